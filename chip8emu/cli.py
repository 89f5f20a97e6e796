"""
Command line entry point

    chip8emu run ROM [--hz N] [--scale N] [--color NAME] [--config FILE]
    chip8emu disasm ROM [-o OUT]
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import COLOR_SCHEMES, EmulatorConfig
from .constants import PROGRAM_START
from .disasm import disassemble_rom
from .errors import InvalidRom

logger = logging.getLogger(__name__)


def setup_logging(verbose: int = 0, quiet: bool = False,
                  log_file: Optional[str] = None):
    """Configure the root logger from -v/-q/--log-file"""
    if quiet:
        level = logging.ERROR
    elif verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=handlers,
        force=True,
    )
    logging.getLogger("chip8emu.trace").setLevel(
        logging.DEBUG if verbose >= 2 else logging.INFO)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chip8emu",
        description="CHIP-8 interpreter with a pygame front end",
    )
    parser.add_argument('--version', action='version',
                        version=f'%(prog)s {__version__}')
    parser.add_argument('--verbose', '-v', action='count', default=0,
                        help='Increase verbosity (-v info, -vv debug with instruction trace)')
    parser.add_argument('--quiet', '-q', action='store_true',
                        help='Suppress all output except errors')
    parser.add_argument('--log-file', type=str, help='Also write log to file')

    sub = parser.add_subparsers(dest='command', required=True)

    run = sub.add_parser('run', help='Run a ROM in a window')
    run.add_argument('rom', help='Path to a .ch8 program')
    run.add_argument('--config', type=str, help='JSON file with settings')
    run.add_argument('--hz', type=int, dest='clock_hz',
                     help='Instructions per second (default 500)')
    run.add_argument('--scale', type=int, help='Window scale factor')
    run.add_argument('--color', choices=sorted(COLOR_SCHEMES), dest='color_scheme',
                     help='Phosphor color')
    run.add_argument('--debug', action='store_true', default=None, dest='show_debug',
                     help='Start with the register overlay visible')

    dis = sub.add_parser('disasm', help='Print a disassembly listing of a ROM')
    dis.add_argument('rom', help='Path to a .ch8 program')
    dis.add_argument('--output', '-o', type=str, help='Write listing to a file')
    dis.add_argument('--origin', type=lambda s: int(s, 0), default=PROGRAM_START,
                     help='Load address of the first byte (default 0x200)')

    return parser


def cmd_disasm(args) -> int:
    try:
        data = Path(args.rom).read_bytes()
    except OSError as e:
        raise InvalidRom(f"cannot read {args.rom}: {e}") from e

    text = "\n".join(disassemble_rom(data, args.origin)) + "\n"
    if args.output:
        Path(args.output).write_text(text, encoding="utf-8")
        logger.info("wrote %s", args.output)
    else:
        sys.stdout.write(text)
    return 0


def cmd_run(args) -> int:
    config = EmulatorConfig.from_json(args.config) if args.config else EmulatorConfig()
    config = config.replace(clock_hz=args.clock_hz, scale=args.scale,
                            color_scheme=args.color_scheme,
                            show_debug=args.show_debug)

    # pygame is only needed for the window
    from .app import Chip8App

    print("CHIP-8 Emulator")
    print("  CHIP-8 Keypad: 1234 / QWER / ASDF / ZXCV")
    print("  P = Pause  N = Step  F5 = Reset  F3 = Debug  +/- = Speed  ESC = Exit")

    app = Chip8App(config)
    try:
        app.load_rom(args.rom)
        app.run()
    finally:
        app.close()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose, args.quiet, args.log_file)

    commands = {'run': cmd_run, 'disasm': cmd_disasm}
    try:
        return commands[args.command](args)
    except InvalidRom as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except (ValueError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
