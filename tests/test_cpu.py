"""Interpreter driver: ROM loading, faults and timed updates"""

import io
import logging

import pytest

from chip8emu import (Chip8CPU, InvalidRom, StackOverflow, StackUnderflow,
                      UnimplementedOpcode)
from chip8emu.constants import MAX_ROM_SIZE, STACK_SIZE

from conftest import assemble


class TestRomLoading:
    def test_cls_rom(self, cpu):
        """ROM of a single CLS: one step leaves a blank screen and PC $202"""
        cpu.load_rom(assemble(0x00E0))
        cpu.step()
        assert cpu.state.video.lit_count() == 0
        assert cpu.state.registers.PC == 0x202

    def test_load_resets_machine(self, cpu):
        cpu.load_rom(assemble(0x6A3C, 0x2300))
        cpu.step()
        cpu.step()
        cpu.state.video[1, 1] = True
        cpu.state.clock.delay = 40
        cpu.key_down(0x3)

        cpu.load_rom(assemble(0x00E0))
        assert cpu.state.registers.PC == 0x200
        assert cpu.state.registers.V[0xA] == 0
        assert cpu.state.registers.SP == 0
        assert cpu.state.video.lit_count() == 0
        assert cpu.state.clock.delay == 0
        assert not cpu.keypad.any_pressed()
        assert cpu.running

    def test_load_refreshes_display(self, cpu, frames):
        cpu.load_rom(assemble(0x00E0))
        assert len(frames) == 1

    def test_stream(self, cpu):
        cpu.load_rom_stream(io.BytesIO(assemble(0x6123)))
        cpu.step()
        assert cpu.state.registers.V[1] == 0x23

    def test_empty_stream(self, cpu):
        with pytest.raises(InvalidRom):
            cpu.load_rom_stream(io.BytesIO(b""))
        assert not cpu.running

    def test_oversized_stream(self, cpu):
        with pytest.raises(InvalidRom):
            cpu.load_rom_stream(io.BytesIO(bytes(MAX_ROM_SIZE + 1)))

    def test_file(self, cpu, tmp_path):
        rom = tmp_path / "test.ch8"
        rom.write_bytes(assemble(0x6542))
        cpu.load_rom_file(rom)
        cpu.step()
        assert cpu.state.registers.V[5] == 0x42

    def test_missing_file(self, cpu, tmp_path):
        with pytest.raises(InvalidRom):
            cpu.load_rom_file(tmp_path / "nope.ch8")

    def test_text_stream(self, cpu):
        """A stream opened in text mode is rejected as a bad ROM"""
        with pytest.raises(InvalidRom, match="not binary"):
            cpu.load_rom_stream(io.StringIO("abc"))
        assert not cpu.running

    def test_reset(self, cpu):
        cpu.load_rom(assemble(0x6A3C))
        cpu.step()
        cpu.reset()
        assert cpu.state.registers.V[0xA] == 0
        assert cpu.state.memory[0x200] == 0
        assert not cpu.running


class TestFaults:
    def test_stack_overflow_leaves_state_untouched(self, program):
        """With every slot used, CALL fails and changes nothing"""
        cpu = program(0x2200)
        for _ in range(STACK_SIZE):
            cpu.step()

        regs = cpu.state.registers
        before = (list(regs.V), regs.I, regs.PC, regs.SP, list(regs.stack))
        memory_before = cpu.state.memory.read(0, 0x1000)

        with pytest.raises(StackOverflow):
            cpu.step()

        assert (list(regs.V), regs.I, regs.PC, regs.SP, list(regs.stack)) == before
        assert cpu.state.memory.read(0, 0x1000) == memory_before
        assert not cpu.running

    def test_stack_underflow(self, program):
        cpu = program(0x00EE)
        with pytest.raises(StackUnderflow):
            cpu.step()
        assert cpu.state.registers.PC == 0x200

    def test_fault_stops_update(self, program):
        """After a fault update() runs nothing until the ROM is reloaded"""
        cpu = program(0x5000)
        with pytest.raises(UnimplementedOpcode):
            cpu.update(0.1, 100)
        assert cpu.update(1.0, 100) == 0

    def test_sprite_past_end_of_memory(self, program):
        """DRW with I near $FFF faults without drawing and halts the machine"""
        cpu = program(0xAFFF, 0xD002)
        cpu.step()
        with pytest.raises(IndexError):
            cpu.update(1.0, 10)
        assert cpu.state.registers.PC == 0x202
        assert not cpu.running
        assert cpu.state.video.lit_count() == 0
        assert cpu.update(1.0, 10) == 0

    def test_bcd_past_end_of_memory(self, program):
        """FX33 with I at $FFE writes none of its three digits"""
        cpu = program(0xAFFE, 0x60FF, 0xF033)
        cpu.step()
        cpu.step()
        with pytest.raises(IndexError):
            cpu.step()
        assert cpu.state.memory.read(0xFFE, 2) == b"\x00\x00"
        assert cpu.state.registers.PC == 0x204
        assert not cpu.running

    def test_load_registers_past_end_of_memory(self, program):
        """FX65 reading past $FFF leaves every register as it was"""
        cpu = program(0xAFFF, 0x6177, 0xF165)
        cpu.step()
        cpu.step()
        with pytest.raises(IndexError):
            cpu.step()
        assert cpu.state.registers.V[0] == 0
        assert cpu.state.registers.V[1] == 0x77


class TestUpdate:
    def test_not_running_until_loaded(self):
        cpu = Chip8CPU()
        assert cpu.update(1.0, 500) == 0

    def test_paused(self, program):
        cpu = program(0x1200)
        cpu.paused = True
        assert cpu.update(1.0, 500) == 0
        assert cpu.cycle_count == 0

    def test_runs_at_target_rate(self, program):
        """JP $200 loop for 0.1s at 600Hz → 60 instructions"""
        cpu = program(0x1200)
        assert cpu.update(0.1, 600) == 60
        assert cpu.cycle_count == 60

    def test_default_rate(self, program):
        cpu = program(0x1200)
        cpu.clock_hz = 100
        assert cpu.update(0.5) == 50

    @pytest.mark.parametrize("rate", [1, 60, 700, 3000])
    def test_delay_independent_of_rate(self, program, rate):
        """One second of updates always takes exactly 60 off DT"""
        cpu = program(0x60FF, 0xF015, 0x1204)
        cpu.step()
        cpu.step()
        for _ in range(60):
            cpu.update(1.0 / 60, rate)
        assert cpu.state.clock.delay == 0xFF - 60

    def test_wait_key_consumes_budget(self, program):
        cpu = program(0xF00A)
        assert cpu.update(0.1, 100) == 10
        assert cpu.state.registers.PC == 0x200
        cpu.key_down(0xB)
        cpu.update(0.01, 100)
        assert cpu.state.registers.V[0] == 0xB
        assert cpu.state.registers.PC == 0x202


class TestTrace:
    def test_trace_logs_mnemonics(self, program, caplog):
        cpu = program(0x00E0, 0x6A3C)
        with caplog.at_level(logging.DEBUG, logger="chip8emu.trace"):
            cpu.step()
            cpu.step()
        assert "CLS" in caplog.text
        assert "LD VA, $3C" in caplog.text
