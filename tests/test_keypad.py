"""Pressed-key latch"""

import threading

from chip8emu.keypad import Key, Keypad


class TestKeypad:
    def test_empty(self):
        pad = Keypad()
        assert not pad.any_pressed()
        assert pad.most_recent() is None
        assert not pad.is_pressed(0x0)

    def test_press_and_release(self):
        pad = Keypad()
        pad.key_down(0xA)
        assert pad.is_pressed(0xA)
        assert pad.is_pressed(Key.A)
        assert pad.any_pressed()
        pad.key_up(0xA)
        assert not pad.is_pressed(0xA)
        assert not pad.any_pressed()

    def test_last_inserted_wins(self):
        pad = Keypad()
        pad.key_down(0x1)
        pad.key_down(0x2)
        assert pad.most_recent() == Key.K2

    def test_repress_moves_to_most_recent(self):
        pad = Keypad()
        pad.key_down(0x1)
        pad.key_down(0x2)
        pad.key_down(0x1)
        assert pad.most_recent() == 0x1
        assert pad.pressed() == [Key.K2, Key.K1]

    def test_release_falls_back_to_previous(self):
        pad = Keypad()
        pad.key_down(0x3)
        pad.key_down(0xF)
        pad.key_up(0xF)
        assert pad.most_recent() == 0x3

    def test_release_unpressed_key_is_harmless(self):
        pad = Keypad()
        pad.key_up(0x4)
        assert pad.pressed() == []

    def test_unknown_keys_ignored(self):
        pad = Keypad()
        pad.key_down(0x10)
        pad.key_down(-1)
        assert not pad.any_pressed()
        assert not pad.is_pressed(0x10)

    def test_release_all(self):
        pad = Keypad()
        for k in range(16):
            pad.key_down(k)
        pad.release_all()
        assert pad.pressed() == []

    def test_events_from_other_threads(self):
        pad = Keypad()

        def press(keys):
            for k in keys:
                pad.key_down(k)

        threads = [threading.Thread(target=press, args=(range(i, 16, 4),))
                   for i in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert sorted(pad.pressed()) == list(range(16))
