"""Tests for building a machine state from a ROM."""

import pytest

from chip8 import load_rom, load_rom_file, RomTooLarge
from chip8.fonts import FONT_BASE, FONT_SET, glyph_address
from chip8.loader import MAX_ROM_SIZE, ROM_START


class TestLoadRom:
    """load_rom tests."""

    def test_rom_loaded_at_0x200(self):
        """ROM bytes are copied verbatim starting at 0x200."""
        state = load_rom(b"\x12\x34\x56")
        assert state.memory.get_range(ROM_START, 4) == [0x12, 0x34, 0x56, 0]
        assert state.pc == 0x200

    def test_font_loaded(self):
        """The 80-byte font table sits at FONT_BASE."""
        state = load_rom(b"")
        assert len(FONT_SET) == 80
        assert bytes(state.memory.get_range(FONT_BASE, 80)) == FONT_SET

    def test_everything_else_cleared(self):
        """Registers, stack, timers, keys and video start cleared."""
        state = load_rom(b"\x00\xE0")
        assert state.registers == [0] * 16
        assert state.stack == [0] * 16
        assert state.sp == 0
        assert state.index == 0
        assert state.delay_timer == 0
        assert state.sound_timer == 0
        assert state.keypad == [False] * 16
        assert state.video == [0] * 32
        assert state.memory.read(0) == 0

    def test_max_size_fits(self):
        """A ROM filling memory to the last byte is accepted."""
        state = load_rom(bytes([0xAB]) * MAX_ROM_SIZE)
        assert state.memory.read(0xFFF) == 0xAB
        assert state.memory.read(FONT_BASE) == FONT_SET[0]

    def test_too_large(self):
        """A ROM that would wrap into the font table is rejected."""
        with pytest.raises(RomTooLarge):
            load_rom(bytes(MAX_ROM_SIZE + 1))

    def test_seed(self):
        """Equal seeds give equal random sources."""
        first = load_rom(b"", seed=3)
        second = load_rom(b"", seed=3)
        assert first.rng.randrange(256) == second.rng.randrange(256)

    def test_new_rom_replaces_state(self):
        """Loading again gives a fresh, unrelated state."""
        first = load_rom(b"\x60\x01")
        first.registers[0] = 9
        second = load_rom(b"\x60\x02")
        assert second.registers[0] == 0
        assert second.memory.read(0x201) == 0x02

    def test_glyph_address(self):
        assert glyph_address(0) == FONT_BASE
        assert glyph_address(0xF) == FONT_BASE + 75


class TestLoadRomFile:
    """load_rom_file tests."""

    def test_reads_file(self, tmp_path):
        path = tmp_path / "game.ch8"
        path.write_bytes(b"\x00\xE0\x12\x02")
        state = load_rom_file(path)
        assert state.memory.get_range(0x200, 4) == [0x00, 0xE0, 0x12, 0x02]

    def test_accepts_str_path(self, tmp_path):
        path = tmp_path / "game.ch8"
        path.write_bytes(b"\x60\x07")
        state = load_rom_file(str(path), seed=1)
        assert state.memory.read(0x201) == 0x07
