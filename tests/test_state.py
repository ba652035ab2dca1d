"""Tests for the MachineState module."""

import random

from chip8.state import MachineState, FLAG_REGISTER


class TestMachineState:
    """MachineState tests."""

    def test_default_initialization(self):
        """State initializes with zeros and no keys held."""
        state = MachineState()
        assert state.registers == [0] * 16
        assert state.stack == [0] * 16
        assert state.keypad == [False] * 16
        assert state.video == [0] * 32
        assert state.index == 0
        assert state.pc == 0
        assert state.sp == 0
        assert state.delay_timer == 0
        assert state.sound_timer == 0

    def test_set_register_wraps(self):
        """Registers hold 8-bit values."""
        state = MachineState()
        state.set_register(3, 0x1FF)
        assert state.registers[3] == 0xFF
        state.set_register(3, -1)
        assert state.registers[3] == 0xFF

    def test_flag_property(self):
        """flag reads register 15."""
        state = MachineState()
        state.registers[FLAG_REGISTER] = 1
        assert state.flag == 1

    def test_press_and_release(self):
        """Keys can be pressed and released individually."""
        state = MachineState()
        state.press(0xA)
        assert state.keypad[0xA] is True
        state.release(0xA)
        assert state.keypad[0xA] is False

    def test_set_keys_replaces_keypad(self):
        """set_keys holds exactly the given keys."""
        state = MachineState()
        state.press(1)
        state.set_keys([2, 0xF])
        assert [k for k, held in enumerate(state.keypad) if held] == [2, 0xF]

    def test_get_state(self):
        """Get state returns registers, pointers and timers."""
        state = MachineState()
        state.registers[0] = 10
        state.index = 0x123
        state.pc = 0x200
        state.delay_timer = 3
        snap = state.get_state()
        assert snap["registers"][0] == 10
        assert snap["index"] == 0x123
        assert snap["pc"] == 0x200
        assert snap["sp"] == 0
        assert snap["delay_timer"] == 3
        assert snap["sound_timer"] == 0

    def test_copy_is_independent(self):
        """Copy shares no mutable state with the original."""
        state = MachineState(rng=random.Random(1))
        state.registers[0] = 1
        state.video[0] = 0xFF
        state.memory.write(0x200, 0x12)
        other = state.copy()
        other.registers[0] = 2
        other.video[0] = 0
        other.memory.write(0x200, 0)
        assert state.registers[0] == 1
        assert state.video[0] == 0xFF
        assert state.memory.read(0x200) == 0x12

    def test_copy_preserves_random_sequence(self):
        """The copied random source continues from the same position."""
        state = MachineState(rng=random.Random(7))
        state.rng.randrange(256)
        other = state.copy()
        assert other.rng.randrange(256) == state.rng.randrange(256)
