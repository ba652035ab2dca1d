"""Machine state model for the CHIP-8 core."""

import copy
import random
from typing import Iterable, Optional

from .memory import Memory

NUM_REGISTERS = 16
FLAG_REGISTER = 0xF
STACK_SIZE = 16
NUM_KEYS = 16
SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32
ROW_MASK = (1 << SCREEN_WIDTH) - 1


class MachineState:
    """All mutable machine state: registers, memory, stack, timers, video, keypad."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.registers: list[int] = [0] * NUM_REGISTERS
        self.memory = Memory()
        self.stack: list[int] = [0] * STACK_SIZE
        self.keypad: list[bool] = [False] * NUM_KEYS
        # Row r is a 64-bit word; column 0 is the most significant bit.
        self.video: list[int] = [0] * SCREEN_HEIGHT
        self.index: int = 0
        self.pc: int = 0
        self.sp: int = 0
        self.delay_timer: int = 0
        self.sound_timer: int = 0
        self.rng = rng if rng is not None else random.Random()

    @property
    def flag(self) -> int:
        """Value of the flag register (VF)."""
        return self.registers[FLAG_REGISTER]

    def set_register(self, reg: int, value: int) -> None:
        """Set register with 8-bit wraparound."""
        self.registers[reg & 0xF] = value & 0xFF

    def press(self, key: int) -> None:
        self.keypad[key % NUM_KEYS] = True

    def release(self, key: int) -> None:
        self.keypad[key % NUM_KEYS] = False

    def set_keys(self, keys: Iterable[int]) -> None:
        """Replace the keypad with exactly the given keys held down."""
        held = {k % NUM_KEYS for k in keys}
        self.keypad = [k in held for k in range(NUM_KEYS)]

    def get_state(self) -> dict:
        """Get current register and timer state as dictionary."""
        return {
            "registers": list(self.registers),
            "index": self.index,
            "pc": self.pc,
            "sp": self.sp,
            "stack": list(self.stack),
            "delay_timer": self.delay_timer,
            "sound_timer": self.sound_timer,
        }

    def copy(self) -> "MachineState":
        """Independent copy; the random source is duplicated with its position."""
        other = MachineState(rng=copy.deepcopy(self.rng))
        other.registers = list(self.registers)
        other.memory = self.memory.copy()
        other.stack = list(self.stack)
        other.keypad = list(self.keypad)
        other.video = list(self.video)
        other.index = self.index
        other.pc = self.pc
        other.sp = self.sp
        other.delay_timer = self.delay_timer
        other.sound_timer = self.sound_timer
        return other
