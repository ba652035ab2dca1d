"""CHIP-8 Interpreter Core Package."""

from .state import MachineState
from .runner import run_cycle, run_rom, RunResult
from .loader import load_rom, load_rom_file
from .config import RunOptions
from .errors import Chip8Error, InvalidOpcode, RomTooLarge

__all__ = [
    "MachineState",
    "run_cycle",
    "run_rom",
    "RunResult",
    "load_rom",
    "load_rom_file",
    "RunOptions",
    "Chip8Error",
    "InvalidOpcode",
    "RomTooLarge",
]
