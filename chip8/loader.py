"""Build a fresh machine state from a ROM image."""

import logging
import random
from pathlib import Path
from typing import Optional, Union

from .errors import RomTooLarge
from .fonts import FONT_BASE, FONT_SET
from .memory import MEMORY_SIZE
from .state import MachineState

logger = logging.getLogger(__name__)

ROM_START = 0x200
MAX_ROM_SIZE = MEMORY_SIZE - ROM_START


def load_rom(rom: bytes, seed: Optional[int] = None) -> MachineState:
    """Create a state with the font table and ROM loaded, PC at 0x200.

    Args:
        rom: Raw ROM bytes, loaded verbatim
        seed: Seed for the random source; None gives an unseeded one

    Raises:
        RomTooLarge: if the ROM does not fit above ROM_START
    """
    if len(rom) > MAX_ROM_SIZE:
        raise RomTooLarge(
            f"ROM is {len(rom)} bytes, maximum is {MAX_ROM_SIZE}",
            addr=ROM_START,
        )

    state = MachineState(rng=random.Random(seed))
    state.memory.load(FONT_SET, FONT_BASE)
    state.memory.load(rom, ROM_START)
    state.pc = ROM_START
    logger.debug("Loaded %d byte ROM at 0x%03X", len(rom), ROM_START)
    return state


def load_rom_file(path: Union[str, Path], seed: Optional[int] = None) -> MachineState:
    """Read a ROM file from disk and load it."""
    return load_rom(Path(path).read_bytes(), seed=seed)
