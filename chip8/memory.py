"""Memory model for the CHIP-8 core."""

from typing import Iterable

MEMORY_SIZE = 4096


class Memory:
    """4 KiB byte-addressed memory where every address wraps modulo 4096."""

    def __init__(self):
        self._data = bytearray(MEMORY_SIZE)

    def read(self, addr: int) -> int:
        """Read byte at address (mod 4096)."""
        return self._data[addr % MEMORY_SIZE]

    def write(self, addr: int, value: int) -> None:
        """Write value (mod 256) at address (mod 4096)."""
        self._data[addr % MEMORY_SIZE] = value & 0xFF

    def load(self, data: Iterable[int], base: int) -> None:
        """Copy a byte sequence into memory starting at base."""
        for offset, value in enumerate(data):
            self.write(base + offset, value)

    def get_range(self, start: int, length: int) -> list[int]:
        """Read length bytes starting at start, wrapping at the end."""
        return [self.read(start + i) for i in range(length)]

    def snapshot(self) -> bytes:
        """Return a copy of the entire memory."""
        return bytes(self._data)

    def copy(self) -> "Memory":
        other = Memory()
        other._data[:] = self._data
        return other
