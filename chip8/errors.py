"""Custom exceptions for the CHIP-8 core."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ErrorInfo:
    """Structured error information for hosts."""
    type: str
    message: str
    addr: int
    tick: int
    opcode: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "message": self.message,
            "addr": self.addr,
            "tick": self.tick,
            "opcode": self.opcode,
        }


class Chip8Error(Exception):
    """Base exception for all CHIP-8 core errors."""

    def __init__(self, message: str, addr: int = 0, tick: int = 0):
        super().__init__(message)
        self.message = message
        self.addr = addr
        self.tick = tick

    def to_error_info(self) -> ErrorInfo:
        return ErrorInfo(
            type=self.__class__.__name__,
            message=self.message,
            addr=self.addr,
            tick=self.tick,
        )


class InvalidOpcode(Chip8Error):
    """Instruction word routed to an unassigned dispatch slot."""

    def __init__(self, opcode: int, addr: int = 0, tick: int = 0):
        super().__init__(f"Invalid opcode: 0x{opcode:04X}", addr=addr, tick=tick)
        self.opcode = opcode

    def to_error_info(self) -> ErrorInfo:
        info = super().to_error_info()
        info.opcode = self.opcode
        return info


class RomTooLarge(Chip8Error):
    """ROM image does not fit between the load address and the end of memory."""
    pass
