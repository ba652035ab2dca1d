"""Cycle runner for the CHIP-8 core."""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from .config import RunOptions
from .errors import Chip8Error, ErrorInfo
from .instructions import execute_instruction
from .loader import load_rom
from .memory import MEMORY_SIZE
from .state import MachineState

logger = logging.getLogger(__name__)


def fetch(state: MachineState) -> int:
    """Read the big-endian instruction word at PC and advance PC by 2."""
    opcode = (state.memory.read(state.pc) << 8) | state.memory.read(state.pc + 1)
    state.pc = (state.pc + 2) % MEMORY_SIZE
    return opcode


def step(state: MachineState) -> int:
    """Fetch, decode and execute one instruction. Returns the instruction word."""
    opcode = fetch(state)
    execute_instruction(state, opcode)
    return opcode


def decay_timers(state: MachineState) -> None:
    """Count both timers one step toward zero."""
    if state.delay_timer > 0:
        state.delay_timer -= 1
    if state.sound_timer > 0:
        state.sound_timer -= 1


def run_cycle(state: MachineState, instructions_per_tick: int) -> None:
    """Run one host tick: a batch of instructions, then one timer decay.

    Raises:
        InvalidOpcode: if an instruction word has no handler
    """
    for _ in range(instructions_per_tick):
        step(state)
    decay_timers(state)


@dataclass
class RunResult:
    """Result of a headless run."""
    status: str  # "ok" | "error"
    ticks_run: int
    final_state: dict
    video: list[int]
    trace: list[dict] = field(default_factory=list)
    error: Optional[ErrorInfo] = None
    state: Optional[MachineState] = field(default=None, repr=False)

    def to_dict(self) -> dict:
        result = {
            "status": self.status,
            "ticks_run": self.ticks_run,
            "final_state": self.final_state,
            "video": self.video,
            "trace": self.trace,
        }
        if self.error:
            result["error"] = self.error.to_dict()
        return result


def _run_traced_tick(
    state: MachineState,
    instructions_per_tick: int,
    trace: list[dict],
    limit: int,
) -> None:
    for _ in range(instructions_per_tick):
        addr = state.pc
        opcode = step(state)
        if len(trace) < limit:
            trace.append({"addr": addr, "opcode": opcode})
    decay_timers(state)


def run_rom(
    rom: bytes,
    ticks: int,
    options: Optional[RunOptions] = None,
    keys: Iterable[int] = (),
) -> RunResult:
    """Load a ROM and run it headless for a number of host ticks.

    Args:
        rom: Raw ROM bytes
        ticks: Number of run_cycle calls to make
        options: Execution options
        keys: Keypad keys held down for the whole run

    Returns:
        RunResult with status, final registers, framebuffer and trace
    """
    if options is None:
        options = RunOptions()

    state = load_rom(rom, seed=options.seed)
    state.set_keys(keys)

    trace: list[dict] = []
    error_info: Optional[ErrorInfo] = None
    ticks_run = 0

    try:
        while ticks_run < ticks:
            if options.trace:
                _run_traced_tick(
                    state, options.instructions_per_tick, trace, options.trace_limit
                )
            else:
                run_cycle(state, options.instructions_per_tick)
            ticks_run += 1
    except Chip8Error as e:
        # Attach context to error
        e.tick = ticks_run
        logger.debug("Run stopped at tick %d: %s", ticks_run, e.message)
        error_info = e.to_error_info()

    return RunResult(
        status="ok" if error_info is None else "error",
        ticks_run=ticks_run,
        final_state=state.get_state(),
        video=list(state.video),
        trace=trace,
        error=error_info,
        state=state,
    )
