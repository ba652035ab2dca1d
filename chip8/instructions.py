"""Instruction execution and dispatch for the CHIP-8 core."""

import logging
from typing import Callable

from .errors import InvalidOpcode
from .fonts import glyph_address
from .memory import MEMORY_SIZE
from .state import (
    FLAG_REGISTER,
    ROW_MASK,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    MachineState,
)

logger = logging.getLogger(__name__)


def _x(opcode: int) -> int:
    return (opcode & 0x0F00) >> 8


def _y(opcode: int) -> int:
    return (opcode & 0x00F0) >> 4


def _n(opcode: int) -> int:
    return opcode & 0x000F


def _kk(opcode: int) -> int:
    return opcode & 0x00FF


def _nnn(opcode: int) -> int:
    return opcode & 0x0FFF


def _skip(state: MachineState) -> None:
    state.pc = (state.pc + 2) % MEMORY_SIZE


def _rotate_right(value: int, amount: int) -> int:
    """Rotate a 64-bit row word right."""
    amount %= SCREEN_WIDTH
    return ((value >> amount) | (value << (SCREEN_WIDTH - amount))) & ROW_MASK


# Instruction executor type
InstructionExecutor = Callable[[MachineState, int], None]


def execute_invalid(state: MachineState, opcode: int) -> None:
    """Unassigned slot: abort the current ROM."""
    addr = (state.pc - 2) % MEMORY_SIZE
    logger.debug("Invalid opcode 0x%04X at 0x%03X", opcode, addr)
    raise InvalidOpcode(opcode, addr=addr)


def execute_00e0(state: MachineState, opcode: int) -> None:
    """CLS: clear the screen"""
    state.video = [0] * SCREEN_HEIGHT


def execute_00ee(state: MachineState, opcode: int) -> None:
    """RET: SP := SP - 1, PC := STACK[SP]"""
    state.sp = (state.sp - 1) % len(state.stack)
    state.pc = state.stack[state.sp]


def execute_1nnn(state: MachineState, opcode: int) -> None:
    """JP nnn: PC := nnn"""
    state.pc = _nnn(opcode)


def execute_2nnn(state: MachineState, opcode: int) -> None:
    """CALL nnn: STACK[SP] := PC, SP := SP + 1, PC := nnn"""
    state.stack[state.sp] = state.pc
    state.sp = (state.sp + 1) % len(state.stack)
    state.pc = _nnn(opcode)


def execute_3xkk(state: MachineState, opcode: int) -> None:
    """SE Vx, kk: skip if Vx == kk"""
    if state.registers[_x(opcode)] == _kk(opcode):
        _skip(state)


def execute_4xkk(state: MachineState, opcode: int) -> None:
    """SNE Vx, kk: skip if Vx != kk"""
    if state.registers[_x(opcode)] != _kk(opcode):
        _skip(state)


def execute_5xy0(state: MachineState, opcode: int) -> None:
    """SE Vx, Vy: skip if Vx == Vy"""
    if state.registers[_x(opcode)] == state.registers[_y(opcode)]:
        _skip(state)


def execute_6xkk(state: MachineState, opcode: int) -> None:
    """LD Vx, kk"""
    state.set_register(_x(opcode), _kk(opcode))


def execute_7xkk(state: MachineState, opcode: int) -> None:
    """ADD Vx, kk (no flag)"""
    x = _x(opcode)
    state.set_register(x, state.registers[x] + _kk(opcode))


def execute_8xy0(state: MachineState, opcode: int) -> None:
    """LD Vx, Vy"""
    state.set_register(_x(opcode), state.registers[_y(opcode)])


def execute_8xy1(state: MachineState, opcode: int) -> None:
    """OR Vx, Vy"""
    x = _x(opcode)
    state.set_register(x, state.registers[x] | state.registers[_y(opcode)])


def execute_8xy2(state: MachineState, opcode: int) -> None:
    """AND Vx, Vy"""
    x = _x(opcode)
    state.set_register(x, state.registers[x] & state.registers[_y(opcode)])


def execute_8xy3(state: MachineState, opcode: int) -> None:
    """XOR Vx, Vy"""
    x = _x(opcode)
    state.set_register(x, state.registers[x] ^ state.registers[_y(opcode)])


def execute_8xy4(state: MachineState, opcode: int) -> None:
    """ADD Vx, Vy: VF := carry"""
    x = _x(opcode)
    total = state.registers[x] + state.registers[_y(opcode)]
    state.registers[FLAG_REGISTER] = 1 if total > 0xFF else 0
    state.set_register(x, total)


def execute_8xy5(state: MachineState, opcode: int) -> None:
    """SUB Vx, Vy: VF := NOT borrow"""
    x = _x(opcode)
    vx = state.registers[x]
    vy = state.registers[_y(opcode)]
    state.registers[FLAG_REGISTER] = 1 if vx > vy else 0
    state.set_register(x, vx - vy)


def execute_8xy6(state: MachineState, opcode: int) -> None:
    """SHR Vx: VF := bit shifted out"""
    x = _x(opcode)
    vx = state.registers[x]
    state.registers[FLAG_REGISTER] = vx & 0x01
    state.set_register(x, vx >> 1)


def execute_8xy7(state: MachineState, opcode: int) -> None:
    """SUBN Vx, Vy: Vx := Vy - Vx, VF := NOT borrow"""
    x = _x(opcode)
    vx = state.registers[x]
    vy = state.registers[_y(opcode)]
    state.registers[FLAG_REGISTER] = 1 if vy > vx else 0
    state.set_register(x, vy - vx)


def execute_8xye(state: MachineState, opcode: int) -> None:
    """SHL Vx: VF := bit shifted out"""
    x = _x(opcode)
    vx = state.registers[x]
    state.registers[FLAG_REGISTER] = (vx & 0x80) >> 7
    state.set_register(x, vx << 1)


def execute_9xy0(state: MachineState, opcode: int) -> None:
    """SNE Vx, Vy: skip if Vx != Vy"""
    if state.registers[_x(opcode)] != state.registers[_y(opcode)]:
        _skip(state)


def execute_annn(state: MachineState, opcode: int) -> None:
    """LD I, nnn"""
    state.index = _nnn(opcode)


def execute_bnnn(state: MachineState, opcode: int) -> None:
    """JP V0, nnn: PC := V0 + nnn"""
    state.pc = (state.registers[0] + _nnn(opcode)) % MEMORY_SIZE


def execute_cxkk(state: MachineState, opcode: int) -> None:
    """RND Vx, kk: Vx := random byte AND kk"""
    state.set_register(_x(opcode), state.rng.randrange(256) & _kk(opcode))


def execute_dxyn(state: MachineState, opcode: int) -> None:
    """DRW Vx, Vy, n: XOR an n-row sprite at I onto the screen.

    Each sprite byte is rotated into place within its 64-bit row, so
    pixels past the right edge reappear at the left edge of the same
    row. Rows wrap vertically. VF is set when any lit pixel is erased.
    """
    x_pos = state.registers[_x(opcode)] % SCREEN_WIDTH
    y_pos = state.registers[_y(opcode)] % SCREEN_HEIGHT

    state.registers[FLAG_REGISTER] = 0

    for row in range(_n(opcode)):
        sprite_row = state.memory.read(state.index + row)
        bits = _rotate_right(sprite_row, x_pos + 8)
        row_index = (y_pos + row) % SCREEN_HEIGHT
        state.video[row_index] ^= bits
        if state.video[row_index] & bits != bits:
            state.registers[FLAG_REGISTER] = 1


def execute_ex9e(state: MachineState, opcode: int) -> None:
    """SKP Vx: skip if key Vx is pressed"""
    if state.keypad[state.registers[_x(opcode)] % len(state.keypad)]:
        _skip(state)


def execute_exa1(state: MachineState, opcode: int) -> None:
    """SKNP Vx: skip if key Vx is not pressed"""
    if not state.keypad[state.registers[_x(opcode)] % len(state.keypad)]:
        _skip(state)


def execute_fx07(state: MachineState, opcode: int) -> None:
    """LD Vx, DT"""
    state.set_register(_x(opcode), state.delay_timer)


def execute_fx0a(state: MachineState, opcode: int) -> None:
    """LD Vx, K: wait for a key press.

    With no key held, PC is rewound so the same instruction runs again
    on the next step; the host's polling cadence is the wake-up.
    """
    for key, pressed in enumerate(state.keypad):
        if pressed:
            state.set_register(_x(opcode), key)
            return
    state.pc = (state.pc - 2) % MEMORY_SIZE


def execute_fx15(state: MachineState, opcode: int) -> None:
    """LD DT, Vx"""
    state.delay_timer = state.registers[_x(opcode)]


def execute_fx18(state: MachineState, opcode: int) -> None:
    """LD ST, Vx"""
    state.sound_timer = state.registers[_x(opcode)]


def execute_fx1e(state: MachineState, opcode: int) -> None:
    """ADD I, Vx"""
    state.index = (state.index + state.registers[_x(opcode)]) % MEMORY_SIZE


def execute_fx29(state: MachineState, opcode: int) -> None:
    """LD F, Vx: I := address of the glyph for digit Vx"""
    state.index = glyph_address(state.registers[_x(opcode)])


def execute_fx33(state: MachineState, opcode: int) -> None:
    """LD B, Vx: store BCD digits of Vx at I, I+1, I+2"""
    value = state.registers[_x(opcode)]
    state.memory.write(state.index, value // 100)
    state.memory.write(state.index + 1, (value // 10) % 10)
    state.memory.write(state.index + 2, value % 10)


def execute_fx55(state: MachineState, opcode: int) -> None:
    """LD [I], Vx: store V0..Vx inclusive at I"""
    for i in range(_x(opcode) + 1):
        state.memory.write(state.index + i, state.registers[i])


def execute_fx65(state: MachineState, opcode: int) -> None:
    """LD Vx, [I]: load V0..Vx inclusive from I"""
    for i in range(_x(opcode) + 1):
        state.set_register(i, state.memory.read(state.index + i))


def _table(size: int, entries: dict[int, InstructionExecutor]) -> tuple:
    return tuple(entries.get(i, execute_invalid) for i in range(size))


# Secondary tables, indexed by the low nibble (0x0, 0x8, 0xE groups)
# or by the whole low byte (0xF group).
TABLE_0 = _table(16, {
    0x0: execute_00e0,
    0xE: execute_00ee,
})

TABLE_8 = _table(16, {
    0x0: execute_8xy0,
    0x1: execute_8xy1,
    0x2: execute_8xy2,
    0x3: execute_8xy3,
    0x4: execute_8xy4,
    0x5: execute_8xy5,
    0x6: execute_8xy6,
    0x7: execute_8xy7,
    0xE: execute_8xye,
})

TABLE_E = _table(16, {
    0x1: execute_exa1,
    0xE: execute_ex9e,
})

TABLE_F = _table(0x66, {
    0x07: execute_fx07,
    0x0A: execute_fx0a,
    0x15: execute_fx15,
    0x18: execute_fx18,
    0x1E: execute_fx1e,
    0x29: execute_fx29,
    0x33: execute_fx33,
    0x55: execute_fx55,
    0x65: execute_fx65,
})

# Group nibble -> (table, mask applied to the instruction word)
GROUP_TABLES = {
    0x0: (TABLE_0, 0x000F),
    0x8: (TABLE_8, 0x000F),
    0xE: (TABLE_E, 0x000F),
    0xF: (TABLE_F, 0x00FF),
}


def _group_handler(opcode: int) -> InstructionExecutor:
    table, mask = GROUP_TABLES[(opcode & 0xF000) >> 12]
    index = opcode & mask
    if index >= len(table):
        return execute_invalid
    return table[index]


def execute_group(state: MachineState, opcode: int) -> None:
    """Second-level dispatch for the 0x0, 0x8, 0xE and 0xF groups."""
    _group_handler(opcode)(state, opcode)


# Primary dispatch table, indexed by the top nibble
PRIMARY_TABLE: tuple = (
    execute_group,
    execute_1nnn,
    execute_2nnn,
    execute_3xkk,
    execute_4xkk,
    execute_5xy0,
    execute_6xkk,
    execute_7xkk,
    execute_group,
    execute_9xy0,
    execute_annn,
    execute_bnnn,
    execute_cxkk,
    execute_dxyn,
    execute_group,
    execute_group,
)


def resolve(opcode: int) -> InstructionExecutor:
    """Return the handler for an instruction word without touching any state."""
    handler = PRIMARY_TABLE[(opcode & 0xF000) >> 12]
    if handler is execute_group:
        return _group_handler(opcode)
    return handler


def execute_instruction(state: MachineState, opcode: int) -> None:
    """Execute a single 16-bit instruction word against state."""
    resolve(opcode)(state, opcode)
