"""CHIP-8 ALU operations (8xxx).

Each operation receives the register file and the X/Y indices and returns
the new VX together with the new VF. Operations that set a flag write it to
VF before computing the result, so when X or Y names VF the result is
computed from the freshly written flag. ADD is the exception: its sum is
formed before the carry is stored. The result is written last, so when X
is F it overwrites the flag.
"""

import jax
import jax.lax
import jax.numpy as jnp
from chipjax.state import EmulatorState
from chipjax.decode import DecodedInstruction


def _u8(value) -> jnp.ndarray:
    return jnp.astype(value, jnp.uint8)


def _with_flag(V: jnp.ndarray, flag) -> jnp.ndarray:
    return V.at[15].set(_u8(flag))


def alu_set(V, x, y):
    """8XY0 - Set: VX = VY."""
    return _u8(V[y]), V[15]


def alu_or(V, x, y):
    """8XY1 - Binary OR: VX |= VY."""
    return _u8(V[x] | V[y]), V[15]


def alu_and(V, x, y):
    """8XY2 - Binary AND: VX &= VY."""
    return _u8(V[x] & V[y]), V[15]


def alu_xor(V, x, y):
    """8XY3 - Logical XOR: VX ^= VY."""
    return _u8(V[x] ^ V[y]), V[15]


def alu_add(V, x, y):
    """8XY4 - Add: VX += VY, VF = carry."""
    total = jnp.astype(V[x], jnp.int32) + V[y]
    return _u8(total & 0xFF), _u8(total > 0xFF)


def alu_sub_xy(V, x, y):
    """8XY5 - Subtract: VX -= VY, VF = 1 when VX > VY."""
    flag = _u8(V[x] > V[y])
    V = _with_flag(V, flag)
    return _u8((jnp.astype(V[x], jnp.int32) - V[y]) & 0xFF), flag


def alu_shift_right(V, x, y):
    """8XY6 - Shift right: VX >>= 1, VF = shifted-out bit."""
    flag = _u8(V[x] & 1)
    V = _with_flag(V, flag)
    return _u8(V[x] >> 1), flag


def alu_sub_yx(V, x, y):
    """8XY7 - Subtract: VX = VY - VX, VF = 1 when VY > VX."""
    flag = _u8(V[y] > V[x])
    V = _with_flag(V, flag)
    return _u8((jnp.astype(V[y], jnp.int32) - V[x]) & 0xFF), flag


def alu_shift_left(V, x, y):
    """8XYE - Shift left: VX <<= 1, VF = shifted-out bit."""
    flag = _u8((V[x] & 0x80) >> 7)
    V = _with_flag(V, flag)
    return _u8((jnp.astype(V[x], jnp.int32) << 1) & 0xFF), flag


def alu_undefined(V, x, y):
    """Undefined ALU operation."""
    return V[x], V[15]


ALU_OPERATIONS = [
    alu_set, alu_or, alu_and, alu_xor, alu_add, alu_sub_xy,
    alu_shift_right, alu_sub_yx, alu_shift_left, alu_undefined,
]

# Low nibble -> index in ALU_OPERATIONS; 8XY8..8XYD and 8XYF are undefined
_ALU_INDEX = jnp.array([0, 1, 2, 3, 4, 5, 6, 7, 9, 9, 9, 9, 9, 9, 8, 9], dtype=jnp.int32)


def execute_alu_operation(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """8XYN - ALU operations dispatcher."""
    result, flag = jax.lax.switch(
        _ALU_INDEX[instruction.n], ALU_OPERATIONS, state.V, instruction.x, instruction.y
    )

    new_V = state.V.at[15].set(flag)
    new_V = new_V.at[instruction.x].set(result)
    return state.replace(V=new_V)
