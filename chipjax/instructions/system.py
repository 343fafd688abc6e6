"""CHIP-8 system instructions (0x0xxx).

Only the low byte selects the operation: ``0nE0`` clears the screen and
``0nEE`` returns from a subroutine. Every other ``0nnn`` (machine code calls
on the original hardware) is ignored.
"""

import jax
import jax.lax
import jax.numpy as jnp
from chipjax.state import EmulatorState
from chipjax.decode import DecodedInstruction
from chipjax.stack import pop


def no_op(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    return state


def execute_clear_screen(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00E0 - Turn every pixel off and request a redraw."""
    return state.replace(
        display=jnp.zeros_like(state.display),
        redraw=jnp.ones((), dtype=jnp.bool_)
    )


def execute_return(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00EE - Resume at the address on top of the stack."""
    stack, return_address = pop(state.stack)
    return state.replace(stack=stack, pc=return_address)


def execute_system_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    branch = jnp.where(instruction.kk == 0xE0, 1, jnp.where(instruction.kk == 0xEE, 2, 0))
    return jax.lax.switch(
        branch,
        [no_op, execute_clear_screen, execute_return],
        state, instruction
    )
