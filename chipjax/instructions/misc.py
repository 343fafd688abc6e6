"""CHIP-8 miscellaneous instructions (Fxxx)."""

import jax
import jax.lax
import jax.numpy as jnp
from chipjax.state import EmulatorState
from chipjax.decode import DecodedInstruction
from chipjax.constants import FONT_START, FONT_GLYPH_SIZE, ADDRESS_MASK, NUM_REGISTERS
from chipjax.instructions.system import no_op


def execute_get_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX07 - Set VX to delay timer value."""
    return state.replace(V=state.V.at[instruction.x].set(state.delay_timer))


def execute_set_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX15 - Set delay timer to VX."""
    return state.replace(delay_timer=state.V[instruction.x])


def execute_set_sound_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX18 - Set sound timer to VX."""
    return state.replace(sound_timer=state.V[instruction.x])


def execute_add_to_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX1E - Add VX to I, VF = 1 when the sum leaves the 12-bit address space.

    The flag is stored before the addition, so FF1E adds the new VF.
    """
    overflow = jnp.astype(state.I, jnp.int32) + state.V[instruction.x] > ADDRESS_MASK
    new_V = state.V.at[15].set(jnp.astype(overflow, jnp.uint8))
    total = jnp.astype(state.I, jnp.int32) + new_V[instruction.x]
    return state.replace(
        I=jnp.astype(total & 0xFFFF, jnp.uint16),
        V=new_V
    )


def execute_wait_for_key(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX0A - Wait for key press (blocking).

    With no key down the PC is rolled back so the same instruction is fetched
    again on the next cycle. Otherwise VX receives the lowest pressed key.
    """
    def key_pressed_action(state):
        pressed_key = jnp.astype(jnp.argmax(jnp.astype(state.keypad, jnp.int32)), jnp.uint8)
        return state.replace(V=state.V.at[instruction.x].set(pressed_key))

    def wait_action(state):
        return state.replace(pc=state.pc - 2)

    return jax.lax.cond(jnp.any(state.keypad), key_pressed_action, wait_action, state)


def execute_font_character(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX29 - Set I to location of sprite for digit VX."""
    digit = jnp.astype(state.V[instruction.x], jnp.uint16)
    return state.replace(I=FONT_START + digit * FONT_GLYPH_SIZE)


def execute_bcd_conversion(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    value = state.V[instruction.x]

    digits = jnp.array([
        value // 100,
        (value // 10) % 10,
        value % 10
    ], dtype=jnp.uint8)

    indices = (jnp.astype(state.I, jnp.int32) + jnp.arange(3)) & ADDRESS_MASK
    new_memory = state.memory.at[indices].set(digits)
    return state.replace(memory=new_memory)


def _register_window(state: EmulatorState, instruction: DecodedInstruction):
    """Memory addresses I..I+15 and a mask selecting V0..VX."""
    register_mask = jnp.arange(NUM_REGISTERS) <= instruction.x
    indices = (jnp.astype(state.I, jnp.int32) + jnp.arange(NUM_REGISTERS)) & ADDRESS_MASK
    return register_mask, indices


def _advance_index(state: EmulatorState, instruction: DecodedInstruction) -> jnp.ndarray:
    return jnp.astype((jnp.astype(state.I, jnp.int32) + instruction.x + 1) & 0xFFFF, jnp.uint16)


def execute_store_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX55 - Store V0 through VX in memory starting at I, then I += X + 1."""
    register_mask, indices = _register_window(state, instruction)
    new_values = jnp.where(register_mask, state.V, state.memory[indices])
    return state.replace(
        memory=state.memory.at[indices].set(new_values),
        I=_advance_index(state, instruction)
    )


def execute_load_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX65 - Load V0 through VX from memory starting at I, then I += X + 1."""
    register_mask, indices = _register_window(state, instruction)
    new_V = jnp.where(register_mask, state.memory[indices], state.V)
    return state.replace(V=new_V, I=_advance_index(state, instruction))


_MISC_HANDLERS = {
    0x07: execute_get_delay_timer,
    0x0A: execute_wait_for_key,
    0x15: execute_set_delay_timer,
    0x18: execute_set_sound_timer,
    0x1E: execute_add_to_index,
    0x29: execute_font_character,
    0x33: execute_bcd_conversion,
    0x55: execute_store_registers,
    0x65: execute_load_registers,
}

# Low byte -> branch index; unknown FXNN map to the trailing no-op
_MISC_INDEX = jnp.full(256, len(_MISC_HANDLERS), dtype=jnp.int32).at[
    jnp.array(list(_MISC_HANDLERS))
].set(jnp.arange(len(_MISC_HANDLERS), dtype=jnp.int32))


def execute_misc_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Dispatch misc instructions on the low byte."""
    return jax.lax.switch(
        _MISC_INDEX[instruction.kk],
        [*_MISC_HANDLERS.values(), no_op],
        state, instruction
    )
