"""CHIP-8 control flow instructions: jumps, calls and conditional skips."""

import jax.numpy as jnp
from chipjax.state import EmulatorState
from chipjax.decode import DecodedInstruction
from chipjax.stack import push


def execute_jump(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """1NNN - PC = NNN."""
    return state.replace(pc=jnp.astype(instruction.nnn, jnp.uint16))


def execute_call(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """2NNN - Push the return address, then PC = NNN."""
    return execute_jump(state.replace(stack=push(state.stack, state.pc)), instruction)


def execute_jump_with_offset(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """BNNN - PC = NNN + V0."""
    target = jnp.astype(instruction.nnn, jnp.uint16) + jnp.astype(state.V[0], jnp.uint16)
    return state.replace(pc=target)


def _skip_when(state: EmulatorState, condition) -> EmulatorState:
    """Advance the PC over the next instruction when ``condition`` holds."""
    skip = jnp.astype(condition, jnp.uint16) * 2
    return state.replace(pc=state.pc + skip)


def execute_skip_if_equal_immediate(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """3XKK"""
    return _skip_when(state, state.V[instruction.x] == instruction.kk)


def execute_skip_if_not_equal_immediate(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """4XKK"""
    return _skip_when(state, state.V[instruction.x] != instruction.kk)


def execute_skip_if_equal_register(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """5XY0"""
    return _skip_when(state, state.V[instruction.x] == state.V[instruction.y])


def execute_skip_if_not_equal_register(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """9XY0"""
    return _skip_when(state, state.V[instruction.x] != state.V[instruction.y])


def execute_skip_if_key(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """EX9E/EXA1 - Skip if key VX is pressed/released; other EXKK do nothing."""
    key_pressed = state.keypad[state.V[instruction.x] & 0xF]
    skip_if_pressed = (instruction.kk == 0x9E) & key_pressed
    skip_if_released = (instruction.kk == 0xA1) & ~key_pressed
    return _skip_when(state, skip_if_pressed | skip_if_released)
