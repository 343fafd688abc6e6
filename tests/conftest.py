"""Test configuration and fixtures for CHIP-8 emulator tests."""

import jax
import jax.numpy as jnp
import pytest
from chipjax import create_state, execute


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state for each test."""
    return create_state()


@pytest.fixture(scope="session")
def jit_execute():
    """Compiled ``execute`` for tests that sweep many operand values."""
    return jax.jit(execute)


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def set_registers(state, **registers):
    """Helper to set V registers, e.g. ``set_registers(state, V1=0x42)``."""
    V = state.V
    for name, value in registers.items():
        V = V.at[int(name[1:], 16)].set(value)
    return state.replace(V=V)


def set_index(state, value):
    return state.replace(I=jnp.asarray(value, dtype=jnp.uint16))


def set_keys(state, *pressed):
    return state.replace(keypad=jnp.zeros(16, dtype=jnp.bool_).at[jnp.array(pressed, dtype=jnp.int32)].set(True))
