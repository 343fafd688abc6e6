"""CHIP-8 stack operations.

The pointer wraps modulo the stack size: a 17th nested call overwrites the
oldest return address and a return without a call reads the top slot.
"""

import jax.numpy as jnp
from chipjax.constants import STACK_SIZE
from chipjax.state import StackState


def push(stack: StackState, address: jnp.ndarray) -> StackState:
    """Push address onto stack."""
    new_data = stack.data.at[stack.pointer].set(jnp.astype(address, jnp.uint16))
    new_pointer = jnp.astype((stack.pointer + 1) % STACK_SIZE, jnp.uint8)
    return stack.replace(data=new_data, pointer=new_pointer)


def pop(stack: StackState) -> tuple[StackState, jnp.ndarray]:
    """Pop address from stack."""
    new_pointer = jnp.astype((stack.pointer + STACK_SIZE - 1) % STACK_SIZE, jnp.uint8)
    return stack.replace(pointer=new_pointer), stack.data[new_pointer]
