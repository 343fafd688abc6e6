"""CHIP-8 instruction decoding.

An instruction word ``0xFXYN`` is split into its family nibble ``F``, the
register nibbles ``X`` and ``Y``, and the immediates ``N`` (low nibble),
``KK`` (low byte) and ``NNN`` (low 12 bits). Which of them an instruction
uses depends on its family; decoding always extracts all of them.
"""

from chex import dataclass

from chipjax.constants import ADDRESS_MASK


@dataclass(frozen=True)
class DecodedInstruction:
    family: int
    x: int
    y: int
    n: int
    kk: int
    nnn: int


def decode(instruction: int) -> DecodedInstruction:
    """Split a 16-bit instruction word into its operand fields."""
    return DecodedInstruction(
        family=(instruction >> 12) & 0xF,
        x=(instruction >> 8) & 0xF,
        y=(instruction >> 4) & 0xF,
        n=instruction & 0xF,
        kk=instruction & 0xFF,
        nnn=instruction & ADDRESS_MASK,
    )
