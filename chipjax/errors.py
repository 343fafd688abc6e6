"""Errors raised around the CHIP-8 core.

Instruction execution itself never raises: unknown opcodes are no-ops and
stack/index bounds are not checked. Only loading a program and configuring a
run can fail.
"""


class ChipError(Exception):
    """Base class for all chipjax errors."""


class ProgramReadFailure(ChipError):
    """The program file could not be read."""


class ProgramTooLarge(ChipError):
    """The program does not fit between PROGRAM_START and the end of memory."""

    def __init__(self, size: int, limit: int):
        super().__init__(f"Program is too large: {size} bytes (max {limit})")
        self.size = size
        self.limit = limit


class ConfigurationError(ChipError):
    """Invalid run configuration."""
