"""CHIP-8 virtual machine package."""

from chipjax.state import EmulatorState, StackState, create_state, set_keypad, acknowledge_redraw
from chipjax.emulator import execute, fetch, cycle, run_cycles, tick_timers, load_program, load_rom
from chipjax.decode import DecodedInstruction, decode
from chipjax.errors import ChipError, ProgramReadFailure, ProgramTooLarge, ConfigurationError
from chipjax.constants import *

__all__ = [
    "EmulatorState",
    "StackState",
    "create_state",
    "set_keypad",
    "acknowledge_redraw",
    "fetch",
    "execute",
    "cycle",
    "run_cycles",
    "tick_timers",
    "load_program",
    "load_rom",
    "DecodedInstruction",
    "decode",
    "ChipError",
    "ProgramReadFailure",
    "ProgramTooLarge",
    "ConfigurationError",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
]
