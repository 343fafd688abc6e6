"""Run configuration for the chipjax command line."""

import dataclasses
from typing import Optional

from chipjax.constants import DEFAULT_FREQUENCY, TIMER_FREQUENCY
from chipjax.errors import ConfigurationError
from chipjax.logging import LEVEL_ORDER
from chipjax.rendering import COLOR_SCHEMES


@dataclasses.dataclass(frozen=True)
class EmulatorConfig:
    """Settings for one emulator run.

    Attributes:
        rom_path: Path of the program file to load at 0x200
        frequency: Instruction cycles per second
        timer_frequency: Delay/sound timer ticks per second
        seed: Seed of the random key used by CXNN
        cycles: Run headless for this many cycles instead of opening the terminal
        snapshot: Optional image path for the final display (headless only)
        color_scheme: Colours used for the snapshot
        scale: Snapshot upscaling factor
        log_level: Console log level
    """
    rom_path: str
    frequency: int = DEFAULT_FREQUENCY
    timer_frequency: int = TIMER_FREQUENCY
    seed: int = 0
    cycles: Optional[int] = None
    snapshot: Optional[str] = None
    color_scheme: str = "classic"
    scale: int = 8
    log_level: str = "INFO"

    @property
    def headless(self) -> bool:
        return self.cycles is not None

    @property
    def cycles_per_tick(self) -> int:
        """Number of instruction cycles between two timer ticks."""
        return max(1, round(self.frequency / self.timer_frequency))

    def validate(self) -> "EmulatorConfig":
        """Raise ConfigurationError on inconsistent settings, return self otherwise."""
        if not self.rom_path:
            raise ConfigurationError("A ROM path is required")
        if self.frequency <= 0:
            raise ConfigurationError(f"Frequency must be positive, got {self.frequency}")
        if self.timer_frequency <= 0:
            raise ConfigurationError(f"Timer frequency must be positive, got {self.timer_frequency}")
        if self.cycles is not None and self.cycles <= 0:
            raise ConfigurationError(f"Cycle count must be positive, got {self.cycles}")
        if self.scale <= 0:
            raise ConfigurationError(f"Scale must be positive, got {self.scale}")
        if self.color_scheme not in COLOR_SCHEMES:
            raise ConfigurationError(
                f"Unknown color scheme '{self.color_scheme}'. Available: {list(COLOR_SCHEMES)}"
            )
        if self.log_level.upper() not in LEVEL_ORDER:
            raise ConfigurationError(f"Unknown log level '{self.log_level}'")
        if self.snapshot is not None and not self.headless:
            raise ConfigurationError("--snapshot requires --cycles")
        return self
