"""Console logging utilities for chipjax.

Log lines carry an elapsed-time stamp, a padded level tag and the logger name,
coloured when the output stream is a terminal.
"""

import time
import sys
from typing import Dict, Optional, TextIO


LEVEL_ORDER = {
    "DEBUG": 0,
    "INFO": 1,
    "WARNING": 2,
    "ERROR": 3,
    "CRITICAL": 4,
}


class ConsoleLogger:
    """Console logger with level filtering and optional colours."""

    def __init__(
        self,
        name: str = "chipjax",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
        stream: Optional[TextIO] = None,
    ):
        if log_level.upper() not in LEVEL_ORDER:
            raise ValueError(
                f"Unknown log level '{log_level}'. Available: {list(LEVEL_ORDER)}"
            )
        self.name = name
        self.log_level = log_level.upper()
        self._stream = stream
        self.use_colors = (
            use_colors and hasattr(self.stream, "isatty") and self.stream.isatty()
        )
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

        self.colors: Dict[str, str] = (
            {
                "DEBUG": "\033[36m",
                "INFO": "\033[32m",
                "WARNING": "\033[33m",
                "ERROR": "\033[31m",
                "CRITICAL": "\033[35m",
                "RESET": "\033[0m"
            }
            if self.use_colors
            else {k: "" for k in [*LEVEL_ORDER, "RESET"]}
        )

    @property
    def stream(self) -> TextIO:
        """Output stream; defaults to whatever sys.stdout is at write time."""
        return self._stream if self._stream is not None else sys.stdout

    def _should_log(self, level: str) -> bool:
        """Check if message should be logged based on current log level."""
        return LEVEL_ORDER.get(level.upper(), 1) >= LEVEL_ORDER[self.log_level]

    def _format_message(self, level: str, message: str) -> str:
        """Format log message with timestamp, level, and colors."""
        timestamp = (
            f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        )
        level_str = f"[{level:>8s}]"
        name_str = f"[{self.name}]"

        if self.use_colors:
            color = self.colors.get(level.upper(), "")
            reset = self.colors["RESET"]
            level_str = f"{color}{level_str}{reset}"

        return f"{timestamp}{level_str}{name_str} {message}"

    def log(self, level: str, message: str):
        """Log a message at the specified level."""
        if self._should_log(level):
            print(self._format_message(level, message), file=self.stream, flush=True)

    def debug(self, message: str):
        self.log("DEBUG", message)

    def info(self, message: str):
        self.log("INFO", message)

    def warning(self, message: str):
        self.log("WARNING", message)

    def error(self, message: str):
        self.log("ERROR", message)

    def critical(self, message: str):
        self.log("CRITICAL", message)


_loggers: Dict[str, ConsoleLogger] = {}


def get_logger(name: str = "chipjax", log_level: Optional[str] = None, **kwargs) -> ConsoleLogger:
    """Return the shared logger for ``name``, creating it on first use.

    Passing ``log_level`` (or any other keyword) replaces the cached instance.
    """
    if name not in _loggers or log_level is not None or kwargs:
        _loggers[name] = ConsoleLogger(name, log_level=log_level or "INFO", **kwargs)
    return _loggers[name]
