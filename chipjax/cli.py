"""Command line entry point: ``chipjax ROM [options]``."""

import argparse
import curses
import sys
from typing import List, Optional

import jax
from tqdm import tqdm

from chipjax.config import EmulatorConfig
from chipjax.constants import DEFAULT_FREQUENCY, TIMER_FREQUENCY
from chipjax.driver import TerminalDriver
from chipjax.emulator import load_rom, run_cycles, tick_timers
from chipjax.errors import ChipError
from chipjax.logging import ConsoleLogger, get_logger
from chipjax.rendering import COLOR_SCHEMES, display_to_text, save_snapshot
from chipjax.state import EmulatorState, create_state


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chipjax",
        description="Run a CHIP-8 program in the terminal or headless",
    )
    parser.add_argument("rom", help="Path to the ROM file")
    parser.add_argument(
        "--freq",
        type=int,
        default=DEFAULT_FREQUENCY,
        help=f"Instruction cycles per second (default: {DEFAULT_FREQUENCY})",
    )
    parser.add_argument(
        "--timer-freq",
        type=int,
        default=TIMER_FREQUENCY,
        help=f"Timer ticks per second (default: {TIMER_FREQUENCY})",
    )
    parser.add_argument("--seed", type=int, default=0, help="Random seed for CXNN (default: 0)")
    parser.add_argument(
        "--cycles",
        type=int,
        default=None,
        help="Run headless for this many cycles and print the final display",
    )
    parser.add_argument("--snapshot", default=None, help="Save the final display as an image (headless only)")
    parser.add_argument("--scheme", default="classic", choices=sorted(COLOR_SCHEMES), help="Snapshot colours")
    parser.add_argument("--scale", type=int, default=8, help="Snapshot upscaling factor (default: 8)")
    parser.add_argument(
        "--log-level",
        default="INFO",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    )
    return parser


def parse_config(argv: Optional[List[str]] = None) -> EmulatorConfig:
    args = build_parser().parse_args(argv)
    return EmulatorConfig(
        rom_path=args.rom,
        frequency=args.freq,
        timer_frequency=args.timer_freq,
        seed=args.seed,
        cycles=args.cycles,
        snapshot=args.snapshot,
        color_scheme=args.scheme,
        scale=args.scale,
        log_level=args.log_level,
    ).validate()


def run_headless(state: EmulatorState, config: EmulatorConfig, show_progress: bool = True) -> EmulatorState:
    """Run ``config.cycles`` cycles, ticking the timers every ``cycles_per_tick``."""
    chunk = config.cycles_per_tick
    remaining = config.cycles
    with tqdm(total=config.cycles, desc="Running", unit="cycle", disable=not show_progress) as progress:
        while remaining > 0:
            n = min(chunk, remaining)
            state = run_cycles(state, n)
            if n == chunk:
                state = tick_timers(state)
            remaining -= n
            progress.update(n)
    return state


def summarize(state: EmulatorState, logger: ConsoleLogger) -> None:
    registers = " ".join(f"V{i:X}={int(v):02X}" for i, v in enumerate(state.V))
    logger.info(f"PC=0x{int(state.pc):03X} I=0x{int(state.I):03X} SP={int(state.stack.pointer)}")
    logger.info(registers)
    logger.debug(f"DT={int(state.delay_timer)} ST={int(state.sound_timer)}")


def main(argv: Optional[List[str]] = None) -> int:
    try:
        config = parse_config(argv)
    except ChipError as e:
        get_logger("chipjax").error(str(e))
        return 1

    logger = get_logger("chipjax", config.log_level)

    try:
        state = load_rom(create_state(jax.random.PRNGKey(config.seed)), config.rom_path)
    except ChipError as e:
        logger.error(str(e))
        return 1
    logger.info(f"Loaded {config.rom_path}")

    if config.headless:
        logger.info(f"Running {config.cycles} cycles headless at {config.frequency} Hz")
        state = run_headless(state, config, show_progress=sys.stderr.isatty())
        for line in display_to_text(state.display):
            print(line.rstrip())
        if config.snapshot:
            save_snapshot(state.display, config.snapshot, config.scale, config.color_scheme)
            logger.info(f"Snapshot saved to {config.snapshot}")
    else:
        logger.info(f"Starting terminal driver at {config.frequency} Hz, Ctrl-Q quits")
        driver = TerminalDriver(config)
        try:
            state = driver.run(state)
        except curses.error as e:
            logger.critical(f"Terminal driver failed: {e}")
            return 1
        logger.info(f"Stopped after {driver.cycles_run} cycles")

    summarize(state, logger)
    return 0


if __name__ == "__main__":
    sys.exit(main())
