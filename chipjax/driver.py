"""Curses terminal driver: keyboard in, framebuffer out.

The loop polls one key per iteration, runs one cycle, ticks the timers at a
fixed wall-clock rate and repaints only when the machine raised ``redraw``.
"""

import curses
import time
from typing import Callable, Dict, List

import numpy as np

from chipjax.config import EmulatorConfig
from chipjax.constants import NUM_KEYS, SCREEN_WIDTH, SCREEN_HEIGHT
from chipjax.emulator import cycle, tick_timers
from chipjax.state import EmulatorState, acknowledge_redraw, set_keypad

# Host keys laid out like the 4x4 hexadecimal keypad:
#   1 2 3 4      1 2 3 C
#   q w e r  ->  4 5 6 D
#   a s d f      7 8 9 E
#   z x c v      A 0 B F
KEY_MAP: Dict[int, int] = {
    ord('1'): 0x1, ord('2'): 0x2, ord('3'): 0x3, ord('4'): 0xC,
    ord('q'): 0x4, ord('w'): 0x5, ord('e'): 0x6, ord('r'): 0xD,
    ord('a'): 0x7, ord('s'): 0x8, ord('d'): 0x9, ord('f'): 0xE,
    ord('z'): 0xA, ord('x'): 0x0, ord('c'): 0xB, ord('v'): 0xF,
}

QUIT_KEY = ord('q') - ord('a') + 1  # Ctrl-Q


def translate_key(key: int) -> List[bool]:
    """Keypad state for a single polled host key (-1 when nothing was typed)."""
    keys = [False] * NUM_KEYS
    if key in KEY_MAP:
        keys[KEY_MAP[key]] = True
    return keys


def draw_display(screen, display) -> None:
    screen.erase()
    pixels = np.array(display, dtype=np.bool_)
    for x, y in zip(*np.nonzero(pixels)):
        try:
            screen.addch(int(y), int(x), curses.ACS_BLOCK)
        except curses.error:
            # Writing the bottom-right cell moves the cursor off screen
            pass
    screen.refresh()


class TerminalDriver:
    """Runs an emulator state inside a curses screen until Ctrl-Q."""

    def __init__(
        self,
        config: EmulatorConfig,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config
        self.clock = clock
        self.sleep = sleep
        self.cycle_delay = 1.0 / config.frequency
        self.timer_delay = 1.0 / config.timer_frequency
        self.cycles_run = 0

    def step(self, state: EmulatorState, key: int, last_tick: float, screen=None):
        """Advance one iteration of the loop; returns the new state and tick time."""
        state = set_keypad(state, translate_key(key))
        state = cycle(state)
        self.cycles_run += 1

        now = self.clock()
        if now - last_tick >= self.timer_delay:
            state = tick_timers(state)
            last_tick = now

        if bool(state.redraw):
            if screen is not None:
                draw_display(screen, state.display)
            state = acknowledge_redraw(state)
        return state, last_tick

    def _loop(self, screen, state: EmulatorState) -> EmulatorState:
        curses.curs_set(0)
        curses.noecho()
        curses.raw()
        screen.nodelay(True)
        screen.keypad(True)

        last_tick = self.clock()
        while True:
            key = screen.getch()
            if key == QUIT_KEY:
                return state
            state, last_tick = self.step(state, key, last_tick, screen)
            self.sleep(self.cycle_delay)

    def run(self, state: EmulatorState) -> EmulatorState:
        """Take over the terminal and run until the quit key is pressed."""
        return curses.wrapper(self._checked_loop, state)

    def _checked_loop(self, screen, state: EmulatorState) -> EmulatorState:
        height, width = screen.getmaxyx()
        if height < SCREEN_HEIGHT or width < SCREEN_WIDTH:
            raise curses.error(
                f"Terminal must be at least {SCREEN_WIDTH}x{SCREEN_HEIGHT}, got {width}x{height}"
            )
        return self._loop(screen, state)
