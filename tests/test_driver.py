"""Tests for the terminal driver logic that does not need a real terminal."""

import jax.numpy as jnp
from chipjax import create_state, load_program, PROGRAM_START
from chipjax.config import EmulatorConfig
from chipjax.driver import KEY_MAP, QUIT_KEY, TerminalDriver, translate_key


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


def make_driver(clock):
    return TerminalDriver(EmulatorConfig(rom_path="unused.ch8"), clock=clock, sleep=lambda _: None)


def test_quit_key_is_ctrl_q():
    assert QUIT_KEY == 0x11


def test_key_map_covers_every_key():
    assert sorted(KEY_MAP.values()) == list(range(16))


def test_translate_key():
    keys = translate_key(ord('v'))
    assert keys[0xF]
    assert sum(keys) == 1


def test_translate_no_key():
    assert translate_key(-1) == [False] * 16
    assert translate_key(ord('p')) == [False] * 16


def test_step_waits_then_reads_key():
    clock = FakeClock()
    driver = make_driver(clock)
    state = load_program(create_state(), bytes([0xF3, 0x0A]))

    state, last_tick = driver.step(state, -1, 0.0)
    assert state.pc == PROGRAM_START

    state, last_tick = driver.step(state, ord('x'), last_tick)
    assert state.V[3] == 0x0
    assert state.pc == PROGRAM_START + 2
    assert driver.cycles_run == 2


def test_step_ticks_timers_on_schedule():
    clock = FakeClock()
    driver = make_driver(clock)
    state = create_state().replace(delay_timer=jnp.asarray(5, dtype=jnp.uint8))

    state, last_tick = driver.step(state, -1, 0.0)
    assert state.delay_timer == 5
    assert last_tick == 0.0

    clock.now = 1 / 60
    state, last_tick = driver.step(state, -1, last_tick)
    assert state.delay_timer == 4
    assert last_tick == clock.now


def test_step_acknowledges_redraw():
    driver = make_driver(FakeClock())
    state = load_program(create_state(), bytes([0x00, 0xE0]))

    state, _ = driver.step(state, -1, 0.0)
    assert not state.redraw
