"""Tests for control flow instructions."""

import pytest
from chipjax import execute
from conftest import set_registers, set_keys


class TestJump:
    """Test jump instructions."""

    def test_execute_jump(self, fresh_state):
        """Test 1NNN - Jump to address."""
        state = execute(fresh_state, 0x1001)
        assert state.pc == 1

    def test_jump_with_offset(self, fresh_state):
        """BNNN - Jump to NNN + V0."""
        state = set_registers(fresh_state, V0=0x10)
        state = execute(state, 0xB300)
        assert state.pc == 0x310

    def test_jump_with_offset_ignores_vx(self, fresh_state):
        """BNNN always uses V0, even when the X nibble names another register."""
        state = set_registers(fresh_state, V0=0x02, V3=0x40)
        state = execute(state, 0xB345)
        assert state.pc == 0x347

    def test_jump_with_offset_is_not_masked(self, fresh_state):
        state = set_registers(fresh_state, V0=0xFF)
        state = execute(state, 0xBFFF)
        assert state.pc == 0xFFF + 0xFF


class TestSkipInstructions:
    """Test all skip instruction variants."""

    @pytest.mark.parametrize("value, skips", [(0x42, True), (0x41, False)])
    def test_skip_if_equal_immediate(self, fresh_state, value, skips):
        """3XNN - Skip when VX == NN."""
        state = set_registers(fresh_state, V5=value)
        initial_pc = state.pc

        state = execute(state, 0x3542)  # Skip if V5 == 0x42
        assert state.pc == initial_pc + (2 if skips else 0)

    @pytest.mark.parametrize("value, skips", [(0x10, True), (0x20, False)])
    def test_skip_if_not_equal_immediate(self, fresh_state, value, skips):
        """4XNN - Skip when VX != NN."""
        state = set_registers(fresh_state, V3=value)
        initial_pc = state.pc

        state = execute(state, 0x4320)  # Skip if V3 != 0x20
        assert state.pc == initial_pc + (2 if skips else 0)

    def test_skip_if_equal_register_true(self, fresh_state):
        """5XY0 - Should skip when VX == VY."""
        state = set_registers(fresh_state, V1=0x55, V2=0x55)
        initial_pc = state.pc

        state = execute(state, 0x5120)  # Skip if V1 == V2
        assert state.pc == initial_pc + 2

    def test_skip_if_equal_register_false(self, fresh_state):
        """5XY0 - Should not skip when VX != VY."""
        state = set_registers(fresh_state, V1=0x55, V2=0x44)
        initial_pc = state.pc

        state = execute(state, 0x5120)  # Skip if V1 == V2
        assert state.pc == initial_pc

    def test_skip_if_not_equal_register_true(self, fresh_state):
        """9XY0 - Should skip when VX != VY."""
        state = set_registers(fresh_state, V7=0xAA, V8=0xBB)
        initial_pc = state.pc

        state = execute(state, 0x9780)  # Skip if V7 != V8
        assert state.pc == initial_pc + 2

    def test_skip_if_not_equal_register_false(self, fresh_state):
        """9XY0 - Should not skip when VX == VY."""
        state = set_registers(fresh_state, V7=0xAA, V8=0xAA)
        initial_pc = state.pc

        state = execute(state, 0x9780)
        assert state.pc == initial_pc


class TestKeySkips:
    """Test EX9E / EXA1."""

    def test_skip_if_key_pressed(self, fresh_state):
        state = set_keys(set_registers(fresh_state, V2=0xA), 0xA)
        initial_pc = state.pc

        state = execute(state, 0xE29E)
        assert state.pc == initial_pc + 2

    def test_no_skip_if_key_released(self, fresh_state):
        state = set_keys(set_registers(fresh_state, V2=0xA), 0xB)
        initial_pc = state.pc

        state = execute(state, 0xE29E)
        assert state.pc == initial_pc

    def test_skip_if_key_not_pressed(self, fresh_state):
        state = set_registers(fresh_state, V2=0x3)
        initial_pc = state.pc

        state = execute(state, 0xE2A1)
        assert state.pc == initial_pc + 2

    def test_no_skip_if_not_pressed_key_is_down(self, fresh_state):
        state = set_keys(set_registers(fresh_state, V2=0x3), 0x3)
        initial_pc = state.pc

        state = execute(state, 0xE2A1)
        assert state.pc == initial_pc

    @pytest.mark.parametrize("pressed", [True, False])
    def test_unknown_key_instruction_is_no_op(self, fresh_state, pressed):
        state = set_registers(fresh_state, V2=0x3)
        if pressed:
            state = set_keys(state, 0x3)
        initial_pc = state.pc

        state = execute(state, 0xE2FF)
        assert state.pc == initial_pc
