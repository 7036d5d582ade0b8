"""Tests for lifeos.governance.numeric."""

from __future__ import annotations

import math
import sys

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lifeos.governance.numeric import clamp, coerce_number, round_half_up, round_to, saturate


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(0.5, 1), (1.5, 2), (2.5, 3), (-0.5, 0), (-1.5, -1), (2.4999, 2), (83.0, 83)],
    )
    def test_ties_go_up(self, value: float, expected: int) -> None:
        assert round_half_up(value) == expected

    def test_round_to_two_places(self) -> None:
        assert round_to(0.125, 2) == 0.13
        assert round_to(13.333, 1) == 13.3

    def test_round_to_keeps_non_finite(self) -> None:
        assert round_to(math.inf, 1) == math.inf

    def test_largest_float_rounds_to_int(self) -> None:
        assert round_half_up(sys.float_info.max) == int(sys.float_info.max)


class TestSaturate:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (math.inf, sys.float_info.max),
            (-math.inf, -sys.float_info.max),
            (math.nan, 0.0),
            (1e308, 1e308),
            (-12.5, -12.5),
        ],
    )
    def test_saturate(self, value: float, expected: float) -> None:
        assert saturate(value) == expected

    def test_overflowed_sum_stays_finite(self) -> None:
        assert math.isfinite(saturate(1e308 + 1e308))


class TestClamp:
    def test_bounds(self) -> None:
        assert clamp(-12) == 0
        assert clamp(140) == 100
        assert clamp(49.5) == 50

    def test_custom_bounds(self) -> None:
        assert clamp(99, 0, 95) == 95
        assert clamp(1, 5, 95) == 5

    def test_non_finite(self) -> None:
        assert clamp(math.nan) == 0
        assert clamp(math.inf) == 100
        assert clamp(-math.inf) == 0

    @given(st.floats(allow_nan=True, allow_infinity=True))
    def test_always_in_range(self, value: float) -> None:
        result = clamp(value)
        assert isinstance(result, int)
        assert 0 <= result <= 100


class TestCoerceNumber:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (None, 0.0),
            ("42.5", 42.5),
            ("abc", 0.0),
            ("", 0.0),
            (float("nan"), 0.0),
            (float("inf"), 0.0),
            ([1, 2], 0.0),
            (True, 1.0),
            (7, 7.0),
            (-30, -30.0),
        ],
    )
    def test_coercion(self, raw, expected: float) -> None:
        assert coerce_number(raw) == expected
