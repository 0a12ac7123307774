from __future__ import annotations

import math

import numpy as np
import pytest

from winch_arm_sim.errors import ConfigurationError
from winch_arm_sim.robots.arm_geometry import ArmAngleCalculator

HEIGHT = 0.8
ARM = 0.35


@pytest.fixture
def calculator() -> ArmAngleCalculator:
    return ArmAngleCalculator(HEIGHT, ARM)


def test_horizontal_arm(calculator: ArmAngleCalculator) -> None:
    result = calculator.calc_signed_degrees_for_string_len(math.hypot(HEIGHT, ARM))
    assert result.is_valid
    assert result.signed_degrees == pytest.approx(0.0, abs=1e-9)


def test_longer_string_raises_arm(calculator: ArmAngleCalculator) -> None:
    low = calculator.calc_signed_degrees_for_string_len(0.7)
    high = calculator.calc_signed_degrees_for_string_len(1.0)
    assert low.is_valid and high.is_valid
    assert low.signed_degrees < 0.0 < high.signed_degrees


@pytest.mark.parametrize("string_len", [HEIGHT - ARM, HEIGHT + ARM])
def test_degenerate_triangle_is_invalid(
    calculator: ArmAngleCalculator, string_len: float
) -> None:
    assert not calculator.calc_signed_degrees_for_string_len(string_len).is_valid


@pytest.mark.parametrize("string_len", [0.0, 0.2, 1.5, -1.0])
def test_impossible_string_len_is_invalid(
    calculator: ArmAngleCalculator, string_len: float
) -> None:
    assert not calculator.calc_signed_degrees_for_string_len(string_len).is_valid


def test_valid_lengths_stay_inside_right_half_plane(calculator: ArmAngleCalculator) -> None:
    for string_len in np.linspace(HEIGHT - ARM + 1e-4, HEIGHT + ARM - 1e-4, 50):
        result = calculator.calc_signed_degrees_for_string_len(float(string_len))
        assert result.is_valid
        assert -90.0 < result.signed_degrees < 90.0


def test_inverse_matches_forward(calculator: ArmAngleCalculator) -> None:
    for degrees in (-60.0, -10.0, 0.0, 33.0, 80.0):
        string_len = calculator.calc_string_len_for_signed_degrees(degrees)
        result = calculator.calc_signed_degrees_for_string_len(string_len)
        assert result.signed_degrees == pytest.approx(degrees, abs=1e-6)


def test_inverse_rejects_left_half_plane(calculator: ArmAngleCalculator) -> None:
    with pytest.raises(ValueError):
        calculator.calc_string_len_for_signed_degrees(120.0)


def test_non_positive_geometry_rejected() -> None:
    with pytest.raises(ConfigurationError):
        ArmAngleCalculator(0.0, ARM)
    with pytest.raises(ConfigurationError):
        ArmAngleCalculator(HEIGHT, -0.1)
