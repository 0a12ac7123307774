from __future__ import annotations

import numpy as np
import pytest

from winch_arm_sim.utils.unit_conversions import (
    is_in_right_half_plane,
    less_than_but_not_equal,
    offset_rotation_position,
    signed_degrees_to_rotations,
    to_non_offset_signed_degrees,
    to_signed_degrees,
    to_unsigned_degrees,
)


@pytest.mark.parametrize("degrees", [0.0, 45.0, 90.0, 179.5, 180.0])
def test_to_signed_degrees_keeps_upper_half(degrees: float) -> None:
    assert to_signed_degrees(degrees) == pytest.approx(degrees)


@pytest.mark.parametrize("degrees", [180.5, 270.0, 359.0])
def test_to_signed_degrees_wraps_lower_half(degrees: float) -> None:
    assert to_signed_degrees(degrees) == pytest.approx(degrees - 360.0)


def test_signed_unsigned_round_trip() -> None:
    for signed in np.linspace(-179.9, 180.0, 97):
        unsigned = to_unsigned_degrees(float(signed))
        assert 0.0 <= unsigned < 360.0
        assert to_signed_degrees(unsigned) == pytest.approx(float(signed), abs=1e-9)


def test_to_unsigned_degrees_of_negative_angle() -> None:
    assert to_unsigned_degrees(-90.0) == pytest.approx(270.0)
    assert to_unsigned_degrees(-1e-15) < 360.0


def test_right_half_plane_is_inclusive() -> None:
    assert is_in_right_half_plane(-90.0)
    assert is_in_right_half_plane(90.0)
    assert is_in_right_half_plane(0.0)
    assert not is_in_right_half_plane(90.001)
    assert not is_in_right_half_plane(-135.0)


def test_less_than_but_not_equal_tolerates_rounding() -> None:
    assert less_than_but_not_equal(1.0, 2.0)
    assert not less_than_but_not_equal(2.0, 1.0)
    assert not less_than_but_not_equal(1.0, 1.0)
    assert not less_than_but_not_equal(0.1 + 0.2 - 1e-12, 0.3)


def test_offset_rotation_position_stays_in_unit_interval() -> None:
    rng = np.random.default_rng(0)
    for position in rng.uniform(-5.0, 5.0, size=200):
        for offset in (0.0, 0.25, 0.999):
            value = offset_rotation_position(float(position), offset)
            assert 0.0 <= value < 1.0
    assert offset_rotation_position(0.9, 0.2) == pytest.approx(0.1)
    assert offset_rotation_position(-1e-17, 0.0) < 1.0


def test_signed_degrees_to_rotations() -> None:
    assert signed_degrees_to_rotations(90.0) == pytest.approx(0.25)
    assert signed_degrees_to_rotations(-90.0) == pytest.approx(0.75)


def test_to_non_offset_signed_degrees_removes_offset() -> None:
    assert to_non_offset_signed_degrees(0.35, 0.1) == pytest.approx(90.0)
    assert to_non_offset_signed_degrees(0.05, 0.3) == pytest.approx(-90.0)
