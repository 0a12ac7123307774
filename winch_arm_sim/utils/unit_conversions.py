"""
Angle and rotation unit conversions.

Three representations are used throughout the package:

* unsigned degrees in [0, 360),
* signed degrees in (-180, 180], with 0 pointing horizontally right and
  positive values rotating counter-clockwise towards vertical-up,
* rotation fractions in [0, 1), as reported by an absolute encoder.

All functions are pure.
"""

from __future__ import annotations

import math

from winch_arm_sim.utils.constants import DOUBLE_EPSILON


def to_signed_degrees(unsigned_degrees: float) -> float:
    """Map an angle in unsigned degrees onto (-180, 180].

    Args:
        unsigned_degrees: Angle in degrees, nominally in [0, 360).

    Returns:
        The same angle in signed degrees.
    """
    degrees = unsigned_degrees % 360.0
    if degrees > 180.0:
        return degrees - 360.0
    return degrees


def to_unsigned_degrees(signed_degrees: float) -> float:
    """Map an angle in signed degrees onto [0, 360).

    Args:
        signed_degrees: Angle in degrees, nominally in (-180, 180].

    Returns:
        The same angle in unsigned degrees.
    """
    degrees = signed_degrees % 360.0
    # -1e-14 % 360.0 rounds up to 360.0
    if degrees >= 360.0:
        return 0.0
    return degrees


def is_in_right_half_plane(signed_degrees: float) -> bool:
    """Return *True* if *signed_degrees* lies in [-90, 90]."""
    return -90.0 <= signed_degrees <= 90.0


def less_than_but_not_equal(a: float, b: float, epsilon: float = DOUBLE_EPSILON) -> bool:
    """Strict ``a < b`` that treats values within *epsilon* as equal.

    Args:
        a: Left-hand value.
        b: Right-hand value.
        epsilon: Absolute tolerance below which the two are considered equal.

    Returns:
        *True* only if *a* is smaller than *b* by more than *epsilon*.
    """
    return a < b and not math.isclose(a, b, rel_tol=0.0, abs_tol=epsilon)


def offset_rotation_position(position: float, offset: float) -> float:
    """Shift a rotation fraction by *offset*, wrapping into [0, 1).

    Args:
        position: Rotation fraction, any real value.
        offset: Rotation offset, any real value (normally in [0, 1)).

    Returns:
        ``(position + offset) mod 1.0``.
    """
    position_with_offset = position + offset
    wrapped = position_with_offset - math.floor(position_with_offset)
    if wrapped >= 1.0:
        return 0.0
    return wrapped


def signed_degrees_to_rotations(signed_degrees: float) -> float:
    """Convert signed degrees to a non-offset rotation fraction in [0, 1)."""
    return offset_rotation_position(to_unsigned_degrees(signed_degrees) / 360.0, 0.0)


def to_non_offset_signed_degrees(position: float, offset: float) -> float:
    """Convert a raw (offset) encoder rotation into true signed degrees.

    The encoder reports ``true_rotation + offset``; this removes the offset
    and expresses the result in signed degrees.

    Args:
        position: Raw encoder rotation fraction.
        offset: Encoder rotation offset in [0, 1).

    Returns:
        Signed degrees of the arm for that encoder reading.
    """
    position_without_offset = offset_rotation_position(position, -offset)
    return to_signed_degrees(position_without_offset * 360.0)
