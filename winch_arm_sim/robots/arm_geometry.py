"""
Winch string length to arm angle geometry.

The winch anchor sits directly below the arm pivot.  The anchor, the pivot
and the arm's string-attachment point form a triangle whose two fixed sides
are the anchor-to-pivot height and the pivot-to-attachment arm length; the
unspooled string is the third, variable side.  The law of cosines gives the
angle at the pivot, measured from straight down, which is shifted by -90
degrees so that 0 points horizontally right and +90 points straight up.

Classes:
    ArmAngleResult: Signed angle plus a validity flag.
    ArmAngleCalculator: Solves the triangle for fixed geometry.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from winch_arm_sim.errors import ConfigurationError
from winch_arm_sim.utils.unit_conversions import less_than_but_not_equal


@dataclass(frozen=True)
class ArmAngleResult:
    """Outcome of an angle calculation.

    Attributes:
        signed_degrees: Arm angle in signed degrees.  Meaningless when
            ``is_valid`` is *False*.
        is_valid: *False* when no real triangle exists for the string length.
    """

    signed_degrees: float
    is_valid: bool


class ArmAngleCalculator:
    """Converts between winch string length and signed arm angle.

    Args:
        height_to_pivot: Distance from the winch anchor up to the pivot.
        arm_length_to_pivot: Distance from the pivot out to the point where
            the string is attached.
    """

    def __init__(self, height_to_pivot: float, arm_length_to_pivot: float) -> None:
        if height_to_pivot <= 0.0:
            raise ConfigurationError("height_to_pivot must be positive")
        if arm_length_to_pivot <= 0.0:
            raise ConfigurationError("arm_length_to_pivot must be positive")
        self.height_to_pivot = float(height_to_pivot)
        self.arm_length_to_pivot = float(arm_length_to_pivot)

    @property
    def min_string_len(self) -> float:
        """Degenerate string length with the arm pointing straight down."""
        return abs(self.height_to_pivot - self.arm_length_to_pivot)

    @property
    def max_string_len(self) -> float:
        """Degenerate string length with the arm pointing straight up."""
        return self.height_to_pivot + self.arm_length_to_pivot

    def _forms_triangle(self, string_len: float) -> bool:
        return less_than_but_not_equal(
            self.min_string_len, string_len
        ) and less_than_but_not_equal(string_len, self.max_string_len)

    def calc_signed_degrees_for_string_len(self, string_len: float) -> ArmAngleResult:
        """Solve for the arm angle produced by *string_len*.

        Args:
            string_len: Unspooled string length from anchor to attachment.

        Returns:
            ``ArmAngleResult`` whose angle lies in (-90, 90) when valid.
        """
        if not self._forms_triangle(string_len):
            return ArmAngleResult(signed_degrees=float("nan"), is_valid=False)

        h = self.height_to_pivot
        a = self.arm_length_to_pivot
        cos_from_down = (h * h + a * a - string_len * string_len) / (2.0 * h * a)
        if not -1.0 <= cos_from_down <= 1.0:
            return ArmAngleResult(signed_degrees=float("nan"), is_valid=False)

        degrees_from_down = float(np.degrees(np.arccos(cos_from_down)))
        return ArmAngleResult(signed_degrees=degrees_from_down - 90.0, is_valid=True)

    def calc_string_len_for_signed_degrees(self, signed_degrees: float) -> float:
        """Return the string length that holds the arm at *signed_degrees*.

        Args:
            signed_degrees: Arm angle in [-90, 90].

        Returns:
            The unspooled string length.

        Raises:
            ValueError: If the angle is outside the right half plane.
        """
        if not -90.0 <= signed_degrees <= 90.0:
            raise ValueError(f"signed_degrees must be in [-90, 90], got {signed_degrees}")
        h = self.height_to_pivot
        a = self.arm_length_to_pivot
        radians_from_down = np.radians(signed_degrees + 90.0)
        return float(np.sqrt(h * h + a * a - 2.0 * h * a * np.cos(radians_from_down)))
