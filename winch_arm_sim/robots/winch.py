"""
Kinematic winch model.

The winch spools string on a drum; turning the drum changes the unspooled
string length by one drum circumference per rotation.  Motor dynamics are
not modelled: callers move the drum directly.

Classes:
    WinchSimulation: Tracks the unspooled string length of a winch drum.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from winch_arm_sim.errors import ConfigurationError
from winch_arm_sim.utils.constants import (
    WINCH_DRUM_DIAMETER,
    WINCH_STRING_LEN_MAX,
    WINCH_STRING_LEN_MIN,
)
from winch_arm_sim.utils.helpers import clamp


@dataclass
class WinchSimulation:
    """A winch drum with a bounded amount of string.

    Attributes:
        string_unspooled_len: Current string length between anchor and arm.
        drum_diameter: Diameter of the spool drum.
        min_string_len: Length when fully spooled in.
        max_string_len: Length when fully unspooled.
    """

    string_unspooled_len: float = 0.0
    drum_diameter: float = WINCH_DRUM_DIAMETER
    min_string_len: float = WINCH_STRING_LEN_MIN
    max_string_len: float = WINCH_STRING_LEN_MAX

    def __post_init__(self) -> None:
        if self.drum_diameter <= 0.0:
            raise ConfigurationError("drum_diameter must be positive")
        if self.min_string_len < 0.0 or self.max_string_len <= self.min_string_len:
            raise ConfigurationError("string length range must satisfy 0 <= min < max")
        self.set_string_unspooled_len(self.string_unspooled_len)

    def get_string_unspooled_len(self) -> float:
        """Return the current unspooled string length."""
        return self.string_unspooled_len

    def set_string_unspooled_len(self, string_len: float) -> None:
        """Place the string at *string_len*, limited by the drum capacity."""
        self.string_unspooled_len = clamp(
            float(string_len), self.min_string_len, self.max_string_len
        )

    def spool_rotations(self, rotations: float) -> float:
        """Turn the drum; positive rotations unspool string.

        Args:
            rotations: Drum rotations this step.

        Returns:
            The new unspooled string length.
        """
        circumference = float(np.pi) * self.drum_diameter
        self.set_string_unspooled_len(self.string_unspooled_len + rotations * circumference)
        return self.string_unspooled_len
