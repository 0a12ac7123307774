"""
Simulated absolute (duty-cycle) encoder.

Classes:
    AbsoluteEncoderSim: Holds the last rotation fraction written by the arm.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class AbsoluteEncoderSim:
    """Write-side of an absolute encoder reporting a rotation in [0, 1).

    Attributes:
        position: Last written rotation fraction.
        write_count: Number of writes since creation.
    """

    position: float = 0.0
    write_count: int = 0

    def set(self, position: float) -> None:
        """Publish a new rotation fraction.

        Raises:
            ValueError: If *position* is outside [0, 1).
        """
        if not 0.0 <= position < 1.0:
            raise ValueError(f"Encoder position must be in [0, 1), got {position}")
        self.position = float(position)
        self.write_count += 1

    def get(self) -> float:
        """Return the last published rotation fraction."""
        return self.position
