"""
Winch-driven arm simulation with mechanical breakage.

Simulates the arm as if it were a real-world object: driving it past its
hard stops, pulling the string into an impossible geometry, or lowering it
into the floor with the grabber open breaks it for the rest of the session.
Each tick reads the winch string length, converts it to an arm angle,
applies the grabber and hard-limit rules, and publishes the result to a
simulated absolute encoder.

Classes:
    Operational: State while the arm still moves.
    Broken: Absorbing state after a mechanical failure.
    ArmSimulation: The per-tick simulator.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Union

from winch_arm_sim.errors import ConfigurationError
from winch_arm_sim.robots.arm_geometry import ArmAngleCalculator
from winch_arm_sim.utils.unit_conversions import (
    is_in_right_half_plane,
    less_than_but_not_equal,
    offset_rotation_position,
    signed_degrees_to_rotations,
    to_non_offset_signed_degrees,
)

logger = logging.getLogger(__name__)

GrabberOpenSupplier = Callable[[], bool]


class WinchModel(Protocol):
    """Anything that reports the winch's unspooled string length."""

    def get_string_unspooled_len(self) -> float:
        ...


class EncoderSink(Protocol):
    """Anything that accepts an absolute-encoder rotation fraction."""

    def set(self, position: float) -> None:
        ...


def always_closed() -> bool:
    """Grabber capability used when no grabber is attached."""
    return False


@dataclass(frozen=True)
class Operational:
    """The arm moves freely.

    Attributes:
        current_signed_degrees: Last committed angle, *None* before the first tick.
    """

    current_signed_degrees: Optional[float] = None


@dataclass(frozen=True)
class Broken:
    """The arm is broken and frozen.

    Attributes:
        frozen_signed_degrees: Angle the arm is stuck at, *None* if it broke
            before any angle was committed.
        reason: Human-readable cause of the breakage.
    """

    frozen_signed_degrees: Optional[float]
    reason: str


ArmState = Union[Operational, Broken]


class ArmSimulation:
    """Simulates a winch-actuated pivoting arm and its absolute encoder.

    Rotation limits are given as raw encoder rotations (i.e. including the
    encoder offset) and converted once to true signed degrees.  The top and
    bottom limits are widened by ``delta_rotations_before_broken`` to give
    the overtravel the mechanism tolerates before it breaks.

    Args:
        winch_simulation: Source of the unspooled string length.
        winch_absolute_encoder_sim: Sink for the offset rotation fraction.
        top_rotations_limit: Highest normal arm position, in encoder rotations.
        bottom_rotations_limit: Lowest normal arm position, in encoder rotations.
        delta_rotations_before_broken: Overtravel past top/bottom before breaking.
        grabber_breaks_if_open_below_this_limit: Encoder rotation below which
            an open grabber hits the ground.
        height_from_winch_to_pivot_point: Winch anchor to pivot distance.
        arm_length_from_edge_to_pivot: Pivot to string attachment distance.
        arm_length_from_edge_to_pivot_min: Smallest arm length that still pivots.
        encoder_rotations_offset: Encoder zero offset in [0, 1).
        grabber_open_supplier: Returns *True* while the grabber is open.
        log: Logger for breakage diagnostics; defaults to the module logger.

    Raises:
        ConfigurationError: If any geometry or limit invariant is violated.
    """

    def __init__(
        self,
        winch_simulation: WinchModel,
        winch_absolute_encoder_sim: EncoderSink,
        top_rotations_limit: float,
        bottom_rotations_limit: float,
        delta_rotations_before_broken: float,
        grabber_breaks_if_open_below_this_limit: float,
        height_from_winch_to_pivot_point: float,
        arm_length_from_edge_to_pivot: float,
        arm_length_from_edge_to_pivot_min: float,
        encoder_rotations_offset: float,
        grabber_open_supplier: Optional[GrabberOpenSupplier] = None,
        log: Optional[logging.Logger] = None,
    ) -> None:
        if winch_simulation is None:
            raise ConfigurationError("winch_simulation is required")
        if winch_absolute_encoder_sim is None:
            raise ConfigurationError("winch_absolute_encoder_sim is required")
        if height_from_winch_to_pivot_point <= 0.0:
            raise ConfigurationError("height_from_winch_to_pivot_point must be positive")
        if arm_length_from_edge_to_pivot < arm_length_from_edge_to_pivot_min:
            raise ConfigurationError(
                f"arm_length_from_edge_to_pivot needs to be at least "
                f"{arm_length_from_edge_to_pivot_min} meters, otherwise the arm can't be pivoted"
            )
        if arm_length_from_edge_to_pivot <= 0.0:
            raise ConfigurationError("arm_length_from_edge_to_pivot must be positive")
        if not 0.0 <= encoder_rotations_offset < 1.0:
            raise ConfigurationError("encoder_rotations_offset must be in [0, 1)")

        self._top_signed_degrees_limit = to_non_offset_signed_degrees(
            top_rotations_limit + delta_rotations_before_broken, encoder_rotations_offset
        )
        self._bottom_signed_degrees_limit = to_non_offset_signed_degrees(
            bottom_rotations_limit - delta_rotations_before_broken, encoder_rotations_offset
        )
        self._grabber_break_signed_degrees_limit = to_non_offset_signed_degrees(
            grabber_breaks_if_open_below_this_limit, encoder_rotations_offset
        )
        self._validate_limits()

        self._winch = winch_simulation
        self._encoder = winch_absolute_encoder_sim
        self._encoder_rotations_offset = encoder_rotations_offset
        self._grabber_open_supplier = grabber_open_supplier or always_closed
        self._log = log or logger
        self._calculator = ArmAngleCalculator(
            height_from_winch_to_pivot_point, arm_length_from_edge_to_pivot
        )
        self._state: ArmState = Operational()

    def _validate_limits(self) -> None:
        """Check the derived signed-degree limits.

        Raises:
            ConfigurationError: If a limit leaves the right half plane or the
                limits are not ordered bottom < grabber break < top.
        """
        top = self._top_signed_degrees_limit
        bottom = self._bottom_signed_degrees_limit
        grabber = self._grabber_break_signed_degrees_limit
        for name, value in (("top", top), ("bottom", bottom), ("grabber break", grabber)):
            if not is_in_right_half_plane(value):
                raise ConfigurationError(
                    f"{name} limit must be between -90 and 90 degrees, got {value:.3f}"
                )
        if top <= bottom:
            raise ConfigurationError(
                f"top limit ({top:.3f} deg) must be above bottom limit ({bottom:.3f} deg)"
            )
        if not bottom < grabber < top:
            raise ConfigurationError(
                f"grabber break limit ({grabber:.3f} deg) must be between the bottom "
                f"({bottom:.3f} deg) and top ({top:.3f} deg) limits"
            )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def state(self) -> ArmState:
        """Current ``Operational`` or ``Broken`` state."""
        return self._state

    @property
    def is_broken(self) -> bool:
        """*True* once the arm has broken; never reverts."""
        return isinstance(self._state, Broken)

    @property
    def broken_reason(self) -> Optional[str]:
        """Cause of the breakage, or *None* while operational."""
        if isinstance(self._state, Broken):
            return self._state.reason
        return None

    @property
    def current_signed_degrees(self) -> Optional[float]:
        """Last committed (or frozen) angle, *None* before the first tick."""
        if isinstance(self._state, Broken):
            return self._state.frozen_signed_degrees
        return self._state.current_signed_degrees

    @property
    def is_current_set(self) -> bool:
        """*True* once an angle has been committed."""
        return self.current_signed_degrees is not None

    @property
    def top_signed_degrees_limit(self) -> float:
        """Top hard stop in signed degrees, overtravel included."""
        return self._top_signed_degrees_limit

    @property
    def bottom_signed_degrees_limit(self) -> float:
        """Bottom hard stop in signed degrees, overtravel included."""
        return self._bottom_signed_degrees_limit

    @property
    def grabber_break_signed_degrees_limit(self) -> float:
        """Angle below which an open grabber hits the ground."""
        return self._grabber_break_signed_degrees_limit

    def set_grabber_open_supplier(self, grabber_open_supplier: Optional[GrabberOpenSupplier]) -> None:
        """Attach (or with *None*, detach) the grabber-open query."""
        self._grabber_open_supplier = grabber_open_supplier or always_closed

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def _is_below_grabber_limit(self, signed_degrees: float) -> bool:
        """Return *True* if *signed_degrees* is below the grabber limit by more than epsilon."""
        return less_than_but_not_equal(signed_degrees, self._grabber_break_signed_degrees_limit)

    def _is_above_grabber_limit(self, signed_degrees: float) -> bool:
        """Return *True* if *signed_degrees* is above the grabber limit by more than epsilon."""
        return less_than_but_not_equal(self._grabber_break_signed_degrees_limit, signed_degrees)

    def _break(self, frozen_signed_degrees: Optional[float], reason: str) -> None:
        """Log *reason* and enter the absorbing ``Broken`` state.

        Args:
            frozen_signed_degrees: Angle the arm stays at.
            reason: Human-readable cause.
        """
        self._log.warning("ARM: %s", reason)
        self._state = Broken(frozen_signed_degrees=frozen_signed_degrees, reason=reason)

    def update(self) -> None:
        """Advance the simulation by one tick.

        Does nothing once the arm is broken, leaving the encoder at its last
        published value.
        """
        if isinstance(self._state, Broken):
            return

        is_grabber_open = bool(self._grabber_open_supplier())
        previous = self._state.current_signed_degrees

        result = self._calculator.calc_signed_degrees_for_string_len(
            self._winch.get_string_unspooled_len()
        )
        if not result.is_valid:
            self._break(previous, "Angle is out of bounds, needs to be in right half plane")
            return

        new_signed_degrees = result.signed_degrees
        broken_reason: Optional[str] = None

        if (
            is_grabber_open
            and previous is not None
            and self._is_below_grabber_limit(new_signed_degrees)
        ):
            # Within epsilon of the limit counts as already in the range, so a
            # jammed arm breaks on the next push down instead of jamming again.
            if self._is_above_grabber_limit(previous):
                self._log.warning(
                    "ARM: Grabber is open while trying to move arm to ground, stuck at %.3f",
                    self._grabber_break_signed_degrees_limit,
                )
                new_signed_degrees = self._grabber_break_signed_degrees_limit
            else:
                broken_reason = "Grabber is open while arm is in breakable range"
                new_signed_degrees = previous

        if new_signed_degrees > self._top_signed_degrees_limit:
            broken_reason = broken_reason or (
                f"Angle is above top limit of {self._top_signed_degrees_limit:.3f}"
            )
            new_signed_degrees = self._top_signed_degrees_limit
        if new_signed_degrees < self._bottom_signed_degrees_limit:
            broken_reason = broken_reason or (
                f"Angle is below bottom limit of {self._bottom_signed_degrees_limit:.3f}"
            )
            new_signed_degrees = self._bottom_signed_degrees_limit

        if broken_reason is not None:
            self._break(new_signed_degrees, broken_reason)
        else:
            self._state = Operational(current_signed_degrees=new_signed_degrees)

        self._write_encoder(new_signed_degrees)

    def _write_encoder(self, signed_degrees: float) -> None:
        """Publish *signed_degrees* to the encoder as an offset rotation fraction."""
        position = signed_degrees_to_rotations(signed_degrees)
        self._encoder.set(offset_rotation_position(position, self._encoder_rotations_offset))

    def periodic(self) -> None:
        """Robot-loop hook; the arm has no non-simulated behaviour."""

    def simulation_periodic(self) -> None:
        """Simulation-loop hook, called once per control cycle."""
        self.update()
