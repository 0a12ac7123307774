"""
Dataclass configuration for the winch-driven arm environment.

Classes:
    WinchArmSimConfig: Arm geometry, travel limits and episode settings for
        the winch-driven arm environment.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from winch_arm_sim.errors import ConfigurationError
from winch_arm_sim.robots.arm_simulation import (
    ArmSimulation,
    EncoderSink,
    GrabberOpenSupplier,
    WinchModel,
)
from winch_arm_sim.utils.constants import (
    ARM_LENGTH_FROM_EDGE_TO_PIVOT,
    ARM_LENGTH_FROM_EDGE_TO_PIVOT_MIN,
    BOTTOM_ROTATIONS_LIMIT,
    DEFAULT_FPS,
    DEFAULT_RENDER_HEIGHT,
    DEFAULT_RENDER_WIDTH,
    DELTA_ROTATIONS_BEFORE_BROKEN,
    ENCODER_ROTATIONS_OFFSET,
    GRABBER_BREAKS_IF_OPEN_BELOW_THIS_LIMIT,
    HEIGHT_FROM_WINCH_TO_PIVOT_POINT,
    TOP_ROTATIONS_LIMIT,
    WINCH_DRUM_DIAMETER,
)


@dataclass
class WinchArmSimConfig:
    """Configuration for the winch-driven arm environment.

    The agent turns the winch drum and opens or closes the grabber, trying
    to hold the arm at a target angle without breaking it.  Rotation limits
    are raw encoder rotations, including ``encoder_rotations_offset``.

    Attributes:
        task: Suite name used by ``make_sim_env``.
        fps: Simulation ticks per second.
        episode_length: Maximum steps per episode.
        obs_type: Observation mode (``'state'`` or ``'pixels_agent_pos'``).
        render_mode: Gymnasium render mode.
        observation_height: Pixel height of rendered observations.
        observation_width: Pixel width of rendered observations.
        seed: Random seed for reproducibility.
        action_dim: Winch speed plus grabber command (2).
        state_dim: Encoder position, grabber flag and broken flag (3).
        max_spool_rotations_per_step: Drum rotations at full winch speed.
        drum_diameter: Winch drum diameter.
        start_signed_degrees: Arm angle at reset; *None* samples one.
        target_tolerance_degrees: Success band around the target angle.
    """

    task: str = "WinchArm-Sim-v0"
    fps: int = DEFAULT_FPS
    episode_length: int = 500
    obs_type: str = "state"
    render_mode: str = "rgb_array"
    observation_height: int = DEFAULT_RENDER_HEIGHT
    observation_width: int = DEFAULT_RENDER_WIDTH
    seed: int = 42
    action_dim: int = 2
    state_dim: int = 3
    top_rotations_limit: float = TOP_ROTATIONS_LIMIT
    bottom_rotations_limit: float = BOTTOM_ROTATIONS_LIMIT
    delta_rotations_before_broken: float = DELTA_ROTATIONS_BEFORE_BROKEN
    grabber_breaks_if_open_below_this_limit: float = GRABBER_BREAKS_IF_OPEN_BELOW_THIS_LIMIT
    height_from_winch_to_pivot_point: float = HEIGHT_FROM_WINCH_TO_PIVOT_POINT
    arm_length_from_edge_to_pivot: float = ARM_LENGTH_FROM_EDGE_TO_PIVOT
    arm_length_from_edge_to_pivot_min: float = ARM_LENGTH_FROM_EDGE_TO_PIVOT_MIN
    encoder_rotations_offset: float = ENCODER_ROTATIONS_OFFSET
    max_spool_rotations_per_step: float = 0.05
    drum_diameter: float = WINCH_DRUM_DIAMETER
    start_signed_degrees: Optional[float] = 10.0
    target_tolerance_degrees: float = 1.0

    def __post_init__(self) -> None:
        if self.fps <= 0:
            raise ConfigurationError("fps must be positive")
        if self.episode_length < 1:
            raise ConfigurationError("episode_length must be at least 1")
        if self.max_spool_rotations_per_step <= 0.0:
            raise ConfigurationError("max_spool_rotations_per_step must be positive")
        if self.target_tolerance_degrees <= 0.0:
            raise ConfigurationError("target_tolerance_degrees must be positive")

    def build_arm(
        self,
        winch: WinchModel,
        encoder: EncoderSink,
        grabber_open_supplier: Optional[GrabberOpenSupplier] = None,
        log: Optional[logging.Logger] = None,
    ) -> ArmSimulation:
        """Create an ``ArmSimulation`` from this configuration.

        Raises:
            ConfigurationError: If the arm parameters are inconsistent.
        """
        return ArmSimulation(
            winch,
            encoder,
            top_rotations_limit=self.top_rotations_limit,
            bottom_rotations_limit=self.bottom_rotations_limit,
            delta_rotations_before_broken=self.delta_rotations_before_broken,
            grabber_breaks_if_open_below_this_limit=self.grabber_breaks_if_open_below_this_limit,
            height_from_winch_to_pivot_point=self.height_from_winch_to_pivot_point,
            arm_length_from_edge_to_pivot=self.arm_length_from_edge_to_pivot,
            arm_length_from_edge_to_pivot_min=self.arm_length_from_edge_to_pivot_min,
            encoder_rotations_offset=self.encoder_rotations_offset,
            grabber_open_supplier=grabber_open_supplier,
            log=log,
        )
