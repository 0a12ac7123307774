"""
Winch-driven arm environment (Gymnasium-compatible).

Closes the loop around ``ArmSimulation`` so control logic can be exercised
without hardware: each step turns the winch drum, ticks the arm simulation
once, and observes the simulated absolute encoder.  Breaking the arm ends
the episode.

Classes:
    WinchArmSimEnv: Gymnasium environment for holding the arm at a target angle.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from winch_arm_sim.envs.configs import WinchArmSimConfig
from winch_arm_sim.robots.arm_geometry import ArmAngleCalculator
from winch_arm_sim.robots.arm_simulation import ArmSimulation
from winch_arm_sim.robots.encoder import AbsoluteEncoderSim
from winch_arm_sim.robots.winch import WinchSimulation
from winch_arm_sim.utils.constants import (
    COLOR_ARM,
    COLOR_BACKGROUND,
    COLOR_BROKEN,
    COLOR_STRING,
    COLOR_TARGET,
    COLOR_WINCH,
)
from winch_arm_sim.utils.helpers import clamp
from winch_arm_sim.utils.unit_conversions import to_non_offset_signed_degrees


class WinchArmSimEnv(gym.Env):
    """Gymnasium environment for a winch-actuated pivoting arm.

    Actions are ``[winch_speed, grabber_cmd]`` in [-1, 1]: positive winch
    speed unspools string (raising the arm) and a positive grabber command
    opens the grabber.  The ``agent_pos`` observation is
    ``[encoder_position, grabber_open, is_broken]``.

    Attributes:
        metadata: Gymnasium metadata with supported render modes.
        cfg: ``WinchArmSimConfig`` controlling geometry, limits and episodes.
    """

    metadata: Dict[str, Any] = {"render_modes": ["rgb_array"]}

    def __init__(self, cfg: WinchArmSimConfig | None = None) -> None:
        """Initialise the environment.

        Args:
            cfg: Optional configuration; a default ``WinchArmSimConfig`` is
                used when *None*.

        Raises:
            ConfigurationError: If the arm parameters are inconsistent.
        """
        super().__init__()
        self.cfg = cfg or WinchArmSimConfig()
        self.metadata = {**self.metadata, "render_fps": self.cfg.fps}
        self.render_mode = self.cfg.render_mode
        self._rng = np.random.default_rng(self.cfg.seed)
        self._calculator = ArmAngleCalculator(
            self.cfg.height_from_winch_to_pivot_point,
            self.cfg.arm_length_from_edge_to_pivot,
        )
        self._top_normal_degrees = to_non_offset_signed_degrees(
            self.cfg.top_rotations_limit, self.cfg.encoder_rotations_offset
        )
        self._bottom_normal_degrees = to_non_offset_signed_degrees(
            self.cfg.bottom_rotations_limit, self.cfg.encoder_rotations_offset
        )
        self._grabber_open = False
        self._target_degrees = 0.0
        self._step_count = 0
        self._build_hardware()
        self._init_spaces()

    # ------------------------------------------------------------------
    # Initialisation helpers
    # ------------------------------------------------------------------

    def _init_spaces(self) -> None:
        """Define action and observation Gymnasium spaces."""
        self.action_space = spaces.Box(
            low=-1.0, high=1.0, shape=(self.cfg.action_dim,), dtype=np.float32
        )
        obs_dict: Dict[str, spaces.Space] = {}
        obs_dict["agent_pos"] = spaces.Box(
            low=0.0, high=1.0, shape=(self.cfg.state_dim,), dtype=np.float32
        )
        if "pixels" in self.cfg.obs_type:
            h, w = self.cfg.observation_height, self.cfg.observation_width
            obs_dict["pixels"] = spaces.Box(low=0, high=255, shape=(h, w, 3), dtype=np.uint8)
        self.observation_space = spaces.Dict(obs_dict)

    def _build_hardware(self) -> None:
        """Create a fresh winch, encoder and arm simulation."""
        self._winch = WinchSimulation(
            string_unspooled_len=self._calculator.calc_string_len_for_signed_degrees(0.0),
            drum_diameter=self.cfg.drum_diameter,
            min_string_len=0.0,
            max_string_len=2.0 * self._calculator.max_string_len,
        )
        self._encoder = AbsoluteEncoderSim()
        self._arm: ArmSimulation = self.cfg.build_arm(
            self._winch, self._encoder, grabber_open_supplier=self._is_grabber_open
        )

    def _is_grabber_open(self) -> bool:
        return self._grabber_open

    # ------------------------------------------------------------------
    # Gymnasium API
    # ------------------------------------------------------------------

    @property
    def arm(self) -> ArmSimulation:
        return self._arm

    @property
    def target_signed_degrees(self) -> float:
        return self._target_degrees

    def _sample_angle(self) -> float:
        """Sample an angle within the normal travel range."""
        return float(self._rng.uniform(self._bottom_normal_degrees, self._top_normal_degrees))

    def reset(
        self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """Reset the environment and return the initial observation.

        Args:
            seed: Optional RNG seed.
            options: Optional ``{'target_signed_degrees': float}`` override.

        Returns:
            Tuple of (observation dict, info dict).
        """
        super().reset(seed=seed)
        if seed is not None:
            self._rng = np.random.default_rng(seed)
        self._step_count = 0
        self._grabber_open = False
        self._build_hardware()

        start = self.cfg.start_signed_degrees
        if start is None:
            start = self._sample_angle()
        self._winch.set_string_unspooled_len(
            self._calculator.calc_string_len_for_signed_degrees(start)
        )
        options = options or {}
        self._target_degrees = float(options.get("target_signed_degrees", self._sample_angle()))
        self._arm.simulation_periodic()
        return self._build_observation(), self._build_info(success=False)

    def _apply_action(self, action: np.ndarray) -> None:
        """Turn the winch drum and set the grabber from *action*."""
        winch_speed = clamp(float(action[0]), -1.0, 1.0)
        if action.shape[0] > 1:
            self._grabber_open = bool(action[1] > 0.0)
        self._winch.spool_rotations(winch_speed * self.cfg.max_spool_rotations_per_step)

    def _compute_reward(self) -> Tuple[float, bool]:
        """Compute shaped reward and success flag.

        Returns:
            Tuple of (scalar reward, success boolean).
        """
        current = self._arm.current_signed_degrees
        if current is None or self._arm.is_broken:
            return -1.0, False
        error = abs(current - self._target_degrees)
        return -error / 180.0, error <= self.cfg.target_tolerance_degrees

    def step(
        self, action: np.ndarray
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """Advance the environment by one control cycle.

        Args:
            action: ``[winch_speed, grabber_cmd]``.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        action = np.asarray(action, dtype=np.float64).reshape(-1)
        self._apply_action(action)
        self._arm.simulation_periodic()
        self._step_count += 1
        reward, success = self._compute_reward()
        terminated = success or self._arm.is_broken
        truncated = self._step_count >= self.cfg.episode_length
        return (
            self._build_observation(),
            reward,
            terminated,
            truncated,
            self._build_info(success),
        )

    # ------------------------------------------------------------------
    # Observation builder
    # ------------------------------------------------------------------

    def _build_state_vector(self) -> np.ndarray:
        return np.array(
            [
                self._encoder.get(),
                1.0 if self._grabber_open else 0.0,
                1.0 if self._arm.is_broken else 0.0,
            ],
            dtype=np.float32,
        )

    def _build_observation(self) -> Dict[str, np.ndarray]:
        obs: Dict[str, np.ndarray] = {"agent_pos": self._build_state_vector()}
        if "pixels" in self.cfg.obs_type:
            obs["pixels"] = self.render()
        return obs

    def _build_info(self, success: bool) -> Dict[str, Any]:
        return {
            "is_success": success,
            "is_broken": self._arm.is_broken,
            "broken_reason": self._arm.broken_reason,
            "signed_degrees": self._arm.current_signed_degrees,
            "target_signed_degrees": self._target_degrees,
        }

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _world_to_pixel(self, x: float, y: float, h: int, w: int) -> Tuple[int, int]:
        """Map a side-view world point (pivot at origin) to pixel coordinates.

        Args:
            x: Horizontal world coordinate.
            y: Vertical world coordinate.
            h: Canvas height.
            w: Canvas width.

        Returns:
            Tuple of (pixel_x, pixel_y).
        """
        extent = 1.2 * self._calculator.max_string_len
        px = int((x / extent + 0.3) * w)
        py = int((0.35 - y / extent) * h)
        return int(np.clip(px, 0, w - 1)), int(np.clip(py, 0, h - 1))

    def _draw_circle(
        self,
        canvas: np.ndarray,
        centre: Tuple[int, int],
        colour: Tuple[int, int, int],
        radius_frac: float,
    ) -> None:
        h, w = canvas.shape[:2]
        cx, cy = centre
        rr, cc = np.ogrid[:h, :w]
        mask = (rr - cy) ** 2 + (cc - cx) ** 2 < (radius_frac * w) ** 2
        canvas[mask] = colour

    def _draw_segment(
        self,
        canvas: np.ndarray,
        start: Tuple[int, int],
        end: Tuple[int, int],
        colour: Tuple[int, int, int],
    ) -> None:
        n = max(abs(end[0] - start[0]), abs(end[1] - start[1])) + 1
        xs = np.linspace(start[0], end[0], n).round().astype(int)
        ys = np.linspace(start[1], end[1], n).round().astype(int)
        canvas[ys, xs] = colour

    def render(self) -> np.ndarray:
        """Render a side view of winch, string, arm and target.

        Returns:
            (H, W, 3) uint8 NumPy array.
        """
        h, w = self.cfg.observation_height, self.cfg.observation_width
        canvas = np.zeros((h, w, 3), dtype=np.uint8)
        canvas[:] = COLOR_BACKGROUND
        length = self._calculator.arm_length_to_pivot

        pivot = self._world_to_pixel(0.0, 0.0, h, w)
        anchor = self._world_to_pixel(0.0, -self._calculator.height_to_pivot, h, w)
        target_rad = np.radians(self._target_degrees)
        target = self._world_to_pixel(
            length * np.cos(target_rad), length * np.sin(target_rad), h, w
        )
        self._draw_circle(canvas, target, COLOR_TARGET, 0.02)

        current = self._arm.current_signed_degrees
        if current is not None:
            rad = np.radians(current)
            tip = self._world_to_pixel(length * np.cos(rad), length * np.sin(rad), h, w)
            arm_colour = COLOR_BROKEN if self._arm.is_broken else COLOR_ARM
            self._draw_segment(canvas, anchor, tip, COLOR_STRING)
            self._draw_segment(canvas, pivot, tip, arm_colour)
        self._draw_circle(canvas, anchor, COLOR_WINCH, 0.025)
        self._draw_circle(canvas, pivot, COLOR_ARM, 0.015)
        return canvas
