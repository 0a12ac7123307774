#!/usr/bin/env python3
"""
Main entry point for the winch-driven arm simulation.

Demonstrates the simulated arm without any hardware: either sweep the winch
through its travel and watch where the arm jams or breaks, or run a simple
proportional controller in the Gymnasium environment.

Usage examples::

    # Sweep the arm upward until it slams into the top stop
    python run_sim.py --mode sweep --direction up

    # Lower the arm with the grabber open
    python run_sim.py --mode sweep --direction down --grabber-open

    # Hold the arm at 20 degrees with a proportional controller
    python run_sim.py --mode control --target 20
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Dict

import numpy as np

from winch_arm_sim.envs.configs import WinchArmSimConfig
from winch_arm_sim.envs.winch_arm import WinchArmSimEnv
from winch_arm_sim.robots.arm_geometry import ArmAngleCalculator
from winch_arm_sim.robots.encoder import AbsoluteEncoderSim
from winch_arm_sim.robots.winch import WinchSimulation
from winch_arm_sim.utils.unit_conversions import to_non_offset_signed_degrees

# ======================================================================
# Mode runners
# ======================================================================


def _run_sweep(cfg: WinchArmSimConfig, args: argparse.Namespace) -> Dict[str, Any]:
    """Move the winch at constant speed until the arm breaks or steps run out.

    Args:
        cfg: Arm configuration.
        args: Parsed CLI arguments.

    Returns:
        Summary of the final arm state.
    """
    calculator = ArmAngleCalculator(
        cfg.height_from_winch_to_pivot_point, cfg.arm_length_from_edge_to_pivot
    )
    winch = WinchSimulation(
        string_unspooled_len=calculator.calc_string_len_for_signed_degrees(
            cfg.start_signed_degrees or 0.0
        ),
        drum_diameter=cfg.drum_diameter,
    )
    encoder = AbsoluteEncoderSim()
    arm = cfg.build_arm(winch, encoder, grabber_open_supplier=lambda: args.grabber_open)
    rotations = cfg.max_spool_rotations_per_step * (1.0 if args.direction == "up" else -1.0)

    arm.simulation_periodic()
    steps = 0
    while steps < args.steps and not arm.is_broken:
        winch.spool_rotations(rotations)
        arm.simulation_periodic()
        steps += 1
    return {
        "steps": steps,
        "signed_degrees": arm.current_signed_degrees,
        "encoder_position": encoder.get(),
        "is_broken": arm.is_broken,
        "broken_reason": arm.broken_reason,
    }


def _run_control(cfg: WinchArmSimConfig, args: argparse.Namespace) -> Dict[str, Any]:
    """Drive the arm to ``args.target`` using only the encoder reading.

    Args:
        cfg: Environment configuration.
        args: Parsed CLI arguments.

    Returns:
        Summary of the episode.
    """
    env = WinchArmSimEnv(cfg)
    obs, info = env.reset(seed=args.seed, options={"target_signed_degrees": args.target})
    total_reward = 0.0
    steps = 0
    terminated = truncated = False
    while not (terminated or truncated):
        encoder_position = float(obs["agent_pos"][0])
        measured = to_non_offset_signed_degrees(encoder_position, cfg.encoder_rotations_offset)
        speed = float(np.clip(args.gain * (args.target - measured), -1.0, 1.0))
        obs, reward, terminated, truncated, info = env.step(np.array([speed, -1.0]))
        total_reward += reward
        steps += 1
    env.close()
    return {"steps": steps, "total_reward": round(total_reward, 4), **info}


# ======================================================================
# CLI
# ======================================================================


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Optional argument list (defaults to ``sys.argv[1:]``).

    Returns:
        Parsed ``argparse.Namespace``.
    """
    parser = argparse.ArgumentParser(description="Winch-driven arm simulation")
    parser.add_argument("--mode", choices=["sweep", "control"], default="sweep")
    parser.add_argument("--direction", choices=["up", "down"], default="up")
    parser.add_argument("--grabber-open", action="store_true")
    parser.add_argument("--steps", type=int, default=1000)
    parser.add_argument("--target", type=float, default=20.0)
    parser.add_argument("--gain", type=float, default=0.2)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the selected mode and print a summary.

    Args:
        argv: Optional argument list.

    Returns:
        Process exit code (1 if the arm broke).
    """
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    cfg = WinchArmSimConfig(seed=args.seed)
    runners = {"sweep": _run_sweep, "control": _run_control}
    summary = runners[args.mode](cfg, args)
    for key, value in summary.items():
        print(f"{key:>22}: {value}")
    return 1 if summary.get("is_broken") else 0


if __name__ == "__main__":
    sys.exit(main())
