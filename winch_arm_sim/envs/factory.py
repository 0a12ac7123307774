"""
Factory function for creating vectorised winch-arm environments.

Callers pass a ``WinchArmSimConfig`` or the name ``'winch_arm'`` and receive
a Gymnasium ``VectorEnv`` wrapped in a ``{suite: {task_id: env}}`` mapping.

Functions:
    make_sim_env: Create one or more vectorised winch-arm environments.
"""

from __future__ import annotations

from typing import Dict

import gymnasium as gym

from winch_arm_sim.envs.configs import WinchArmSimConfig
from winch_arm_sim.envs.winch_arm import WinchArmSimEnv

ENV_NAME = "winch_arm"


def make_sim_env(
    cfg: WinchArmSimConfig | str = ENV_NAME,
    n_envs: int = 1,
    use_async_envs: bool = False,
) -> Dict[str, Dict[int, gym.vector.VectorEnv]]:
    """Create vectorised winch-arm environments.

    Args:
        cfg: A ``WinchArmSimConfig``, or ``'winch_arm'`` for the defaults.
        n_envs: Number of parallel environments (default 1).
        use_async_envs: Whether to use ``AsyncVectorEnv`` (default *False*).

    Returns:
        ``{cfg.task: {0: VectorEnv}}`` mapping.

    Raises:
        ValueError: If *cfg* is an unknown name or ``n_envs < 1``.
    """
    if isinstance(cfg, str):
        if cfg != ENV_NAME:
            raise ValueError(f"Unknown env '{cfg}'. Choose from ['{ENV_NAME}']")
        cfg = WinchArmSimConfig()
    if n_envs < 1:
        raise ValueError("`n_envs` must be at least 1")

    wrapper_cls = gym.vector.AsyncVectorEnv if use_async_envs else gym.vector.SyncVectorEnv
    vec = wrapper_cls([lambda c=cfg: WinchArmSimEnv(c) for _ in range(n_envs)])
    return {cfg.task: {0: vec}}
