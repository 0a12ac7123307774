"""
Gymnasium-compatible simulation environments.

Provides the winch-driven arm task, which closes the loop between a
controller under test, the simulated winch, and the simulated encoder.
"""

from winch_arm_sim.envs.configs import WinchArmSimConfig
from winch_arm_sim.envs.factory import make_sim_env
from winch_arm_sim.envs.winch_arm import WinchArmSimEnv

__all__ = [
    "WinchArmSimConfig",
    "WinchArmSimEnv",
    "make_sim_env",
]
