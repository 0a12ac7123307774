from __future__ import annotations

import numpy as np
import pytest

from winch_arm_sim.envs.configs import WinchArmSimConfig
from winch_arm_sim.envs.factory import make_sim_env
from winch_arm_sim.envs.winch_arm import WinchArmSimEnv
from winch_arm_sim.errors import ConfigurationError
from winch_arm_sim.robots.encoder import AbsoluteEncoderSim
from winch_arm_sim.robots.winch import WinchSimulation


def _run(env: WinchArmSimEnv, action, max_steps: int = 1000):
    for _ in range(max_steps):
        obs, reward, terminated, truncated, info = env.step(np.array(action))
        if terminated or truncated:
            return obs, reward, terminated, truncated, info
    raise AssertionError("episode did not end")


def test_reset_observation() -> None:
    env = WinchArmSimEnv()
    obs, info = env.reset(seed=0, options={"target_signed_degrees": 30.0})
    assert obs["agent_pos"].shape == (3,)
    assert env.observation_space.contains(obs)
    assert not info["is_broken"]
    assert info["signed_degrees"] == pytest.approx(10.0, abs=1e-6)
    assert info["target_signed_degrees"] == 30.0


def test_unspooling_raises_arm() -> None:
    env = WinchArmSimEnv()
    env.reset(seed=0, options={"target_signed_degrees": 40.0})
    _, _, terminated, _, info = env.step(np.array([1.0, -1.0]))
    assert not terminated
    assert info["signed_degrees"] > 10.0


def test_driving_into_top_stop_ends_episode() -> None:
    env = WinchArmSimEnv()
    env.reset(seed=0, options={"target_signed_degrees": -40.0})
    obs, reward, terminated, _, info = _run(env, [1.0, -1.0])
    assert terminated
    assert info["is_broken"]
    assert not info["is_success"]
    assert obs["agent_pos"][2] == 1.0
    assert reward == -1.0
    assert info["signed_degrees"] == pytest.approx(env.arm.top_signed_degrees_limit)


def test_lowering_with_grabber_open_breaks_arm() -> None:
    env = WinchArmSimEnv()
    env.reset(seed=0, options={"target_signed_degrees": 40.0})
    _, _, terminated, _, info = _run(env, [-1.0, 1.0])
    assert terminated
    assert info["is_broken"]
    assert "Grabber is open" in info["broken_reason"]
    assert info["signed_degrees"] == env.arm.grabber_break_signed_degrees_limit


def test_reaching_target_succeeds() -> None:
    env = WinchArmSimEnv()
    env.reset(seed=0, options={"target_signed_degrees": 12.0})
    _, _, terminated, _, info = _run(env, [1.0, -1.0], max_steps=10)
    assert terminated
    assert info["is_success"]
    assert not info["is_broken"]


def test_episode_truncates() -> None:
    env = WinchArmSimEnv(WinchArmSimConfig(episode_length=5))
    env.reset(seed=0, options={"target_signed_degrees": 40.0})
    _, _, terminated, truncated, _ = _run(env, [0.0, -1.0])
    assert truncated and not terminated


def test_sampled_start_and_target_within_travel() -> None:
    env = WinchArmSimEnv(WinchArmSimConfig(start_signed_degrees=None))
    for seed in range(5):
        _, info = env.reset(seed=seed)
        assert not info["is_broken"]
        assert -45.0 <= info["signed_degrees"] <= 45.0
        assert -45.0 <= info["target_signed_degrees"] <= 45.0


def test_render_and_pixel_observation() -> None:
    cfg = WinchArmSimConfig(obs_type="pixels_agent_pos", observation_height=64, observation_width=64)
    env = WinchArmSimEnv(cfg)
    obs, _ = env.reset(seed=0)
    assert obs["pixels"].shape == (64, 64, 3)
    assert obs["pixels"].dtype == np.uint8
    assert env.render().shape == (64, 64, 3)


def test_invalid_env_config_rejected() -> None:
    with pytest.raises(ConfigurationError):
        WinchArmSimConfig(fps=0)
    with pytest.raises(ConfigurationError):
        WinchArmSimEnv(WinchArmSimConfig(encoder_rotations_offset=1.2))


def test_build_arm_from_config() -> None:
    cfg = WinchArmSimConfig()
    arm = cfg.build_arm(WinchSimulation(string_unspooled_len=0.9), AbsoluteEncoderSim())
    assert not arm.is_broken
    arm.update()
    assert arm.is_current_set


def test_make_sim_env_by_name() -> None:
    envs = make_sim_env("winch_arm", n_envs=2)
    vec = envs["WinchArm-Sim-v0"][0]
    assert vec.num_envs == 2
    vec.close()


def test_make_sim_env_rejects_bad_arguments() -> None:
    with pytest.raises(ValueError, match="Unknown env"):
        make_sim_env("pusht")
    with pytest.raises(ValueError, match="n_envs"):
        make_sim_env(WinchArmSimConfig(), n_envs=0)


def test_make_sim_env_keys_suite_by_config_task() -> None:
    cfg = WinchArmSimConfig(task="WinchArm-Hold-v1", episode_length=5)
    envs = make_sim_env(cfg)
    assert list(envs) == ["WinchArm-Hold-v1"]
    vec = envs["WinchArm-Hold-v1"][0]
    obs, _ = vec.reset(seed=0)
    assert obs["agent_pos"].shape == (1, cfg.state_dim)
    vec.close()


def test_config_carries_episode_fields_without_base_class() -> None:
    cfg = WinchArmSimConfig()
    assert type(cfg).__mro__[1] is object
    assert (cfg.fps, cfg.episode_length, cfg.obs_type, cfg.seed) == (50, 500, "state", 42)
    assert not hasattr(cfg, "gym_kwargs")
