from __future__ import annotations

import numpy as np
import pytest

from winch_arm_sim.errors import ConfigurationError
from winch_arm_sim.robots.encoder import AbsoluteEncoderSim
from winch_arm_sim.robots.winch import WinchSimulation


def test_spooling_changes_length_by_circumference() -> None:
    winch = WinchSimulation(string_unspooled_len=1.0, drum_diameter=0.02)
    winch.spool_rotations(2.0)
    assert winch.get_string_unspooled_len() == pytest.approx(1.0 + 2.0 * np.pi * 0.02)
    winch.spool_rotations(-2.0)
    assert winch.get_string_unspooled_len() == pytest.approx(1.0)


def test_string_length_is_bounded() -> None:
    winch = WinchSimulation(string_unspooled_len=0.1, min_string_len=0.0, max_string_len=0.5)
    winch.spool_rotations(-100.0)
    assert winch.get_string_unspooled_len() == 0.0
    winch.set_string_unspooled_len(3.0)
    assert winch.get_string_unspooled_len() == 0.5


def test_invalid_winch_rejected() -> None:
    with pytest.raises(ConfigurationError):
        WinchSimulation(drum_diameter=0.0)
    with pytest.raises(ConfigurationError):
        WinchSimulation(min_string_len=1.0, max_string_len=0.5)


def test_encoder_rejects_out_of_range_positions() -> None:
    encoder = AbsoluteEncoderSim()
    encoder.set(0.5)
    assert encoder.get() == 0.5
    assert encoder.write_count == 1
    with pytest.raises(ValueError):
        encoder.set(1.0)
    with pytest.raises(ValueError):
        encoder.set(-0.01)
