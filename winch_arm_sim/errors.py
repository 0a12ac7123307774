"""
Exception types raised by winch_arm_sim.

Classes:
    ConfigurationError: Invalid geometry or travel-limit configuration.
"""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when a simulator is constructed with inconsistent parameters.

    Mechanical breakage during a simulation is never reported through an
    exception; see ``ArmSimulation.is_broken``.
    """
