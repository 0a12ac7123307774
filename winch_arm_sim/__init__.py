"""
Winch-driven arm simulation.

Simulates a pivoting arm raised and lowered by a winch so that robot
control logic can be validated without hardware.  The unspooled string
length is converted into an arm angle, travel limits and grabber
interaction are enforced, breakage is modelled as a permanent state, and
the result is published through a simulated absolute encoder.

Modules:
    robots: Geometry, arm simulation, winch and encoder models.
    envs: Gymnasium-compatible environment and factory.
    utils: Shared constants, unit conversions and helpers.
    errors: Configuration error type.
"""

__version__ = "0.1.0"
