"""
Simulated arm hardware.

Provides the string-length/angle geometry, the breakage-aware arm
simulation, a kinematic winch, and a simulated absolute encoder.
"""
