"""
Shared constants, unit conversions, and helper utilities.

Centralizes default arm parameters, numeric tolerances, and the small
stateless angle/rotation conversions used across the winch_arm_sim package.
"""
