"""
Core value types, mathematical primitives, and contracts.

This module contains a self-clamping numeric variable and the clamp policy
it is built on. Nothing here depends on external systems.
"""
