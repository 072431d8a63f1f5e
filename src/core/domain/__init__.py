"""
Domain models and value objects.

Contains the self-clamping numeric variable ClampedValue.
"""

from src.core.domain.clamped_value import ClampedValue, make_clamped_type

__all__ = [
    "ClampedValue",
    "make_clamped_type",
]
