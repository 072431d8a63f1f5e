"""
Core math modules

Политика clamp и валидированные границы диапазона.
"""

from src.core.math.clamping import (
    # Exceptions
    InvalidClampBounds,
    UnsupportedValueType,
    # Types
    ClampBounds,
    # Functions
    clamp_strict,
    ensure_scalar_type,
    is_integral_type,
    is_scalar_number,
)

__all__ = [
    # Clamping — Exceptions
    "InvalidClampBounds",
    "UnsupportedValueType",
    # Clamping — Types
    "ClampBounds",
    # Clamping — Functions
    "clamp_strict",
    "ensure_scalar_type",
    "is_integral_type",
    "is_scalar_number",
]
