"""
Contract Validation Module

Модуль для валидации JSON контракта снапшотов clamped-переменных.
"""

from .validators import (
    CLAMPED_VALUE_SCHEMA,
    SCHEMA_DIR,
    ClampedValueValidator,
    SchemaLoader,
    default_loader,
    validate_clamped_value,
)

__all__ = [
    # Constants
    "SCHEMA_DIR",
    "CLAMPED_VALUE_SCHEMA",
    # Classes
    "SchemaLoader",
    "ClampedValueValidator",
    # Functions
    "default_loader",
    "validate_clamped_value",
]
