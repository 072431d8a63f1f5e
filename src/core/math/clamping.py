"""
Clamping — Политика насыщения и валидированные границы

Модуль содержит единственный алгоритм системы: clamp в замкнутый диапазон
[min_value, max_value], а также неизменяемую структуру границ ClampBounds,
проверяемую в момент определения clamped-типа.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. max_value > min_value (иначе InvalidClampBounds, экземпляр не создаётся)
2. Результат clamp всегда лежит в [min_value, max_value] включительно
3. Неупорядочиваемый вход (NaN) насыщается до max_value
4. Clamp никогда не бросает исключений, только насыщает
"""

import numbers
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

# =============================================================================
# EXCEPTIONS
# =============================================================================


class InvalidClampBounds(ValueError):
    """
    Нарушение инварианта границ: max_value <= min_value,
    либо граница не представима в типе значения.

    Возникает при определении clamped-типа, а не во время работы с экземпляром.
    """

    pass


class UnsupportedValueType(TypeError):
    """
    Тип значения не является простым скалярным числом.

    Допустимы подклассы numbers.Real (int, float, Fraction) и Decimal.
    bool исключён.
    """

    pass


# =============================================================================
# ТИПЫ ЗНАЧЕНИЙ
# =============================================================================


def is_scalar_number(value: Any) -> bool:
    """
    Проверка, является ли значение простым скалярным числом.

    Args:
        value: Проверяемое значение

    Returns:
        True для int/float/Fraction/Decimal, False для bool и прочего
    """
    if isinstance(value, bool):
        return False
    return isinstance(value, (numbers.Real, Decimal))


def ensure_scalar_type(value_type: Any) -> type:
    """
    Проверка, что тип пригоден как тип значения clamped-переменной.

    Args:
        value_type: Кандидат в тип значения

    Returns:
        value_type без изменений

    Raises:
        UnsupportedValueType: Если тип не скалярный числовой
    """
    if not isinstance(value_type, type):
        raise UnsupportedValueType(f"value_type must be a type, got {value_type!r}")

    if issubclass(value_type, bool):
        raise UnsupportedValueType("bool is not a supported value_type")

    if not issubclass(value_type, (numbers.Real, Decimal)):
        raise UnsupportedValueType(
            f"value_type must be a real scalar number type, got {value_type.__name__}"
        )

    return value_type


def is_integral_type(value_type: type) -> bool:
    """True если тип целочисленный (деление усекается к нулю)."""
    return issubclass(value_type, numbers.Integral)


# =============================================================================
# CLAMP POLICY
# =============================================================================


def clamp_strict(value: Any, min_value: Any, max_value: Any) -> Any:
    """
    Ограничение значения в замкнутом диапазоне [min_value, max_value].

    Структура сравнений: value < min_value → min_value,
    value < max_value → value, иначе → max_value.
    Значение, равное max_value, уходит в ветку насыщения,
    что даёт тот же результат.

    Args:
        value: Исходное значение
        min_value: Нижняя граница (включительно)
        max_value: Верхняя граница (включительно)

    Returns:
        Значение в диапазоне [min_value, max_value]

    Examples:
        >>> clamp_strict(5, 0, 10)
        5
        >>> clamp_strict(-1, 0, 10)
        0
        >>> clamp_strict(15, 0, 10)
        10
        >>> clamp_strict(float("nan"), 0.0, 1.0)
        1.0
    """
    # NaN (в т.ч. Decimal NaN, который бросает InvalidOperation на <)
    if value != value:
        return max_value
    if value < min_value:
        return min_value
    if value < max_value:
        return value
    return max_value


# =============================================================================
# BOUNDS MODEL
# =============================================================================


class ClampBounds(BaseModel):
    """
    Неизменяемая пара границ [min_value, max_value].

    Immutable модель (frozen=True): границы задаются один раз при
    определении clamped-типа и больше не меняются.
    """

    min_value: Any
    max_value: Any

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("min_value", "max_value")
    @classmethod
    def validate_scalar(cls, v: Any) -> Any:
        """Границы должны быть скалярными числами."""
        if not is_scalar_number(v):
            raise ValueError(f"bound must be a real scalar number, got {v!r}")
        if v != v:
            raise ValueError("bound must not be NaN")
        return v

    @model_validator(mode="after")
    def validate_order(self) -> "ClampBounds":
        """
        Проверка инварианта max_value > min_value.

        NaN в любой границе не проходит сравнение и отклоняется.
        """
        if not self.max_value > self.min_value:
            raise ValueError(
                f"max_value ({self.max_value}) must be greater than "
                f"min_value ({self.min_value})"
            )
        return self

    @classmethod
    def create(cls, min_value: Any, max_value: Any) -> "ClampBounds":
        """
        Создание границ с преобразованием ошибки валидации в InvalidClampBounds.

        Args:
            min_value: Нижняя граница
            max_value: Верхняя граница

        Returns:
            Валидированные границы

        Raises:
            InvalidClampBounds: Если границы не скалярные или max_value <= min_value
        """
        try:
            return cls(min_value=min_value, max_value=max_value)
        except ValidationError as e:
            messages = "; ".join(err["msg"] for err in e.errors())
            raise InvalidClampBounds(messages) from e

    @property
    def width(self) -> Any:
        """Ширина диапазона (max_value - min_value), всегда положительная."""
        return self.max_value - self.min_value

    def contains(self, value: Any) -> bool:
        """Проверка min_value <= value <= max_value. NaN не входит в диапазон."""
        if value != value:
            return False
        return self.min_value <= value <= self.max_value

    def clamp(self, value: Any) -> Any:
        """Применение clamp_strict с этими границами."""
        return clamp_strict(value, self.min_value, self.max_value)
