"""
ClampedValue — Числовая переменная с насыщением в диапазоне

Обёртка над одним скалярным значением, которая применяет clamp при каждой
записи: конструирование, присваивание и составные операции (+=, -=, *=, /=).
Тип значения и границы фиксируются при определении конкретного типа:

    class Health(ClampedValue, value_type=int, min_value=0, max_value=100):
        pass

    Stamina = make_clamped_type("Stamina", float, 0.0, 1.0)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. min_value <= value <= max_value после любой записи
2. Границы проверяются при определении типа (InvalidClampBounds / UnsupportedValueType)
3. Не мутирующая арифметика (+, -, *, /) возвращает сырое значение без clamp
4. Деление на ноль не перехватывается (ZeroDivisionError)
"""

import logging
import numbers
import types
from decimal import Decimal
from typing import Any, Callable, ClassVar, Dict, Optional

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema

from src.core.contracts.validators import validate_clamped_value
from src.core.math.clamping import (
    ClampBounds,
    InvalidClampBounds,
    ensure_scalar_type,
    is_integral_type,
    is_scalar_number,
)

logger = logging.getLogger(__name__)


# =============================================================================
# HELPERS
# =============================================================================


def _coerce_bound(value_type: type, bound: Any, name: str) -> Any:
    """
    Приведение границы к типу значения с проверкой точной представимости.

    Raises:
        InvalidClampBounds: Если граница не число или теряет точность в value_type
    """
    if not is_scalar_number(bound):
        raise InvalidClampBounds(f"{name} must be a real scalar number, got {bound!r}")

    try:
        coerced = value_type(bound)
    except (TypeError, ValueError, ArithmeticError) as e:
        raise InvalidClampBounds(
            f"{name} {bound!r} is not representable as {value_type.__name__}"
        ) from e

    if coerced != bound:
        raise InvalidClampBounds(
            f"{name} {bound!r} is not representable as {value_type.__name__}"
        )

    return coerced


def _truncating_div(a: Any, b: Any) -> Any:
    """Целочисленное деление с усечением к нулю (как у машинных целых)."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def _mixable(a: Any, b: Any) -> bool:
    """Decimal участвует в арифметике только с Decimal и целыми."""
    if isinstance(a, Decimal) or isinstance(b, Decimal):
        return all(isinstance(x, (Decimal, numbers.Integral)) for x in (a, b))
    return True


def _json_number(value: Any) -> Any:
    """int остаётся int, остальные скаляры (float/Decimal/Fraction) → float."""
    if isinstance(value, numbers.Integral):
        return int(value)
    return float(value)


# =============================================================================
# CLAMPED VALUE
# =============================================================================


class ClampedValue:
    """
    Базовый clamped-тип. Сам по себе не имеет границ и не инстанцируется.

    Конкретный тип определяется подклассом с ключевыми аргументами
    value_type, min_value, max_value (либо через make_clamped_type).
    Подкласс конкретного типа без аргументов наследует его границы.

    Экземпляры изменяемы и поэтому не хэшируются.
    """

    value_type: ClassVar[Optional[type]] = None
    bounds: ClassVar[Optional[ClampBounds]] = None

    __hash__ = None  # type: ignore[assignment]

    def __init_subclass__(
        cls,
        *,
        value_type: Optional[type] = None,
        min_value: Any = None,
        max_value: Any = None,
        **kwargs: Any,
    ) -> None:
        super().__init_subclass__(**kwargs)

        params = (value_type, min_value, max_value)
        if all(p is None for p in params):
            return

        if any(p is None for p in params):
            raise TypeError("value_type, min_value and max_value must be given together")

        value_type = ensure_scalar_type(value_type)
        bounds = ClampBounds.create(
            _coerce_bound(value_type, min_value, "min_value"),
            _coerce_bound(value_type, max_value, "max_value"),
        )

        cls.value_type = value_type
        cls.bounds = bounds
        logger.debug(
            "Defined clamped type %s[%s, %s, %s]",
            cls.__name__,
            value_type.__name__,
            bounds.min_value,
            bounds.max_value,
        )

    def __init__(self, initial: Any = 0) -> None:
        """
        Инициализация значением clamp(initial).

        Вызов без аргументов даёт clamp(0): это не отдельное "пустое"
        состояние, а требование хостов, которым нужен конструктор без
        аргументов.

        Raises:
            TypeError: Если тип не имеет границ (базовый ClampedValue)
        """
        if type(self).bounds is None:
            raise TypeError(
                f"{type(self).__name__} has no bounds; define a subclass with "
                f"value_type, min_value and max_value"
            )
        self._value: Any = None
        self.assign(initial)

    # -------------------------------------------------------------------------
    # Чтение
    # -------------------------------------------------------------------------

    def get(self) -> Any:
        """Текущее значение (копия скаляра)."""
        return self._value

    @property
    def value(self) -> Any:
        """Текущее значение, то же что get()."""
        return self._value

    @property
    def min_value(self) -> Any:
        return self.bounds.min_value

    @property
    def max_value(self) -> Any:
        return self.bounds.max_value

    # -------------------------------------------------------------------------
    # Внутренние операции
    # -------------------------------------------------------------------------

    def _operand(self, other: Any) -> Any:
        """
        Операнд арифметики.

        Сырое число приводится к value_type, как типизированный аргумент.
        Значение другого ClampedValue берётся как есть, и операция идёт в
        общем типе; к value_type приводится уже результат. Исключение:
        Decimal не смешивается с float/Fraction, такой операнд приводится.

        Returns:
            Операнд или None для неподдерживаемых типов
        """
        if isinstance(other, ClampedValue):
            value = other.get()
            if _mixable(self._value, value):
                return value
            return self.value_type(value)
        if not is_scalar_number(other):
            return None
        return self.value_type(other)

    def _require_operand(self, other: Any) -> Any:
        operand = self._operand(other)
        if operand is None:
            raise TypeError(
                f"unsupported operand for {type(self).__name__}: {type(other).__name__}"
            )
        return operand

    @staticmethod
    def _divide(a: Any, b: Any) -> Any:
        if isinstance(a, numbers.Integral) and isinstance(b, numbers.Integral):
            return _truncating_div(a, b)
        return a / b

    def _store(self, raw: Any) -> "ClampedValue":
        """Единственная точка записи: clamp, затем приведение к value_type."""
        bounds = self.bounds
        clamped = bounds.clamp(raw)
        if not bounds.contains(raw):
            logger.debug("%s saturated: %r -> %r", type(self).__name__, raw, clamped)
        self._value = self.value_type(clamped)
        return self

    def _compute(self, op: Callable[[Any, Any], Any], other: Any) -> Any:
        return op(self._value, self._require_operand(other))

    def _raw(self, result: Any) -> Any:
        """Результат арифметики без clamp, приведённый к value_type."""
        return self.value_type(result)

    # -------------------------------------------------------------------------
    # Запись
    # -------------------------------------------------------------------------

    def assign(self, new_value: Any) -> "ClampedValue":
        """
        Замена значения на clamp(new_value).

        Clamp выполняется до приведения к value_type, поэтому
        float('inf') для целочисленного типа насыщается до max_value.

        Returns:
            self (для цепочек вызовов)
        """
        if isinstance(new_value, ClampedValue):
            new_value = new_value.get()
        if not is_scalar_number(new_value):
            raise TypeError(
                f"cannot assign {type(new_value).__name__} to {type(self).__name__}"
            )
        return self._store(new_value)

    def add_assign(self, other: Any) -> "ClampedValue":
        """value = clamp(value + other)"""
        return self._store(self._compute(lambda a, b: a + b, other))

    def sub_assign(self, other: Any) -> "ClampedValue":
        """value = clamp(value - other)"""
        return self._store(self._compute(lambda a, b: a - b, other))

    def mul_assign(self, other: Any) -> "ClampedValue":
        """value = clamp(value * other)"""
        return self._store(self._compute(lambda a, b: a * b, other))

    def div_assign(self, other: Any) -> "ClampedValue":
        """
        value = clamp(value / other)

        Для целочисленного value_type деление усекается к нулю.

        Raises:
            ZeroDivisionError: При делении на ноль (не перехватывается)
        """
        return self._store(self._compute(self._divide, other))

    # -------------------------------------------------------------------------
    # Арифметика без clamp
    # -------------------------------------------------------------------------

    def add(self, other: Any) -> Any:
        """value + other, без clamp."""
        return self._raw(self._compute(lambda a, b: a + b, other))

    def sub(self, other: Any) -> Any:
        """value - other, без clamp."""
        return self._raw(self._compute(lambda a, b: a - b, other))

    def mul(self, other: Any) -> Any:
        """value * other, без clamp."""
        return self._raw(self._compute(lambda a, b: a * b, other))

    def div(self, other: Any) -> Any:
        """value / other, без clamp."""
        return self._raw(self._compute(self._divide, other))

    # -------------------------------------------------------------------------
    # Операторы
    # -------------------------------------------------------------------------

    def _binary(self, op: Callable[[Any, Any], Any], other: Any, reflected: bool = False) -> Any:
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        if reflected:
            return self._raw(op(operand, self._value))
        return self._raw(op(self._value, operand))

    def _inplace(self, op: Callable[[Any, Any], Any], other: Any) -> Any:
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return self._store(op(self._value, operand))

    def __add__(self, other: Any) -> Any:
        return self._binary(lambda a, b: a + b, other)

    def __sub__(self, other: Any) -> Any:
        return self._binary(lambda a, b: a - b, other)

    def __mul__(self, other: Any) -> Any:
        return self._binary(lambda a, b: a * b, other)

    def __truediv__(self, other: Any) -> Any:
        return self._binary(self._divide, other)

    def __radd__(self, other: Any) -> Any:
        return self._binary(lambda a, b: a + b, other, reflected=True)

    def __rsub__(self, other: Any) -> Any:
        return self._binary(lambda a, b: a - b, other, reflected=True)

    def __rmul__(self, other: Any) -> Any:
        return self._binary(lambda a, b: a * b, other, reflected=True)

    def __rtruediv__(self, other: Any) -> Any:
        return self._binary(self._divide, other, reflected=True)

    def __iadd__(self, other: Any) -> Any:
        return self._inplace(lambda a, b: a + b, other)

    def __isub__(self, other: Any) -> Any:
        return self._inplace(lambda a, b: a - b, other)

    def __imul__(self, other: Any) -> Any:
        return self._inplace(lambda a, b: a * b, other)

    def __itruediv__(self, other: Any) -> Any:
        return self._inplace(self._divide, other)

    # -------------------------------------------------------------------------
    # Сравнения
    # -------------------------------------------------------------------------

    @staticmethod
    def _comparable(other: Any) -> Any:
        """Сравнение идёт по естественному порядку чисел, без приведения к value_type."""
        if isinstance(other, ClampedValue):
            return other.get()
        if is_scalar_number(other):
            return other
        return None

    def __eq__(self, other: Any) -> Any:
        value = self._comparable(other)
        if value is None:
            return NotImplemented
        return self._value == value

    def __ne__(self, other: Any) -> Any:
        value = self._comparable(other)
        if value is None:
            return NotImplemented
        return self._value != value

    def __lt__(self, other: Any) -> Any:
        value = self._comparable(other)
        if value is None:
            return NotImplemented
        return self._value < value

    def __le__(self, other: Any) -> Any:
        value = self._comparable(other)
        if value is None:
            return NotImplemented
        return self._value <= value

    def __gt__(self, other: Any) -> Any:
        value = self._comparable(other)
        if value is None:
            return NotImplemented
        return self._value > value

    def __ge__(self, other: Any) -> Any:
        value = self._comparable(other)
        if value is None:
            return NotImplemented
        return self._value >= value

    # -------------------------------------------------------------------------
    # Конверсии и представление
    # -------------------------------------------------------------------------

    def __int__(self) -> int:
        return int(self._value)

    def __float__(self) -> float:
        return float(self._value)

    def __bool__(self) -> bool:
        return bool(self._value)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self._value!r}, "
            f"bounds=[{self.bounds.min_value}, {self.bounds.max_value}])"
        )

    def __str__(self) -> str:
        return str(self._value)

    # -------------------------------------------------------------------------
    # Snapshot (JSON контракт clamped_value)
    # -------------------------------------------------------------------------

    def to_snapshot(self) -> Dict[str, Any]:
        """
        Снапшот для JSON контракта clamped_value.

        Decimal и Fraction сериализуются как float.

        Returns:
            dict с полями type, value, min_value, max_value
        """
        return {
            "type": type(self).__name__,
            "value": _json_number(self._value),
            "min_value": _json_number(self.bounds.min_value),
            "max_value": _json_number(self.bounds.max_value),
        }

    @classmethod
    def from_snapshot(cls, data: Dict[str, Any]) -> "ClampedValue":
        """
        Восстановление из снапшота.

        Args:
            data: Снапшот, соответствующий схеме clamped_value

        Returns:
            Новый экземпляр cls со значением clamp(data["value"])

        Raises:
            jsonschema.ValidationError: Если данные не соответствуют схеме
            ValueError: Если тип или границы снапшота не совпадают с cls
        """
        validate_clamped_value(data)

        if data["type"] != cls.__name__:
            raise ValueError(f"snapshot type {data['type']!r} does not match {cls.__name__}")

        # Границы сравниваются в JSON-форме: Decimal и Fraction записаны как float
        expected = (_json_number(cls.bounds.min_value), _json_number(cls.bounds.max_value))
        if (data["min_value"], data["max_value"]) != expected:
            raise ValueError(
                f"snapshot bounds [{data['min_value']}, {data['max_value']}] do not match "
                f"{cls.__name__} bounds [{cls.bounds.min_value}, {cls.bounds.max_value}]"
            )

        return cls(data["value"])

    # -------------------------------------------------------------------------
    # Pydantic integration
    # -------------------------------------------------------------------------

    @classmethod
    def _pydantic_validate(cls, value: Any) -> "ClampedValue":
        if isinstance(value, ClampedValue):
            return cls(value.get())
        if is_scalar_number(value):
            return cls(value)
        raise ValueError(f"{cls.__name__} expects a number, got {type(value).__name__}")

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """Поле pydantic модели: вход clamp-ится, сериализуется сырое значение."""
        if cls.bounds is None:
            raise TypeError(f"{cls.__name__} has no bounds and cannot be a model field")

        return core_schema.no_info_plain_validator_function(
            cls._pydantic_validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda instance: instance.get()
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        json_type = "integer" if is_integral_type(cls.value_type) else "number"
        return {
            "type": json_type,
            "minimum": _json_number(cls.bounds.min_value),
            "maximum": _json_number(cls.bounds.max_value),
        }


# =============================================================================
# FACTORY
# =============================================================================


def make_clamped_type(
    name: str,
    value_type: type,
    min_value: Any,
    max_value: Any,
) -> type:
    """
    Определение конкретного clamped-типа без class statement.

    Args:
        name: Имя типа
        value_type: Скалярный тип значения (int, float, Fraction, Decimal)
        min_value: Нижняя граница
        max_value: Верхняя граница (строго больше min_value)

    Returns:
        Подкласс ClampedValue

    Raises:
        InvalidClampBounds: Если max_value <= min_value или граница непредставима
        UnsupportedValueType: Если value_type не скалярный числовой тип

    Examples:
        >>> Percent = make_clamped_type("Percent", int, 0, 100)
        >>> Percent(150).get()
        100
    """
    return types.new_class(
        name,
        (ClampedValue,),
        {"value_type": value_type, "min_value": min_value, "max_value": max_value},
        lambda ns: ns.update({"__module__": __name__}),
    )
