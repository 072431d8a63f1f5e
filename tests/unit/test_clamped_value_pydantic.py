"""
Tests for ClampedValue as a Pydantic field type

Покрывает:
- Валидацию входа (сырое число или другой ClampedValue) с clamp
- Сериализацию в сырое значение (dict и JSON)
- JSON Schema поля (minimum / maximum)
- Инвариант после мутации поля
"""

import json

import pytest
from pydantic import BaseModel, Field, ValidationError

from src.core.domain import ClampedValue, make_clamped_type


class Health(ClampedValue, value_type=int, min_value=0, max_value=100):
    pass


Ten = make_clamped_type("Ten", int, 0, 10)
Unit = make_clamped_type("Unit", float, 0.0, 1.0)


class Character(BaseModel):
    """Модель-хост с clamped-полями."""

    name: str = Field(..., min_length=1)
    health: Health
    stamina: Unit = Field(default_factory=lambda: Unit(1.0))


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


class TestFieldValidation:
    """Тесты валидации clamped-полей"""

    def test_raw_number_clamped(self) -> None:
        character = Character(name="knight", health=150)
        assert isinstance(character.health, Health)
        assert character.health.get() == 100

    def test_other_instance_converted(self) -> None:
        character = Character(name="knight", health=Ten(7))
        assert isinstance(character.health, Health)
        assert character.health.get() == 7

    def test_same_type_instance_copied(self) -> None:
        """Экземпляр копируется, поле не разделяет состояние с источником"""
        source = Health(40)
        character = Character(name="knight", health=source)
        source.add_assign(10)
        assert character.health.get() == 40

    def test_default_factory(self) -> None:
        assert Character(name="knight", health=1).stamina.get() == 1.0

    def test_non_numeric_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Character(name="knight", health="full")

    def test_from_json(self) -> None:
        character = Character.model_validate_json('{"name": "rogue", "health": -5, "stamina": 2.5}')
        assert character.health.get() == 0
        assert character.stamina.get() == 1.0


# =============================================================================
# СЕРИАЛИЗАЦИЯ
# =============================================================================


class TestFieldSerialization:
    """Тесты сериализации clamped-полей"""

    def test_model_dump(self) -> None:
        character = Character(name="knight", health=150, stamina=0.5)
        assert character.model_dump() == {"name": "knight", "health": 100, "stamina": 0.5}

    def test_model_dump_json(self) -> None:
        character = Character(name="knight", health=30, stamina=0.25)
        assert json.loads(character.model_dump_json()) == {
            "name": "knight",
            "health": 30,
            "stamina": 0.25,
        }

    def test_json_roundtrip_preserves_clamped_value(self) -> None:
        original = Character(name="knight", health=250)
        restored = Character.model_validate_json(original.model_dump_json())
        assert restored.health == original.health


# =============================================================================
# JSON SCHEMA
# =============================================================================


class TestFieldJsonSchema:
    """Тесты JSON Schema clamped-полей"""

    def test_integer_field_schema(self) -> None:
        health = Character.model_json_schema()["properties"]["health"]
        assert health["type"] == "integer"
        assert health["minimum"] == 0
        assert health["maximum"] == 100

    def test_float_field_schema(self) -> None:
        stamina = Character.model_json_schema()["properties"]["stamina"]
        assert stamina["type"] == "number"
        assert stamina["minimum"] == 0.0
        assert stamina["maximum"] == 1.0


# =============================================================================
# МУТАЦИЯ
# =============================================================================


class TestFieldMutation:
    """Clamp сохраняется при мутации поля модели"""

    def test_inplace_operator_on_field(self) -> None:
        character = Character(name="knight", health=90)
        character.health += 50
        assert character.health.get() == 100
        character.health -= 500
        assert character.health.get() == 0

    def test_named_operations_on_field(self) -> None:
        character = Character(name="knight", health=10, stamina=0.5)
        character.stamina.mul_assign(3)
        assert character.stamina.get() == 1.0
        assert character.health.add(500) == 510
        assert character.health.get() == 10
