"""
Контракт снапшота clamped-переменной

Схема clamped_value.json лежит рядом с модулем (src/core/contracts/schema/)
и загружается при первой валидации. Помимо схемы проверяется порядок
границ max_value > min_value, который JSON Schema выразить не может.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterator

import jsonschema
from jsonschema import Draft202012Validator, ValidationError

SCHEMA_DIR: Path = Path(__file__).parent / "schema"

CLAMPED_VALUE_SCHEMA: str = "clamped_value"


class SchemaLoader:
    """Загрузчик JSON Schema файлов из каталога с кэшем и meta-validation."""

    def __init__(self, schema_dir: Path = SCHEMA_DIR):
        if not schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {schema_dir}")
        self.schema_dir = schema_dir
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Args:
            schema_name: Имя схемы без расширения

        Raises:
            FileNotFoundError: Если файла схемы нет
            ValueError: Если файл не является валидной JSON Schema
        """
        if schema_name not in self._schemas:
            schema_path = self.schema_dir / f"{schema_name}.json"
            if not schema_path.exists():
                raise FileNotFoundError(f"Schema not found: {schema_path}")

            schema = json.loads(schema_path.read_text(encoding="utf-8"))
            try:
                Draft202012Validator.check_schema(schema)
            except jsonschema.SchemaError as e:
                raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

            self._schemas[schema_name] = schema
        return self._schemas[schema_name]


@lru_cache(maxsize=None)
def default_loader() -> SchemaLoader:
    return SchemaLoader()


class ClampedValueValidator:
    """Валидатор снапшотов clamped_value (схема + порядок границ)."""

    def __init__(self, loader: SchemaLoader | None = None):
        loader = loader or default_loader()
        self.schema = loader.load_schema(CLAMPED_VALUE_SCHEMA)
        self._validator = Draft202012Validator(self.schema)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[ValidationError]:
        """Ошибки схемы; порядок границ проверяется только в validate()."""
        return self._validator.iter_errors(data)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: Если данные не соответствуют схеме
                или max_value <= min_value
        """
        self._validator.validate(data)

        if not data["max_value"] > data["min_value"]:
            raise ValidationError(
                f"max_value ({data['max_value']}) must be greater than "
                f"min_value ({data['min_value']})"
            )

    def is_valid(self, data: Dict[str, Any]) -> bool:
        try:
            self.validate(data)
        except ValidationError:
            return False
        return True


def validate_clamped_value(data: Dict[str, Any]) -> None:
    """
    Валидация снапшота clamped-переменной.

    Raises:
        ValidationError: Если данные не соответствуют контракту
    """
    ClampedValueValidator().validate(data)
