"""
JSON Schema Contract Validators

Модуль для валидации JSON данных согласно формальным JSON Schema контрактам.
Использует библиотеку jsonschema для проверки соответствия данных схемам.

Схемы:
- pool_state.json (снапшот пула для расчёта комиссий)
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterator, List, Tuple

import jsonschema
from jsonschema import Draft202012Validator, ValidationError

from hyperdrive_fees.core.domain.pool_state import PoolState

logger = logging.getLogger(__name__)


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы поставляются вместе с пакетом в contracts/schema/.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'pool_state')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если файл не является валидной JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Валидируем саму схему (meta-validation)
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        logger.debug("loaded schema %s from %s", schema_name, schema_path)
        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# POOL STATE VALIDATOR
# =============================================================================


class PoolStateValidator:
    """
    Валидатор сырого pool_state payload.

    Проверяет wire-формат (uint256 как строки цифр, положительные
    длительности) до построения pydantic моделей и строит PoolState.
    """

    SCHEMA_NAME = "pool_state"

    def __init__(self, loader: SchemaLoader | None = None):
        loader = loader or _SCHEMA_LOADER
        self.schema = loader.load_schema(self.SCHEMA_NAME)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Валидация payload против контракта.

        Raises:
            ValidationError: Наиболее релевантное нарушение контракта
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        """Проверка валидности payload без exception."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[ValidationError]:
        """Все нарушения контракта в порядке пути к полю."""
        return iter(sorted(self.validator.iter_errors(data), key=_error_sort_key))

    def error_paths(self, data: Dict[str, Any]) -> List[str]:
        """
        Пути к нарушающим контракт полям ("info.spot_price").

        Нарушения на уровне объекта (лишнее или отсутствующее поле)
        возвращают путь к самому объекту, "" для корня.
        """
        return [
            ".".join(str(part) for part in error.absolute_path)
            for error in self.iter_errors(data)
        ]

    def load(self, data: Dict[str, Any]) -> PoolState:
        """
        Валидация payload по контракту и построение PoolState.

        Raises:
            jsonschema.ValidationError: Если payload нарушает контракт
            pydantic.ValidationError: Если payload нарушает ограничения модели
        """
        self.validate(data)
        state = PoolState.model_validate(data)
        logger.debug(
            "loaded pool state: position_duration=%d checkpoint_duration=%d",
            state.position_duration(),
            state.checkpoint_duration(),
        )
        return state


def _error_sort_key(error: ValidationError) -> Tuple[str, ...]:
    return tuple(str(part) for part in error.absolute_path)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_pool_state(data: Dict[str, Any]) -> None:
    """
    Валидация pool_state данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    PoolStateValidator().validate(data)


def load_pool_state(data: Dict[str, Any]) -> PoolState:
    """
    Валидация payload по контракту и построение PoolState.

    Args:
        data: Сырой pool_state payload (uint256 как строки)

    Returns:
        Immutable PoolState

    Raises:
        jsonschema.ValidationError: Если payload нарушает контракт
        pydantic.ValidationError: Если payload нарушает ограничения модели
    """
    return PoolStateValidator().load(data)
