"""
Contracts — JSON Schema контракты внешнего представления Number

Две формы, в которых Number пересекает JSON-границу:
- number_literal.json — голое JSON-число или строка-литерал по грамматике
  по умолчанию ("123.456", "-.5")
- number_parts.json — структура {"mantissa": int64, "exponent": int},
  совпадающая с Number.model_dump()

Нарушение контракта сообщается как ContractError со списком всех
нарушений (JSON-путь и сообщение jsonschema), а не первым попавшимся.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Final, List, Optional

import jsonschema
from jsonschema import Draft202012Validator

from fixdec.core.errors import ContractError

logger = logging.getLogger(__name__)

# Схемы поставляются как package data
SCHEMA_DIR: Final[Path] = Path(__file__).parent / "schema"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузка схем из каталога и кэш скомпилированных валидаторов.

    Каждая схема проходит meta-validation (Draft 2020-12) один раз,
    при первом обращении.
    """

    def __init__(self, schema_dir: Path = SCHEMA_DIR):
        self.schema_dir = Path(schema_dir)
        self._validators: Dict[str, Draft202012Validator] = {}

    def validator(self, schema_name: str) -> Draft202012Validator:
        """
        Валидатор для схемы schema_name (без расширения .json).

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если файл не является валидной JSON Schema
        """
        cached = self._validators.get(schema_name)
        if cached is not None:
            return cached

        path = self.schema_dir / f"{schema_name}.json"
        if not path.is_file():
            raise FileNotFoundError(f"Schema not found: {path}")

        schema = json.loads(path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {path.name}: {e.message}") from e

        logger.debug("loaded schema %s from %s", schema_name, path)
        validator = Draft202012Validator(schema)
        self._validators[schema_name] = validator
        return validator

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """Схема как dict (тот же объект при повторных вызовах)."""
        return self.validator(schema_name).schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACTS
# =============================================================================


class Contract:
    """Именованный контракт: проверка данных против одной схемы."""

    def __init__(self, schema_name: str, loader: Optional[SchemaLoader] = None):
        self.schema_name = schema_name
        self._validator = (loader or _SCHEMA_LOADER).validator(schema_name)

    def violations(self, data: Any) -> List[str]:
        """Все нарушения как "<json path>: <message>", в порядке пути."""
        errors = sorted(self._validator.iter_errors(data), key=lambda e: e.json_path)
        return [f"{e.json_path}: {e.message}" for e in errors]

    def is_valid(self, data: Any) -> bool:
        return self._validator.is_valid(data)

    def check(self, data: Any) -> Any:
        """
        Проверка данных; возвращает data без изменений.

        Raises:
            ContractError: Если есть хотя бы одно нарушение
        """
        violations = self.violations(data)
        if violations:
            logger.debug("%s contract rejected %r: %s", self.schema_name, data, violations)
            raise ContractError(self.schema_name, violations)
        return data


NUMBER_LITERAL: Final[Contract] = Contract("number_literal")
NUMBER_PARTS: Final[Contract] = Contract("number_parts")


def validate_number_literal(data: Any) -> Any:
    """
    Проверка декодированного JSON-значения (число или строка-литерал).

    Raises:
        ContractError: Если значение не соответствует number_literal
    """
    return NUMBER_LITERAL.check(data)


def validate_number_parts(data: Any) -> Any:
    """
    Проверка структуры {"mantissa": int64, "exponent": int}.

    Raises:
        ContractError: Если структура не соответствует number_parts
    """
    return NUMBER_PARTS.check(data)
