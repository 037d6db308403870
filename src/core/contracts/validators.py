"""
JSON Schema Contract Validators

Модуль для валидации JSON-документов BigNumber согласно формальному
JSON Schema контракту. Использует библиотеку jsonschema.

Документ (wire-форма):
    {"sign": 1 | -1, "digits": "<цифры от старшей, без ведущих нулей>"}

Схемы:
- bignumber.json
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict

from jsonschema import Draft202012Validator, ValidationError
from pydantic import ValidationError as ModelValidationError

from src.core.domain.bignumber import BigNumber
from src.core.math.errors import InvalidFormat

logger = logging.getLogger(__name__)

# contracts/schema/ в корне проекта
SCHEMA_DIR = Path(__file__).resolve().parents[3] / "contracts" / "schema"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """Загрузчик схем из contracts/schema/ с кэшем и meta-валидацией."""

    def __init__(self, schema_dir: Path = SCHEMA_DIR):
        self._schema_dir = schema_dir
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Raises:
            FileNotFoundError: Если файла <schema_name>.json нет
            jsonschema.SchemaError: Если файл не является валидной Draft 2020-12 схемой
        """
        if schema_name not in self._schemas:
            schema_path = self._schema_dir / f"{schema_name}.json"
            schema = json.loads(schema_path.read_text(encoding="utf-8"))
            Draft202012Validator.check_schema(schema)
            self._schemas[schema_name] = schema
        return self._schemas[schema_name]


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# BIGNUMBER DOCUMENT
# =============================================================================


class BigNumberDocumentValidator:
    """Валидатор документа bignumber.json."""

    def __init__(self):
        self.validator = Draft202012Validator(_SCHEMA_LOADER.load_schema("bignumber"))

    def validate(self, data: Dict[str, Any]) -> None:
        """Raises ValidationError при нарушении схемы."""
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        return self.validator.iter_errors(data)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_bignumber_document(data: Dict[str, Any]) -> None:
    """
    Валидация bignumber документа.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    BigNumberDocumentValidator().validate(data)


def bignumber_to_document(value: BigNumber) -> Dict[str, Any]:
    """
    Сериализация BigNumber в JSON-документ.

    Examples:
        >>> bignumber_to_document(BigNumber.from_native(-120))
        {'sign': -1, 'digits': '120'}
    """
    return {"sign": value.sign, "digits": value.abs().to_text()}


def bignumber_from_document(data: Dict[str, Any]) -> BigNumber:
    """
    Десериализация JSON-документа в BigNumber.

    Документ проверяется схемой, затем каноническая форма проверяется
    валидаторами модели (например, sign=-1 с digits="0" отклоняется).

    Raises:
        InvalidFormat: Если документ нарушает контракт
    """
    try:
        validate_bignumber_document(data)
    except ValidationError as e:
        logger.debug("bignumber document rejected by schema: %s", e.message)
        raise InvalidFormat(f"Invalid BigNumber document: {e.message}") from e

    try:
        return BigNumber(
            sign=data["sign"],
            magnitude=tuple(int(char) for char in reversed(data["digits"])),
        )
    except ModelValidationError as e:
        logger.debug("non-canonical bignumber document: %s", data)
        raise InvalidFormat(f"Non-canonical BigNumber document: {data}") from e
