"""
Contract Validation Module

Модуль для валидации JSON контрактов BigNumber.
"""

from .validators import (
    BigNumberDocumentValidator,
    SchemaLoader,
    bignumber_from_document,
    bignumber_to_document,
    validate_bignumber_document,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "BigNumberDocumentValidator",
    # Functions
    "validate_bignumber_document",
    "bignumber_to_document",
    "bignumber_from_document",
]
