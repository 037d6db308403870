"""
Native Widths — Закрытый набор native integer типов и безопасные проверки

Модуль описывает ширины машинных целых, в которые (и из которых)
конвертируется BigNumber:
- Закрытый набор ширин (INT8..INT64, UINT8..UINT64) вместо generic dispatch
- Two's-complement wraparound (семантика native overflow)
- Range-проверки и валидация для checked-конверсий
- Максимальное количество десятичных цифр для pre-check по длине

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. wrap_to_width всегда возвращает значение в [min_value, max_value]
2. wrap_to_width(x) == x для всех x, помещающихся в ширину
3. Все операции детерминированы и не зависят от платформы
"""

import logging
from enum import Enum
from typing import Final

from src.core.math.errors import NumericOverflow

logger = logging.getLogger(__name__)

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Основание системы счисления для magnitude
DIGIT_BASE: Final[int] = 10


# =============================================================================
# NATIVE WIDTHS
# =============================================================================


class NativeWidth(str, Enum):
    """Ширина native целого типа"""

    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"

    @property
    def signed(self) -> bool:
        return not self.value.startswith("u")

    @property
    def bits(self) -> int:
        return int(self.value.lstrip("uint"))

    @property
    def min_value(self) -> int:
        if self.signed:
            return -(1 << (self.bits - 1))
        return 0

    @property
    def max_value(self) -> int:
        if self.signed:
            return (1 << (self.bits - 1)) - 1
        return (1 << self.bits) - 1

    @property
    def max_digits(self) -> int:
        """
        Максимальное количество десятичных цифр значения этой ширины.

        Используется для быстрой pre-check по длине magnitude:
        если цифр больше — значение гарантированно не помещается.

        Examples:
            >>> NativeWidth.INT8.max_digits   # 127 / -128
            3
            >>> NativeWidth.UINT64.max_digits  # 18446744073709551615
            20
        """
        return len(str(max(self.max_value, -self.min_value)))


# Ширина по умолчанию для to_native
DEFAULT_NATIVE_WIDTH: Final[NativeWidth] = NativeWidth.INT64


# =============================================================================
# WRAPAROUND И RANGE-ПРОВЕРКИ
# =============================================================================


def wrap_to_width(value: int, width: NativeWidth) -> int:
    """
    Приведение целого к ширине с two's-complement wraparound.

    Эквивалент native overflow: берутся младшие `bits` бит значения,
    для signed-ширин старший бит интерпретируется как знак.

    Args:
        value: Произвольное целое
        width: Целевая ширина

    Returns:
        Значение в диапазоне [width.min_value, width.max_value]

    Examples:
        >>> wrap_to_width(127, NativeWidth.INT8)
        127
        >>> wrap_to_width(128, NativeWidth.INT8)
        -128
        >>> wrap_to_width(-1, NativeWidth.UINT8)
        255
        >>> wrap_to_width(300, NativeWidth.UINT8)
        44
    """
    modulus = 1 << width.bits
    wrapped = value % modulus

    if width.signed and wrapped > width.max_value:
        wrapped -= modulus

    return wrapped


def fits_width(value: int, width: NativeWidth) -> bool:
    """
    Проверка, помещается ли значение в ширину без wraparound.

    Args:
        value: Проверяемое значение
        width: Целевая ширина

    Returns:
        True если width.min_value <= value <= width.max_value
    """
    return width.min_value <= value <= width.max_value


def validate_fits_width(value: int, width: NativeWidth, name: str = "value") -> None:
    """
    Валидация, что значение помещается в ширину.

    Args:
        value: Проверяемое значение
        width: Целевая ширина
        name: Имя параметра (для сообщения об ошибке)

    Raises:
        NumericOverflow: Если значение вне диапазона ширины
    """
    if not fits_width(value, width):
        logger.debug("%s=%d does not fit %s", name, value, width.value)
        raise NumericOverflow(
            f"{name} {value} out of range for {width.value} "
            f"[{width.min_value}, {width.max_value}]"
        )
