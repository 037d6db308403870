"""
Core math modules

Таксономия ошибок и native integer widths для точной целочисленной арифметики.
"""

# Errors
from src.core.math.errors import (
    BigNumberError,
    DivisionByZero,
    InvalidFormat,
    NumericOverflow,
)

# Native Widths
from src.core.math.native_widths import (
    DEFAULT_NATIVE_WIDTH,
    DIGIT_BASE,
    NativeWidth,
    fits_width,
    validate_fits_width,
    wrap_to_width,
)

__all__ = [
    # Errors
    "BigNumberError",
    "DivisionByZero",
    "InvalidFormat",
    "NumericOverflow",
    # Native Widths — Constants
    "DEFAULT_NATIVE_WIDTH",
    "DIGIT_BASE",
    # Native Widths — Types
    "NativeWidth",
    # Native Widths — Functions
    "fits_width",
    "validate_fits_width",
    "wrap_to_width",
]
