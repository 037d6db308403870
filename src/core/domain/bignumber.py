"""
BigNumber — Целое произвольной точности со знаком

Immutable Pydantic модель, представляющая целое число, не помещающееся
в машинное слово. Все операции точные и реализованы grade-school
алгоритмами (поразрядное сложение/вычитание, умножение повторным
сложением, деление в столбик).

Представление:
- sign: +1 или -1
- magnitude: десятичные цифры 0–9, младшая цифра первой

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. magnitude никогда не пустая
2. Старшая цифра не ноль, кроме значения 0: magnitude == (0,), sign == +1
   (-0 непредставим)
3. sign принимает только значения +1 / -1
4. Любой оператор завершается normalize() — единственной точкой
   канонизации результата
5. Операнды никогда не мутируются: каждая операция возвращает новое значение

Деление усечённое (toward zero), остаток имеет знак делимого:
    dividend == quotient * divisor + remainder, |remainder| < |divisor|
"""

import logging
import re
from typing import Final, Iterable, Literal

from pydantic import BaseModel, Field, field_validator

from src.core.math.errors import DivisionByZero, InvalidFormat, NumericOverflow
from src.core.math.native_widths import (
    DEFAULT_NATIVE_WIDTH,
    DIGIT_BASE,
    NativeWidth,
    fits_width,
    validate_fits_width,
    wrap_to_width,
)

logger = logging.getLogger(__name__)

# Грамматика текстового ввода: ['-'] digit+ ['.' digit*]
# [0-9] вместо \d: Unicode-цифры других письменностей не допускаются
_TEXT_PATTERN: Final[re.Pattern[str]] = re.compile(r"(-?)([0-9]+)(?:\.[0-9]*)?")


# =============================================================================
# BIGNUMBER MODEL
# =============================================================================


class BigNumber(BaseModel):
    """
    Целое произвольной точности со знаком.

    Immutable модель (frozen=True): все арифметические операции возвращают
    новый экземпляр. Составное присваивание (`a += b`) перепривязывает имя.

    Создание:
        BigNumber.from_text("-12345")
        BigNumber.from_native(42)
        to_bignumber(value)   # int | str | BigNumber
    """

    sign: Literal[1, -1] = Field(1, description="Знак: +1 или -1")
    magnitude: tuple[int, ...] = Field(
        (0,), description="Десятичные цифры, младшая первой"
    )

    model_config = {"frozen": True, "strict": True}  # Immutable, без коэрции типов

    @field_validator("magnitude")
    @classmethod
    def validate_digits(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        """Каждая цифра в диапазоне 0–9, magnitude не пустая."""
        if not v:
            raise ValueError("magnitude must contain at least one digit")
        for digit in v:
            if not 0 <= digit < DIGIT_BASE:
                raise ValueError(f"magnitude digit out of range 0-9: {digit}")
        return v

    @field_validator("magnitude")
    @classmethod
    def validate_canonical(cls, v: tuple[int, ...], info) -> tuple[int, ...]:
        """
        Проверка канонической формы.

        - Нет старших нулей (кроме самого значения 0)
        - Ноль всегда положительный
        """
        if len(v) > 1 and v[-1] == 0:
            raise ValueError(f"magnitude has most-significant zero digits: {v}")
        if v == (0,) and info.data.get("sign", 1) != 1:
            raise ValueError("zero must have positive sign")
        return v

    def model_copy(self, *, update=None, deep: bool = False) -> "BigNumber":
        """Копия; поля из update проходят ту же валидацию, что и при создании."""
        if not update:
            return super().model_copy(deep=deep)
        return type(self).model_validate({**self.model_dump(), **update})

    # =========================================================================
    # ПРЕДСТАВЛЕНИЕ
    # =========================================================================

    def digits(self) -> int:
        """Количество десятичных цифр magnitude."""
        return len(self.magnitude)

    def is_zero(self) -> bool:
        return self.magnitude == (0,)

    def is_negative(self) -> bool:
        return self.sign == -1

    # =========================================================================
    # СРАВНЕНИЕ
    # =========================================================================

    def compare(self, other: "BigNumber") -> int:
        """
        Тотальный порядок над BigNumber.

        Алгоритм:
        1. Разные знаки: значение со знаком -1 меньше
        2. Одинаковые знаки, разная длина: для положительных меньше короткое,
           для отрицательных — длинное
        3. Одинаковые знаки и длина: поразрядно от старшей цифры,
           первое несовпадение решает (направление инвертируется при sign=-1)

        Returns:
            -1 если self < other, 0 если равны, +1 если self > other

        Examples:
            >>> BigNumber.from_native(-5).compare(BigNumber.from_native(3))
            -1
            >>> BigNumber.from_native(-100).compare(BigNumber.from_native(-99))
            -1
        """
        if self.sign != other.sign:
            return -1 if self.sign < other.sign else 1

        if len(self.magnitude) != len(other.magnitude):
            shorter = len(self.magnitude) < len(other.magnitude)
            return -self.sign if shorter else self.sign

        for mine, theirs in zip(reversed(self.magnitude), reversed(other.magnitude)):
            if mine != theirs:
                return -self.sign if mine < theirs else self.sign

        return 0

    # =========================================================================
    # АДДИТИВНЫЕ ОПЕРАЦИИ
    # =========================================================================

    def negate(self) -> "BigNumber":
        """Смена знака. Отрицание нуля даёт ноль (не -0)."""
        return normalize(self.magnitude, -self.sign)

    def abs(self) -> "BigNumber":
        return normalize(self.magnitude, 1)

    def add(self, other: "BigNumber") -> "BigNumber":
        """
        Сложение.

        Одинаковые знаки: поразрядная сумма с переносом, длина результата
        не больше max(len(a), len(b)) + 1.
        Разные знаки: сводится к вычитанию a + b ≡ a - (-b).
        """
        if other.is_zero():
            return self
        if self.is_zero():
            return other
        if self.sign != other.sign:
            return self.subtract(other.negate())

        return normalize(_add_magnitudes(self.magnitude, other.magnitude), self.sign)

    def subtract(self, other: "BigNumber") -> "BigNumber":
        """
        Вычитание.

        Одинаковые знаки: если |a| < |b|, вычисляется |b| - |a| с инвертированным
        общим знаком; иначе поразрядное вычитание с заёмом.
        Разные знаки: сводится к сложению a - b ≡ a + (-b).

        Examples:
            >>> str(BigNumber.from_native(3).subtract(BigNumber.from_native(5)))
            '-2'
        """
        if other.is_zero():
            return self
        if self.is_zero():
            return other.negate()
        if self.sign != other.sign:
            return self.add(other.negate())

        common_sign = self.sign
        if self.abs().compare(other.abs()) < 0:
            # Swap: |b| - |a|, знак противоположен общему
            return normalize(
                _subtract_magnitudes(other.magnitude, self.magnitude), -common_sign
            )

        return normalize(
            _subtract_magnitudes(self.magnitude, other.magnitude), common_sign
        )

    def increment(self) -> "BigNumber":
        return self.add(ONE)

    def decrement(self) -> "BigNumber":
        return self.subtract(ONE)

    # =========================================================================
    # МУЛЬТИПЛИКАТИВНЫЕ ОПЕРАЦИИ
    # =========================================================================

    def multiply(self, other: "BigNumber") -> "BigNumber":
        """
        Умножение (grade-school, повторным сложением).

        Для каждой цифры d на позиции i левого операнда правый операнд,
        сдвинутый на i разрядов, прибавляется d раз к накопителю.
        Стоимость пропорциональна сумме цифр левого операнда, умноженной
        на длину правого (не более 9 сложений на разряд).

        Знак результата — произведение знаков операндов.
        """
        total = ZERO
        for position, digit in enumerate(self.magnitude):
            shifted = normalize((0,) * position + other.magnitude, 1)
            for _ in range(digit):
                total = total.add(shifted)

        return normalize(total.magnitude, self.sign * other.sign)

    def divide_with_remainder(self, other: "BigNumber") -> tuple["BigNumber", "BigNumber"]:
        """
        Деление в столбик: частное и остаток за один проход.

        Для каждой цифры делимого от старшей к младшей:
        1. Остаток сдвигается на один разряд, к нему дописывается цифра
        2. Пока остаток >= |делитель|, вычитаем |делитель| и увеличиваем
           цифру частного (не более 9 вычитаний на разряд)

        Returns:
            (quotient, remainder): частное со знаком sign_a * sign_b,
            остаток со знаком делимого (или ноль)

        Raises:
            DivisionByZero: Если делитель равен нулю (до любых вычислений)

        Examples:
            >>> q, r = BigNumber.from_native(-7).divide_with_remainder(BigNumber.from_native(2))
            >>> str(q), str(r)
            ('-3', '-1')
        """
        if other.is_zero():
            logger.debug("division by zero: dividend=%s", self.to_text())
            raise DivisionByZero(f"Division by zero: {self.to_text()} / 0")

        divisor = other.abs()
        quotient = [0] * len(self.magnitude)
        remainder = ZERO

        for position in reversed(range(len(self.magnitude))):
            remainder = normalize((self.magnitude[position],) + remainder.magnitude, 1)
            while remainder.compare(divisor) >= 0:
                remainder = remainder.subtract(divisor)
                quotient[position] += 1

        return (
            normalize(quotient, self.sign * other.sign),
            normalize(remainder.magnitude, self.sign),
        )

    def divide(self, other: "BigNumber") -> "BigNumber":
        """Усечённое деление (toward zero). Raises DivisionByZero."""
        return self.divide_with_remainder(other)[0]

    def modulo(self, other: "BigNumber") -> "BigNumber":
        """Остаток со знаком делимого. Raises DivisionByZero."""
        return self.divide_with_remainder(other)[1]

    def power(self, exponent: int) -> "BigNumber":
        """
        Возведение в неотрицательную степень повторным умножением.

        x^0 == 1 для любого x, включая 0^0 == 1.

        Args:
            exponent: Показатель степени (>= 0)

        Raises:
            ValueError: Если exponent отрицательный
            TypeError: Если exponent не целое
        """
        if isinstance(exponent, bool) or not isinstance(exponent, int):
            raise TypeError(f"exponent must be int, got {type(exponent).__name__}")
        if exponent < 0:
            raise ValueError(f"exponent must be non-negative, got {exponent}")

        result = ONE
        for _ in range(exponent):
            result = result.multiply(self)
        return result

    # =========================================================================
    # КОНВЕРСИИ
    # =========================================================================

    @classmethod
    def from_text(cls, text: str) -> "BigNumber":
        """
        Разбор десятичного текста.

        Грамматика: ['-'] digit+ ['.' digit*]
        Дробная часть отбрасывается без округления, старшие нули убираются.

        Raises:
            InvalidFormat: Если текст не соответствует грамматике
            TypeError: Если text не строка

        Examples:
            >>> str(BigNumber.from_text("007"))
            '7'
            >>> str(BigNumber.from_text("-3.99"))
            '-3'
            >>> str(BigNumber.from_text("-0"))
            '0'
        """
        if not isinstance(text, str):
            raise TypeError(f"text must be str, got {type(text).__name__}")

        match = _TEXT_PATTERN.fullmatch(text)
        if match is None:
            logger.debug("invalid BigNumber text: %r", text)
            raise InvalidFormat(
                f"Invalid BigNumber text {text!r}: expected ['-'] digit+ ['.' digit*]"
            )

        sign_text, integral = match.groups()
        digits = [int(char) for char in reversed(integral)]
        return normalize(digits, -1 if sign_text else 1)

    @classmethod
    def from_native(cls, value: int, width: NativeWidth | None = None) -> "BigNumber":
        """
        Точная конверсия native целого (прямое извлечение цифр).

        Args:
            value: Целое значение
            width: Ширина, которой должно соответствовать значение (optional)

        Raises:
            TypeError: Если value не int (bool тоже отклоняется)
            NumericOverflow: Если задана width и значение вне её диапазона
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"value must be int, got {type(value).__name__}")
        if width is not None:
            validate_fits_width(value, width)

        remaining = -value if value < 0 else value
        digits = []
        while remaining:
            remaining, digit = divmod(remaining, DIGIT_BASE)
            digits.append(digit)

        return normalize(digits, -1 if value < 0 else 1)

    def to_text(self) -> str:
        """Каноническая десятичная запись: ['-'] digit+, ноль — "0"."""
        body = "".join(str(digit) for digit in reversed(self.magnitude))
        return "-" + body if self.sign == -1 else body

    def to_int(self) -> int:
        """Точное значение как Python int."""
        value = 0
        for digit in reversed(self.magnitude):
            value = value * DIGIT_BASE + digit
        return value * self.sign

    def to_native(self, width: NativeWidth = DEFAULT_NATIVE_WIDTH) -> int:
        """
        Конверсия в native целое с молчаливым wraparound.

        Накопление value*10 + digit от старшей цифры, затем применение знака.
        Переполнение НЕ проверяется: результат усекается как при native
        overflow (two's complement). Для проверки используйте to_native_checked.

        Examples:
            >>> BigNumber.from_native(300).to_native(NativeWidth.UINT8)
            44
        """
        value = 0
        modulus = 1 << width.bits
        for digit in reversed(self.magnitude):
            value = (value * DIGIT_BASE + digit) % modulus

        result = wrap_to_width(value * self.sign, width)
        if self.digits() > width.max_digits or not fits_width(self.to_int(), width):
            logger.debug("truncated %s to %s: %d", self.to_text(), width.value, result)
        return result

    def to_native_checked(self, width: NativeWidth = DEFAULT_NATIVE_WIDTH) -> int:
        """
        Конверсия в native целое с проверкой диапазона.

        Raises:
            NumericOverflow: Если значение не помещается в width
        """
        # Pre-check по длине: без накопления заведомо слишком длинных значений
        if self.digits() > width.max_digits:
            logger.debug("%d digits exceed %s", self.digits(), width.value)
            raise NumericOverflow(
                f"value with {self.digits()} digits out of range for {width.value} "
                f"(max {width.max_digits} digits)"
            )

        value = self.to_int()
        validate_fits_width(value, width)
        return value

    def to_float(self) -> float:
        """
        Приближение binary float.

        Переполнение даёт inf без исключения.
        """
        value = 0.0
        for digit in reversed(self.magnitude):
            value = value * DIGIT_BASE + digit
        return value * self.sign

    # =========================================================================
    # PYTHON PROTOCOLS
    # =========================================================================

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        return f"BigNumber({self.to_text()!r})"

    def __hash__(self) -> int:
        # Совпадает с hash(int), т.к. __eq__ приравнивает BigNumber к int
        return hash(self.to_int())

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __int__(self) -> int:
        return self.to_int()

    def __float__(self) -> float:
        return self.to_float()

    def __eq__(self, other: object) -> bool:
        # str не приравнивается: равенство согласовано с hash(int)
        if isinstance(other, str):
            return NotImplemented
        other_value = _coerce(other)
        if other_value is None:
            return NotImplemented
        return self.sign == other_value.sign and self.magnitude == other_value.magnitude

    def __lt__(self, other: object) -> bool:
        other_value = _coerce(other)
        if other_value is None:
            return NotImplemented
        return self.compare(other_value) < 0

    def __le__(self, other: object) -> bool:
        other_value = _coerce(other)
        if other_value is None:
            return NotImplemented
        return self.compare(other_value) <= 0

    def __gt__(self, other: object) -> bool:
        other_value = _coerce(other)
        if other_value is None:
            return NotImplemented
        return self.compare(other_value) > 0

    def __ge__(self, other: object) -> bool:
        other_value = _coerce(other)
        if other_value is None:
            return NotImplemented
        return self.compare(other_value) >= 0

    def __neg__(self) -> "BigNumber":
        return self.negate()

    def __pos__(self) -> "BigNumber":
        return self

    def __abs__(self) -> "BigNumber":
        return self.abs()

    def __add__(self, other: object) -> "BigNumber":
        other_value = _coerce(other)
        if other_value is None:
            return NotImplemented
        return self.add(other_value)

    def __radd__(self, other: object) -> "BigNumber":
        other_value = _coerce(other)
        if other_value is None:
            return NotImplemented
        return other_value.add(self)

    def __sub__(self, other: object) -> "BigNumber":
        other_value = _coerce(other)
        if other_value is None:
            return NotImplemented
        return self.subtract(other_value)

    def __rsub__(self, other: object) -> "BigNumber":
        other_value = _coerce(other)
        if other_value is None:
            return NotImplemented
        return other_value.subtract(self)

    def __mul__(self, other: object) -> "BigNumber":
        other_value = _coerce(other)
        if other_value is None:
            return NotImplemented
        return self.multiply(other_value)

    def __rmul__(self, other: object) -> "BigNumber":
        other_value = _coerce(other)
        if other_value is None:
            return NotImplemented
        return other_value.multiply(self)

    # `/` и `%` — усечённые (C-style), в отличие от floor-деления Python.
    # `//` намеренно не определён.
    def __truediv__(self, other: object) -> "BigNumber":
        other_value = _coerce(other)
        if other_value is None:
            return NotImplemented
        return self.divide(other_value)

    def __rtruediv__(self, other: object) -> "BigNumber":
        other_value = _coerce(other)
        if other_value is None:
            return NotImplemented
        return other_value.divide(self)

    def __mod__(self, other: object) -> "BigNumber":
        other_value = _coerce(other)
        if other_value is None:
            return NotImplemented
        return self.modulo(other_value)

    def __rmod__(self, other: object) -> "BigNumber":
        other_value = _coerce(other)
        if other_value is None:
            return NotImplemented
        return other_value.modulo(self)

    def __divmod__(self, other: object) -> tuple["BigNumber", "BigNumber"]:
        other_value = _coerce(other)
        if other_value is None:
            return NotImplemented
        return self.divide_with_remainder(other_value)

    def __pow__(self, exponent: object, modulo: None = None) -> "BigNumber":
        if modulo is not None:
            return NotImplemented
        if isinstance(exponent, BigNumber):
            exponent = exponent.to_int()
        if isinstance(exponent, bool) or not isinstance(exponent, int):
            return NotImplemented
        return self.power(exponent)


# =============================================================================
# НОРМАЛИЗАЦИЯ И ПОРАЗРЯДНЫЕ ПРИМИТИВЫ
# =============================================================================


def normalize(digits: Iterable[int], candidate_sign: int) -> BigNumber:
    """
    Канонизация сырого результата оператора.

    Убирает старшие нули (оставляя одну цифру для нуля), затем
    устанавливает знак: +1 для нуля, иначе candidate_sign.

    Args:
        digits: Цифры, младшая первой (может быть пустой)
        candidate_sign: Знак результата, если он не ноль (+1 / -1)

    Returns:
        BigNumber в канонической форме
    """
    magnitude = list(digits) or [0]
    while len(magnitude) > 1 and magnitude[-1] == 0:
        magnitude.pop()

    sign = 1 if magnitude == [0] else candidate_sign
    return BigNumber(sign=sign, magnitude=tuple(magnitude))


def _add_magnitudes(left: tuple[int, ...], right: tuple[int, ...]) -> list[int]:
    result = []
    carry = 0
    for position in range(max(len(left), len(right))):
        carry += left[position] if position < len(left) else 0
        carry += right[position] if position < len(right) else 0
        result.append(carry % DIGIT_BASE)
        carry //= DIGIT_BASE
    if carry:
        result.append(carry)
    return result


def _subtract_magnitudes(larger: tuple[int, ...], smaller: tuple[int, ...]) -> list[int]:
    # Требует |larger| >= |smaller|
    result = []
    borrow = 0
    for position in range(len(larger)):
        difference = larger[position] - borrow
        difference -= smaller[position] if position < len(smaller) else 0
        borrow = 1 if difference < 0 else 0
        result.append(difference + DIGIT_BASE * borrow)
    return result


def _coerce(value: object) -> BigNumber | None:
    # Смешанные операции с int/str; остальные типы — NotImplemented
    if isinstance(value, BigNumber):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return BigNumber.from_native(value)
    if isinstance(value, str):
        return BigNumber.from_text(value)
    return None


def to_bignumber(value: BigNumber | int | str) -> BigNumber:
    """
    Универсальная фабрика: копия BigNumber, native int или десятичный текст.

    Raises:
        InvalidFormat: Если текст не соответствует грамматике
        TypeError: Если тип value не поддерживается
    """
    if isinstance(value, BigNumber):
        return value.model_copy()
    result = _coerce(value)
    if result is None:
        raise TypeError(f"cannot convert {type(value).__name__} to BigNumber")
    return result


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

ZERO: Final[BigNumber] = BigNumber(sign=1, magnitude=(0,))
ONE: Final[BigNumber] = BigNumber(sign=1, magnitude=(1,))
