"""
Тесты конверсий BigNumber

Проверяет:
1. Разбор текста: знак, старшие нули, усечение дробной части, ошибки формата
2. Канонический вывод и стабильность round-trip
3. Native → BigNumber (точная конверсия, опциональная width)
4. BigNumber → native (молчаливый wraparound и checked-вариант)
5. BigNumber → float / int
"""

import logging
import math

import pytest

from src.core.domain import ZERO, BigNumber, to_bignumber
from src.core.math import InvalidFormat, NativeWidth, NumericOverflow

LARGE = "55555555555555555555555555555555555555555557777777777"


# =============================================================================
# ТЕСТЫ РАЗБОРА ТЕКСТА
# =============================================================================


class TestFromText:
    """Тесты для from_text"""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("0", "0"),
            ("7", "7"),
            ("007", "7"),
            ("-007", "-7"),
            ("3.99", "3"),
            ("-3.99", "-3"),
            ("3.", "3"),
            ("-0", "0"),
            ("-0.5", "0"),
            ("000", "0"),
            ("100", "100"),
            (LARGE, LARGE),
        ],
    )
    def test_valid_text(self, text: str, expected: str) -> None:
        """Допустимые строки и их каноническая форма"""
        assert BigNumber.from_text(text).to_text() == expected

    def test_leading_zeros_equivalent(self) -> None:
        """"007" и "7" — одно значение"""
        assert BigNumber.from_text("007") == BigNumber.from_text("7")

    def test_fraction_truncated_not_rounded(self) -> None:
        """"3.99" равно "3" (без округления)"""
        assert BigNumber.from_text("3.99") == BigNumber.from_text("3")

    def test_negative_zero_has_no_sign(self) -> None:
        """"-0" — это 0 без знака"""
        value = BigNumber.from_text("-0")
        assert value == ZERO
        assert value.sign == 1

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "-",
            ".5",
            "-.5",
            "+5",
            "12a",
            "1 2",
            " 12",
            "12 ",
            "1.2.3",
            "--1",
            "1-",
            "0x10",
            "1e5",
            "١٢",  # Arabic-Indic digits
        ],
    )
    def test_invalid_text_raises(self, text: str) -> None:
        """Нарушение грамматики → InvalidFormat"""
        with pytest.raises(InvalidFormat, match="Invalid BigNumber text"):
            BigNumber.from_text(text)

    def test_invalid_format_is_value_error(self) -> None:
        """InvalidFormat ловится как ValueError"""
        with pytest.raises(ValueError):
            BigNumber.from_text("abc")

    def test_non_string_raises_type_error(self) -> None:
        """Не-строка → TypeError"""
        with pytest.raises(TypeError):
            BigNumber.from_text(123)  # type: ignore[arg-type]

    def test_magnitude_stored_least_significant_first(self) -> None:
        """Младшая цифра хранится первой"""
        assert BigNumber.from_text("1230").magnitude == (0, 3, 2, 1)


class TestToText:
    """Тесты для to_text и round-trip стабильности"""

    @pytest.mark.parametrize(
        "text", ["0", "1", "-1", "10", "-100200300", LARGE, "-" + LARGE]
    )
    def test_roundtrip_is_stable(self, text: str) -> None:
        """format(parse(format(x))) == format(x)"""
        first = BigNumber.from_text(text).to_text()
        second = BigNumber.from_text(first).to_text()
        assert first == second == text

    def test_str_and_repr(self) -> None:
        """str — каноническая запись, repr — конструктор"""
        value = BigNumber.from_native(-42)
        assert str(value) == "-42"
        assert repr(value) == "BigNumber('-42')"


# =============================================================================
# ТЕСТЫ NATIVE КОНВЕРСИЙ
# =============================================================================


class TestFromNative:
    """Тесты для from_native"""

    @pytest.mark.parametrize("value", [0, 1, -1, 9, 10, -10, 2**63 - 1, -(2**63), 10**50])
    def test_exact_conversion(self, value: int) -> None:
        """Расширяющая конверсия всегда точная"""
        assert BigNumber.from_native(value).to_int() == value
        assert BigNumber.from_native(value).to_text() == str(value)

    def test_width_in_range(self) -> None:
        """Значение в пределах width принимается"""
        value = BigNumber.from_native(-128, NativeWidth.INT8)
        assert value.to_text() == "-128"

    def test_width_out_of_range_raises(self) -> None:
        """Значение вне width → NumericOverflow"""
        with pytest.raises(NumericOverflow, match="out of range for uint8"):
            BigNumber.from_native(256, NativeWidth.UINT8)

        with pytest.raises(NumericOverflow):
            BigNumber.from_native(-1, NativeWidth.UINT64)

    @pytest.mark.parametrize("value", [True, 1.0, "1", None])
    def test_non_int_rejected(self, value: object) -> None:
        """bool, float, str → TypeError"""
        with pytest.raises(TypeError):
            BigNumber.from_native(value)  # type: ignore[arg-type]

    def test_to_bignumber_factory(self) -> None:
        """Универсальная фабрика принимает int, str и BigNumber"""
        assert to_bignumber(42) == to_bignumber("42") == to_bignumber(to_bignumber(42))

        with pytest.raises(TypeError):
            to_bignumber(4.2)  # type: ignore[arg-type]


class TestToNative:
    """Тесты для to_native (молчаливый wraparound)"""

    @pytest.mark.parametrize(
        "value, width, expected",
        [
            (127, NativeWidth.INT8, 127),
            (128, NativeWidth.INT8, -128),
            (-129, NativeWidth.INT8, 127),
            (300, NativeWidth.UINT8, 44),
            (-1, NativeWidth.UINT8, 255),
            (-1, NativeWidth.UINT64, 2**64 - 1),
            (2**63, NativeWidth.INT64, -(2**63)),
            (2**32 + 5, NativeWidth.UINT32, 5),
            (-(2**31), NativeWidth.INT32, -(2**31)),
            (40000, NativeWidth.INT16, 40000 - 2**16),
        ],
    )
    def test_wraparound(self, value: int, width: NativeWidth, expected: int) -> None:
        """Переполнение усекается как native overflow"""
        assert BigNumber.from_native(value).to_native(width) == expected

    def test_default_width_is_int64(self) -> None:
        """Ширина по умолчанию — int64"""
        assert BigNumber.from_native(2**63 + 1).to_native() == -(2**63) + 1

    def test_huge_value_does_not_raise(self) -> None:
        """Огромное значение не вызывает исключение"""
        value = BigNumber.from_text(LARGE)
        assert value.to_native(NativeWidth.INT64) == (
            (int(LARGE) + 2**63) % 2**64 - 2**63
        )

    def test_truncation_logged_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        """Усечение пишет DEBUG-запись, значение в диапазоне — нет"""
        logger_name = "src.core.domain.bignumber"
        with caplog.at_level(logging.DEBUG, logger=logger_name):
            BigNumber.from_native(100).to_native(NativeWidth.INT8)
        assert not caplog.records

        with caplog.at_level(logging.DEBUG, logger=logger_name):
            assert BigNumber.from_native(300).to_native(NativeWidth.UINT8) == 44
        assert [record.levelno for record in caplog.records] == [logging.DEBUG]
        assert "truncated 300 to uint8: 44" in caplog.text

    def test_division_by_zero_logged_at_debug(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """DivisionByZero сопровождается DEBUG-записью"""
        with caplog.at_level(logging.DEBUG, logger="src.core.domain.bignumber"):
            with pytest.raises(ZeroDivisionError):
                BigNumber.from_native(7) / ZERO
        assert "division by zero: dividend=7" in caplog.text


class TestToNativeChecked:
    """Тесты для to_native_checked"""

    def test_in_range_value(self) -> None:
        """Значение в пределах ширины возвращается точно"""
        assert BigNumber.from_native(2**63 - 1).to_native_checked() == 2**63 - 1
        assert BigNumber.from_native(255).to_native_checked(NativeWidth.UINT8) == 255

    def test_boundary_overflow(self) -> None:
        """Граница: max + 1 → NumericOverflow"""
        with pytest.raises(NumericOverflow):
            BigNumber.from_native(2**63).to_native_checked(NativeWidth.INT64)

        with pytest.raises(NumericOverflow):
            BigNumber.from_native(-1).to_native_checked(NativeWidth.UINT32)

    def test_digit_count_precheck(self) -> None:
        """Слишком длинное значение отклоняется по количеству цифр"""
        with pytest.raises(NumericOverflow, match="digits"):
            BigNumber.from_text(LARGE).to_native_checked(NativeWidth.UINT64)

    def test_overflow_is_overflow_error(self) -> None:
        """NumericOverflow ловится как OverflowError"""
        with pytest.raises(OverflowError):
            BigNumber.from_native(1000).to_native_checked(NativeWidth.INT8)


class TestToFloatAndInt:
    """Тесты для to_float и to_int"""

    def test_float_approximation(self) -> None:
        """float — приближение значения"""
        assert float(BigNumber.from_text(LARGE)) == pytest.approx(float(int(LARGE)), rel=1e-12)
        assert float(BigNumber.from_native(-12)) == -12.0

    def test_float_overflow_is_inf(self) -> None:
        """Переполнение float даёт inf без исключения"""
        assert math.isinf(BigNumber.from_native(10**400).to_float())
        assert BigNumber.from_native(-(10**400)).to_float() == -math.inf

    def test_int_is_exact(self) -> None:
        """int() — точное значение"""
        assert int(BigNumber.from_text("-" + LARGE)) == -int(LARGE)
