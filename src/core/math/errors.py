"""
BigNumber Errors — Таксономия ошибок целочисленной арифметики

Все ошибки локальные и синхронные: операция прерывается, операнды остаются
неизменными (значения immutable), частичный результат не возвращается.

Иерархия:
- BigNumberError            — базовый класс
- DivisionByZero            — деление/остаток на ноль
- InvalidFormat             — текст или документ нарушает грамматику
- NumericOverflow           — значение не помещается в native width
                              (только явные checked-конверсии)
"""


class BigNumberError(Exception):
    """Базовая ошибка для всех операций BigNumber."""

    pass


class DivisionByZero(BigNumberError, ZeroDivisionError):
    """
    Деление или остаток от деления на ноль.

    Детектируется явной проверкой делителя ДО начала поразрядного деления.
    Наследует ZeroDivisionError, чтобы вызывающий код мог ловить
    стандартное исключение Python.
    """

    pass


class InvalidFormat(BigNumberError, ValueError):
    """
    Текст (или JSON-документ) не соответствует грамматике

        ['-'] digit+ ['.' digit*]
    """

    pass


class NumericOverflow(BigNumberError, OverflowError):
    """
    Значение не помещается в выбранную native width.

    Никогда не возникает в обычной (truncating) конверсии to_native —
    только в явных checked-точках входа.
    """

    pass
