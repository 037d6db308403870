"""
BigNumber I/O — Текстовый ввод/вывод через generic sink/source

Замена stream insertion/extraction: функции работают с любым объектом,
у которого есть write(str) (sink) или read(n) (source) — io.StringIO,
открытый файл, sys.stdin/sys.stdout.

Формат вывода: канонический ['-'] digit+
Грамматика ввода: ['-'] digit+ ['.' digit*], дробная часть отбрасывается
"""

import logging
from dataclasses import dataclass
from typing import Iterator, Protocol

from src.core.domain.bignumber import BigNumber
from src.core.math.errors import InvalidFormat

logger = logging.getLogger(__name__)


# =============================================================================
# SINK / SOURCE
# =============================================================================


class TextSink(Protocol):
    def write(self, text: str) -> int: ...


class TextSource(Protocol):
    def read(self, size: int = -1) -> str: ...


# =============================================================================
# КОНФИГУРАЦИЯ
# =============================================================================


@dataclass(frozen=True)
class ParseConfig:
    """Конфигурация разбора текста.

    - allow_fraction: допускать дробную часть (отбрасывается без округления)
    - max_digits: ограничение длины целой части (None — без ограничения)
    """

    allow_fraction: bool = True
    max_digits: int | None = None

    def __post_init__(self) -> None:
        if self.max_digits is not None and self.max_digits <= 0:
            raise ValueError(f"max_digits must be positive, got {self.max_digits}")


DEFAULT_PARSE_CONFIG = ParseConfig()


# =============================================================================
# FORMAT / PARSE
# =============================================================================


def format_bignumber(value: BigNumber) -> str:
    """Каноническая десятичная запись значения."""
    return value.to_text()


def parse_bignumber(text: str, config: ParseConfig = DEFAULT_PARSE_CONFIG) -> BigNumber:
    """
    Разбор десятичного текста с учётом конфигурации.

    Args:
        text: Текст вида ['-'] digit+ ['.' digit*]
        config: Ограничения разбора

    Returns:
        BigNumber в канонической форме

    Raises:
        InvalidFormat: Если текст нарушает грамматику или ограничения config

    Examples:
        >>> str(parse_bignumber("-00042.7"))
        '-42'
        >>> parse_bignumber("1.5", ParseConfig(allow_fraction=False))  # doctest: +SKIP
        Traceback (most recent call last):
            ...
        InvalidFormat: ...
    """
    if isinstance(text, str) and not config.allow_fraction and "." in text:
        logger.debug("fraction rejected by config: %r", text)
        raise InvalidFormat(f"Fractional part not allowed: {text!r}")

    value = BigNumber.from_text(text)

    if config.max_digits is not None:
        integral = text.lstrip("-").split(".", 1)[0]
        if len(integral) > config.max_digits:
            logger.debug("too many digits (%d > %d)", len(integral), config.max_digits)
            raise InvalidFormat(
                f"Integral part has {len(integral)} digits, "
                f"max {config.max_digits} allowed"
            )

    return value


# =============================================================================
# SINK / SOURCE ОПЕРАЦИИ
# =============================================================================


def write_bignumber(value: BigNumber, sink: TextSink) -> None:
    """Запись канонического текста значения в sink."""
    sink.write(format_bignumber(value))


def _read_token(source: TextSource) -> str:
    # Пропуск ведущих пробелов, затем чтение до пробела или EOF
    char = source.read(1)
    while char and char.isspace():
        char = source.read(1)

    token = []
    while char and not char.isspace():
        token.append(char)
        char = source.read(1)
    return "".join(token)


def read_bignumber(
    source: TextSource, config: ParseConfig = DEFAULT_PARSE_CONFIG
) -> BigNumber:
    """
    Чтение одного whitespace-разделённого токена из source и его разбор.

    Raises:
        InvalidFormat: Если source пуст или токен нарушает грамматику
    """
    token = _read_token(source)
    if not token:
        raise InvalidFormat("No BigNumber token in source (end of input)")
    return parse_bignumber(token, config)


def read_bignumbers(
    source: TextSource, config: ParseConfig = DEFAULT_PARSE_CONFIG
) -> Iterator[BigNumber]:
    """Итератор по всем токенам source до EOF."""
    token = _read_token(source)
    while token:
        yield parse_bignumber(token, config)
        token = _read_token(source)
