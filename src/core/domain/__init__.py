"""
Domain models and value objects.

Contains the BigNumber value type and its text I/O.
"""

from src.core.domain.bignumber import ONE, ZERO, BigNumber, normalize, to_bignumber
from src.core.domain.bignumber_io import (
    DEFAULT_PARSE_CONFIG,
    ParseConfig,
    TextSink,
    TextSource,
    format_bignumber,
    parse_bignumber,
    read_bignumber,
    read_bignumbers,
    write_bignumber,
)

__all__ = [
    # BigNumber model
    "BigNumber",
    "ZERO",
    "ONE",
    "normalize",
    "to_bignumber",
    # Text I/O
    "ParseConfig",
    "DEFAULT_PARSE_CONFIG",
    "TextSink",
    "TextSource",
    "format_bignumber",
    "parse_bignumber",
    "write_bignumber",
    "read_bignumber",
    "read_bignumbers",
]
