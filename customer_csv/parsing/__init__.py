"""Format parsers (TypeA/TypeB/TypeC) and the parser factory."""

from .base import CsvFormatParser, FormatSpec
from .factory import ParserFactory, UnsupportedFormatError
from .formats import TYPE_A, TYPE_A_SPEC, TYPE_B, TYPE_B_SPEC, TYPE_C, TYPE_C_SPEC

__all__ = [
    "CsvFormatParser",
    "FormatSpec",
    "ParserFactory",
    "UnsupportedFormatError",
    "TYPE_A",
    "TYPE_B",
    "TYPE_C",
    "TYPE_A_SPEC",
    "TYPE_B_SPEC",
    "TYPE_C_SPEC",
]
