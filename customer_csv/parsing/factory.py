from __future__ import annotations

from collections.abc import Callable

from ..logging.error_log import ErrorSink
from ..transformation.customer_transformer import CustomerTransformer
from ..validation.customer_validator import CustomerValidator
from .base import CsvFormatParser, FormatSpec
from .formats import BUILTIN_FORMATS

"""Parser selection by format tag.

The factory maps a tag ("TypeA", ...) to a creator callable receiving the
validator, transformer and error sink. New layouts can be registered at
runtime with ``register`` or ``register_spec``.
"""

__all__ = [
    "ParserCreator",
    "ParserFactory",
    "UnsupportedFormatError",
]

ParserCreator = Callable[[CustomerValidator, CustomerTransformer, ErrorSink], CsvFormatParser]

MSG_TAG_EMPTY = "Parser type cannot be null or empty"
MSG_UNSUPPORTED = "Unsupported parser type '{tag}'. Supported types: {supported}"


class UnsupportedFormatError(ValueError):
    """Raised when a parser is requested for an unknown format tag."""

    def __init__(self, tag: str, supported: list[str]) -> None:
        self.tag = tag
        self.supported = supported
        super().__init__(MSG_UNSUPPORTED.format(tag=tag, supported=", ".join(supported)))


def _spec_creator(spec: FormatSpec) -> ParserCreator:
    def create(validator: CustomerValidator, transformer: CustomerTransformer, sink: ErrorSink) -> CsvFormatParser:
        return CsvFormatParser(spec, validator, transformer, sink)

    return create


class ParserFactory:
    """Registry of format tag -> parser creator (built-ins: TypeA, TypeB, TypeC)."""

    def __init__(self) -> None:
        self._creators: dict[str, ParserCreator] = {
            spec.tag: _spec_creator(spec) for spec in BUILTIN_FORMATS
        }

    def create_parser(
        self,
        tag: str,
        validator: CustomerValidator,
        transformer: CustomerTransformer,
        sink: ErrorSink,
    ) -> CsvFormatParser:
        if tag is None or not tag.strip():
            raise ValueError(MSG_TAG_EMPTY)
        creator = self._creators.get(tag)
        if creator is None:
            raise UnsupportedFormatError(tag, self.supported_types())
        return creator(validator, transformer, sink)

    def supported_types(self) -> list[str]:
        return list(self._creators)

    def is_supported(self, tag: str) -> bool:
        return tag in self._creators

    def register(self, tag: str, creator: ParserCreator) -> None:
        """Bind ``tag`` to ``creator``, replacing any previous binding."""
        if tag is None or not tag.strip():
            raise ValueError(MSG_TAG_EMPTY)
        if creator is None:
            raise TypeError("creator must not be None")
        self._creators[tag] = creator

    def register_spec(self, spec: FormatSpec) -> None:
        """Register a layout described only by its FormatSpec."""
        self.register(spec.tag, _spec_creator(spec))
