"""
Filter DSL exception hierarchy.

All exceptions inherit from ``FilterError`` and provide ``to_dict()``
for API-friendly error responses.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any


class FilterError(Exception):
    """Base exception for all filter DSL errors."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class FilterEncodingError(FilterError):
    """A filter value could not be rendered into a BSON document."""


class SizeOverflowError(FilterEncodingError):
    """``$size`` operand does not fit into a signed 64-bit integer."""

    def __init__(self, size: int) -> None:
        self.size = size
        super().__init__(f"{{ $size: {size} }} overflows int64")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "SIZE_OVERFLOW",
            "message": str(self),
            "size": self.size,
        }


class EmptyTypeSetError(FilterEncodingError):
    """A ``$type`` operand was built from an empty ``BsonType`` set."""

    def __init__(self) -> None:
        super().__init__("at least one type must be specified")


class FilterDecodingError(FilterError, ValueError):
    """A wire value could not be decoded into a flag set.

    Subclasses ``ValueError`` so pydantic reports it as a validation error.
    """


class UnknownTypeAliasError(FilterDecodingError):
    """
    Unknown BSON type alias.

    Provides fuzzy-matched suggestions for likely intended aliases.
    """

    def __init__(self, alias: str, valid_aliases: list[str]) -> None:
        self.alias = alias
        self.valid_aliases = valid_aliases
        self.suggestions = get_close_matches(alias, valid_aliases, n=3, cutoff=0.6)

        message = f"unknown BSON type alias: '{alias}'"
        if self.suggestions:
            message += f". Did you mean: {', '.join(self.suggestions)}?"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "UNKNOWN_TYPE_ALIAS",
            "alias": self.alias,
            "suggestions": self.suggestions,
            "valid_aliases": sorted(self.valid_aliases),
        }


class UnknownRegexOptionError(FilterDecodingError):
    """A regex option string contains a letter outside ``imxs``."""

    def __init__(self, option: str) -> None:
        self.option = option
        super().__init__(f"unexpected regex option: '{option}'")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "UNKNOWN_REGEX_OPTION",
            "option": self.option,
        }
