"""Literal operand types: BSON type flags, regex options and sort order.

``BsonType`` and ``RegexOpts`` are bit sets with a canonical wire form.
Each is paired with one ordered ``(flag, name)`` table that drives both
encoding and decoding.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import IntEnum, IntFlag
from typing import TYPE_CHECKING, Any

from pydantic_core import core_schema

from .exceptions import (
    EmptyTypeSetError,
    FilterDecodingError,
    FilterEncodingError,
    UnknownRegexOptionError,
    UnknownTypeAliasError,
)

if TYPE_CHECKING:
    from pydantic import GetCoreSchemaHandler


def _codec_schema(
    decode: Any,
    encode: Any,
) -> core_schema.CoreSchema:
    """Pydantic schema that validates via ``decode`` and dumps via ``encode``."""
    return core_schema.no_info_plain_validator_function(
        decode,
        serialization=core_schema.plain_serializer_function_ser_schema(encode),
    )


class BsonType(IntFlag):
    """Non-deprecated BSON types accepted by ``$type``."""

    NULL = 1 << 0
    BOOL = 1 << 1
    DOUBLE = 1 << 2
    INT = 1 << 3
    LONG = 1 << 4
    DECIMAL = 1 << 5
    OBJECT_ID = 1 << 6
    TIMESTAMP = 1 << 7
    DATE = 1 << 8
    STRING = 1 << 9
    REGEX = 1 << 10
    BINARY = 1 << 11
    ARRAY = 1 << 12
    DOCUMENT = 1 << 13
    JAVASCRIPT = 1 << 14
    JAVASCRIPT_WITH_SCOPE = 1 << 15

    # Any of the 4 numeric types
    NUMBER = DOUBLE | INT | LONG | DECIMAL

    def encode(self) -> str | list[str]:
        """Render as a single alias, or a list of aliases for several types.

        Aliases come out in table order. ``INT`` and ``LONG`` both render as
        ``"int"``, so ``NUMBER`` yields ``["double", "int", "int", "decimal"]``.
        """
        bits = int(self)
        if bits == 0:
            raise EmptyTypeSetError()
        unknown = bits & ~_ALL_TYPE_BITS
        if unknown:
            raise FilterEncodingError(f"unexpected BSON type flag bits: {unknown:#06x}")
        names = [name for flag, name in TYPE_NAMES if flag in self]
        if bits.bit_count() == 1:
            return names[0]
        return names

    @classmethod
    def from_alias(cls, alias: str) -> BsonType:
        """Return the first flag whose alias is ``alias``."""
        for flag, name in TYPE_NAMES:
            if name == alias:
                return flag
        raise UnknownTypeAliasError(
            alias, list(dict.fromkeys(n for _, n in TYPE_NAMES))
        )

    @classmethod
    def decode(cls, value: Any) -> BsonType:
        """Parse an alias string or an array of alias strings."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.from_alias(value)
        if isinstance(value, Iterable) and not isinstance(value, (bytes, dict)):
            flags = cls(0)
            for alias in value:
                if not isinstance(alias, str):
                    raise FilterDecodingError(
                        f"BSON type alias must be a string, got {type(alias).__name__}"
                    )
                flags |= cls.from_alias(alias)
            return flags
        raise FilterDecodingError(
            "expected a BSON type alias string or an array of BSON type alias "
            f"strings, got {type(value).__name__}"
        )

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return _codec_schema(cls.decode, lambda flags: flags.encode())


# All distinct BSON type flags, along with their string aliases.
TYPE_NAMES: tuple[tuple[BsonType, str], ...] = (
    (BsonType.NULL, "null"),
    (BsonType.BOOL, "bool"),
    (BsonType.DOUBLE, "double"),
    (BsonType.INT, "int"),
    (BsonType.LONG, "int"),
    (BsonType.DECIMAL, "decimal"),
    (BsonType.OBJECT_ID, "objectId"),
    (BsonType.TIMESTAMP, "timestamp"),
    (BsonType.DATE, "date"),
    (BsonType.STRING, "string"),
    (BsonType.REGEX, "regex"),
    (BsonType.BINARY, "binData"),
    (BsonType.ARRAY, "array"),
    (BsonType.DOCUMENT, "object"),
    (BsonType.JAVASCRIPT, "javascript"),
    (BsonType.JAVASCRIPT_WITH_SCOPE, "javascriptWithScope"),
)

_ALL_TYPE_BITS = sum({int(flag) for flag, _ in TYPE_NAMES})


class RegexOpts(IntFlag):
    """Options for matching text against a regular expression."""

    # Case insensitive matching
    IGNORE_CASE = 1 << 0
    # ^ and $ match at line boundaries, not only at the ends of the string
    LINE_ANCHOR = 1 << 1
    # Extended syntax: embedded whitespace and #-comments are ignored
    EXTENDED = 1 << 2
    # . matches newlines too
    DOT_NEWLINE = 1 << 3

    def encode(self) -> str:
        """Render the set options as letters in canonical ``imxs`` order."""
        unknown = int(self) & ~_ALL_OPTION_BITS
        if unknown:
            raise FilterEncodingError(f"unexpected regex option bits: {unknown:#04x}")
        return "".join(letter for option, letter in OPTION_LETTERS if option in self)

    @classmethod
    def decode(cls, value: Any) -> RegexOpts:
        """Parse a string of option letters; repeated letters are allowed."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise FilterDecodingError(
                "expected a string containing one of [imxs], "
                f"got {type(value).__name__}"
            )
        options = cls(0)
        for char in value:
            for option, letter in OPTION_LETTERS:
                if letter == char:
                    options |= option
                    break
            else:
                raise UnknownRegexOptionError(char)
        return options

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return _codec_schema(cls.decode, lambda options: options.encode())


# Each regex option, along with its letter representation.
OPTION_LETTERS: tuple[tuple[RegexOpts, str], ...] = (
    (RegexOpts.IGNORE_CASE, "i"),
    (RegexOpts.LINE_ANCHOR, "m"),
    (RegexOpts.EXTENDED, "x"),
    (RegexOpts.DOT_NEWLINE, "s"),
)

_ALL_OPTION_BITS = sum(int(option) for option, _ in OPTION_LETTERS)


class Order(IntEnum):
    """Sort direction of a field in a sort document."""

    ASCENDING = 1
    DESCENDING = -1
