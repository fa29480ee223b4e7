"""Typed MongoDB query/filter DSL for CQRS/DDD.

Builds query predicates as immutable values and renders them into the
ordered operator documents the server expects.
"""

from __future__ import annotations

from .builders import (
    all_,
    and_,
    elem_match,
    eq,
    exists,
    filter_doc,
    gt,
    gte,
    in_,
    json_schema,
    lt,
    lte,
    ne,
    nin,
    nor,
    not_,
    or_,
    regex,
    regex_opts,
    size,
    sort_doc,
    type_,
)
from .document import Document
from .exceptions import (
    EmptyTypeSetError,
    FilterDecodingError,
    FilterEncodingError,
    FilterError,
    SizeOverflowError,
    UnknownRegexOptionError,
    UnknownTypeAliasError,
)
from .filters import (
    All,
    Array,
    Doc,
    ElemMatch,
    Eq,
    Exists,
    FilterDoc,
    FilterNode,
    Gt,
    Gte,
    In,
    JsonSchema,
    Lt,
    Lte,
    Ne,
    Nin,
    Not,
    Regex,
    Size,
    Type,
    Value,
    as_filter,
    serialize,
)
from .literal import OPTION_LETTERS, TYPE_NAMES, BsonType, Order, RegexOpts

__all__ = [
    # Container
    "Document",
    # Literals
    "BsonType",
    "RegexOpts",
    "Order",
    "TYPE_NAMES",
    "OPTION_LETTERS",
    # Filter algebra
    "FilterNode",
    "FilterDoc",
    "Value",
    "Doc",
    "Array",
    "Eq",
    "Ne",
    "Gt",
    "Lt",
    "Gte",
    "Lte",
    "In",
    "Nin",
    "Not",
    "Exists",
    "Type",
    "JsonSchema",
    "Regex",
    "All",
    "ElemMatch",
    "Size",
    "as_filter",
    "serialize",
    # Builders
    "eq",
    "ne",
    "gt",
    "lt",
    "gte",
    "lte",
    "in_",
    "nin",
    "all_",
    "exists",
    "type_",
    "json_schema",
    "elem_match",
    "size",
    "regex",
    "regex_opts",
    "not_",
    "filter_doc",
    "and_",
    "or_",
    "nor",
    "sort_doc",
    # Exceptions
    "FilterError",
    "FilterEncodingError",
    "FilterDecodingError",
    "SizeOverflowError",
    "EmptyTypeSetError",
    "UnknownTypeAliasError",
    "UnknownRegexOptionError",
]
