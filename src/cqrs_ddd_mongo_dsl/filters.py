"""Filtering sub-operators of the MongoDB query language.

Every predicate form is a frozen pydantic model deriving from ``FilterNode``.
``serialize`` walks a filter tree and renders the nested operator document
that the server expects::

    serialize(Doc({"count": Ne(5)}))  # -> SON([("count", SON([("$ne", 5)]))])
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, MutableMapping
from typing import Any, ClassVar

from bson.int64 import Int64
from bson.son import SON
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .document import Document
from .exceptions import FilterEncodingError, SizeOverflowError
from .literal import BsonType, Order, RegexOpts

logger = logging.getLogger("cqrs_ddd.mongo_dsl")

INT64_MAX = 2**63 - 1


class FilterNode(BaseModel):
    """Base class for a single query/filter condition.

    Nodes are immutable; composing filters builds new trees. Fields may be
    passed positionally, in declaration order.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    def __init__(self, *args: Any, **data: Any) -> None:
        if args:
            names = list(type(self).model_fields)
            if len(args) > len(names):
                raise TypeError(
                    f"{type(self).__name__} takes at most {len(names)} "
                    f"positional argument(s), got {len(args)}"
                )
            for name, arg in zip(names, args):
                if name in data:
                    raise TypeError(
                        f"{type(self).__name__} got multiple values for {name!r}"
                    )
                data[name] = arg
        super().__init__(**data)

    def to_bson(self, **kwargs: Any) -> Any:
        """Shorthand for ``serialize(self, **kwargs)``."""
        return serialize(self, **kwargs)


FilterDoc = Document[FilterNode]
"""A map from field paths to filter sub-operations."""


def as_filter(obj: Any) -> FilterNode:
    """Lift ``obj`` into the filter algebra.

    Filters pass through, mappings become ``Doc`` and anything else is an
    exact-match ``Value``.
    """
    if isinstance(obj, FilterNode):
        return obj
    if isinstance(obj, Mapping):
        return Doc(obj)
    return Value(obj)


def _filter_doc(value: Any) -> Document[FilterNode]:
    if not isinstance(value, Mapping):
        raise ValueError(
            f"expected a mapping of field paths, got {type(value).__name__}"
        )
    doc: Document[FilterNode] = Document(
        (key, as_filter(sub)) for key, sub in value.items()
    )
    return doc.freeze()


def _literal_operand(value: Any) -> Any:
    if isinstance(value, FilterNode):
        raise ValueError(
            f"operand must be a literal value, not a {type(value).__name__} filter"
        )
    return value


# -- untagged forms ----------------------------------------------------------


class Value(FilterNode):
    """Matches if the field has the given value."""

    value: Any


class Doc(FilterNode):
    """A sub-query of multiple path => filter specifiers."""

    doc: Document[FilterNode]

    @field_validator("doc", mode="before")
    @classmethod
    def coerce_doc(cls, value: Any) -> Document[FilterNode]:
        return _filter_doc(value)


class Array(FilterNode):
    """A sub-query of multiple filters."""

    filters: tuple[FilterNode, ...]

    @field_validator("filters", mode="before")
    @classmethod
    def coerce_filters(cls, value: Any) -> tuple[FilterNode, ...]:
        return tuple(as_filter(item) for item in value)


# -- comparison --------------------------------------------------------------


class _Comparison(FilterNode):
    operator: ClassVar[str]

    value: Any

    @field_validator("value")
    @classmethod
    def check_operand(cls, value: Any) -> Any:
        return _literal_operand(value)


class Eq(_Comparison):
    """Matches if the field is equal to the given value."""

    operator = "$eq"


class Ne(_Comparison):
    """Matches if the field is not equal to the given value."""

    operator = "$ne"


class Gt(_Comparison):
    """Matches if the field is greater than the given value."""

    operator = "$gt"


class Lt(_Comparison):
    """Matches if the field is less than the given value."""

    operator = "$lt"


class Gte(_Comparison):
    """Matches if the field is greater than or equal to the given value."""

    operator = "$gte"


class Lte(_Comparison):
    """Matches if the field is less than or equal to the given value."""

    operator = "$lte"


class _ValueList(FilterNode):
    operator: ClassVar[str]

    values: tuple[Any, ...]

    @field_validator("values")
    @classmethod
    def check_operands(cls, values: tuple[Any, ...]) -> tuple[Any, ...]:
        return tuple(_literal_operand(value) for value in values)


class In(_ValueList):
    """Matches if the value of the field is any of the specified values."""

    operator = "$in"


class Nin(_ValueList):
    """Matches if the value of the field is none of the specified values."""

    operator = "$nin"


# -- logical / element -------------------------------------------------------


class Not(FilterNode):
    """Matches if the field does not satisfy the specified subquery."""

    filter: FilterNode

    @field_validator("filter", mode="before")
    @classmethod
    def coerce_filter(cls, value: Any) -> FilterNode:
        return as_filter(value)


class Exists(FilterNode):
    """
    If the argument is ``True``, matches if the field exists in the enclosing
    document. If it is ``False``, matches if the field does not exist.
    """

    exists: bool


class Type(FilterNode):
    """Matches if the type of the field is any of the specified types."""

    types: BsonType


# -- evaluation --------------------------------------------------------------


class JsonSchema(FilterNode):
    """Matches if the value of the field satisfies the given JSON schema."""

    json_schema: dict[str, Any]


class Regex(FilterNode):
    """Matches if the field is a string satisfying the given regular expression."""

    pattern: str
    options: RegexOpts = RegexOpts(0)


# -- array -------------------------------------------------------------------


class All(_ValueList):
    """Matches if the field is an array containing all the specified values."""

    operator = "$all"


class ElemMatch(FilterNode):
    """
    Matches if the field is an array containing at least one element that
    matches all of the specified subqueries.
    """

    doc: Document[FilterNode]

    @field_validator("doc", mode="before")
    @classmethod
    def coerce_doc(cls, value: Any) -> Document[FilterNode]:
        return _filter_doc(value)


class Size(FilterNode):
    """Matches if the field is an array whose length is the given value."""

    size: int = Field(ge=0)


# -- serialization -----------------------------------------------------------


def serialize(
    obj: FilterNode | Document[Any],
    *,
    document_class: type[MutableMapping[str, Any]] = SON,
) -> Any:
    """Render a filter or a filter document into its BSON-ready form.

    Documents are built with ``document_class`` so that field order survives
    into the wire encoder.

    Raises:
        SizeOverflowError: If a ``$size`` operand does not fit into int64.
        FilterEncodingError: If a ``$type`` operand is an empty or unknown set,
            or a regex carries option bits with no letter.
    """
    try:
        return _encode(obj, document_class)
    except FilterEncodingError as e:
        logger.debug("Failed to serialize filter %r: %s", obj, e)
        raise


def _encode(obj: Any, document_class: type[MutableMapping[str, Any]]) -> Any:
    if isinstance(obj, Document):
        return obj.to_son(
            lambda value: _encode(value, document_class), document_class=document_class
        )
    if isinstance(obj, Order):
        return int(obj)
    if not isinstance(obj, FilterNode):
        return obj

    def single(key: str, value: Any) -> MutableMapping[str, Any]:
        rendered = document_class()
        rendered[key] = value
        return rendered

    if isinstance(obj, Value):
        return obj.value
    if isinstance(obj, (Doc, ElemMatch)):
        doc = _encode(obj.doc, document_class)
        return doc if isinstance(obj, Doc) else single("$elemMatch", doc)
    if isinstance(obj, Array):
        return [_encode(sub, document_class) for sub in obj.filters]
    if isinstance(obj, _Comparison):
        return single(obj.operator, _encode(obj.value, document_class))
    if isinstance(obj, _ValueList):
        return single(
            obj.operator, [_encode(value, document_class) for value in obj.values]
        )
    if isinstance(obj, Not):
        return single("$not", _encode(obj.filter, document_class))
    if isinstance(obj, Exists):
        return single("$exists", int(obj.exists))
    if isinstance(obj, Type):
        return single("$type", obj.types.encode())
    if isinstance(obj, JsonSchema):
        return single("$jsonSchema", obj.json_schema)
    if isinstance(obj, Regex):
        rendered = single("$regex", obj.pattern)
        letters = obj.options.encode()
        if letters:
            rendered["$options"] = letters
        return rendered
    if isinstance(obj, Size):
        if obj.size > INT64_MAX:
            raise SizeOverflowError(obj.size)
        return single("$size", Int64(obj.size))
    raise FilterEncodingError(f"Unknown filter node: {type(obj).__name__}")
