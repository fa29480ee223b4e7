"""
Convenience constructors for filters and filter documents.

Example::

    query = filter_doc(
        {
            "name": regex("^Order-"),
            "customer.address.city": "Athens",
            "placed_at": {"year": 2024},
            "lines": type_(BsonType.ARRAY),
            "status": ne("cancelled"),
        }
    )
    serialize(query)
    # -> {"name": {"$regex": "^Order-"}, "customer.address.city": "Athens", ...}
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from .document import Document
from .filters import (
    All,
    Array,
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
    as_filter,
)
from .literal import BsonType, Order, RegexOpts

# -- comparison ----------------------------------------------------------------


def eq(value: Any) -> Eq:
    """``{"$eq": value}``"""
    return Eq(value)


def ne(value: Any) -> Ne:
    """``{"$ne": value}``"""
    return Ne(value)


def gt(value: Any) -> Gt:
    """``{"$gt": value}``"""
    return Gt(value)


def lt(value: Any) -> Lt:
    """``{"$lt": value}``"""
    return Lt(value)


def gte(value: Any) -> Gte:
    """``{"$gte": value}``"""
    return Gte(value)


def lte(value: Any) -> Lte:
    """``{"$lte": value}``"""
    return Lte(value)


def in_(values: Iterable[Any]) -> In:
    return In(tuple(values))


def nin(values: Iterable[Any]) -> Nin:
    return Nin(tuple(values))


# -- element / evaluation / array ------------------------------------------------


def exists(flag: bool = True) -> Exists:
    return Exists(flag)


def type_(types: BsonType | str | Iterable[str]) -> Type:
    """Build a ``$type`` filter from flags or from BSON type aliases."""
    return Type(types)


def json_schema(schema: Mapping[str, Any]) -> JsonSchema:
    return JsonSchema(dict(schema))


def all_(values: Iterable[Any]) -> All:
    return All(tuple(values))


def elem_match(doc: Mapping[str, Any]) -> ElemMatch:
    return ElemMatch(doc)


def size(n: int) -> Size:
    return Size(n)


def regex(pattern: str) -> Regex:
    """Build a ``$regex`` filter with no options."""
    return regex_opts(pattern, RegexOpts(0))


def regex_opts(pattern: str, options: RegexOpts | str) -> Regex:
    """Build a ``$regex`` filter; ``options`` may be flags or letters like ``"im"``."""
    return Regex(pattern, options)


def not_(flt: Any) -> Not:
    """Negate a filter. Plain values and mappings are lifted first."""
    return Not(as_filter(flt))


# -- documents -------------------------------------------------------------------


def filter_doc(
    fields: Mapping[str, Any] | Iterable[tuple[str, Any]] | None = None,
    /,
    **kwargs: Any,
) -> FilterDoc:
    """Build a filter document, lifting every value with ``as_filter``.

    Dotted paths are not valid keyword names; pass them in ``fields``.
    Keyword entries follow the positional ones.
    """
    doc: Document[FilterNode] = Document()
    if fields is not None:
        pairs = fields.items() if isinstance(fields, Mapping) else fields
        for path, value in pairs:
            doc.insert(path, as_filter(value))
    for path, value in kwargs.items():
        doc.insert(path, as_filter(value))
    return doc


def toplevel_logic(name: str, filters: Iterable[Any]) -> FilterDoc:
    """Wrap sub-queries into a one-entry document keyed by a logical operator."""
    doc: Document[FilterNode] = Document()
    doc.insert(name, Array(tuple(as_filter(f) for f in filters)))
    return doc


def and_(*filters: Any) -> FilterDoc:
    """
    ``{"$and": [...]}``. Such a query can only appear at the top level,
    not as a field specifier.
    """
    return toplevel_logic("$and", filters)


def or_(*filters: Any) -> FilterDoc:
    """The same as ``and_`` but builds an ``$or`` filter."""
    return toplevel_logic("$or", filters)


def nor(*filters: Any) -> FilterDoc:
    """The same as ``and_`` but builds a ``$nor`` filter."""
    return toplevel_logic("$nor", filters)


# -- sorting ---------------------------------------------------------------------


def sort_doc(
    order_by: Iterable[tuple[str, Order | str | int] | str] | None,
) -> Document[Order]:
    """Build a sort document.

    Accepts either ``[(field, "asc"|"desc"|Order)]`` or ``["-field", "field"]``.
    """
    doc: Document[Order] = Document()
    if not order_by:
        return doc
    for item in order_by:
        if isinstance(item, tuple):
            field, direction = item[0], item[1]
            if isinstance(direction, str):
                order = (
                    Order.DESCENDING if direction.lower() == "desc" else Order.ASCENDING
                )
            else:
                order = Order(direction)
            doc.insert(field, order)
        elif item.startswith("-"):
            doc.insert(item[1:], Order.DESCENDING)
        else:
            doc.insert(item, Order.ASCENDING)
    return doc
