"""Insertion-ordered, key-unique document container."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping, MutableMapping
from typing import TYPE_CHECKING, Any, TypeVar

from bson.son import SON
from pydantic_core import core_schema

if TYPE_CHECKING:
    from pydantic import GetCoreSchemaHandler

V = TypeVar("V")


class Document(MutableMapping[str, V]):
    """Mapping from field paths to values that remembers first-insertion order.

    Writing an existing key replaces the value in place; the key keeps the
    position of its first insertion. Field order is significant on the wire,
    so the order is tracked explicitly rather than left to ``dict``.

    ``freeze()`` returns a read-only, hashable copy. Filter nodes hold their
    sub-documents in that form.
    """

    __slots__ = ("_frozen", "_index", "_keys", "_values")

    def __init__(
        self,
        entries: Mapping[str, V] | Iterable[tuple[str, V]] | None = None,
        /,
        **fields: V,
    ) -> None:
        self._frozen = False
        self._keys: list[str] = []
        self._values: list[V] = []
        self._index: dict[str, int] = {}
        if entries is not None:
            self.update(entries)
        if fields:
            self.update(fields)

    def insert(self, key: str, value: V) -> V | None:
        """Insert or replace ``key``; return the previous value, if any."""
        self._check_writable()
        if not isinstance(key, str):
            raise TypeError(f"Document keys must be str, got {type(key).__name__}")
        pos = self._index.get(key)
        if pos is None:
            self._index[key] = len(self._keys)
            self._keys.append(key)
            self._values.append(value)
            return None
        previous = self._values[pos]
        self._values[pos] = value
        return previous

    # -- MutableMapping ------------------------------------------------------

    def __getitem__(self, key: str) -> V:
        return self._values[self._index[key]]

    def __setitem__(self, key: str, value: V) -> None:
        self.insert(key, value)

    def __delitem__(self, key: str) -> None:
        self._check_writable()
        pos = self._index.pop(key)
        del self._keys[pos]
        del self._values[pos]
        for shifted in self._keys[pos:]:
            self._index[shifted] -= 1

    def __iter__(self) -> Iterator[str]:
        return iter(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Document):
            return list(self.items()) == list(other.items())
        if isinstance(other, Mapping):
            return dict(self.items()) == dict(other.items())
        return NotImplemented

    def __hash__(self) -> int:
        if not self._frozen:
            raise TypeError(f"unhashable type: {self.__class__.__name__!r}")
        return hash(tuple(zip(self._keys, self._values)))

    def __repr__(self) -> str:
        body = ", ".join(f"{k!r}: {v!r}" for k, v in self.items())
        return f"{self.__class__.__name__}({{{body}}})"

    # -- helpers -------------------------------------------------------------

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> Document[V]:
        """Return a read-only copy; a frozen document returns itself."""
        if self._frozen:
            return self
        sealed = self.copy()
        sealed._frozen = True
        return sealed

    def copy(self) -> Document[V]:
        """Shallow, writable copy; the new document has its own ordering state."""
        return self.__class__(zip(self._keys, self._values))

    def to_son(
        self,
        convert: Callable[[V], Any] | None = None,
        *,
        document_class: type[MutableMapping[str, Any]] = SON,
    ) -> MutableMapping[str, Any]:
        """Render the entries, in order, into a BSON-ready mapping."""
        rendered = document_class()
        for key, value in zip(self._keys, self._values):
            rendered[key] = convert(value) if convert is not None else value
        return rendered

    def _check_writable(self) -> None:
        if self._frozen:
            raise TypeError(f"{self.__class__.__name__} is frozen")

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.is_instance_schema(cls)
