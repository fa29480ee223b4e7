"""Unit tests for the ordered Document container."""

from __future__ import annotations

from collections import OrderedDict

import pytest
from bson.son import SON

from cqrs_ddd_mongo_dsl.document import Document


class TestDocumentOrdering:
    """Insertion order and overwrite-in-place semantics."""

    def test_reinserted_key_keeps_first_position(self):
        """A, B, C then A again iterates as A, B, C with A updated."""
        doc: Document[int] = Document()
        doc.insert("a", 1)
        doc.insert("b", 2)
        doc.insert("c", 3)
        doc.insert("a", 10)

        assert list(doc) == ["a", "b", "c"]
        assert doc["a"] == 10
        assert len(doc) == 3

    def test_insert_returns_previous_value(self):
        doc: Document[str] = Document()
        assert doc.insert("k", "old") is None
        assert doc.insert("k", "new") == "old"

    def test_setitem_is_insert(self):
        doc: Document[int] = Document(x=1, y=2)
        doc["x"] = 5
        assert list(doc.items()) == [("x", 5), ("y", 2)]

    def test_delete_keeps_relative_order(self):
        doc = Document([("a", 1), ("b", 2), ("c", 3), ("d", 4)])
        del doc["b"]
        doc["b"] = 20

        assert list(doc) == ["a", "c", "d", "b"]
        assert doc["c"] == 3
        assert doc["d"] == 4

    def test_missing_key_raises_key_error(self):
        doc: Document[int] = Document()
        with pytest.raises(KeyError):
            doc["nope"]
        with pytest.raises(KeyError):
            del doc["nope"]

    def test_non_string_key_rejected(self):
        doc: Document[int] = Document()
        with pytest.raises(TypeError, match="keys must be str"):
            doc.insert(1, 1)  # type: ignore[arg-type]


class TestDocumentConstruction:
    """Constructors follow dict conventions."""

    def test_from_mapping_pairs_and_kwargs(self):
        doc = Document({"a": 1}, b=2)
        assert list(doc.items()) == [("a", 1), ("b", 2)]

        doc = Document([("z", 1), ("y", 2)])
        assert list(doc) == ["z", "y"]

    def test_copy_is_independent(self):
        source = Document(a=1, b=2)
        clone = source.copy()
        clone["c"] = 3
        clone["a"] = 100

        assert list(source.items()) == [("a", 1), ("b", 2)]
        assert list(clone.items()) == [("a", 100), ("b", 2), ("c", 3)]


class TestFrozenDocument:
    """``freeze()`` seals a copy against writes and makes it hashable."""

    def test_freeze_copies_and_seals(self):
        source = Document(a=1, b=2)
        sealed = source.freeze()
        source["c"] = 3

        assert sealed.frozen and not source.frozen
        assert list(sealed.items()) == [("a", 1), ("b", 2)]

    def test_writes_are_rejected(self):
        sealed = Document(a=1).freeze()

        with pytest.raises(TypeError, match="frozen"):
            sealed["a"] = 2
        with pytest.raises(TypeError, match="frozen"):
            sealed.insert("b", 2)
        with pytest.raises(TypeError, match="frozen"):
            del sealed["a"]
        with pytest.raises(TypeError, match="frozen"):
            sealed.update(c=3)
        assert sealed == Document(a=1)

    def test_freeze_is_idempotent(self):
        sealed = Document(a=1).freeze()
        assert sealed.freeze() is sealed

    def test_copy_of_frozen_is_writable(self):
        clone = Document(a=1).freeze().copy()
        clone["b"] = 2
        assert list(clone) == ["a", "b"]

    def test_only_frozen_documents_hash(self):
        assert hash(Document(a=1).freeze()) == hash(Document(a=1).freeze())
        with pytest.raises(TypeError, match="unhashable"):
            hash(Document(a=1))


class TestDocumentEquality:
    def test_documents_compare_in_order(self):
        assert Document(a=1, b=2) == Document(a=1, b=2)
        assert Document(a=1, b=2) != Document(b=2, a=1)

    def test_mapping_comparison_ignores_order(self):
        assert Document(a=1, b=2) == {"b": 2, "a": 1}

    def test_unrelated_types_are_not_equal(self):
        assert Document(a=1) != [("a", 1)]


class TestDocumentRendering:
    def test_to_son_preserves_order(self):
        doc = Document([("b", 1), ("a", 2)])
        rendered = doc.to_son()

        assert isinstance(rendered, SON)
        assert list(rendered.keys()) == ["b", "a"]

    def test_to_son_converts_values(self):
        doc = Document(a=1, b=2)
        assert doc.to_son(lambda v: v * 10) == {"a": 10, "b": 20}

    def test_to_son_document_class(self):
        rendered = Document(a=1).to_son(document_class=OrderedDict)
        assert type(rendered) is OrderedDict

    def test_repr(self):
        assert repr(Document(a=1)) == "Document({'a': 1})"
