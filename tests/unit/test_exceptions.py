"""Tests for exceptions module."""

from __future__ import annotations

from cqrs_ddd_mongo_dsl.exceptions import (
    EmptyTypeSetError,
    FilterDecodingError,
    FilterEncodingError,
    FilterError,
    SizeOverflowError,
    UnknownRegexOptionError,
    UnknownTypeAliasError,
)

# -- hierarchy ---------------------------------------------------------------


def test_encoding_errors_share_a_base():
    assert issubclass(SizeOverflowError, FilterEncodingError)
    assert issubclass(EmptyTypeSetError, FilterEncodingError)
    assert issubclass(FilterEncodingError, FilterError)


def test_decoding_errors_are_value_errors():
    assert issubclass(UnknownTypeAliasError, FilterDecodingError)
    assert issubclass(UnknownRegexOptionError, FilterDecodingError)
    assert issubclass(FilterDecodingError, ValueError)
    assert not issubclass(FilterEncodingError, ValueError)


# -- payloads ----------------------------------------------------------------


def test_base_to_dict():
    err = FilterEncodingError("boom")
    assert err.to_dict() == {"error": "FilterEncodingError", "message": "boom"}


def test_size_overflow_to_dict():
    err = SizeOverflowError(2**63)
    d = err.to_dict()
    assert d["error"] == "SIZE_OVERFLOW"
    assert d["size"] == 2**63
    assert str(2**63) in d["message"]


def test_empty_type_set_message():
    assert str(EmptyTypeSetError()) == "at least one type must be specified"


def test_unknown_type_alias_fuzzy_suggestion():
    err = UnknownTypeAliasError("objectid", ["objectId", "object", "array"])
    assert "'objectid'" in str(err)
    assert "objectId" in err.suggestions
    assert "Did you mean" in str(err)


def test_unknown_type_alias_no_matches():
    err = UnknownTypeAliasError("zzzzz", ["null", "bool"])
    d = err.to_dict()
    assert d["error"] == "UNKNOWN_TYPE_ALIAS"
    assert d["suggestions"] == []
    assert d["valid_aliases"] == ["bool", "null"]
    assert "Did you mean" not in str(err)


def test_unknown_regex_option_to_dict():
    err = UnknownRegexOptionError("g")
    assert str(err) == "unexpected regex option: 'g'"
    assert err.to_dict() == {"error": "UNKNOWN_REGEX_OPTION", "option": "g"}
