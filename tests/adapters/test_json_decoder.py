"""JSON decoding into records: key matching, type checks and atomic commits."""

from __future__ import annotations

import json

import pytest

from lib_configurator import InvalidFormat, set_defaults
from lib_configurator.adapters.decoders.json_record import JSONRecordDecoder
from tests.support import VALID_DOCUMENT, EdgeConfig, NestedSettings, SuiteConfig


def _decode(document: object, record: object) -> None:
    JSONRecordDecoder().decode(json.dumps(document).encode("utf-8"), record)


def _defaults() -> SuiteConfig:
    record = SuiteConfig()
    set_defaults(record)
    return record


def test_matched_keys_override_and_others_keep_defaults() -> None:
    record = _defaults()
    _decode(VALID_DOCUMENT, record)
    assert record.foo == "abcd"
    assert record.test.foo == "bcde"
    assert record.bar == 1234
    assert record.baz is True


def test_every_supported_kind_is_decoded() -> None:
    record = _defaults()
    _decode({"foo": "x", "bar": -5, "baz": False, "foo_empty": "y", "test": {"test-foo": "z"}}, record)
    assert (record.foo, record.bar, record.baz, record.foo_empty, record.test.foo) == ("x", -5, False, "y", "z")


def test_keys_match_case_insensitively_after_exact_match() -> None:
    record = _defaults()
    _decode({"FOO": "upper", "Bar": 7, "TEST": {"Test-Foo": "nested"}}, record)
    assert record.foo == "upper"
    assert record.bar == 7
    assert record.test.foo == "nested"


def test_unknown_keys_and_nulls_are_ignored() -> None:
    record = _defaults()
    _decode({"foo": None, "test": None, "extra": [1, 2], "doesnt-matter": {"a": "b"}}, record)
    assert record.foo == "foo"
    assert record.test.foo == "test-foo"
    assert record.unsupported == {}


@pytest.mark.parametrize(
    "document",
    [
        {"foo": "changed", "bar": "1234"},
        {"foo": "changed", "bar": 12.5},
        {"foo": "changed", "bar": True},
        {"foo": "changed", "baz": "true"},
        {"foo": "changed", "baz": 1},
        {"foo": "changed", "test": {"test-foo": 3}},
        {"foo": "changed", "test": "flat"},
    ],
)
def test_type_mismatch_fails_without_partial_writes(document: dict) -> None:
    record = _defaults()
    with pytest.raises(InvalidFormat):
        _decode(document, record)
    assert record.foo == "foo"
    assert record.test.foo == "test-foo"


@pytest.mark.parametrize("payload", [b"", b"{invalid}", b'["foo"]', b'"foo"', b"\xff\xfe\x00"])
def test_malformed_documents_are_rejected(payload: bytes) -> None:
    with pytest.raises(InvalidFormat):
        JSONRecordDecoder().decode(payload, SuiteConfig())


def test_unsupported_fields_are_never_decoded() -> None:
    record = EdgeConfig()
    _decode({"ratio": 2.5, "hosts": ["a"]}, record)
    assert record.ratio == 0.0
    assert record.hosts == []


def test_missing_nested_record_is_attached_only_on_success() -> None:
    record = EdgeConfig()
    _decode({"child": {"test-foo": "created"}}, record)
    assert record.child == NestedSettings(foo="created")

    failing = EdgeConfig()
    with pytest.raises(InvalidFormat):
        _decode({"child": {"test-foo": "created"}, "verbose": "no"}, failing)
    assert failing.child is None
