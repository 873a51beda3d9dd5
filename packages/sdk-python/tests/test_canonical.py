import math
from collections import OrderedDict

import pytest

from walletauth_sdk.canonical import canonical_bytes, canonicalize
from walletauth_sdk.exceptions import CanonicalizationError


def test_key_order_is_irrelevant() -> None:
    first = {"type": "email", "address": "a@example.com", "nested": {"b": 1, "a": 2}}
    second = OrderedDict([("nested", {"a": 2, "b": 1}), ("address", "a@example.com"), ("type", "email")])
    assert canonicalize(first) == canonicalize(second)
    assert canonicalize(first) == '{"address":"a@example.com","nested":{"a":2,"b":1},"type":"email"}'


def test_numbers_and_strings_are_not_coerced() -> None:
    assert canonicalize({"n": 1, "s": "1"}) == '{"n":1,"s":"1"}'
    assert canonicalize({"n": 1.0}) == canonicalize({"n": 1})


def test_tuples_serialize_as_arrays() -> None:
    assert canonicalize({"ids": ("p1", "p2")}) == '{"ids":["p1","p2"]}'


def test_canonical_bytes_are_utf8() -> None:
    assert canonical_bytes({"name": "café"}) == '{"name":"café"}'.encode("utf-8")


@pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
def test_non_finite_numbers_are_rejected(value: float) -> None:
    with pytest.raises(CanonicalizationError):
        canonicalize({"n": value})


def test_non_string_keys_are_rejected() -> None:
    with pytest.raises(CanonicalizationError):
        canonicalize({1: "one"})


def test_unsupported_types_are_rejected() -> None:
    with pytest.raises(CanonicalizationError):
        canonicalize({"raw": b"bytes"})
    with pytest.raises(CanonicalizationError):
        canonicalize({"ids": {"p1", "p2"}})


def test_cycles_are_rejected() -> None:
    items: list[object] = []
    items.append(items)
    with pytest.raises(CanonicalizationError):
        canonicalize({"items": items})


def test_shared_references_are_not_cycles() -> None:
    shared = {"k": "v"}
    assert canonicalize({"a": shared, "b": shared}) == '{"a":{"k":"v"},"b":{"k":"v"}}'


def test_lone_surrogates_are_escaped() -> None:
    assert canonicalize({"address": "a\ud800b"}) == '{"address":"a\\ud800b"}'
    assert canonicalize({"\udfff": 1}) == '{"\\udfff":1}'
    assert canonical_bytes({"address": "\udc00"}) == b'{"address":"\\udc00"}'


def test_surrogate_pairs_join_into_one_character() -> None:
    assert canonicalize({"emoji": "😀"}) == '{"emoji":"😀"}'
    assert canonicalize({"emoji": "\ud83d\ude00"}) == canonicalize({"emoji": "😀"})
