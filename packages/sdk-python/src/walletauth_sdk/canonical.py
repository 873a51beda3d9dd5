"""JSON Canonicalization Scheme (RFC 8785).

The custody API verifies signatures against the output of the npm
``canonicalize`` package, so the rules here follow that contract exactly:
keys sorted by UTF-16 code units, no whitespace, ECMAScript number formatting.
"""

import json
import math
import re
from collections.abc import Mapping
from typing import Any

from walletauth_sdk.exceptions import CanonicalizationError

# Integers above this magnitude lose precision as IEEE-754 doubles.
_MAX_SAFE_INTEGER = 2**53

_LONE_SURROGATE = re.compile(r"[\ud800-\udfff]")


def _utf16_key(key: str) -> bytes:
    return key.encode("utf-16-be", "surrogatepass")


def _format_string(value: str) -> str:
    # Join surrogate pairs into code points, then escape whatever is left
    # unpaired as \udxxx, matching well-formed JSON.stringify.
    joined = value.encode("utf-16-be", "surrogatepass").decode("utf-16-be", "surrogatepass")
    encoded = json.dumps(joined, ensure_ascii=False)
    return _LONE_SURROGATE.sub(lambda match: f"\\u{ord(match.group()):04x}", encoded)


def _format_float(value: float) -> str:
    if not math.isfinite(value):
        raise CanonicalizationError(f"Non-finite number is not allowed: {value!r}")
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    mantissa, _, exp_part = repr(abs(value)).partition("e")
    int_part, _, frac_part = mantissa.partition(".")
    digits = (int_part + frac_part).lstrip("0")
    # Decimal point position relative to the first significant digit.
    point = len(int_part) + (int(exp_part) if exp_part else 0)
    point -= len(int_part + frac_part) - len((int_part + frac_part).lstrip("0"))
    digits = digits.rstrip("0")
    k = len(digits)

    if k <= point <= 21:
        return sign + digits + "0" * (point - k)
    if 0 < point <= 21:
        return sign + digits[:point] + "." + digits[point:]
    if -6 < point <= 0:
        return sign + "0." + "0" * (-point) + digits

    exponent = point - 1
    exp_sign = "+" if exponent >= 0 else "-"
    head = digits[0] if k == 1 else f"{digits[0]}.{digits[1:]}"
    return f"{sign}{head}e{exp_sign}{abs(exponent)}"


def _serialize(value: Any, parts: list[str], seen: set[int]) -> None:
    if value is None:
        parts.append("null")
    elif value is True:
        parts.append("true")
    elif value is False:
        parts.append("false")
    elif isinstance(value, str):
        parts.append(_format_string(value))
    elif isinstance(value, int):
        if abs(value) > _MAX_SAFE_INTEGER:
            parts.append(_format_float(float(value)))
        else:
            parts.append(str(value))
    elif isinstance(value, float):
        parts.append(_format_float(value))
    elif isinstance(value, Mapping):
        marker = id(value)
        if marker in seen:
            raise CanonicalizationError("Circular reference detected")
        seen.add(marker)
        for key in value:
            if not isinstance(key, str):
                raise CanonicalizationError(f"Object keys must be strings, got {type(key).__name__}")
        parts.append("{")
        for index, key in enumerate(sorted(value, key=_utf16_key)):
            if index:
                parts.append(",")
            parts.append(_format_string(key))
            parts.append(":")
            _serialize(value[key], parts, seen)
        parts.append("}")
        seen.discard(marker)
    elif isinstance(value, (list, tuple)):
        marker = id(value)
        if marker in seen:
            raise CanonicalizationError("Circular reference detected")
        seen.add(marker)
        parts.append("[")
        for index, item in enumerate(value):
            if index:
                parts.append(",")
            _serialize(item, parts, seen)
        parts.append("]")
        seen.discard(marker)
    else:
        raise CanonicalizationError(f"Value of type {type(value).__name__} is not JSON serializable")


def canonicalize(payload: Any) -> str:
    parts: list[str] = []
    _serialize(payload, parts, set())
    return "".join(parts)


def canonical_bytes(payload: Any) -> bytes:
    return canonicalize(payload).encode("utf-8")
