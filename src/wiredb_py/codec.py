from __future__ import annotations

import base64
import binascii
import re
from collections.abc import Callable, Mapping, Sequence
from decimal import Decimal
from typing import Any

from .errors import DecodeError, EncodeError
from .types import AttributeType, AttributeValue, Number

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_NUMBER_RE = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")

_SET_CONTAINERS = (set, frozenset, list, tuple)


def classify(native: Any) -> AttributeType:
    if isinstance(native, AttributeValue):
        return native.type
    if native is None:
        raise EncodeError("None is not representable")
    if isinstance(native, bool):
        raise EncodeError("bool is not representable")
    if isinstance(native, str):
        return AttributeType.S
    if isinstance(native, (int, float, Decimal)):
        return AttributeType.N
    if isinstance(native, (bytes, bytearray, memoryview)):
        return AttributeType.B
    if isinstance(native, _SET_CONTAINERS):
        kinds = {classify(member) for member in native}
        if not kinds:
            raise EncodeError("cannot infer the type of an empty set; pass an explicit AttributeValue")
        if len(kinds) > 1:
            raise EncodeError(f"set members have mixed types: {', '.join(sorted(kinds))}")
        (kind,) = kinds
        if kind.is_set:
            raise EncodeError("set members must be scalars")
        return kind.set_type
    raise EncodeError(f"unsupported value type: {type(native).__name__}")


def to_attribute_value(native: Any) -> AttributeValue:
    if isinstance(native, AttributeValue):
        return native

    kind = classify(native)
    if not kind.is_set:
        return AttributeValue(kind, native)

    members = [m.value if isinstance(m, AttributeValue) else m for m in native]
    if isinstance(native, (set, frozenset)):
        return AttributeValue(kind, frozenset(members))
    return AttributeValue(kind, members)


def _encode_number(value: Number) -> str:
    try:
        return str(value)
    except ValueError as err:
        raise EncodeError("N value has too many digits") from err


def _encode_binary(value: bytes) -> str:
    return base64.b64encode(value).decode("ascii")


_ENCODERS: dict[AttributeType, Callable[[Any], str]] = {
    AttributeType.S: str,
    AttributeType.N: _encode_number,
    AttributeType.B: _encode_binary,
}


def encode_value(value: Any) -> dict[str, Any]:
    av = to_attribute_value(value)
    if av.type.is_set:
        encode = _ENCODERS[av.type.element_type]
        return {av.type.value: [encode(member) for member in av.value]}
    return {av.type.value: _ENCODERS[av.type](av.value)}


def _decode_string(raw: Any, kind: AttributeType) -> str:
    if not isinstance(raw, str):
        raise DecodeError(f"{kind} value must be a string")
    return raw


def _decode_number(raw: Any, kind: AttributeType) -> Number:
    if not isinstance(raw, str):
        raise DecodeError(f"{kind} value must be a numeric string")
    if _INTEGER_RE.fullmatch(raw):
        try:
            return int(raw)
        except ValueError as err:
            raise DecodeError(f"{kind} value is out of range") from err
    if not _NUMBER_RE.fullmatch(raw):
        raise DecodeError(f"{kind} value is not a number: {raw!r}")
    return Decimal(raw)


def _decode_binary(raw: Any, kind: AttributeType) -> bytes:
    if not isinstance(raw, str):
        raise DecodeError(f"{kind} value must be a base64 string")
    try:
        return base64.b64decode(raw, validate=True)
    except (binascii.Error, ValueError) as err:
        raise DecodeError(f"{kind} value is not valid base64") from err


_DECODERS: dict[AttributeType, Callable[[Any, AttributeType], Any]] = {
    AttributeType.S: _decode_string,
    AttributeType.N: _decode_number,
    AttributeType.B: _decode_binary,
}


def decode_value(wire: Any) -> AttributeValue:
    if not isinstance(wire, Mapping) or len(wire) != 1:
        raise DecodeError("attribute value must be a single-key map")

    ((tag, raw),) = wire.items()
    try:
        kind = AttributeType(tag)
    except ValueError as err:
        raise DecodeError(f"unsupported attribute value type: {tag!r}") from err

    decode = _DECODERS[kind.element_type]
    if kind.is_set:
        if not isinstance(raw, list):
            raise DecodeError(f"{kind} value must be a list")
        value: Any = [decode(member, kind) for member in raw]
    else:
        value = decode(raw, kind)

    try:
        return AttributeValue(kind, value)
    except EncodeError as err:
        raise DecodeError(str(err)) from err


def attribute_pairs(item: Mapping[str, Any] | Sequence[tuple[str, Any]]) -> list[tuple[str, Any]]:
    if isinstance(item, Mapping):
        pairs = list(item.items())
    elif isinstance(item, Sequence) and not isinstance(item, (str, bytes, bytearray)):
        pairs = []
        for entry in item:
            if not isinstance(entry, tuple) or len(entry) != 2:
                raise EncodeError("item entries must be (name, value) pairs")
            pairs.append(entry)
    else:
        raise EncodeError("item must be a mapping or a sequence of (name, value) pairs")

    seen: set[str] = set()
    for name, _ in pairs:
        if not isinstance(name, str) or not name:
            raise EncodeError("attribute names must be non-empty strings")
        if name in seen:
            raise EncodeError(f"duplicate attribute name: {name}")
        seen.add(name)
    return pairs


def encode_item(item: Mapping[str, Any] | Sequence[tuple[str, Any]]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for name, value in attribute_pairs(item):
        try:
            out[name] = encode_value(value)
        except EncodeError as err:
            raise EncodeError(f"{name}: {err}") from err
    return out


def decode_item(obj: Any) -> dict[str, AttributeValue]:
    if not isinstance(obj, Mapping):
        raise DecodeError("item must be a map")

    out: dict[str, AttributeValue] = {}
    for name, wire in obj.items():
        try:
            out[name] = decode_value(wire)
        except DecodeError as err:
            raise DecodeError(f"{name}: {err}") from err
    return out


def unwrap_item(item: Mapping[str, AttributeValue]) -> list[tuple[str, Any]]:
    return [(name, av.to_native()) for name, av in item.items()]


def _encode_key_element(value: Any, *, role: str) -> dict[str, Any]:
    av = to_attribute_value(value)
    if av.type.is_set:
        raise EncodeError(f"{role} key must be a scalar, got {av.type}")
    return encode_value(av)


def infer_key(key: Any) -> dict[str, Any]:
    if isinstance(key, tuple):
        if len(key) != 2:
            raise EncodeError("key must be a scalar or a (hash, range) pair")
        hash_key, range_key = key
        return {
            "HashKeyElement": _encode_key_element(hash_key, role="hash"),
            "RangeKeyElement": _encode_key_element(range_key, role="range"),
        }
    return {"HashKeyElement": _encode_key_element(key, role="hash")}
