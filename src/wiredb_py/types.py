from __future__ import annotations

import math
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum
from typing import Any

from .errors import EncodeError

type Number = int | Decimal
type Scalar = str | Number | bytes


class AttributeType(StrEnum):
    S = "S"
    N = "N"
    B = "B"
    SS = "SS"
    NS = "NS"
    BS = "BS"

    @property
    def is_set(self) -> bool:
        return len(self.value) == 2

    @property
    def element_type(self) -> AttributeType:
        return AttributeType(self.value[0])

    @property
    def set_type(self) -> AttributeType:
        if self.is_set:
            return self
        return AttributeType(self.value + "S")


class _CaseInsensitiveEnum(StrEnum):
    @classmethod
    def _missing_(cls, value: object) -> Any:
        if isinstance(value, str):
            upper = value.strip().upper()
            for member in cls:
                if member.value == upper:
                    return member
        return None


class UpdateAction(_CaseInsensitiveEnum):
    PUT = "PUT"
    ADD = "ADD"
    DELETE = "DELETE"


class ReturnValues(_CaseInsensitiveEnum):
    NONE = "NONE"
    ALL_OLD = "ALL_OLD"
    ALL_NEW = "ALL_NEW"
    UPDATED_OLD = "UPDATED_OLD"
    UPDATED_NEW = "UPDATED_NEW"


class Operation(StrEnum):
    GET_ITEM = "GetItem"
    PUT_ITEM = "PutItem"
    DELETE_ITEM = "DeleteItem"
    UPDATE_ITEM = "UpdateItem"

    @property
    def container(self) -> str:
        if self is Operation.GET_ITEM:
            return "Item"
        return "Attributes"


def _normalize_string(value: Any) -> str:
    if isinstance(value, str):
        try:
            value.encode("utf-8")
        except UnicodeEncodeError as err:
            raise EncodeError("S value is not encodable as UTF-8") from err
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        try:
            return bytes(value).decode("utf-8")
        except UnicodeDecodeError as err:
            raise EncodeError("S value is not valid UTF-8") from err
    raise EncodeError(f"S value must be text, got {type(value).__name__}")


def _normalize_number(value: Any) -> Number:
    if isinstance(value, bool):
        raise EncodeError("N value must be numeric, got bool")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise EncodeError(f"N value must be finite, got {value!r}")
        return Decimal(repr(value))
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise EncodeError(f"N value must be finite, got {value!r}")
        return value
    raise EncodeError(f"N value must be numeric, got {type(value).__name__}")


def _normalize_binary(value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise EncodeError(f"B value must be bytes, got {type(value).__name__}")


_NORMALIZERS = {
    AttributeType.S: _normalize_string,
    AttributeType.N: _normalize_number,
    AttributeType.B: _normalize_binary,
}


def _normalize_members(kind: AttributeType, value: Any) -> tuple[Any, ...]:
    if isinstance(value, (str, bytes, bytearray, memoryview)) or not isinstance(value, Iterable):
        raise EncodeError(f"{kind} value must be a collection, got {type(value).__name__}")

    normalize = _NORMALIZERS[kind.element_type]
    members = [normalize(v) for v in value]

    seen: set[Any] = set()
    for member in members:
        if member in seen:
            raise EncodeError(f"{kind} contains duplicate member: {member!r}")
        seen.add(member)

    if isinstance(value, (set, frozenset)):
        members.sort()
    return tuple(members)


@dataclass(frozen=True)
class AttributeValue:
    type: AttributeType
    value: Any

    def __post_init__(self) -> None:
        try:
            kind = AttributeType(self.type)
        except ValueError as err:
            raise EncodeError(f"unsupported attribute type: {self.type!r}") from err

        if kind.is_set:
            normalized = _normalize_members(kind, self.value)
        else:
            normalized = _NORMALIZERS[kind](self.value)

        object.__setattr__(self, "type", kind)
        object.__setattr__(self, "value", normalized)

    @staticmethod
    def string(value: str | bytes) -> AttributeValue:
        return AttributeValue(AttributeType.S, value)

    @staticmethod
    def number(value: int | float | Decimal) -> AttributeValue:
        return AttributeValue(AttributeType.N, value)

    @staticmethod
    def binary(value: bytes) -> AttributeValue:
        return AttributeValue(AttributeType.B, value)

    @staticmethod
    def string_set(values: Iterable[str]) -> AttributeValue:
        return AttributeValue(AttributeType.SS, values)

    @staticmethod
    def number_set(values: Iterable[int | float | Decimal]) -> AttributeValue:
        return AttributeValue(AttributeType.NS, values)

    @staticmethod
    def binary_set(values: Iterable[bytes]) -> AttributeValue:
        return AttributeValue(AttributeType.BS, values)

    def to_native(self) -> Any:
        if self.type.is_set:
            return list(self.value)
        return self.value


@dataclass(frozen=True)
class AttributeUpdate:
    """One entry of an UpdateItem request.

    ``action=None`` means the default PUT semantics and leaves ``Action`` out of
    the wire object. ``value=None`` is only valid for a DELETE of the whole
    attribute.
    """

    name: str
    value: Any = None
    action: UpdateAction | None = None

    @staticmethod
    def put(name: str, value: Any) -> AttributeUpdate:
        return AttributeUpdate(name=name, value=value, action=UpdateAction.PUT)

    @staticmethod
    def add(name: str, value: Any) -> AttributeUpdate:
        return AttributeUpdate(name=name, value=value, action=UpdateAction.ADD)

    @staticmethod
    def delete(name: str, value: Any = None) -> AttributeUpdate:
        return AttributeUpdate(name=name, value=value, action=UpdateAction.DELETE)


@dataclass(frozen=True)
class ExpectedCondition:
    name: str
    value: Any = None
    exists: bool | None = None

    @staticmethod
    def equals(name: str, value: Any) -> ExpectedCondition:
        return ExpectedCondition(name=name, value=value)

    @staticmethod
    def not_exists(name: str) -> ExpectedCondition:
        return ExpectedCondition(name=name, exists=False)


type ExpectedSpec = (
    ExpectedCondition
    | tuple[str, Any]
    | Mapping[str, Any]
    | Sequence[ExpectedCondition | tuple[str, Any]]
)


@dataclass(frozen=True)
class GetOptions:
    """GetItem options. ``None`` fields are left out of the request body."""

    attributes_to_get: Sequence[str] | None = None
    consistent_read: bool | None = None


@dataclass(frozen=True)
class PutOptions:
    """PutItem options.

    ``expected`` becomes the ``Expected`` conditional check and ``return_values``
    the upper-cased ``ReturnValues`` enum. Either is omitted when ``None``.
    """

    expected: ExpectedSpec | None = None
    return_values: ReturnValues | str | None = None


@dataclass(frozen=True)
class DeleteOptions:
    expected: ExpectedSpec | None = None
    return_values: ReturnValues | str | None = None


@dataclass(frozen=True)
class UpdateOptions:
    expected: ExpectedSpec | None = None
    return_values: ReturnValues | str | None = None
