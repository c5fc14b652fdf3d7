from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from .codec import encode_item, encode_value, infer_key
from .errors import EncodeError
from .types import (
    AttributeUpdate,
    DeleteOptions,
    ExpectedCondition,
    ExpectedSpec,
    GetOptions,
    PutOptions,
    ReturnValues,
    UpdateAction,
    UpdateOptions,
)

type UpdateSpec = AttributeUpdate | tuple[Any, ...]


def _require_table_name(table_name: Any) -> str:
    if not isinstance(table_name, str) or not table_name:
        raise EncodeError("table_name must be a non-empty string")
    return table_name


def _expected_condition(entry: Any) -> ExpectedCondition:
    if isinstance(entry, ExpectedCondition):
        return entry
    if isinstance(entry, tuple) and len(entry) == 2 and isinstance(entry[0], str):
        name, value = entry
        if value is False:
            return ExpectedCondition.not_exists(name)
        return ExpectedCondition.equals(name, value)
    raise EncodeError(f"unsupported expected condition: {entry!r}")


def _expected_conditions(spec: ExpectedSpec) -> list[ExpectedCondition]:
    if isinstance(spec, Mapping):
        return [_expected_condition((name, value)) for name, value in spec.items()]
    if isinstance(spec, ExpectedCondition):
        return [spec]
    if isinstance(spec, tuple) and len(spec) == 2 and isinstance(spec[0], str):
        return [_expected_condition(spec)]
    if isinstance(spec, Sequence) and not isinstance(spec, (str, bytes, bytearray)):
        return [_expected_condition(entry) for entry in spec]
    raise EncodeError(f"unsupported expected spec: {spec!r}")


def build_expected(spec: ExpectedSpec) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for cond in _expected_conditions(spec):
        if not isinstance(cond.name, str) or not cond.name:
            raise EncodeError("expected attribute names must be non-empty strings")
        if cond.name in out:
            raise EncodeError(f"duplicate expected attribute: {cond.name}")

        entry: dict[str, Any] = {}
        if cond.exists is False:
            if cond.value is not None:
                raise EncodeError(f"expected {cond.name}: a must-not-exist check takes no value")
            entry["Exists"] = False
        else:
            if cond.value is None:
                raise EncodeError(f"expected {cond.name}: a value is required")
            entry["Value"] = encode_value(cond.value)
            if cond.exists is True:
                entry["Exists"] = True
        out[cond.name] = entry
    return out


def _return_values(option: ReturnValues | str) -> str:
    try:
        return ReturnValues(option).value
    except ValueError as err:
        raise EncodeError(f"unsupported return_values: {option!r}") from err


def _apply_conditional(req: dict[str, Any], options: PutOptions | DeleteOptions | UpdateOptions) -> None:
    if options.expected is not None:
        req["Expected"] = build_expected(options.expected)
    if options.return_values is not None:
        req["ReturnValues"] = _return_values(options.return_values)


def _update_action(action: Any) -> UpdateAction:
    try:
        return UpdateAction(action)
    except ValueError as err:
        raise EncodeError(f"unsupported update action: {action!r}") from err


def _attribute_update(spec: UpdateSpec) -> AttributeUpdate:
    if isinstance(spec, AttributeUpdate):
        return spec
    if isinstance(spec, tuple):
        if len(spec) == 2:
            name, second = spec
            if isinstance(second, UpdateAction):
                return AttributeUpdate(name=name, action=second)
            return AttributeUpdate(name=name, value=second)
        if len(spec) == 3:
            name, value, action = spec
            return AttributeUpdate(
                name=name,
                value=value,
                action=None if action is None else _update_action(action),
            )
    raise EncodeError(f"unsupported attribute update: {spec!r}")


def build_attribute_updates(updates: Sequence[UpdateSpec]) -> dict[str, Any]:
    if isinstance(updates, (str, bytes, bytearray)) or not isinstance(updates, Sequence):
        raise EncodeError("updates must be a sequence")

    out: dict[str, Any] = {}
    for spec in updates:
        upd = _attribute_update(spec)
        if not isinstance(upd.name, str) or not upd.name:
            raise EncodeError("update attribute names must be non-empty strings")
        if upd.name in out:
            raise EncodeError(f"duplicate update attribute: {upd.name}")

        action = None if upd.action is None else _update_action(upd.action)
        if upd.value is None and action is not UpdateAction.DELETE:
            raise EncodeError(f"update {upd.name}: {action or 'PUT'} requires a value")

        entry: dict[str, Any] = {}
        if upd.value is not None:
            try:
                entry["Value"] = encode_value(upd.value)
            except EncodeError as err:
                raise EncodeError(f"update {upd.name}: {err}") from err
        if action is not None:
            entry["Action"] = action.value
        out[upd.name] = entry
    return out


def build_get_item(table_name: str, key: Any, options: GetOptions | None = None) -> dict[str, Any]:
    options = options or GetOptions()
    req: dict[str, Any] = {"TableName": _require_table_name(table_name), "Key": infer_key(key)}
    if options.attributes_to_get is not None:
        raw = options.attributes_to_get
        if isinstance(raw, (str, bytes)) or not isinstance(raw, Iterable):
            raise EncodeError("attributes_to_get must be a sequence of attribute names")
        names = list(raw)
        if not all(isinstance(n, str) for n in names):
            raise EncodeError("attributes_to_get must be a sequence of attribute names")
        req["AttributesToGet"] = names
    if options.consistent_read is not None:
        req["ConsistentRead"] = bool(options.consistent_read)
    return req


def build_put_item(
    table_name: str,
    item: Mapping[str, Any] | Sequence[tuple[str, Any]],
    options: PutOptions | None = None,
) -> dict[str, Any]:
    req: dict[str, Any] = {"TableName": _require_table_name(table_name), "Item": encode_item(item)}
    _apply_conditional(req, options or PutOptions())
    return req


def build_delete_item(table_name: str, key: Any, options: DeleteOptions | None = None) -> dict[str, Any]:
    req: dict[str, Any] = {"TableName": _require_table_name(table_name), "Key": infer_key(key)}
    _apply_conditional(req, options or DeleteOptions())
    return req


def build_update_item(
    table_name: str,
    key: Any,
    updates: Sequence[UpdateSpec],
    options: UpdateOptions | None = None,
) -> dict[str, Any]:
    req: dict[str, Any] = {
        "TableName": _require_table_name(table_name),
        "Key": infer_key(key),
        "AttributeUpdates": build_attribute_updates(updates),
    }
    _apply_conditional(req, options or UpdateOptions())
    return req
