from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from .codec import decode_item, unwrap_item
from .errors import DecodeError
from .types import Operation


def parse_body(raw: bytes | str) -> dict[str, Any]:
    try:
        body = json.loads(raw)
    except (UnicodeDecodeError, ValueError) as err:
        raise DecodeError("response body is not valid JSON") from err
    if not isinstance(body, dict):
        raise DecodeError("response body must be a JSON object")
    return body


def decode_response(operation: Operation | str, body: Mapping[str, Any]) -> list[tuple[str, Any]]:
    op = Operation(operation)
    if not isinstance(body, Mapping):
        raise DecodeError("response body must be a map")

    container = body.get(op.container)
    if container is None:
        return []
    if not isinstance(container, Mapping):
        raise DecodeError(f"{op}: {op.container} must be a map")
    return unwrap_item(decode_item(container))
