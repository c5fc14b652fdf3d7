from __future__ import annotations

import json
from collections.abc import Callable

from .mocks import ANY, FakeTransport
from .transport import TARGET_PREFIX

ERROR_TYPE_PREFIX = f"com.amazonaws.dynamodb.v{TARGET_PREFIX.rsplit('_', 1)[-1]}"


def no_sleep(_: float) -> None:
    return None


def fixed_random(value: float) -> Callable[[], float]:
    if not 0.0 <= value < 1.0:
        raise ValueError("value must be in [0, 1)")

    def rand() -> float:
        return value

    return rand


def error_body(name: str, message: str = "") -> bytes:
    if not name:
        raise ValueError("name must be non-empty")
    return json.dumps({"__type": f"{ERROR_TYPE_PREFIX}#{name}", "message": message}).encode("utf-8")


__all__ = [
    "ANY",
    "ERROR_TYPE_PREFIX",
    "FakeTransport",
    "error_body",
    "fixed_random",
    "no_sleep",
]
