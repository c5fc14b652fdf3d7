from __future__ import annotations

import json
from typing import Any

from .errors import (
    ConditionFailedError,
    NotFoundError,
    ServerError,
    ServiceError,
    ThrottledError,
    ValidationError,
)

DEFAULT_RETRYABLE_EXCEPTIONS: frozenset[str] = frozenset(
    {
        "ProvisionedThroughputExceededException",
        "ThrottlingException",
        "RequestLimitExceeded",
    }
)

_TERMINAL_ERRORS: dict[str, type[ServiceError]] = {
    "ConditionalCheckFailedException": ConditionFailedError,
    "ValidationException": ValidationError,
    "ResourceNotFoundException": NotFoundError,
}


def exception_name(type_field: Any) -> str | None:
    if not isinstance(type_field, str) or not type_field:
        return None
    name = type_field.rsplit("#", 1)[-1].strip()
    return name or None


def parse_error_body(raw: bytes | str) -> tuple[str | None, str]:
    try:
        body = json.loads(raw)
    except ValueError:
        return None, ""
    if not isinstance(body, dict):
        return None, ""

    message = body.get("message") or body.get("Message") or ""
    return exception_name(body.get("__type")), str(message)


def map_service_error(*, status: int, raw_body: bytes | str, retryable: frozenset[str]) -> ServiceError:
    name, message = parse_error_body(raw_body)
    code = name or str(status)

    if status >= 500:
        return ServerError(code=code, message=message, status=status)
    if status == 400 and name is not None and name in retryable:
        return ThrottledError(code=code, message=message, status=status)

    err_type = _TERMINAL_ERRORS.get(code, ServiceError)
    return err_type(code=code, message=message, status=status)
