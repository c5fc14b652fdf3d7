from __future__ import annotations

import json
import re
from importlib.resources import files
from typing import TYPE_CHECKING, Any

from .codec import (
    classify,
    decode_item,
    decode_value,
    encode_item,
    encode_value,
    infer_key,
    to_attribute_value,
    unwrap_item,
)
from .config import ClientConfig, RetryConfig
from .errors import (
    ConditionFailedError,
    DecodeError,
    EncodeError,
    NotFoundError,
    RetryExhaustedError,
    ServerError,
    ServiceError,
    ThrottledError,
    TransportError,
    ValidationError,
    WiredbPyError,
)
from .request import (
    build_delete_item,
    build_get_item,
    build_put_item,
    build_update_item,
)
from .response import decode_response, parse_body
from .service_errors import DEFAULT_RETRYABLE_EXCEPTIONS
from .types import (
    AttributeType,
    AttributeUpdate,
    AttributeValue,
    DeleteOptions,
    ExpectedCondition,
    GetOptions,
    Operation,
    PutOptions,
    ReturnValues,
    UpdateAction,
    UpdateOptions,
)

if TYPE_CHECKING:
    from .client import Client
    from .retry import AttemptState, RetryExecutor
    from .runtime import CallMetric, instrument_transport
    from .transport import BotocoreTransport, HttpResponse, Transport


def _read_repo_version() -> str:
    try:
        data = json.loads(files(__package__).joinpath("version.json").read_text(encoding="utf-8"))
    except Exception:
        return "0.0.0"

    version = data.get("version")
    return version if isinstance(version, str) and version else "0.0.0"


def _normalize_repo_version(repo_version: str) -> str:
    match = re.match(r"^(\d+\.\d+\.\d+)-rc\.?([0-9]+)$", repo_version)
    if match:
        return f"{match.group(1)}rc{match.group(2)}"
    return repo_version


__repo_version__ = _read_repo_version()
__version__ = _normalize_repo_version(__repo_version__)


def __getattr__(name: str) -> Any:
    if name == "Client":
        from .client import Client

        return Client
    if name in {"AttemptState", "RetryExecutor"}:
        from . import retry

        return getattr(retry, name)
    if name in {"CallMetric", "instrument_transport"}:
        from . import runtime

        return getattr(runtime, name)
    if name in {"BotocoreTransport", "HttpResponse", "Transport"}:
        from . import transport

        return getattr(transport, name)
    raise AttributeError(name)


__all__ = [
    "AttemptState",
    "AttributeType",
    "AttributeUpdate",
    "AttributeValue",
    "BotocoreTransport",
    "CallMetric",
    "classify",
    "Client",
    "ClientConfig",
    "ConditionFailedError",
    "DecodeError",
    "decode_item",
    "decode_response",
    "decode_value",
    "DEFAULT_RETRYABLE_EXCEPTIONS",
    "DeleteOptions",
    "EncodeError",
    "encode_item",
    "encode_value",
    "ExpectedCondition",
    "GetOptions",
    "HttpResponse",
    "infer_key",
    "instrument_transport",
    "NotFoundError",
    "Operation",
    "parse_body",
    "PutOptions",
    "RetryConfig",
    "RetryExecutor",
    "RetryExhaustedError",
    "ReturnValues",
    "ServerError",
    "ServiceError",
    "ThrottledError",
    "to_attribute_value",
    "Transport",
    "TransportError",
    "unwrap_item",
    "UpdateAction",
    "UpdateOptions",
    "ValidationError",
    "WiredbPyError",
    "build_delete_item",
    "build_get_item",
    "build_put_item",
    "build_update_item",
    "__repo_version__",
    "__version__",
]
