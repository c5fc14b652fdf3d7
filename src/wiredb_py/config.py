from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from .service_errors import DEFAULT_RETRYABLE_EXCEPTIONS

DEFAULT_REGION = "us-east-1"


@dataclass(frozen=True)
class RetryConfig:
    max_attempts: int = 10
    initial_delay_seconds: float = 0.05
    max_delay_seconds: float = 5.0
    backoff_factor: float = 2.0
    jitter: bool = True
    retryable_exceptions: frozenset[str] = DEFAULT_RETRYABLE_EXCEPTIONS
    retryable_statuses: frozenset[int] = frozenset({500, 503})

    def __post_init__(self) -> None:
        if not isinstance(self.max_attempts, int) or self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.initial_delay_seconds < 0:
            raise ValueError("initial_delay_seconds must be >= 0")
        if self.max_delay_seconds < self.initial_delay_seconds:
            raise ValueError("max_delay_seconds must be >= initial_delay_seconds")
        if self.backoff_factor < 1:
            raise ValueError("backoff_factor must be >= 1")
        object.__setattr__(self, "retryable_exceptions", frozenset(self.retryable_exceptions))
        object.__setattr__(self, "retryable_statuses", frozenset(self.retryable_statuses))

    def backoff_seconds(self, attempt: int) -> float:
        seconds = self.initial_delay_seconds * (self.backoff_factor ** (attempt - 1))
        if seconds > self.max_delay_seconds:
            return self.max_delay_seconds
        return seconds


@dataclass(frozen=True)
class ClientConfig:
    region: str = DEFAULT_REGION
    endpoint_url: str | None = None
    connect_timeout: float = 1.0
    read_timeout: float = 3.0
    retry: RetryConfig = field(default_factory=RetryConfig)

    @staticmethod
    def from_env(environ: Mapping[str, str] = os.environ) -> ClientConfig:
        region = environ.get("AWS_REGION") or environ.get("AWS_DEFAULT_REGION") or DEFAULT_REGION
        retry = RetryConfig()
        if environ.get("WIREDB_MAX_ATTEMPTS"):
            retry = RetryConfig(max_attempts=_env_int(environ, "WIREDB_MAX_ATTEMPTS"))

        return ClientConfig(
            region=region,
            endpoint_url=environ.get("DYNAMODB_ENDPOINT") or None,
            connect_timeout=_env_float(environ, "WIREDB_CONNECT_TIMEOUT", 1.0),
            read_timeout=_env_float(environ, "WIREDB_READ_TIMEOUT", 3.0),
            retry=retry,
        )


def _env_int(environ: Mapping[str, str], name: str) -> int:
    raw = environ[name]
    try:
        return int(raw)
    except ValueError as err:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from err


def _env_float(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = environ.get(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as err:
        raise ValueError(f"{name} must be a number, got {raw!r}") from err
