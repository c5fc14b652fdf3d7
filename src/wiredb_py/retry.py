from __future__ import annotations

import logging
import random
import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, cast

from .config import RetryConfig
from .errors import DecodeError, RetryExhaustedError, ServiceError, ThrottledError, TransportError
from .response import parse_body
from .service_errors import map_service_error
from .transport import HttpResponse, Transport
from .types import Operation

logger = logging.getLogger(__name__)


class AttemptState(StrEnum):
    ATTEMPTING = "attempting"
    SUCCESS = "success"
    RETRYING = "retrying"
    FAILED = "failed"


@dataclass(frozen=True)
class AttemptOutcome:
    state: AttemptState
    body: dict[str, Any] | None = None
    error: Exception | None = None


def classify_response(response: HttpResponse, config: RetryConfig) -> AttemptOutcome:
    if response.status == 200:
        try:
            body = parse_body(response.body)
        except DecodeError as err:
            return AttemptOutcome(AttemptState.FAILED, error=err)
        return AttemptOutcome(AttemptState.SUCCESS, body=body)

    err = map_service_error(
        status=response.status,
        raw_body=response.body,
        retryable=config.retryable_exceptions,
    )
    if response.status in config.retryable_statuses or isinstance(err, ThrottledError):
        return AttemptOutcome(AttemptState.RETRYING, error=err)
    return AttemptOutcome(AttemptState.FAILED, error=err)


def _error_code(err: Exception | None) -> str:
    if isinstance(err, ServiceError):
        return err.code
    return type(err).__name__


class RetryExecutor:
    def __init__(
        self,
        transport: Transport,
        config: RetryConfig | None = None,
        *,
        sleep: Callable[[float], None] = time.sleep,
        rand: Callable[[], float] = random.random,
    ) -> None:
        self._transport = transport
        self._config = config or RetryConfig()
        self._sleep = sleep
        self._rand = rand

    @property
    def config(self) -> RetryConfig:
        return self._config

    def delay_seconds(self, attempt: int) -> float:
        delay = self._config.backoff_seconds(attempt)
        if self._config.jitter:
            delay = min(self._config.max_delay_seconds, delay * (0.5 + self._rand()))
        return delay

    def attempt(self, operation: Operation, body: bytes) -> AttemptOutcome:
        try:
            response = self._transport.send(operation.value, body)
        except TransportError as err:
            return AttemptOutcome(AttemptState.RETRYING, error=err)
        return classify_response(response, self._config)

    def execute(self, operation: Operation | str, body: bytes) -> dict[str, Any]:
        op = Operation(operation)
        max_attempts = self._config.max_attempts
        last_error: Exception | None = None

        for attempt in range(1, max_attempts + 1):
            logger.debug("%s attempt %d/%d", op, attempt, max_attempts)
            outcome = self.attempt(op, body)

            if outcome.state is AttemptState.SUCCESS:
                return cast(dict[str, Any], outcome.body)
            if outcome.state is AttemptState.FAILED:
                raise cast(Exception, outcome.error)

            last_error = outcome.error
            if attempt < max_attempts:
                delay = self.delay_seconds(attempt)
                logger.warning(
                    "%s attempt %d/%d failed with %s; retrying in %.3fs",
                    op,
                    attempt,
                    max_attempts,
                    _error_code(last_error),
                    delay,
                )
                if delay > 0:
                    self._sleep(delay)

        raise RetryExhaustedError(
            operation=op.value,
            attempts=max_attempts,
            last_error=cast(Exception, last_error),
        ) from last_error
