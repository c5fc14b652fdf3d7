from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

from .transport import HttpResponse, Transport


@dataclass(frozen=True)
class CallMetric:
    operation: str
    seconds: float
    status: int | None
    ok: bool


class _InstrumentedTransport:
    def __init__(
        self,
        transport: Transport,
        on_call: Callable[[CallMetric], None],
        now: Callable[[], float],
    ) -> None:
        self._transport = transport
        self._on_call = on_call
        self._now = now

    def send(self, operation: str, body: bytes) -> HttpResponse:
        start = self._now()
        try:
            resp = self._transport.send(operation, body)
        except Exception:
            self._on_call(
                CallMetric(
                    operation=operation,
                    seconds=self._now() - start,
                    status=None,
                    ok=False,
                )
            )
            raise

        self._on_call(
            CallMetric(
                operation=operation,
                seconds=self._now() - start,
                status=resp.status,
                ok=resp.status == 200,
            )
        )
        return resp


def instrument_transport(
    transport: Transport,
    *,
    on_call: Callable[[CallMetric], None],
    now: Callable[[], float] = time.monotonic,
) -> Transport:
    return _InstrumentedTransport(transport, on_call, now)
