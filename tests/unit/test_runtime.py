from __future__ import annotations

import pytest

from wiredb_py import Client, ClientConfig, RetryConfig, TransportError
from wiredb_py.runtime import CallMetric, instrument_transport
from wiredb_py.testkit import FakeTransport, error_body, no_sleep


def _clock(*ticks: float):
    it = iter(ticks)
    return lambda: next(it)


def test_instrument_transport_records_successful_calls() -> None:
    metrics: list[CallMetric] = []

    transport = FakeTransport()
    transport.expect("GetItem", response={})
    wrapped = instrument_transport(transport, on_call=metrics.append, now=_clock(1.0, 1.25))

    resp = wrapped.send("GetItem", b"{}")

    assert resp.status == 200
    assert metrics == [CallMetric(operation="GetItem", seconds=0.25, status=200, ok=True)]


def test_instrument_transport_records_error_statuses_and_exceptions() -> None:
    metrics: list[CallMetric] = []

    transport = FakeTransport()
    transport.expect("PutItem", status=400, response=error_body("ValidationException"))
    transport.expect("PutItem", error=TransportError("boom"))
    wrapped = instrument_transport(transport, on_call=metrics.append, now=_clock(0.0, 0.5, 1.0, 3.0))

    assert wrapped.send("PutItem", b"{}").status == 400
    with pytest.raises(TransportError, match="boom"):
        wrapped.send("PutItem", b"{}")

    assert metrics == [
        CallMetric(operation="PutItem", seconds=0.5, status=400, ok=False),
        CallMetric(operation="PutItem", seconds=2.0, status=None, ok=False),
    ]


def test_instrumented_transport_sees_every_retry_attempt() -> None:
    metrics: list[CallMetric] = []

    transport = FakeTransport()
    transport.expect("GetItem", status=500)
    transport.expect("GetItem", response={"Item": {"a": {"S": "x"}}})

    client = Client(
        transport=instrument_transport(transport, on_call=metrics.append),
        config=ClientConfig(retry=RetryConfig(jitter=False)),
        sleep=no_sleep,
    )
    assert client.get_item("t", "k") == [("a", "x")]
    assert [m.status for m in metrics] == [500, 200]
