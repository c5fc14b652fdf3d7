from __future__ import annotations

import pytest

from wiredb_py import (
    DEFAULT_RETRYABLE_EXCEPTIONS,
    ConditionFailedError,
    NotFoundError,
    RetryExhaustedError,
    ServerError,
    ServiceError,
    ThrottledError,
    TransportError,
    ValidationError,
)
from wiredb_py.service_errors import exception_name, map_service_error, parse_error_body
from wiredb_py.testkit import error_body


def test_exception_name_takes_text_after_last_hash() -> None:
    assert (
        exception_name("com.amazonaws.dynamodb.v20111205#ProvisionedThroughputExceededException")
        == "ProvisionedThroughputExceededException"
    )
    assert exception_name("a#b#ValidationException") == "ValidationException"
    assert exception_name("ThrottlingException") == "ThrottlingException"
    assert exception_name("prefix#") is None
    assert exception_name("") is None
    assert exception_name(None) is None


def test_parse_error_body() -> None:
    assert parse_error_body(error_body("ValidationException", "bad key")) == ("ValidationException", "bad key")
    assert parse_error_body(b'{"__type":"x#Y","Message":"upper"}') == ("Y", "upper")
    assert parse_error_body(b"") == (None, "")
    assert parse_error_body(b"[]") == (None, "")


@pytest.mark.parametrize(
    ("name", "err_type"),
    [
        ("ConditionalCheckFailedException", ConditionFailedError),
        ("ValidationException", ValidationError),
        ("ResourceNotFoundException", NotFoundError),
        ("ProvisionedThroughputExceededException", ThrottledError),
        ("ThrottlingException", ThrottledError),
        ("SomethingNewException", ServiceError),
    ],
)
def test_map_service_error_for_400(name: str, err_type: type[ServiceError]) -> None:
    err = map_service_error(status=400, raw_body=error_body(name, "msg"), retryable=DEFAULT_RETRYABLE_EXCEPTIONS)
    assert type(err) is err_type
    assert err.code == name
    assert err.message == "msg"
    assert err.status == 400


def test_map_service_error_uses_injected_retryable_table() -> None:
    err = map_service_error(
        status=400,
        raw_body=error_body("ProvisionedThroughputExceededException"),
        retryable=frozenset(),
    )
    assert type(err) is ServiceError

    err = map_service_error(status=400, raw_body=error_body("CustomBusy"), retryable=frozenset({"CustomBusy"}))
    assert isinstance(err, ThrottledError)


def test_map_service_error_server_and_raw_status() -> None:
    err = map_service_error(status=500, raw_body=b"", retryable=DEFAULT_RETRYABLE_EXCEPTIONS)
    assert isinstance(err, ServerError)
    assert err.code == "500"

    err = map_service_error(status=403, raw_body=b"<html/>", retryable=DEFAULT_RETRYABLE_EXCEPTIONS)
    assert type(err) is ServiceError
    assert err.code == "403"

    err = map_service_error(status=413, raw_body=error_body("ThrottlingException"), retryable=DEFAULT_RETRYABLE_EXCEPTIONS)
    assert type(err) is ServiceError
    assert err.code == "ThrottlingException"


def test_error_string_forms() -> None:
    assert str(ServiceError(code="ConditionalCheckFailedException")) == "ConditionalCheckFailedException"
    assert str(ServiceError(code="X", message="y")) == "X: y"


def test_retry_exhausted_error_exposes_last_code() -> None:
    err = RetryExhaustedError(
        operation="GetItem",
        attempts=3,
        last_error=ThrottledError(code="ThrottlingException", status=400),
    )
    assert err.code == "ThrottlingException"
    assert err.attempts == 3

    err = RetryExhaustedError(operation="GetItem", attempts=1, last_error=TransportError("down"))
    assert err.code == "TransportError"
