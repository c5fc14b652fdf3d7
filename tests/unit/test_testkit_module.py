from __future__ import annotations

import json

import pytest

from wiredb_py.testkit import ERROR_TYPE_PREFIX, error_body, fixed_random, no_sleep


def test_no_sleep_is_noop() -> None:
    no_sleep(0.0)
    no_sleep(1.0)


def test_fixed_random_returns_the_same_value() -> None:
    rand = fixed_random(0.25)
    assert rand() == 0.25
    assert rand() == 0.25


@pytest.mark.parametrize("value", [-0.1, 1.0, 2.0])
def test_fixed_random_rejects_out_of_range_values(value: float) -> None:
    with pytest.raises(ValueError, match=r"\[0, 1\)"):
        fixed_random(value)


def test_error_body_uses_service_type_prefix() -> None:
    body = json.loads(error_body("ThrottlingException", "slow down"))
    assert ERROR_TYPE_PREFIX == "com.amazonaws.dynamodb.v20111205"
    assert body == {
        "__type": "com.amazonaws.dynamodb.v20111205#ThrottlingException",
        "message": "slow down",
    }


def test_error_body_rejects_empty_name() -> None:
    with pytest.raises(ValueError, match="non-empty"):
        error_body("")
