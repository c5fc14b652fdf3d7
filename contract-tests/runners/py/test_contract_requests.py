from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from wiredb_py import (
    AttributeValue,
    DeleteOptions,
    GetOptions,
    PutOptions,
    UpdateAction,
    UpdateOptions,
    build_delete_item,
    build_get_item,
    build_put_item,
    build_update_item,
)
from wiredb_py.client import serialize_request


def _repo_root() -> Path:
    # contract-tests/runners/py/test_*.py -> repo root is 4 levels up
    return Path(__file__).resolve().parents[3]


def _golden(name: str) -> dict[str, Any]:
    path = _repo_root() / "contract-tests" / "golden" / "requests" / f"{name}.json"
    return json.loads(path.read_text(encoding="utf-8"))


CASES = {
    "get_item_hash_range": lambda: build_get_item(
        "comptable",
        ("Julie", 1307654345),
        GetOptions(attributes_to_get=["status", "friends"], consistent_read=True),
    ),
    "put_item_expected_all_old": lambda: build_put_item(
        "comp5",
        [("time", 300), ("feeling", "not surprised"), ("user", "Riley")],
        PutOptions(expected=("feeling", "surprised"), return_values="all_old"),
    ),
    "delete_item_expected_all_old": lambda: build_delete_item(
        "comp-table",
        (AttributeValue.string("Mingus"), AttributeValue.number(200)),
        DeleteOptions(expected=("status", "shopping"), return_values="all_old"),
    ),
    "update_item_actions": lambda: build_update_item(
        "comp5",
        ("Julie", 1307654350),
        [
            ("status", "online", "put"),
            ("number", 5, "add"),
            ("numberset", AttributeValue.number_set([3]), "add"),
            ("todelete", UpdateAction.DELETE),
            ("toremove", AttributeValue.string_set(["bye"]), "delete"),
            ("defaultput", "online"),
        ],
        UpdateOptions(expected=("status", "offline"), return_values="all_new"),
    ),
}


@pytest.mark.parametrize("name", sorted(CASES))
def test_request_matches_golden(name: str) -> None:
    req = CASES[name]()
    assert req == _golden(name)
    assert json.loads(serialize_request(req)) == _golden(name)
