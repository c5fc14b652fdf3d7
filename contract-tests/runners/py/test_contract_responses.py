from __future__ import annotations

import base64
import json
from pathlib import Path
from typing import Any

import pytest

from wiredb_py import decode_response, parse_body


def _repo_root() -> Path:
    # contract-tests/runners/py/test_*.py -> repo root is 4 levels up
    return Path(__file__).resolve().parents[3]


def _golden_dir() -> Path:
    return _repo_root() / "contract-tests" / "golden" / "responses"


def _expected_native(value: Any) -> Any:
    if isinstance(value, dict) and set(value) == {"base64"}:
        return base64.b64decode(value["base64"])
    if isinstance(value, list):
        return [_expected_native(v) for v in value]
    return value


@pytest.mark.parametrize("path", sorted(_golden_dir().glob("*.json")), ids=lambda p: p.stem)
def test_response_decodes_to_golden_result(path: Path) -> None:
    case = json.loads(path.read_text(encoding="utf-8"))
    body = parse_body(json.dumps(case["body"]).encode("utf-8"))

    out = decode_response(case["operation"], body)

    assert out == [(name, _expected_native(value)) for name, value in case["result"]]
