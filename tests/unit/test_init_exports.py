from __future__ import annotations

import pytest

import wiredb_py as wiredb


def test_init_exposes_lazy_exports_via_getattr() -> None:
    assert wiredb._normalize_repo_version("1.2.3") == "1.2.3"
    assert wiredb._normalize_repo_version("1.2.3-rc.4") == "1.2.3rc4"

    assert callable(wiredb.Client)
    assert callable(wiredb.RetryExecutor)
    assert callable(wiredb.BotocoreTransport)
    assert callable(wiredb.instrument_transport)
    assert wiredb.AttemptState.SUCCESS == "success"
    assert wiredb.HttpResponse(200, b"{}").status == 200


def test_init_rejects_unknown_names() -> None:
    with pytest.raises(AttributeError):
        _ = wiredb.DoesNotExist  # type: ignore[attr-defined]


def test_all_names_resolve() -> None:
    for name in wiredb.__all__:
        assert getattr(wiredb, name) is not None
