import logging

import pytest

import spmat
from spmat import _runtime
from spmat._runtime import ENV_MATMUL_METHOD


@pytest.fixture(autouse=True)
def restore_method(monkeypatch):
    monkeypatch.delenv(ENV_MATMUL_METHOD, raising=False)
    monkeypatch.setattr(_runtime, "_warned_env", None)
    yield
    spmat.set_matmul_method("rowcol")


def test_default_is_rowcol():
    assert spmat.get_matmul_method() == "rowcol"


def test_set_and_get():
    spmat.set_matmul_method("dense")
    assert spmat.get_matmul_method() == "dense"


def test_set_invalid():
    with pytest.raises(ValueError):
        spmat.set_matmul_method("gpu")
    assert spmat.get_matmul_method() == "rowcol"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv(ENV_MATMUL_METHOD, " Dense ")
    assert spmat.get_matmul_method() == "dense"


def test_env_invalid_is_ignored(monkeypatch, caplog):
    monkeypatch.setenv(ENV_MATMUL_METHOD, "gpu")
    with caplog.at_level(logging.WARNING, logger="spmat._runtime"):
        assert spmat.get_matmul_method() == "rowcol"
    assert any(ENV_MATMUL_METHOD in rec.getMessage() for rec in caplog.records)


def test_env_invalid_warns_once(monkeypatch, caplog):
    monkeypatch.setenv(ENV_MATMUL_METHOD, "blocked")
    with caplog.at_level(logging.WARNING, logger="spmat._runtime"):
        for _ in range(3):
            assert spmat.get_matmul_method() == "rowcol"
    warnings = [rec for rec in caplog.records if ENV_MATMUL_METHOD in rec.getMessage()]
    assert len(warnings) == 1
