from __future__ import annotations

import importlib
import os

from runcount import config


def test_import_leaves_environment_alone(monkeypatch) -> None:
    for var in ("OMP_NUM_THREADS", "OPENBLAS_NUM_THREADS", "PYTHONHASHSEED"):
        monkeypatch.delenv(var, raising=False)
    reloaded = importlib.reload(config)
    assert "OMP_NUM_THREADS" not in os.environ
    assert "OPENBLAS_NUM_THREADS" not in os.environ
    assert "PYTHONHASHSEED" not in os.environ
    assert reloaded.UNFOLD_FACTOR == 5


def test_version_parsing() -> None:
    assert config._version_tuple("2.1.3") == (2, 1)
    assert config._version_tuple("1.26rc1") == (1, 26)
    assert config._version_tuple("1") == (1,)
