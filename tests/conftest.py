"""Shared pytest fixtures for math-expr tests."""

import logging
from pathlib import Path

import pytest

from math_expr.config import ENV_VARS


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by setup_logging so tests stay independent."""
    yield
    package_logger = logging.getLogger("math_expr")
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run in an empty directory with no MATH_EXPR_* variables set."""
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def write_config(tmp_path: Path):
    """Return a helper that writes a math_expr.toml and returns its path."""

    def _write(body: str, name: str = "math_expr.toml") -> Path:
        path = tmp_path / name
        path.write_text(body)
        return path

    return _write
