"""
Settings for math-expr.

Values come from the [math_expr] table of math_expr.toml, then from
MATH_EXPR_* environment variables, which win.

Example math_expr.toml:

    [math_expr]
    max_depth = 200
    strict_lexing = true
    precision = 10
    log_level = "INFO"
"""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from math_expr.core.evaluator import DEFAULT_MAX_DEPTH

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "math_expr.toml"
CONFIG_TABLE = "math_expr"

# Environment variable -> settings field
ENV_VARS: dict[str, str] = {
    "MATH_EXPR_MAX_DEPTH": "max_depth",
    "MATH_EXPR_STRICT": "strict_lexing",
    "MATH_EXPR_PRECISION": "precision",
    "MATH_EXPR_LOG_LEVEL": "log_level",
}

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseModel):
    """Evaluator and CLI settings."""

    max_depth: int = Field(
        default=DEFAULT_MAX_DEPTH, ge=1, description="Maximum expression nesting depth"
    )
    strict_lexing: bool = Field(
        default=False, description="Raise LexError on unrecognized characters"
    )
    precision: int = Field(
        default=15, ge=1, le=17, description="Significant digits when printing results"
    )
    log_level: str = Field(default="WARNING", description="Level for the math_expr logger")

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    def format_result(self, value: float) -> str:
        """Render a result with the configured number of significant digits."""
        return f"{value:.{self.precision}g}"


def _read_toml(path: Path) -> dict[str, Any]:
    with open(path, "rb") as f:
        data = tomllib.load(f)
    table = data.get(CONFIG_TABLE, {})
    if not isinstance(table, dict):
        raise ValueError(f"[{CONFIG_TABLE}] in {path} must be a table")
    return table


def _env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for var, field in ENV_VARS.items():
        raw = environ.get(var)
        if raw is None or not raw.strip():
            continue
        overrides[field] = raw.strip()
    return overrides


def load_settings(
    path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """
    Load settings from a TOML file and the environment.

    Args:
        path: TOML file; defaults to math_expr.toml in the working directory.
            A missing file means defaults.
        environ: Environment mapping; defaults to os.environ.

    Returns:
        Validated Settings

    Raises:
        pydantic.ValidationError: If a value is out of range or mistyped
    """
    toml_path = path if path is not None else Path.cwd() / CONFIG_FILENAME
    values: dict[str, Any] = {}
    if toml_path.exists():
        values.update(_read_toml(toml_path))
        logger.debug("Loaded settings from %s", toml_path)
    elif path is not None:
        logger.warning("Config file %s not found, using defaults", path)

    values.update(_env_overrides(os.environ if environ is None else environ))
    return Settings(**values)
