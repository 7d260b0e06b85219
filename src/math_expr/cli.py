"""
math-expr CLI.

Commands:
- eval: Evaluate an expression and print the result
- tokens: Show the tokens of an expression
- functions: List built-in functions and constants
"""

from __future__ import annotations

import platform
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table
from rich.text import Text

from math_expr import __version__
from math_expr.config import Settings, load_settings
from math_expr.core.errors import MathExprError
from math_expr.core.evaluator import evaluate_expression
from math_expr.core.registry import iter_constants, iter_functions
from math_expr.core.tokenizer import TokenKind, token_kind_name, tokenize
from math_expr.logging import setup_logging

app = typer.Typer(
    help="Evaluate arithmetic expressions with built-in functions and constants.",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"math-expr {__version__}")
        typer.echo(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """math-expr command line."""


def _load(config: Path | None, **overrides: object) -> Settings:
    """Load settings and apply command-line overrides; exit 1 on bad config."""
    try:
        settings = load_settings(config)
        updates = {k: v for k, v in overrides.items() if v is not None}
        if updates:
            settings = Settings(**{**settings.model_dump(), **updates})
    except (ValidationError, ValueError, OSError) as e:
        typer.echo(f"Error: invalid configuration: {e}", err=True)
        raise typer.Exit(code=1)
    setup_logging(settings.log_level)
    return settings


@app.command("eval")
def eval_command(
    expression: str = typer.Argument(..., help="Expression to evaluate, e.g. '2 + 3 * 4'"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Path to math_expr.toml"),
    strict: bool | None = typer.Option(
        None, "--strict/--lenient", help="Fail on unrecognized characters"
    ),
    precision: int | None = typer.Option(
        None, "--precision", "-p", help="Significant digits in the printed result"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Evaluate an expression and print the result."""
    settings = _load(
        config,
        strict_lexing=strict,
        precision=precision,
        log_level="DEBUG" if verbose else None,
    )

    try:
        result = evaluate_expression(expression, settings=settings)
    except MathExprError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(settings.format_result(result))


@app.command("tokens")
def tokens_command(
    expression: str = typer.Argument(..., help="Expression to tokenize"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Path to math_expr.toml"),
    strict: bool | None = typer.Option(
        None, "--strict/--lenient", help="Fail on unrecognized characters"
    ),
) -> None:
    """Show the tokens of an expression."""
    settings = _load(config, strict_lexing=strict)

    try:
        tokens = tokenize(expression, strict=settings.strict_lexing)
    except MathExprError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    table = Table(title=Text(f"Tokens: {expression}"))
    table.add_column("Kind", style="cyan")
    table.add_column("Text")
    table.add_column("Value", justify="right")

    for tok in tokens:
        if tok.kind == TokenKind.SPACE:
            table.add_row(token_kind_name(tok.kind), Text("[space]"), "")
        elif tok.kind == TokenKind.NUMBER:
            table.add_row(token_kind_name(tok.kind), tok.text, f"{tok.value:g}")
        else:
            table.add_row(token_kind_name(tok.kind), Text(tok.text), "")

    console.print(table)
    for diag in tokens.diagnostics:
        console.print(f"skipped {diag.char!r} at position {diag.pos}", style="yellow", markup=False)


@app.command("functions")
def functions_command() -> None:
    """List built-in functions and constants."""
    table = Table(title="Functions")
    table.add_column("Name", style="cyan")
    table.add_column("Arity", justify="right")
    table.add_column("Description")
    for entry in iter_functions():
        table.add_row(entry.name, str(entry.arity), entry.summary)
    console.print(table)

    constants = Table(title="Constants")
    constants.add_column("Name", style="cyan")
    constants.add_column("Value", justify="right")
    for const in iter_constants():
        constants.add_row(const.name, repr(const.value))
    console.print(constants)
