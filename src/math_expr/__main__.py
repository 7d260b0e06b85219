"""Entry point for ``python -m math_expr``."""

from math_expr.cli import app

if __name__ == "__main__":
    app(prog_name="math-expr")
