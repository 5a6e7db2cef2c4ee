"""Top-level package for termbag: academic term name parsing."""

__author__ = """Matthew Leingang"""
__email__ = 'leingang@nyu.edu'

import typer

from termbag.frames import normalize_term_column
from termbag.term import (
    InvalidTermName,
    Season,
    TermName,
    TermNameResult,
    parse_term_name,
    to_canonical,
)

app = typer.Typer(help="Validate and normalize academic term names")

# Import submodules at the end to register their commands
from termbag import cli  # noqa: E402, F401

__all__ = [
    "InvalidTermName",
    "Season",
    "TermName",
    "TermNameResult",
    "app",
    "normalize_term_column",
    "parse_term_name",
    "to_canonical",
]

if __name__ == "__main__":
    app()
