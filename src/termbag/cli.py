import sys
from pathlib import Path
from typing import Annotated

import pandas as pd
import typer
from loguru import logger

from termbag import app as main_app
from termbag.frames import ERROR_MODES, normalize_term_column
from termbag.term import InvalidTermName, parse_term_name


def _set_verbosity(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


@main_app.command()
def normalize(
    terms: Annotated[
        list[str], typer.Argument(help="One or more term names, e.g. 'Winter 2024/25'")
    ],
    skip_invalid: Annotated[
        bool,
        typer.Option(help="Exit successfully even if some term names are invalid"),
    ] = False,
    verbose: Annotated[bool, typer.Option(help="Log debugging output")] = False,
):
    """Print the canonical form of each term name, one per line.

    Invalid term names are reported on stderr. Unless `skip_invalid` is set,
    the command exits with code 1 after processing all of them.
    """
    _set_verbosity(verbose)
    failures = 0
    for term in terms:
        result = parse_term_name(term)
        if result:
            typer.echo(result.value)
        else:
            failures += 1
            typer.echo(f"Invalid term name: {term!r}", err=True)
    if failures and not skip_invalid:
        raise typer.Exit(code=1)


@main_app.command()
def check(
    term: Annotated[str, typer.Argument(help="A term name to validate")],
    verbose: Annotated[
        bool, typer.Option(help="Print the canonical form and log debugging output")
    ] = False,
):
    """Exit with code 0 if `term` is a valid term name, 1 otherwise."""
    _set_verbosity(verbose)
    result = parse_term_name(term)
    if not result:
        if verbose:
            typer.echo(f"Invalid term name: {term!r}", err=True)
        raise typer.Exit(code=1)
    if verbose:
        typer.echo(result.value)


@main_app.command("csv")
def normalize_csv(
    input: Annotated[Path, typer.Argument(help="Path to a CSV file")],
    output: Annotated[
        Path | None,
        typer.Argument(help="Path to write the normalized CSV file to"),
    ] = None,
    column: Annotated[
        str, typer.Option(help="Name of the column holding term names")
    ] = "Term",
    errors: Annotated[
        str,
        typer.Option(help="How to treat invalid term names: raise, coerce or ignore"),
    ] = "raise",
    verbose: Annotated[bool, typer.Option(help="Log debugging output")] = False,
):
    """Normalize the term names in one column of a CSV file.

    If no `output` path is provided, the CSV is written to stdout.
    """
    _set_verbosity(verbose)
    if errors not in ERROR_MODES:
        raise typer.BadParameter(
            f"--errors must be one of {', '.join(ERROR_MODES)}", param_hint="--errors"
        )
    df = pd.read_csv(input, dtype=str, keep_default_na=False, na_values=[""])
    try:
        df = normalize_term_column(df, column, errors=errors)
    except KeyError as e:
        raise typer.BadParameter(str(e), param_hint="--column") from e
    except InvalidTermName as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)

    if output is None:
        df.to_csv(sys.stdout, index=False)
    else:
        output.parent.mkdir(parents=True, exist_ok=True)
        logger.info(f"Writing normalized CSV to {output}")
        df.to_csv(output, index=False)
