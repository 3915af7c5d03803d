"""CLI for the ``camt_convert`` package.

A thin Typer wrapper: it checks that the input exists, derives the output
path, loads placeholder overrides from the environment (and a local ``.env``
via ``python-dotenv``) and delegates to :func:`camt_convert.api.convert_file`.
Every failure is reported as a single ``Error: ...`` line on stderr with exit
code 1.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from pydantic import ValidationError

from .logging_setup import configure_logging

app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="Convert ISO 20022 CAMT.053 statements from version 053.001.10 to 053.001.08.",
)


def _fail(message: str) -> typer.Exit:
    typer.echo(f"Error: {message}", err=True)
    return typer.Exit(1)


@app.command("convert")
def convert_cmd(
    input_path: Annotated[
        Path,
        typer.Argument(help="Path to the CAMT 053.001.10 file to convert.", dir_okay=False),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Destination file (default: <input stem>_08.xml next to the input).",
            dir_okay=False,
        ),
    ] = None,
) -> None:
    """Convert a single statement file."""

    # Deferred imports keep `--help` fast
    from .api import convert_file, derive_output_path
    from .settings import load_settings
    from .xmlstream import StatementParseError

    if not input_path.exists():
        raise _fail(f"Input file does not exist: {input_path}")

    try:
        settings = load_settings()
    except ValidationError as e:
        raise _fail(f"invalid placeholder settings: {e}") from e

    try:
        output_path = output if output is not None else derive_output_path(input_path)
    except ValueError as e:
        raise _fail(str(e)) from e

    typer.echo(f"Converting {input_path} to {output_path}")

    try:
        convert_file(input_path, output_path, settings=settings)
    except StatementParseError as e:
        raise _fail(f"Failed to parse {input_path}: {e}") from e
    except PermissionError as e:
        raise _fail(f"Permission denied: {e.filename or input_path}") from e
    except OSError as e:
        raise _fail(f"I/O failure: {e}") from e

    typer.echo("Conversion completed successfully!")


@app.callback()
def _root(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Logging level (falls back to CAMT_CONVERT_LOG_LEVEL, then INFO).",
    ),
) -> None:
    """Root command.

    Loads ``.env`` from the current working directory (without overriding any
    already-set environment variables) and configures package logging.
    """

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging(log_level)


if __name__ == "__main__":  # pragma: no cover - exercised via the console script
    app()
