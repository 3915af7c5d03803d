"""Public conversion entrypoints for the ``camt_convert`` package.

- :func:`convert` turns CAMT.053.001.10 input into CAMT.053.001.08 bytes.
- :func:`convert_file` does the same for files on disk and writes the result
  all-or-nothing (``.tmp`` first, then ``os.replace`` into place).
- :func:`derive_output_path` yields the default ``<stem>_08.xml`` sibling of
  an input file.

The statement is fully parsed before any output is produced; a parse failure
therefore never leaves a partial output file behind.
"""

from __future__ import annotations

import os
from os import PathLike
from pathlib import Path

from .logging_setup import get_logger
from .parser import parse_statement
from .settings import PlaceholderSettings, load_settings
from .writer import write_statement
from .xmlstream import XmlSource

_logger = get_logger("camt_convert.api")

OUTPUT_SUFFIX = "_08.xml"


def convert(source: XmlSource, *, settings: PlaceholderSettings | None = None) -> bytes:
    """Convert a CAMT.053.001.10 document into CAMT.053.001.08 bytes.

    When ``settings`` is omitted, placeholders come from :func:`load_settings`
    (defaults overlaid with ``CAMT_CONVERT_*`` environment variables).

    Raises
    ------
    StatementParseError
        When ``source`` is not well-formed XML.
    OSError
        When a path-like ``source`` cannot be opened or read.
    """

    statement = parse_statement(source)
    if settings is None:
        settings = load_settings()
    return write_statement(statement, settings=settings)


def derive_output_path(input_path: str | PathLike[str]) -> Path:
    """Return ``<input dir>/<input stem>_08.xml``.

    Raises ``ValueError`` when the path has no file name to derive from.
    """

    p = Path(input_path)
    if not p.stem:
        raise ValueError(f"Invalid input filename: {os.fspath(input_path)!r}")
    return p.with_name(f"{p.stem}{OUTPUT_SUFFIX}")


def convert_file(
    input_path: str | PathLike[str],
    output_path: str | PathLike[str] | None = None,
    *,
    settings: PlaceholderSettings | None = None,
) -> Path:
    """Convert ``input_path`` and write the result; return the output path.

    When ``output_path`` is omitted it is derived with
    :func:`derive_output_path`. I/O errors propagate unchanged.
    """

    src = Path(input_path)
    dest = Path(output_path) if output_path is not None else derive_output_path(src)
    _logger.info("convert_file:start input=%s output=%s", src, dest)

    data = convert(src.read_bytes(), settings=settings)

    tmp = dest.with_name(dest.name + ".tmp")
    try:
        tmp.write_bytes(data)
        os.replace(tmp, dest)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise

    _logger.info("convert_file:done output=%s bytes=%d", dest, len(data))
    return dest


__all__ = ["OUTPUT_SUFFIX", "convert", "convert_file", "derive_output_path"]
