"""Streaming XML event source shared by the statement parser and amount correlator.

Wraps :func:`lxml.etree.iterparse` and exposes a flat stream of
:class:`XmlEvent` tuples carrying the element's local name and the current
element path (the stack of local names from the document root down to and
including the element). Namespaces are stripped, so callers match on plain
CAMT element names such as ``Bal`` or ``Ntry``.

Elements are cleared once their ``end`` event has been consumed, keeping
memory flat for large statements.

Failure mode
------------
Malformed XML (unbalanced tags, an empty document, invalid UTF-8 in text or
element names) raises :class:`StatementParseError`. I/O errors raised while
opening or reading a path-like source propagate unchanged.
"""

from __future__ import annotations

import io
from collections.abc import Iterator
from os import PathLike
from typing import BinaryIO, NamedTuple

from lxml import etree

type XmlSource = bytes | str | PathLike[str] | BinaryIO
"""Accepted inputs: raw document bytes, a filesystem path, or a binary stream."""


class StatementParseError(ValueError):
    """Fatal failure while reading the source statement document."""

    def __init__(self, message: str, *, lineno: int | None = None) -> None:
        # lxml messages already carry the position; keep it only as an attribute.
        super().__init__(message)
        self.lineno = lineno


class XmlEvent(NamedTuple):
    """A single ``start`` or ``end`` event with its path context."""

    kind: str
    name: str
    element: etree._Element
    path: tuple[str, ...]


def local_name(tag: str) -> str:
    """Strip a ``{namespace}`` prefix from an lxml tag."""

    return tag.split("}", 1)[1] if tag.startswith("{") else tag


def path_endswith(path: tuple[str, ...], suffix: tuple[str, ...]) -> bool:
    """Return ``True`` when the last segments of ``path`` equal ``suffix``."""

    n = len(suffix)
    return len(path) >= n and path[-n:] == suffix


def element_text(element: etree._Element) -> str:
    """Return the element's own text, trimmed; ``""`` when absent."""

    text = element.text
    return text.strip() if text else ""


def _iterparse(stream: BinaryIO) -> Iterator[XmlEvent]:
    stack: list[str] = []
    try:
        for kind, element in etree.iterparse(stream, events=("start", "end")):
            if kind == "start":
                name = local_name(element.tag)
                stack.append(name)
                yield XmlEvent(kind, name, element, tuple(stack))
                continue

            path = tuple(stack)
            yield XmlEvent(kind, path[-1], element, path)
            stack.pop()
            # Release the finished subtree and any already-processed siblings.
            element.clear(keep_tail=True)
            parent = element.getparent()
            if parent is not None:
                while element.getprevious() is not None:
                    del parent[0]
    except etree.XMLSyntaxError as exc:
        raise StatementParseError(
            f"Error parsing XML: {exc.msg}", lineno=getattr(exc, "lineno", None) or None
        ) from exc
    except UnicodeDecodeError as exc:
        raise StatementParseError(f"Error parsing XML: invalid text encoding: {exc}") from exc


def iter_events(source: XmlSource) -> Iterator[XmlEvent]:
    """Yield ``start``/``end`` events for ``source`` in document order.

    ``bytes`` are parsed from memory, paths are opened in binary mode for the
    duration of the iteration, and file-like objects are read from their
    current position without being closed.
    """

    if isinstance(source, bytes):
        yield from _iterparse(io.BytesIO(source))
    elif isinstance(source, (str, PathLike)):
        with open(source, "rb") as fh:
            yield from _iterparse(fh)
    else:
        yield from _iterparse(source)


__all__ = [
    "StatementParseError",
    "XmlEvent",
    "XmlSource",
    "element_text",
    "iter_events",
    "local_name",
    "path_endswith",
]
