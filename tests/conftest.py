"""Pytest configuration for test isolation.

Placeholder values and the log level are read from ``CAMT_CONVERT_*``
environment variables, and the CLI configures package logging once per
process. Both would leak between tests (a developer's shell or ``.env`` could
change expected output, and a handler bound to one test's captured stderr
would outlive it), so an autouse fixture scrubs the environment and resets
logging around every test.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import pytest

import camt_convert.logging_setup as logging_setup
from tests.helpers.camt import build_camt10


@pytest.fixture(autouse=True)
def _isolate_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    for name in list(os.environ):
        if name.startswith("CAMT_CONVERT_"):
            monkeypatch.delenv(name, raising=False)
    # Keep the CLI's .env lookup away from the developer's working tree.
    monkeypatch.chdir(tmp_path)

    yield

    # Values loaded from a test's .env bypass monkeypatch; drop them here.
    for name in list(os.environ):
        if name.startswith("CAMT_CONVERT_"):
            del os.environ[name]

    pkg_logger = logging.getLogger("camt_convert")
    for h in list(pkg_logger.handlers):
        pkg_logger.removeHandler(h)
    pkg_logger.propagate = True
    pkg_logger.setLevel(logging.NOTSET)
    logging_setup._CONFIGURED = False


@pytest.fixture
def camt10_bytes() -> bytes:
    """The default single-balance, single-entry source document."""

    return build_camt10()


@pytest.fixture
def camt10_file(tmp_path: Path, camt10_bytes: bytes) -> Path:
    path = tmp_path / "statement.xml"
    path.write_bytes(camt10_bytes)
    return path
