"""Public interface for the ``camt_convert`` package.

Converts ISO 20022 CAMT.053 bank statements from version 053.001.10 to
053.001.08. This module only re-exports the stable import surface.
"""

from .api import convert, convert_file, derive_output_path
from .classification import TransactionFamily, classify_bank_code
from .datetimes import to_date_only, to_offset_datetime
from .models import Balance, Statement, Transaction
from .parser import parse_statement
from .references import generate_reference
from .settings import PlaceholderSettings, load_settings
from .writer import write_statement
from .xmlstream import StatementParseError

__all__ = [
    # API
    "convert",
    "convert_file",
    "derive_output_path",
    "parse_statement",
    "write_statement",
    # Helpers
    "classify_bank_code",
    "generate_reference",
    "to_date_only",
    "to_offset_datetime",
    # Models / settings / errors
    "Balance",
    "Statement",
    "Transaction",
    "TransactionFamily",
    "PlaceholderSettings",
    "load_settings",
    "StatementParseError",
]
