"""Path-tracking reader for CAMT.053.001.10 statement documents.

The reader walks the document as a stream of start/end events and keeps the
stack of open element names. When an element closes, the trailing segments
of its path are compared against fixed suffix tables and its trimmed text is
assigned to the matching model field. Suffix matching tolerates arbitrary
wrapping above the statement (namespaces, enclosing groups) without having
to spell out absolute paths.

Scope rules
-----------
- A ``Bal`` start tag opens a fresh :class:`Balance` accumulator; balance
  suffixes only apply while it is open. ``Ntry`` does the same for
  :class:`Transaction`.
- ``Chrgs`` opens the charges scope. The total charges amount is only taken
  while both the entry and the charges scopes are open.
- On the matching end tag the accumulator is appended to the statement and
  the scope is closed. The end of an entry also closes the charges scope.

Amounts and currencies are filled by :class:`~camt_convert.amounts.AmountCorrelator`,
which observes the same event stream.

Known limitation: matching is by local-name suffix. Should the source schema
reuse one of these suffixes at a different depth, the field would be
misattributed.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .amounts import AmountCorrelator
from .logging_setup import get_logger
from .models import Balance, Statement, Transaction
from .xmlstream import XmlEvent, XmlSource, element_text, iter_events, path_endswith

_logger = get_logger("camt_convert.parser")

# ---------------------------------------------------------------------------
# Suffix tables (path segments, matched against the end of the element path)
# ---------------------------------------------------------------------------

STATEMENT_FIELDS: dict[tuple[str, ...], str] = {
    ("Stmt", "Id"): "id",
    ("Stmt", "CreDtTm"): "creation_datetime",
    ("FrToDt", "FrDtTm"): "from_datetime",
    ("FrToDt", "ToDtTm"): "to_datetime",
    ("Acct", "Id", "IBAN"): "iban",
    ("Acct", "Ccy"): "currency",
    ("Acct", "Ownr", "Nm"): "owner_name",
}

BALANCE_FIELDS: dict[tuple[str, ...], str] = {
    ("Bal", "Tp", "CdOrPrtry", "Cd"): "balance_type",
    ("Bal", "CdtDbtInd"): "credit_debit_ind",
    ("Bal", "Dt", "DtTm"): "date",
    ("Bal", "Dt", "Dt"): "date",
}

TRANSACTION_FIELDS: dict[tuple[str, ...], str] = {
    ("Ntry", "CdtDbtInd"): "credit_debit_ind",
    ("Ntry", "BookgDt", "DtTm"): "booking_date",
    ("Ntry", "BookgDt", "Dt"): "booking_date",
    ("Ntry", "BkTxCd", "Prtry", "Cd"): "bank_tx_code",
    ("Ntry", "AddtlNtryInf"): "additional_info",
}

CHARGES_TOTAL: tuple[str, ...] = ("Chrgs", "TtlChrgsAndTaxAmt")


def _match(path: tuple[str, ...], table: dict[tuple[str, ...], str]) -> str | None:
    for suffix, attr in table.items():
        if path_endswith(path, suffix):
            return attr
    return None


@dataclass(slots=True)
class ParseContext:
    """Scope flags and open accumulators threaded through one traversal."""

    statement: Statement = field(default_factory=Statement)
    balance: Balance | None = None
    transaction: Transaction | None = None
    in_charges: bool = False

    @property
    def in_balance(self) -> bool:
        return self.balance is not None

    @property
    def in_transaction(self) -> bool:
        return self.transaction is not None

    def feed(self, event: XmlEvent) -> None:
        if event.kind == "start":
            self._on_start(event.name)
        else:
            self._on_text(event.path, element_text(event.element))
            self._on_end(event.name)

    def _on_start(self, name: str) -> None:
        if name == "Bal":
            self.balance = Balance()
        elif name == "Ntry":
            self.transaction = Transaction()
        elif name == "Chrgs":
            self.in_charges = True

    def _on_text(self, path: tuple[str, ...], text: str) -> None:
        if not text:
            return

        attr = _match(path, STATEMENT_FIELDS)
        if attr is not None:
            setattr(self.statement, attr, text)

        if self.in_balance:
            attr = _match(path, BALANCE_FIELDS)
            if attr is not None:
                setattr(self.balance, attr, text)

        if self.in_transaction:
            attr = _match(path, TRANSACTION_FIELDS)
            if attr is not None:
                setattr(self.transaction, attr, text)
            if self.in_charges and path_endswith(path, CHARGES_TOTAL):
                self.transaction.charges = text

    def _on_end(self, name: str) -> None:
        if name == "Bal" and self.balance is not None:
            self.statement.balances.append(self.balance)
            self.balance = None
        elif name == "Ntry" and self.transaction is not None:
            self.statement.transactions.append(self.transaction)
            self.transaction = None
            self.in_charges = False
        elif name == "Chrgs":
            self.in_charges = False


def parse_statement(source: XmlSource) -> Statement:
    """Read a CAMT.053.001.10 document into a fully populated :class:`Statement`.

    Header fields, balances and entries are extracted by :class:`ParseContext`
    while an :class:`AmountCorrelator` collects amounts from the same event
    stream, so the source is read exactly once.

    Raises
    ------
    StatementParseError
        When the document is not well-formed XML or is not valid UTF-8.
    """

    ctx = ParseContext()
    correlator = AmountCorrelator()
    for event in iter_events(source):
        ctx.feed(event)
        correlator.feed(event)

    statement = ctx.statement
    correlator.apply(statement)

    _logger.debug(
        "parse_statement:done id=%s balances=%d transactions=%d",
        statement.id,
        len(statement.balances),
        len(statement.transactions),
    )
    return statement


__all__ = [
    "BALANCE_FIELDS",
    "CHARGES_TOTAL",
    "STATEMENT_FIELDS",
    "TRANSACTION_FIELDS",
    "ParseContext",
    "parse_statement",
]
