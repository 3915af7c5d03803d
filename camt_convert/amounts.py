"""Positional amount correlation for balances and entries.

An amount is the one field the generic suffix dispatch in
:mod:`camt_convert.parser` cannot extract: its currency lives in the ``Ccy``
attribute of the ``Amt`` start tag while its value is the element text. The
:class:`AmountCorrelator` watches the same event stream as the field
extractor. On a ``Bal/Amt`` or ``Ntry/Amt`` start tag it records a pending
marker (currency, target list, running index); the marker is resolved with
the amount text when the element closes.

Running indices advance on every ``Bal``/``Ntry`` end tag, independently of
the parser, so the Nth resolved balance amount lands on the Nth balance the
parser recorded. :meth:`AmountCorrelator.apply` bounds-checks each index
against the statement: amounts whose index exceeds the recorded counts are
dropped with a warning rather than raising.

:func:`correlate_amounts` runs the correlator alone over a fresh read of the
source, for callers that already hold a skeleton :class:`Statement`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple

from .logging_setup import get_logger
from .models import Statement
from .xmlstream import XmlEvent, XmlSource, element_text, iter_events, path_endswith

_logger = get_logger("camt_convert.amounts")

_BALANCE_AMOUNT = ("Bal", "Amt")
_ENTRY_AMOUNT = ("Ntry", "Amt")


class ResolvedAmount(NamedTuple):
    amount: str
    currency: str


class _Pending(NamedTuple):
    target: str  # "balance" | "transaction"
    index: int
    currency: str
    depth: int


@dataclass(slots=True)
class AmountCorrelator:
    """Collects ``(amount, currency)`` pairs keyed by balance/entry position."""

    balance_amounts: dict[int, ResolvedAmount] = field(default_factory=dict)
    transaction_amounts: dict[int, ResolvedAmount] = field(default_factory=dict)
    in_balance: bool = False
    in_transaction: bool = False
    balance_idx: int = 0
    tx_idx: int = 0
    _pending: _Pending | None = None

    def feed(self, event: XmlEvent) -> None:
        if event.kind == "start":
            self._on_start(event)
        else:
            self._on_end(event)

    def _on_start(self, event: XmlEvent) -> None:
        if event.name == "Bal":
            self.in_balance = True
        elif event.name == "Ntry":
            self.in_transaction = True
        elif event.name == "Amt":
            currency = event.element.get("Ccy", "")
            if self.in_balance and path_endswith(event.path, _BALANCE_AMOUNT):
                self._pending = _Pending("balance", self.balance_idx, currency, len(event.path))
            elif self.in_transaction and path_endswith(event.path, _ENTRY_AMOUNT):
                self._pending = _Pending("transaction", self.tx_idx, currency, len(event.path))

    def _on_end(self, event: XmlEvent) -> None:
        pending = self._pending
        if pending is not None and event.name == "Amt" and len(event.path) == pending.depth:
            self._pending = None
            amount = element_text(event.element)
            # An amount element without text leaves the record untouched.
            if amount:
                resolved = ResolvedAmount(amount, pending.currency)
                if pending.target == "balance":
                    self.balance_amounts[pending.index] = resolved
                else:
                    self.transaction_amounts[pending.index] = resolved
        elif event.name == "Bal":
            self.in_balance = False
            self.balance_idx += 1
        elif event.name == "Ntry":
            self.in_transaction = False
            self.tx_idx += 1

    def apply(self, statement: Statement) -> None:
        """Write the collected pairs onto ``statement`` by position."""

        for idx, resolved in sorted(self.balance_amounts.items()):
            if idx >= len(statement.balances):
                _logger.warning(
                    "correlate_amounts:dropped target=balance index=%d count=%d",
                    idx,
                    len(statement.balances),
                )
                continue
            statement.balances[idx].amount = resolved.amount
            statement.balances[idx].currency = resolved.currency

        for idx, resolved in sorted(self.transaction_amounts.items()):
            if idx >= len(statement.transactions):
                _logger.warning(
                    "correlate_amounts:dropped target=transaction index=%d count=%d",
                    idx,
                    len(statement.transactions),
                )
                continue
            statement.transactions[idx].amount = resolved.amount
            statement.transactions[idx].currency = resolved.currency


def correlate_amounts(source: XmlSource, statement: Statement) -> Statement:
    """Fill ``amount``/``currency`` on ``statement`` from a fresh read of ``source``.

    ``source`` must yield the same document the skeleton was built from;
    correlation is purely positional.
    """

    correlator = AmountCorrelator()
    for event in iter_events(source):
        correlator.feed(event)
    correlator.apply(statement)
    return statement


__all__ = ["AmountCorrelator", "ResolvedAmount", "correlate_amounts"]
