"""In-memory statement model shared by the parser and the writer.

The model is version-agnostic: it holds what the CAMT.053.001.10 reader
extracts and what the CAMT.053.001.08 writer needs, nothing more.

Conventions
-----------
- Every field is a string. Absent source fields are ``""`` rather than
  ``None`` so the writer can emit them as empty elements without special
  cases. The one exception is :attr:`Transaction.charges`, which is ``None``
  unless a charges element existed in the entry.
- Amounts are the exact source text (``"1234.56"``), never parsed into a
  numeric type, so the output cannot drift through rounding or re-formatting.
- ``Statement.balances`` and ``Statement.transactions`` keep document order.
  The amount correlator fills amounts by position, so the order is part of
  the contract.

Instances are mutable: the parser builds skeleton records first and the
amount correlator fills ``amount``/``currency`` in place afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class Balance:
    """A single ``Bal`` snapshot (opening, closing, available, ...)."""

    balance_type: str = ""
    amount: str = ""
    currency: str = ""
    credit_debit_ind: str = ""
    # Date or datetime text as found in the source (``Dt/DtTm`` or ``Dt/Dt``).
    date: str = ""


@dataclass(slots=True)
class Transaction:
    """A single ``Ntry`` line item."""

    amount: str = ""
    currency: str = ""
    credit_debit_ind: str = ""
    booking_date: str = ""
    bank_tx_code: str = ""
    additional_info: str = ""
    charges: str | None = None


@dataclass(slots=True)
class Statement:
    """Header fields of one statement plus its balances and entries."""

    id: str = ""
    creation_datetime: str = ""
    from_datetime: str = ""
    to_datetime: str = ""
    iban: str = ""
    currency: str = ""
    owner_name: str = ""
    balances: list[Balance] = field(default_factory=list)
    transactions: list[Transaction] = field(default_factory=list)


__all__ = ["Balance", "Statement", "Transaction"]
