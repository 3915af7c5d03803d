"""Deterministic account-servicer references for entries.

The source schema carries no bank-assigned entry reference, while the target
schema expects one. :func:`generate_reference` derives it from the entry's
content so repeated conversions of the same document yield identical output.

Algorithm (version 1)
---------------------
1. Take, in this order: amount text, currency, credit/debit indicator,
   booking date text, bank transaction code, and the additional information
   with whitespace runs collapsed to single spaces.
2. Feed each value's UTF-8 bytes into SHA-256, each followed by a ``0xFF``
   separator byte (never valid inside UTF-8, so field boundaries cannot
   shift).
3. Read the first 8 digest bytes as a big-endian unsigned 64-bit integer.
4. Reduce modulo ten billion and render as ``TX`` plus ten zero-padded
   digits, e.g. ``TX0123456789``.

SHA-256 is used for its stability across platforms and interpreter versions,
not for any security property. Changing any step changes every reference
already issued, so treat the algorithm as versioned.
"""

from __future__ import annotations

import hashlib

from .models import Transaction

REFERENCE_PREFIX = "TX"
REFERENCE_MODULUS = 10_000_000_000
_FIELD_SEPARATOR = b"\xff"


def normalize_whitespace(text: str) -> str:
    """Collapse whitespace runs to single spaces and trim both ends."""

    return " ".join(text.split())


def generate_reference(transaction: Transaction) -> str:
    """Return the synthetic ``TXnnnnnnnnnn`` reference for ``transaction``."""

    digest = hashlib.sha256()
    for part in (
        transaction.amount,
        transaction.currency,
        transaction.credit_debit_ind,
        transaction.booking_date,
        transaction.bank_tx_code,
        normalize_whitespace(transaction.additional_info),
    ):
        digest.update(part.encode("utf-8"))
        digest.update(_FIELD_SEPARATOR)

    value = int.from_bytes(digest.digest()[:8], "big")
    return f"{REFERENCE_PREFIX}{value % REFERENCE_MODULUS:010d}"


__all__ = ["REFERENCE_MODULUS", "REFERENCE_PREFIX", "generate_reference", "normalize_whitespace"]
