"""Bank transaction code classification for the target schema.

The source documents only carry a proprietary bank transaction code. The
target schema also wants the ISO domain/family/sub-family triple, which is
derived here with a deliberately coarse rule: codes starting with ``CARD``
are card-present point-of-sale payments, everything else is an incoming
SEPA credit transfer. No other families are distinguished.
"""

from __future__ import annotations

from typing import NamedTuple


class TransactionFamily(NamedTuple):
    domain: str
    family: str
    sub_family: str


CARD_PRESENT = TransactionFamily(domain="PMNT", family="CCRD", sub_family="POSD")
CREDIT_TRANSFER = TransactionFamily(domain="PMNT", family="ICDT", sub_family="ESCT")

CARD_CODE_PREFIX = "CARD"


def classify_bank_code(bank_tx_code: str) -> TransactionFamily:
    if bank_tx_code.startswith(CARD_CODE_PREFIX):
        return CARD_PRESENT
    return CREDIT_TRANSFER


__all__ = ["CARD_PRESENT", "CREDIT_TRANSFER", "TransactionFamily", "classify_bank_code"]
