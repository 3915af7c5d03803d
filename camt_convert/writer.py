"""Serializer for CAMT.053.001.08 documents.

Maps a populated :class:`~camt_convert.models.Statement` onto the target
schema's fixed element order:

``Document/BkToCstmrStmt``
    ``GrpHdr`` (message id, creation time, synthetic recipient, single-page
    pagination, additional info), then one ``Stmt`` holding the statement
    header, the account with a synthetic servicer, every ``Bal`` and every
    ``Ntry`` in model order.

Fields the source never carries are synthesized: placeholder identifiers
come from :class:`~camt_convert.settings.PlaceholderSettings`, the entry
status is always ``BOOK``, both booking and value date are taken from the
single source booking date, and the bank transaction family comes from
:func:`~camt_convert.classification.classify_bank_code`.

Amounts are written back as the exact source text. Empty model fields become
empty elements. The statement is not modified.
"""

from __future__ import annotations

from lxml import etree

from .classification import classify_bank_code
from .datetimes import to_date_only, to_offset_datetime
from .logging_setup import get_logger
from .models import Balance, Statement, Transaction
from .references import generate_reference, normalize_whitespace
from .settings import PlaceholderSettings

_logger = get_logger("camt_convert.writer")

TARGET_NAMESPACE = "urn:iso:std:iso:20022:tech:xsd:camt.053.001.08"
XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"

ENTRY_STATUS = "BOOK"
ELECTRONIC_SEQUENCE_NUMBER = "1"
PAGE_NUMBER = "1"
LAST_PAGE_INDICATOR = "true"

_INDENT = "    "


def _q(tag: str) -> str:
    return f"{{{TARGET_NAMESPACE}}}{tag}"


def _sub(parent: etree._Element, tag: str, text: str | None = None) -> etree._Element:
    el = etree.SubElement(parent, _q(tag))
    if text is not None:
        el.text = text
    return el


def _path(parent: etree._Element, *tags: str) -> etree._Element:
    """Create a chain of nested elements and return the innermost one."""

    el = parent
    for tag in tags:
        el = _sub(el, tag)
    return el


def _amount(parent: etree._Element, amount: str, currency: str) -> None:
    el = _sub(parent, "Amt", amount)
    el.set("Ccy", currency)


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------


def _write_group_header(
    parent: etree._Element, statement: Statement, settings: PlaceholderSettings
) -> None:
    grp = _sub(parent, "GrpHdr")
    _sub(grp, "MsgId", statement.id)
    _sub(grp, "CreDtTm", to_offset_datetime(statement.creation_datetime))

    org_id = _path(grp, "MsgRcpt", "Id", "OrgId")
    _sub(org_id, "AnyBIC", settings.recipient_bic)

    pgntn = _sub(grp, "MsgPgntn")
    _sub(pgntn, "PgNb", PAGE_NUMBER)
    _sub(pgntn, "LastPgInd", LAST_PAGE_INDICATOR)

    _sub(grp, "AddtlInf", settings.additional_info)


def _write_account(
    parent: etree._Element, statement: Statement, settings: PlaceholderSettings
) -> None:
    acct = _sub(parent, "Acct")
    _sub(_sub(acct, "Id"), "IBAN", statement.iban)
    _sub(acct, "Ccy", statement.currency)
    _sub(_sub(acct, "Ownr"), "Nm", statement.owner_name)

    fin_instn = _path(acct, "Svcr", "FinInstnId")
    _sub(fin_instn, "BICFI", settings.servicer_bic)
    _sub(fin_instn, "Nm", settings.servicer_name)
    othr = _sub(fin_instn, "Othr")
    _sub(othr, "Id", settings.servicer_other_id)
    _sub(othr, "Issr", settings.servicer_other_issuer)


def _write_balance(parent: etree._Element, balance: Balance) -> None:
    bal = _sub(parent, "Bal")
    _sub(_path(bal, "Tp", "CdOrPrtry"), "Cd", balance.balance_type)
    _amount(bal, balance.amount, balance.currency)
    _sub(bal, "CdtDbtInd", balance.credit_debit_ind)
    _sub(_sub(bal, "Dt"), "Dt", to_date_only(balance.date))


def _write_entry(parent: etree._Element, transaction: Transaction) -> None:
    ntry = _sub(parent, "Ntry")
    _amount(ntry, transaction.amount, transaction.currency)
    _sub(ntry, "CdtDbtInd", transaction.credit_debit_ind)
    _sub(_sub(ntry, "Sts"), "Cd", ENTRY_STATUS)

    # The source has a single date; it serves as booking and value date.
    booking_date = to_date_only(transaction.booking_date)
    _sub(_sub(ntry, "BookgDt"), "Dt", booking_date)
    _sub(_sub(ntry, "ValDt"), "Dt", booking_date)

    reference = generate_reference(transaction)
    _sub(ntry, "AcctSvcrRef", reference)

    family = classify_bank_code(transaction.bank_tx_code)
    bk_tx_cd = _sub(ntry, "BkTxCd")
    domn = _sub(bk_tx_cd, "Domn")
    _sub(domn, "Cd", family.domain)
    fmly = _sub(domn, "Fmly")
    _sub(fmly, "Cd", family.family)
    _sub(fmly, "SubFmlyCd", family.sub_family)
    _sub(_sub(bk_tx_cd, "Prtry"), "Cd", transaction.bank_tx_code)

    if transaction.additional_info:
        tx_dtls = _path(ntry, "NtryDtls", "TxDtls")
        _sub(_sub(tx_dtls, "Refs"), "AcctSvcrRef", reference)
        _amount(tx_dtls, transaction.amount, transaction.currency)
        _sub(tx_dtls, "CdtDbtInd", transaction.credit_debit_ind)
        _sub(
            _sub(tx_dtls, "RmtInf"), "Ustrd", normalize_whitespace(transaction.additional_info)
        )

    _sub(ntry, "AddtlNtryInf", transaction.additional_info)


def build_document(
    statement: Statement, *, settings: PlaceholderSettings | None = None
) -> etree._Element:
    """Return the ``Document`` element tree for ``statement`` (not indented)."""

    settings = settings or PlaceholderSettings()
    root = etree.Element(_q("Document"), nsmap={None: TARGET_NAMESPACE, "xsi": XSI_NAMESPACE})
    bk = _sub(root, "BkToCstmrStmt")
    _write_group_header(bk, statement, settings)

    stmt = _sub(bk, "Stmt")
    _sub(stmt, "Id", statement.id)
    _sub(stmt, "ElctrncSeqNb", ELECTRONIC_SEQUENCE_NUMBER)
    _sub(stmt, "CreDtTm", to_offset_datetime(statement.creation_datetime))
    fr_to = _sub(stmt, "FrToDt")
    _sub(fr_to, "FrDtTm", to_offset_datetime(statement.from_datetime))
    _sub(fr_to, "ToDtTm", to_offset_datetime(statement.to_datetime))
    _write_account(stmt, statement, settings)

    for balance in statement.balances:
        _write_balance(stmt, balance)
    for transaction in statement.transactions:
        _write_entry(stmt, transaction)

    return root


def write_statement(statement: Statement, *, settings: PlaceholderSettings | None = None) -> bytes:
    """Serialize ``statement`` as a UTF-8 CAMT.053.001.08 document.

    The output starts with an XML declaration and uses four-space
    indentation.
    """

    root = build_document(statement, settings=settings)
    etree.indent(root, space=_INDENT)
    data = etree.tostring(root, xml_declaration=True, encoding="UTF-8", pretty_print=True)
    _logger.debug(
        "write_statement:done id=%s balances=%d transactions=%d bytes=%d",
        statement.id,
        len(statement.balances),
        len(statement.transactions),
        len(data),
    )
    return data


__all__ = [
    "ENTRY_STATUS",
    "TARGET_NAMESPACE",
    "XSI_NAMESPACE",
    "build_document",
    "write_statement",
]
