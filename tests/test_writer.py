import re

from camt_convert.models import Balance, Statement, Transaction
from camt_convert.references import generate_reference
from camt_convert.settings import PlaceholderSettings
from camt_convert.writer import TARGET_NAMESPACE, XSI_NAMESPACE, write_statement
from tests.helpers.camt import TARGET_NS as NS
from tests.helpers.camt import parse_output, stmt_of


def _statement(**overrides) -> Statement:
    stmt = Statement(
        id="STMT-1",
        creation_datetime="2025-06-22T17:33:43.291656435Z",
        from_datetime="2025-06-20T00:00:00+02:00",
        to_datetime="2025-06-20T23:59:59+02:00",
        iban="CH9300762011623852957",
        currency="EUR",
        owner_name="Jane Example",
        balances=[
            Balance(
                balance_type="CLBD",
                amount="1234.56",
                currency="EUR",
                credit_debit_ind="CRDT",
                date="2025-06-20T00:00:00+02:00",
            )
        ],
        transactions=[
            Transaction(
                amount="50.00",
                currency="EUR",
                credit_debit_ind="DBIT",
                booking_date="2025-06-20T00:00:00+02:00",
                bank_tx_code="CARD001",
                additional_info="Coffee   shop",
            )
        ],
    )
    for key, value in overrides.items():
        setattr(stmt, key, value)
    return stmt


def _children(el) -> list[str]:
    return [child.tag.split("}", 1)[1] for child in el]


def test_document_envelope_and_formatting():
    data = write_statement(_statement())

    assert data.startswith(b"<?xml version='1.0' encoding='UTF-8'?>")
    assert b"\n    <BkToCstmrStmt>\n        <GrpHdr>\n" in data
    root = parse_output(data)
    assert root.tag == f"{{{TARGET_NAMESPACE}}}Document"
    assert root.nsmap == {None: TARGET_NAMESPACE, "xsi": XSI_NAMESPACE}
    assert _children(root) == ["BkToCstmrStmt"]
    assert _children(root[0]) == ["GrpHdr", "Stmt"]


def test_group_header_uses_placeholders():
    root = parse_output(write_statement(_statement()))
    grp = root.find("c:BkToCstmrStmt/c:GrpHdr", NS)

    assert _children(grp) == ["MsgId", "CreDtTm", "MsgRcpt", "MsgPgntn", "AddtlInf"]
    assert grp.findtext("c:MsgId", namespaces=NS) == "STMT-1"
    assert grp.findtext("c:CreDtTm", namespaces=NS) == "2025-06-22T17:33:43+00:00"
    assert grp.findtext("c:MsgRcpt/c:Id/c:OrgId/c:AnyBIC", namespaces=NS) == "XXXXXXXX"
    assert grp.findtext("c:MsgPgntn/c:PgNb", namespaces=NS) == "1"
    assert grp.findtext("c:MsgPgntn/c:LastPgInd", namespaces=NS) == "true"
    assert grp.findtext("c:AddtlInf", namespaces=NS) == "SPS/2.1"


def test_statement_header_and_account():
    stmt = stmt_of(parse_output(write_statement(_statement())))

    assert _children(stmt) == ["Id", "ElctrncSeqNb", "CreDtTm", "FrToDt", "Acct", "Bal", "Ntry"]
    assert stmt.findtext("c:Id", namespaces=NS) == "STMT-1"
    assert stmt.findtext("c:ElctrncSeqNb", namespaces=NS) == "1"
    assert stmt.findtext("c:FrToDt/c:FrDtTm", namespaces=NS) == "2025-06-20T00:00:00+02:00"
    assert stmt.findtext("c:FrToDt/c:ToDtTm", namespaces=NS) == "2025-06-20T23:59:59+02:00"

    acct = stmt.find("c:Acct", NS)
    assert _children(acct) == ["Id", "Ccy", "Ownr", "Svcr"]
    assert acct.findtext("c:Id/c:IBAN", namespaces=NS) == "CH9300762011623852957"
    assert acct.findtext("c:Ccy", namespaces=NS) == "EUR"
    assert acct.findtext("c:Ownr/c:Nm", namespaces=NS) == "Jane Example"
    fin = acct.find("c:Svcr/c:FinInstnId", NS)
    assert _children(fin) == ["BICFI", "Nm", "Othr"]
    assert fin.findtext("c:BICFI", namespaces=NS) == "XXXXXXXX"
    assert fin.findtext("c:Nm", namespaces=NS) == "Bank"
    assert fin.findtext("c:Othr/c:Id", namespaces=NS) == "XXX-000.000.000"
    assert fin.findtext("c:Othr/c:Issr", namespaces=NS) == "ID"


def test_custom_placeholders_are_emitted():
    settings = PlaceholderSettings(
        recipient_bic="RCPTCHZZ",
        additional_info="EXPORT/1",
        servicer_bic="SVCRCHZZ",
        servicer_name="Example Bank AG",
        servicer_other_id="CHE-123.456.789",
        servicer_other_issuer="UID",
    )
    root = parse_output(write_statement(_statement(), settings=settings))

    grp = root.find("c:BkToCstmrStmt/c:GrpHdr", NS)
    assert grp.findtext("c:MsgRcpt/c:Id/c:OrgId/c:AnyBIC", namespaces=NS) == "RCPTCHZZ"
    assert grp.findtext("c:AddtlInf", namespaces=NS) == "EXPORT/1"
    fin = stmt_of(root).find("c:Acct/c:Svcr/c:FinInstnId", NS)
    assert fin.findtext("c:BICFI", namespaces=NS) == "SVCRCHZZ"
    assert fin.findtext("c:Nm", namespaces=NS) == "Example Bank AG"
    assert fin.findtext("c:Othr/c:Id", namespaces=NS) == "CHE-123.456.789"
    assert fin.findtext("c:Othr/c:Issr", namespaces=NS) == "UID"


def test_balance_block():
    bal = stmt_of(parse_output(write_statement(_statement()))).find("c:Bal", NS)

    assert _children(bal) == ["Tp", "Amt", "CdtDbtInd", "Dt"]
    assert bal.findtext("c:Tp/c:CdOrPrtry/c:Cd", namespaces=NS) == "CLBD"
    amt = bal.find("c:Amt", NS)
    assert (amt.text, amt.get("Ccy")) == ("1234.56", "EUR")
    assert bal.findtext("c:CdtDbtInd", namespaces=NS) == "CRDT"
    assert bal.findtext("c:Dt/c:Dt", namespaces=NS) == "2025-06-20"


def test_entry_block_with_details():
    model = _statement()
    ntry = stmt_of(parse_output(write_statement(model))).find("c:Ntry", NS)

    assert _children(ntry) == [
        "Amt",
        "CdtDbtInd",
        "Sts",
        "BookgDt",
        "ValDt",
        "AcctSvcrRef",
        "BkTxCd",
        "NtryDtls",
        "AddtlNtryInf",
    ]
    amt = ntry.find("c:Amt", NS)
    assert (amt.text, amt.get("Ccy")) == ("50.00", "EUR")
    assert ntry.findtext("c:Sts/c:Cd", namespaces=NS) == "BOOK"
    assert ntry.findtext("c:BookgDt/c:Dt", namespaces=NS) == "2025-06-20"
    assert ntry.findtext("c:ValDt/c:Dt", namespaces=NS) == "2025-06-20"

    ref = ntry.findtext("c:AcctSvcrRef", namespaces=NS)
    assert re.fullmatch(r"TX\d{10}", ref)
    assert ref == generate_reference(model.transactions[0])

    assert ntry.findtext("c:BkTxCd/c:Domn/c:Cd", namespaces=NS) == "PMNT"
    assert ntry.findtext("c:BkTxCd/c:Domn/c:Fmly/c:Cd", namespaces=NS) == "CCRD"
    assert ntry.findtext("c:BkTxCd/c:Domn/c:Fmly/c:SubFmlyCd", namespaces=NS) == "POSD"
    assert ntry.findtext("c:BkTxCd/c:Prtry/c:Cd", namespaces=NS) == "CARD001"

    tx = ntry.find("c:NtryDtls/c:TxDtls", NS)
    assert _children(tx) == ["Refs", "Amt", "CdtDbtInd", "RmtInf"]
    assert tx.findtext("c:Refs/c:AcctSvcrRef", namespaces=NS) == ref
    assert tx.find("c:Amt", NS).get("Ccy") == "EUR"
    assert tx.findtext("c:Amt", namespaces=NS) == "50.00"
    assert tx.findtext("c:CdtDbtInd", namespaces=NS) == "DBIT"
    assert tx.findtext("c:RmtInf/c:Ustrd", namespaces=NS) == "Coffee shop"
    assert ntry.findtext("c:AddtlNtryInf", namespaces=NS) == "Coffee   shop"


def test_entry_without_additional_info_has_no_details_block():
    model = _statement()
    model.transactions[0].additional_info = ""
    model.transactions[0].bank_tx_code = "SCT-INBOUND"
    ntry = stmt_of(parse_output(write_statement(model))).find("c:Ntry", NS)

    assert ntry.find("c:NtryDtls", NS) is None
    assert ntry.find("c:AddtlNtryInf", NS) is not None
    assert ntry.findtext("c:AddtlNtryInf", namespaces=NS) == ""
    assert ntry.findtext("c:BkTxCd/c:Domn/c:Fmly/c:Cd", namespaces=NS) == "ICDT"
    assert ntry.findtext("c:BkTxCd/c:Domn/c:Fmly/c:SubFmlyCd", namespaces=NS) == "ESCT"


def test_empty_fields_become_empty_elements():
    root = parse_output(write_statement(Statement(transactions=[Transaction()])))
    stmt = stmt_of(root)

    assert stmt.findtext("c:Id", namespaces=NS) == ""
    assert stmt.findtext("c:CreDtTm", namespaces=NS) == ""
    assert stmt.findtext("c:Acct/c:Id/c:IBAN", namespaces=NS) == ""
    ntry = stmt.find("c:Ntry", NS)
    assert ntry.find("c:Amt", NS).get("Ccy") == ""
    assert ntry.findtext("c:BookgDt/c:Dt", namespaces=NS) == ""


def test_empty_collections_emit_skeleton_only():
    root = parse_output(write_statement(_statement(balances=[], transactions=[])))
    stmt = stmt_of(root)

    assert root.find("c:BkToCstmrStmt/c:GrpHdr", NS) is not None
    assert stmt.find("c:Bal", NS) is None
    assert stmt.find("c:Ntry", NS) is None
    assert _children(stmt) == ["Id", "ElctrncSeqNb", "CreDtTm", "FrToDt", "Acct"]


def test_writer_does_not_mutate_statement():
    model = _statement()
    before = repr(model)
    write_statement(model)
    assert repr(model) == before


def test_unparseable_timestamps_pass_through():
    stmt = stmt_of(parse_output(write_statement(_statement(from_datetime="start of day"))))
    assert stmt.findtext("c:FrToDt/c:FrDtTm", namespaces=NS) == "start of day"
