from camt_convert.classification import (
    CARD_PRESENT,
    CREDIT_TRANSFER,
    classify_bank_code,
)


def test_card_codes_are_card_present_point_of_sale():
    family = classify_bank_code("CARD-POS-01")
    assert (family.domain, family.family, family.sub_family) == ("PMNT", "CCRD", "POSD")
    assert classify_bank_code("CARD001") is CARD_PRESENT


def test_other_codes_are_credit_transfers():
    family = classify_bank_code("SCT-INBOUND")
    assert (family.domain, family.family, family.sub_family) == ("PMNT", "ICDT", "ESCT")


def test_prefix_match_is_case_sensitive_and_anchored():
    assert classify_bank_code("card-01") is CREDIT_TRANSFER
    assert classify_bank_code("XCARD") is CREDIT_TRANSFER
    assert classify_bank_code("") is CREDIT_TRANSFER
