import pytest
from pydantic import ValidationError

from camt_convert.settings import PlaceholderSettings, load_settings


def test_defaults():
    s = load_settings({})
    assert s == PlaceholderSettings()
    assert s.recipient_bic == "XXXXXXXX"
    assert s.servicer_bic == "XXXXXXXX"
    assert s.servicer_name == "Bank"
    assert s.servicer_other_id == "XXX-000.000.000"
    assert s.servicer_other_issuer == "ID"
    assert s.additional_info == "SPS/2.1"


def test_env_overrides_individual_fields():
    s = load_settings(
        {
            "CAMT_CONVERT_SERVICER_NAME": "  Example Bank AG ",
            "CAMT_CONVERT_RECIPIENT_BIC": "RCPTCHZZ",
            "CAMT_CONVERT_ADDITIONAL_INFO": "   ",
            "UNRELATED": "x",
        }
    )
    assert s.servicer_name == "Example Bank AG"
    assert s.recipient_bic == "RCPTCHZZ"
    # Blank values keep the default.
    assert s.additional_info == "SPS/2.1"


def test_reads_process_environment_by_default(monkeypatch):
    monkeypatch.setenv("CAMT_CONVERT_SERVICER_BIC", "SVCRCHZZ")
    assert load_settings().servicer_bic == "SVCRCHZZ"


def test_settings_are_frozen_and_validated():
    s = PlaceholderSettings()
    with pytest.raises(ValidationError):
        s.servicer_name = "Other"  # type: ignore[misc]
    with pytest.raises(ValidationError):
        PlaceholderSettings(servicer_name="   ")
    with pytest.raises(ValidationError):
        PlaceholderSettings(unknown_field="x")  # type: ignore[call-arg]
