"""Placeholder values for target-schema fields the source never carries.

CAMT.053.001.08 makes a message recipient and an account servicer mandatory;
CAMT.053.001.10 statements as produced upstream do not include them. The
writer fills these with the synthetic defaults below. Deployments override
individual values through ``CAMT_CONVERT_<FIELD>`` environment variables
(for example ``CAMT_CONVERT_SERVICER_NAME``), typically from a local ``.env``
loaded by the CLI.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, field_validator

ENV_PREFIX = "CAMT_CONVERT_"


class PlaceholderSettings(BaseModel):
    """Synthetic header and servicer values emitted by the writer."""

    model_config = ConfigDict(strict=True, extra="forbid", frozen=True, str_strip_whitespace=True)

    # GrpHdr/MsgRcpt/Id/OrgId/AnyBIC
    recipient_bic: str = "XXXXXXXX"
    # GrpHdr/AddtlInf
    additional_info: str = "SPS/2.1"
    # Stmt/Acct/Svcr/FinInstnId
    servicer_bic: str = "XXXXXXXX"
    servicer_name: str = "Bank"
    servicer_other_id: str = "XXX-000.000.000"
    servicer_other_issuer: str = "ID"

    @field_validator("*")
    @classmethod
    def _non_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("placeholder values must be non-empty")
        return v


def load_settings(env: Mapping[str, str] | None = None) -> PlaceholderSettings:
    """Build settings from defaults overlaid with ``CAMT_CONVERT_*`` variables.

    ``env`` defaults to ``os.environ``. Unset or blank variables keep the
    default value.
    """

    source = os.environ if env is None else env
    overrides: dict[str, str] = {}
    for name in PlaceholderSettings.model_fields:
        raw = source.get(f"{ENV_PREFIX}{name.upper()}")
        if raw is not None and raw.strip():
            overrides[name] = raw
    return PlaceholderSettings(**overrides)


__all__ = ["ENV_PREFIX", "PlaceholderSettings", "load_settings"]
