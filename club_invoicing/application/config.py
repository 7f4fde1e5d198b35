"""Settings for invoice computation and application wiring."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from dotenv import load_dotenv

from club_invoicing.domain.invoices import (
    DEFAULT_CLUB_NAME,
    DEFAULT_SETTLEMENT_LAST_FOUR,
    DEFAULT_SETTLEMENT_METHOD,
)
from club_invoicing.domain.totals import DEFAULT_GST_RATE, DEFAULT_QST_RATE
from club_invoicing.infrastructure.storage.config import StorageSettings


def _rate(data: Mapping[str, str], name: str, default: float) -> float:
    raw = (data.get(name) or "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a decimal rate such as 0.05, got '{raw}'.") from exc
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got '{raw}'.")
    return value


@dataclass(slots=True, frozen=True)
class InvoiceSettings:
    """Tax rates and display defaults applied to assembled invoices."""

    gst_rate: float = DEFAULT_GST_RATE
    qst_rate: float = DEFAULT_QST_RATE
    default_club_name: str = DEFAULT_CLUB_NAME
    settlement_method: str = DEFAULT_SETTLEMENT_METHOD
    settlement_last_four: str = DEFAULT_SETTLEMENT_LAST_FOUR

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "InvoiceSettings":
        """Build settings instance from environment variables."""

        data = environ if environ is not None else os.environ
        return cls(
            gst_rate=_rate(data, "INVOICE_GST_RATE", DEFAULT_GST_RATE),
            qst_rate=_rate(data, "INVOICE_QST_RATE", DEFAULT_QST_RATE),
            default_club_name=(data.get("INVOICE_DEFAULT_CLUB_NAME") or "").strip() or DEFAULT_CLUB_NAME,
            settlement_method=(data.get("INVOICE_SETTLEMENT_METHOD") or "").strip()
            or DEFAULT_SETTLEMENT_METHOD,
            settlement_last_four=(data.get("INVOICE_SETTLEMENT_LAST_FOUR") or "").strip()
            or DEFAULT_SETTLEMENT_LAST_FOUR,
        )


@dataclass(slots=True, frozen=True)
class AppSettings:
    storage: StorageSettings
    invoices: InvoiceSettings


def load_settings() -> AppSettings:
    """Load ``.env`` (if present) and read all settings from the environment."""

    load_dotenv()
    return AppSettings(storage=StorageSettings.from_env(), invoices=InvoiceSettings.from_env())
