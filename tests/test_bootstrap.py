"""Tests for storage selection and service wiring."""

from __future__ import annotations

import pytest

import club_invoicing.application.bootstrap as bootstrap_module
from club_invoicing.application.bootstrap import open_invoice_service
from club_invoicing.application.config import AppSettings, InvoiceSettings
from club_invoicing.domain.models import ClubData
from club_invoicing.infrastructure.storage import StorageBackend, StorageSettings, create_storage
from tests.factories import EventFactory
from tests.fakes import InMemoryStorage


@pytest.mark.asyncio()
async def test_create_storage_requires_spreadsheet_key() -> None:
    with pytest.raises(RuntimeError, match="SPREADSHEET_KEY"):
        await create_storage(StorageSettings(backend=StorageBackend.SHEETS))


@pytest.mark.asyncio()
async def test_create_storage_requires_db_url() -> None:
    with pytest.raises(RuntimeError, match="DB_URL"):
        await create_storage(StorageSettings(backend=StorageBackend.POSTGRES))


@pytest.mark.asyncio()
async def test_open_invoice_service_closes_storage(club_data: ClubData, monkeypatch) -> None:
    storage = InMemoryStorage(clubs={"club-001": club_data}, events=[EventFactory()])
    requested: list[StorageSettings] = []

    async def _fake_create_storage(settings: StorageSettings) -> InMemoryStorage:
        requested.append(settings)
        return storage

    monkeypatch.delenv("SENTRY_DSN", raising=False)
    monkeypatch.setattr(bootstrap_module, "create_storage", _fake_create_storage)
    settings = AppSettings(
        storage=StorageSettings(backend=StorageBackend.SHEETS, spreadsheet_key="sheet"),
        invoices=InvoiceSettings(),
    )

    async with open_invoice_service(settings) as service:
        issued = await service.build_invoice("club-001", "reg-1")
        assert not storage.closed

    assert storage.closed
    assert requested == [settings.storage]
    assert issued.invoice.club_name == "Starlight Cheer"
