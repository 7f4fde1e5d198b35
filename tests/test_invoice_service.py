"""Tests for the invoice use-case over an injected storage facade."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

import club_invoicing.application.services.invoice_service as invoice_service_module
from club_invoicing.application.config import InvoiceSettings
from club_invoicing.application.services import InvoiceService, RegistrationNotFoundError
from club_invoicing.domain.invoices import InvoiceScope
from club_invoicing.domain.models import ClubData, InvoiceStatus, PricingTier
from tests.factories import EventFactory, RegistrationFactory
from tests.fakes import InMemoryStorage

NOW = datetime(2025, 6, 1, tzinfo=timezone.utc)


@pytest.fixture
def storage(club_data: ClubData) -> InMemoryStorage:
    return InMemoryStorage(clubs={"club-001": club_data}, events=[EventFactory()])


def _service(storage: InMemoryStorage, settings: InvoiceSettings | None = None) -> InvoiceService:
    return InvoiceService(storage, settings, clock=lambda: NOW)


@pytest.mark.asyncio()
async def test_build_invoice_uses_stored_club_and_event(storage: InMemoryStorage) -> None:
    issued = await _service(storage).build_invoice("club-001", "reg-1")

    assert issued.registration.id == "reg-1"
    assert issued.invoice.club_name == "Starlight Cheer"
    assert issued.totals.line_items[0].tier is PricingTier.EARLY_BIRD
    assert issued.totals.total == pytest.approx(459.9)
    assert storage.clubs.calls == ["club-001"]
    assert storage.events.calls == ["evt-1"]


@pytest.mark.asyncio()
async def test_settings_drive_taxes_and_club_name(club_data: ClubData) -> None:
    unnamed = ClubData(
        teams=club_data.teams,
        rosters=club_data.rosters,
        registered_teams=club_data.registered_teams,
        registrations=club_data.registrations,
    )
    storage = InMemoryStorage(clubs={"club-001": unnamed}, events=[EventFactory()])
    settings = InvoiceSettings(gst_rate=0.0, qst_rate=0.0, default_club_name="Fallback Club")

    issued = await _service(storage, settings).build_invoice("club-001", "reg-1")

    assert issued.invoice.club_name == "Fallback Club"
    assert issued.totals.total == pytest.approx(400.0)


@pytest.mark.asyncio()
async def test_build_invoice_passes_identifier_and_version(storage: InMemoryStorage) -> None:
    issued = await _service(storage).build_invoice(
        "club-001", "reg-1", invoice_id="INV-000042", order_version=2
    )

    assert issued.invoice.invoice_number == "000042-002"


@pytest.mark.asyncio()
async def test_unknown_registration_raises_lookup_error(storage: InMemoryStorage) -> None:
    with pytest.raises(RegistrationNotFoundError) as exc_info:
        await _service(storage).build_invoice("club-001", "reg-404")

    assert isinstance(exc_info.value, LookupError)
    assert exc_info.value.registration_id == "reg-404"
    assert exc_info.value.club_owner_id == "club-001"


@pytest.mark.asyncio()
async def test_missing_event_prices_from_stored_total() -> None:
    registration = RegistrationFactory(id="reg-x", event_id="evt-gone", invoice_total="$240", athletes=3)
    storage = InMemoryStorage(clubs={"club-001": ClubData(registrations=(registration,))})

    issued = await _service(storage).build_invoice("club-001", "reg-x")

    assert issued.totals.subtotal == pytest.approx(240.0)
    assert issued.totals.line_items[0].tier is PricingTier.REGULAR


@pytest.mark.asyncio()
async def test_list_invoices_returns_one_per_registration(club_data: ClubData) -> None:
    paid = RegistrationFactory(
        id="reg-2",
        event_id="evt-2",
        athletes=2,
        invoice_total=100,
        status="paid",
        paid_at=datetime(2025, 3, 1, tzinfo=timezone.utc),
    )
    club = ClubData(
        teams=club_data.teams,
        rosters=club_data.rosters,
        registered_teams=club_data.registered_teams,
        registrations=(*club_data.registrations, paid),
        club_name=club_data.club_name,
    )
    storage = InMemoryStorage(clubs={"club-001": club}, events=[EventFactory()])

    issued = await _service(storage).list_invoices("club-001", scope=InvoiceScope.REGISTRATION)

    assert [item.registration.id for item in issued] == ["reg-1", "reg-2"]
    assert issued[1].invoice.status is InvoiceStatus.PAID
    assert issued[1].totals.balance_due == pytest.approx(0.0)
    assert storage.events.calls == ["evt-1", "evt-2"]


@pytest.mark.asyncio()
async def test_assembly_failure_is_reported_and_reraised(storage: InMemoryStorage, monkeypatch) -> None:
    reported: list[tuple[BaseException, str | None]] = []

    def _explode(*args, **kwargs):
        raise RuntimeError("corrupt snapshot")

    monkeypatch.setattr(invoice_service_module, "build_invoice_data", _explode)
    monkeypatch.setattr(
        invoice_service_module,
        "capture_exception",
        lambda exc, *, club_owner_id=None: reported.append((exc, club_owner_id)),
    )

    with pytest.raises(RuntimeError, match="corrupt snapshot"):
        await _service(storage).build_invoice("club-001", "reg-1")

    assert len(reported) == 1
    assert reported[0][1] == "club-001"
