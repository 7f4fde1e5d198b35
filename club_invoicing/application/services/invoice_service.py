"""Invoice use-case: load club and event data, then run the invoice engine."""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from club_invoicing.application.config import InvoiceSettings
from club_invoicing.application.ports.storage import Storage
from club_invoicing.domain.dates import utc_now
from club_invoicing.domain.invoices import InvoiceScope, build_invoice_data
from club_invoicing.domain.models import ClubData, Event, InvoiceData, InvoiceTotals, Registration
from club_invoicing.domain.totals import calculate_invoice_totals
from utils.logger import get_logger
from utils.sentry import capture_exception

logger = get_logger(__name__)


class RegistrationNotFoundError(LookupError):
    """Raised when a club has no registration with the requested id."""

    def __init__(self, club_owner_id: str, registration_id: str) -> None:
        super().__init__(f"Registration '{registration_id}' not found for club '{club_owner_id}'")
        self.club_owner_id = club_owner_id
        self.registration_id = registration_id


@dataclass(slots=True, frozen=True)
class IssuedInvoice:
    """Invoice together with the registration it bills and its totals."""

    registration: Registration
    invoice: InvoiceData
    totals: InvoiceTotals


class InvoiceService:
    """Builds invoices for stored registrations."""

    def __init__(
        self,
        storage: Storage,
        settings: InvoiceSettings | None = None,
        *,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._storage = storage
        self._settings = settings or InvoiceSettings()
        self._clock = clock

    async def build_invoice(
        self,
        club_owner_id: str,
        registration_id: str,
        *,
        invoice_id: Optional[str] = None,
        order_version: int = 1,
        scope: InvoiceScope = InvoiceScope.EVENT,
    ) -> IssuedInvoice:
        """Return the invoice of one registration.

        Raises:
            RegistrationNotFoundError: If the club has no such registration.
        """

        club_data = await self._storage.clubs.get_club_data(club_owner_id)
        registration = club_data.find_registration(registration_id)
        if registration is None:
            logger.warning(
                "Invoice requested for unknown registration",
                extra={"club_owner_id": club_owner_id, "registration_id": registration_id},
            )
            raise RegistrationNotFoundError(club_owner_id, registration_id)
        event = await self._storage.events.get(registration.event_id)
        return self._issue(
            club_owner_id,
            registration,
            club_data,
            event,
            invoice_id=invoice_id,
            order_version=order_version,
            scope=scope,
        )

    async def list_invoices(
        self,
        club_owner_id: str,
        *,
        scope: InvoiceScope = InvoiceScope.EVENT,
    ) -> tuple[IssuedInvoice, ...]:
        """Return one invoice per registration of the club, in stored order."""

        club_data = await self._storage.clubs.get_club_data(club_owner_id)
        events: dict[str, Optional[Event]] = {}
        issued: list[IssuedInvoice] = []
        for registration in club_data.registrations:
            if registration.event_id not in events:
                events[registration.event_id] = await self._storage.events.get(registration.event_id)
            issued.append(
                self._issue(
                    club_owner_id,
                    registration,
                    club_data,
                    events[registration.event_id],
                    scope=scope,
                )
            )
        return tuple(issued)

    def _issue(
        self,
        club_owner_id: str,
        registration: Registration,
        club_data: ClubData,
        event: Optional[Event],
        *,
        invoice_id: Optional[str] = None,
        order_version: int = 1,
        scope: InvoiceScope = InvoiceScope.EVENT,
    ) -> IssuedInvoice:
        started = time.perf_counter()
        now = self._clock()
        try:
            invoice = build_invoice_data(
                registration,
                club_data,
                event,
                club_name=club_data.club_name or self._settings.default_club_name,
                invoice_id=invoice_id,
                order_version=order_version,
                scope=scope,
                gst_rate=self._settings.gst_rate,
                qst_rate=self._settings.qst_rate,
                settlement_method=self._settings.settlement_method,
                settlement_last_four=self._settings.settlement_last_four,
                now=now,
            )
            totals = calculate_invoice_totals(invoice, now=now)
        except Exception as exc:
            logger.exception(
                "Invoice assembly failed",
                extra={"club_owner_id": club_owner_id, "registration_id": registration.id},
            )
            capture_exception(exc, club_owner_id=club_owner_id)
            raise

        if event is None:
            logger.info(
                "Event %s not found; invoice priced from stored totals",
                registration.event_id,
                extra={"club_owner_id": club_owner_id, "registration_id": registration.id},
            )
        logger.info(
            "Invoice assembled",
            extra={
                "club_owner_id": club_owner_id,
                "registration_id": registration.id,
                "invoice_number": invoice.invoice_number,
                "latency_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        )
        return IssuedInvoice(registration=registration, invoice=invoice, totals=totals)
