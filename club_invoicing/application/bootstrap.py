"""Wiring of settings, telemetry and storage into a ready invoice service."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from club_invoicing.application.config import AppSettings, load_settings
from club_invoicing.application.services import InvoiceService
from club_invoicing.infrastructure.storage import create_storage
from utils.logger import get_logger
from utils.sentry import init_sentry

logger = get_logger(__name__)


@asynccontextmanager
async def open_invoice_service(settings: Optional[AppSettings] = None) -> AsyncIterator[InvoiceService]:
    """Yield an :class:`InvoiceService` over the configured backend.

    Settings default to the environment (``.env`` included). The storage
    backend is closed when the context exits.
    """

    settings = settings or load_settings()
    if init_sentry():
        logger.info("Sentry successfully initialised")
    else:
        logger.info("Sentry DSN not provided; Sentry disabled")

    storage = await create_storage(settings.storage)
    logger.info("Storage backend '%s' ready", settings.storage.backend.value)
    try:
        yield InvoiceService(storage, settings.invoices)
    finally:
        await storage.close()
