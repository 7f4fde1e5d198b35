"""Application use-cases."""

from .invoice_service import IssuedInvoice, InvoiceService, RegistrationNotFoundError

__all__ = ["IssuedInvoice", "InvoiceService", "RegistrationNotFoundError"]
