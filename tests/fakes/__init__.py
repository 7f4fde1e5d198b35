"""In-memory fakes for external integrations used in tests."""

from .sheets import SheetsClientFake, WorksheetFake
from .storage import InMemoryStorage

__all__ = [
    "InMemoryStorage",
    "SheetsClientFake",
    "WorksheetFake",
]
