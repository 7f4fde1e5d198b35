"""Ports define the contracts between application layer and adapters."""

from .repositories import ClubDataRepository, EventRepository
from .storage import Storage

__all__ = [
    "ClubDataRepository",
    "EventRepository",
    "Storage",
]
