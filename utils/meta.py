"""Metadata constants for the invoicing service."""

from __future__ import annotations

from typing import Final

SERVICE_VERSION: Final[str] = "0.1.0"
"""Current version used for telemetry and observability tags."""
