"""Storage backend selection read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Mapping


class StorageBackend(str, Enum):
    """Backends able to serve club and event data."""

    SHEETS = "sheets"
    POSTGRES = "postgres"


@dataclass(slots=True)
class StorageSettings:
    """Connection settings for the configured storage backend."""

    backend: StorageBackend = StorageBackend.SHEETS
    spreadsheet_key: str | None = None
    credentials_path: Path = Path("creds.json")
    db_url: str | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "StorageSettings":
        """Read ``STORAGE_BACKEND``, ``SPREADSHEET_KEY``, ``DB_URL`` and credentials."""

        data = environ if environ is not None else os.environ
        backend_raw = (data.get("STORAGE_BACKEND") or StorageBackend.SHEETS.value).strip().lower()
        try:
            backend = StorageBackend(backend_raw)
        except ValueError as exc:
            raise ValueError(
                f"Unsupported STORAGE_BACKEND '{backend_raw}'. Use 'sheets' or 'postgres'."
            ) from exc

        credentials_raw = data.get("GOOGLE_APPLICATION_CREDENTIALS") or data.get("SHEETS_CREDENTIALS")
        return cls(
            backend=backend,
            spreadsheet_key=data.get("SPREADSHEET_KEY") or None,
            credentials_path=Path(credentials_raw) if credentials_raw else Path("creds.json"),
            db_url=data.get("DB_URL") or None,
        )

    def require_spreadsheet_key(self) -> str:
        if not self.spreadsheet_key:
            raise RuntimeError("SPREADSHEET_KEY must be configured to read club data from Google Sheets.")
        return self.spreadsheet_key

    def require_db_url(self) -> str:
        if not self.db_url:
            raise RuntimeError("DB_URL must be configured to read club data from Postgres.")
        return self.db_url
