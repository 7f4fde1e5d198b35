"""In-memory gspread stand-ins for storage contract tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

import gspread


@dataclass
class WorksheetFake:
    """Worksheet holding header-keyed rows as returned by ``get_all_records``."""

    records: list[Mapping[str, Any]] = field(default_factory=list)
    reads: int = 0

    def get_all_records(self) -> list[dict[str, Any]]:
        self.reads += 1
        return [dict(record) for record in self.records]


@dataclass
class SpreadsheetFake:
    """Collection of worksheets addressable by title."""

    worksheets: dict[str, WorksheetFake] = field(default_factory=dict)
    id: str = "fake-spreadsheet"

    def worksheet(self, title: str) -> WorksheetFake:
        try:
            return self.worksheets[title]
        except KeyError as exc:
            raise gspread.WorksheetNotFound(title) from exc


class SheetsClientFake:
    """Fake gspread client serving registered spreadsheets by key."""

    def __init__(self) -> None:
        self._spreadsheets: dict[str, SpreadsheetFake] = {}

    def register_spreadsheet(
        self,
        key: str,
        worksheets: Mapping[str, WorksheetFake | Iterable[Mapping[str, Any]]] | None = None,
    ) -> SpreadsheetFake:
        mapping = {
            name: sheet if isinstance(sheet, WorksheetFake) else WorksheetFake(records=list(sheet))
            for name, sheet in (worksheets or {}).items()
        }
        spreadsheet = SpreadsheetFake(worksheets=mapping, id=key)
        self._spreadsheets[key] = spreadsheet
        return spreadsheet

    def open_by_key(self, key: str) -> SpreadsheetFake:
        try:
            return self._spreadsheets[key]
        except KeyError as exc:
            raise gspread.SpreadsheetNotFound(f"Spreadsheet {key} is not registered") from exc
