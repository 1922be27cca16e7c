"""Tests for the Google Sheet payment mirror, using an in-memory worksheet."""

import logging
from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest

from rent_ledger.core import google_sheets
from rent_ledger.core.config import settings
from rent_ledger.core.logging import get_log_level


class FakeWorksheet:
    def __init__(self):
        self.rows = []

    def row_values(self, n):
        return self.rows[n - 1] if len(self.rows) >= n else []

    def col_values(self, n):
        return [row[n - 1] for row in self.rows]

    def append_row(self, row, value_input_option=None):
        self.rows.append(list(row))

    def append_rows(self, rows, value_input_option=None):
        self.rows.extend(list(r) for r in rows)

    def range(self, r1, c1, r2, c2):
        return [SimpleNamespace(row=r1, col=c, value=None) for c in range(c1, c2 + 1)]

    def update_cells(self, cells, value_input_option=None):
        for cell in cells:
            self.rows[cell.row - 1][cell.col - 1] = cell.value

    def delete_rows(self, n):
        del self.rows[n - 1]


def _payment(**overrides):
    data = dict(
        id="p1", tenant_id="t1", tenant_name="Ravi", room="101", month="April", year=2024,
        rent=Decimal("5000"), deposit=Decimal("0"), maintenance=Decimal("0"),
        method="Cash", status="paid", paid_on=date(2024, 4, 3),
    )
    data.update(overrides)
    return SimpleNamespace(**data)


@pytest.fixture
def sheet(monkeypatch):
    worksheet = FakeWorksheet()
    monkeypatch.setattr(settings, "GOOGLE_SHEETS_ENABLED", True)
    monkeypatch.setattr(settings, "GOOGLE_SHEETS_SPREADSHEET_ID", "sheet-id")
    monkeypatch.setattr(google_sheets, "_get_worksheet", lambda: worksheet)
    return worksheet


class TestSheetMirror:
    def test_row_layout(self):
        row = google_sheets.payment_to_row(_payment(paid_on=None, tenant_name=None))
        assert len(row) == len(google_sheets.PAYMENT_SHEET_HEADERS)
        assert row[2] == ""
        assert row[6] == "5000"
        assert row[-1] == ""

    def test_append_writes_headers_once(self, sheet):
        google_sheets.append_payment_rows([_payment()])
        google_sheets.append_payment_rows([_payment(id="p2", month="May")])
        assert sheet.rows[0] == google_sheets.PAYMENT_SHEET_HEADERS
        assert [r[0] for r in sheet.rows[1:]] == ["p1", "p2"]

    def test_update_overwrites_row(self, sheet):
        google_sheets.append_payment_rows([_payment(status="pending")])
        google_sheets.update_payment_row(_payment(status="paid"))
        assert sheet.rows[1][10] == "paid"
        assert len(sheet.rows) == 2

    def test_update_missing_row_appends(self, sheet):
        google_sheets.update_payment_row(_payment(id="p9"))
        assert sheet.rows[-1][0] == "p9"

    def test_delete_row(self, sheet):
        google_sheets.append_payment_rows([_payment(), _payment(id="p2")])
        google_sheets.delete_payment_row("p1")
        assert [r[0] for r in sheet.rows[1:]] == ["p2"]

    def test_sheet_errors_are_swallowed(self, monkeypatch, caplog):
        monkeypatch.setattr(settings, "GOOGLE_SHEETS_ENABLED", True)
        monkeypatch.setattr(settings, "GOOGLE_SHEETS_SPREADSHEET_ID", "sheet-id")

        def broken():
            raise RuntimeError("quota exceeded")

        monkeypatch.setattr(google_sheets, "_get_worksheet", broken)
        with caplog.at_level(logging.ERROR):
            google_sheets.append_payment_rows([_payment()])
        assert "Failed to append payments" in caplog.text

    def test_disabled_mirror_does_nothing(self, monkeypatch):
        monkeypatch.setattr(settings, "GOOGLE_SHEETS_ENABLED", False)

        def unexpected():
            raise AssertionError("sheet should not be opened")

        monkeypatch.setattr(google_sheets, "_get_worksheet", unexpected)
        google_sheets.append_payment_rows([_payment()])
        google_sheets.delete_payment_row("p1")


class TestLogLevel:
    def test_level_names(self):
        assert get_log_level("debug") == logging.DEBUG
        assert get_log_level(None) == logging.INFO
        assert get_log_level("chatty") == logging.INFO
