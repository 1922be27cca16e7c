"""Best-effort mirror of the payment ledger into a Google Sheet.

Disabled unless GOOGLE_SHEETS_ENABLED is set. Sheet errors are logged and
never affect the ledger write that triggered them.
"""
import logging
from pathlib import Path
from typing import Optional

import gspread
from google.oauth2.service_account import Credentials

from rent_ledger.core.config import settings

logger = logging.getLogger(__name__)

SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets",
    "https://www.googleapis.com/auth/drive",
]

PAYMENT_SHEET_HEADERS = [
    "Payment ID",
    "Tenant ID",
    "Tenant",
    "Room",
    "Month",
    "Year",
    "Rent",
    "Deposit",
    "Maintenance",
    "Method",
    "Status",
    "Paid On",
]


def _enabled() -> bool:
    return bool(settings.GOOGLE_SHEETS_ENABLED and settings.GOOGLE_SHEETS_SPREADSHEET_ID)


def _get_client() -> gspread.Client:
    """Build and return an authorised gspread client using the service-account JSON."""
    creds_path = Path(settings.GOOGLE_SHEETS_CREDENTIALS_FILE)
    if not creds_path.exists():
        raise FileNotFoundError(
            f"Google credentials file not found at {creds_path.resolve()}"
        )
    creds = Credentials.from_service_account_file(str(creds_path), scopes=SCOPES)
    return gspread.authorize(creds)


def _get_worksheet() -> gspread.Worksheet:
    client = _get_client()
    spreadsheet = client.open_by_key(settings.GOOGLE_SHEETS_SPREADSHEET_ID)
    return spreadsheet.worksheet(settings.GOOGLE_SHEETS_WORKSHEET_NAME)


def _ensure_headers(worksheet: gspread.Worksheet) -> None:
    existing = worksheet.row_values(1)
    if not existing:
        worksheet.append_row(PAYMENT_SHEET_HEADERS, value_input_option="USER_ENTERED")


def payment_to_row(payment) -> list:
    """Flatten a payment record into a list matching PAYMENT_SHEET_HEADERS."""
    return [
        payment.id,
        payment.tenant_id,
        payment.tenant_name or "",
        payment.room or "",
        payment.month,
        payment.year,
        str(payment.rent),
        str(payment.deposit),
        str(payment.maintenance),
        payment.method or "",
        payment.status or "",
        payment.paid_on.isoformat() if payment.paid_on else "",
    ]


def _find_row_by_payment_id(worksheet: gspread.Worksheet, payment_id: str) -> Optional[int]:
    """
    Search column A for the payment id.
    Returns the 1-based row number, or None if not found.
    """
    id_column = worksheet.col_values(1)
    for idx, value in enumerate(id_column):
        if str(value) == str(payment_id):
            return idx + 1
    return None


def append_payment_rows(payments) -> None:
    """Append payments (a submission and its due records) at the bottom of the sheet."""
    if not _enabled() or not payments:
        return
    try:
        worksheet = _get_worksheet()
        _ensure_headers(worksheet)
        worksheet.append_rows([payment_to_row(p) for p in payments], value_input_option="USER_ENTERED")
        logger.info("%d payment row(s) appended to Google Sheet", len(payments))
    except Exception:
        logger.exception("Failed to append payments to Google Sheet")


def update_payment_row(payment) -> None:
    """Overwrite the row of this payment, appending it when missing."""
    if not _enabled():
        return
    try:
        worksheet = _get_worksheet()
        row_number = _find_row_by_payment_id(worksheet, payment.id)
        if row_number is None:
            logger.warning("Payment %s not found in Google Sheet, appending instead", payment.id)
            _ensure_headers(worksheet)
            worksheet.append_row(payment_to_row(payment), value_input_option="USER_ENTERED")
            return

        num_cols = len(PAYMENT_SHEET_HEADERS)
        cell_range = worksheet.range(row_number, 1, row_number, num_cols)
        for cell, value in zip(cell_range, payment_to_row(payment)):
            cell.value = value
        worksheet.update_cells(cell_range, value_input_option="USER_ENTERED")
        logger.info("Payment %s updated in Google Sheet (row %s)", payment.id, row_number)
    except Exception:
        logger.exception("Failed to update payment %s in Google Sheet", payment.id)


def delete_payment_row(payment_id: str) -> None:
    if not _enabled():
        return
    try:
        worksheet = _get_worksheet()
        row_number = _find_row_by_payment_id(worksheet, payment_id)
        if row_number is None:
            logger.warning("Payment %s not found in Google Sheet, nothing to delete", payment_id)
            return

        worksheet.delete_rows(row_number)
        logger.info("Payment %s deleted from Google Sheet (row %s)", payment_id, row_number)
    except Exception:
        logger.exception("Failed to delete payment %s from Google Sheet", payment_id)
