"""Ledger error taxonomy and the structured payload they render to."""

from typing import Any, Dict

from fastapi import status


class LedgerError(Exception):
    """Base error; carries a machine code and the HTTP status it maps to."""

    def __init__(self, message: str, code: str, http_status: int = 400):
        self.message = message
        self.code = code
        self.http_status = http_status
        super().__init__(message)


class ValidationError(LedgerError):
    """Missing or malformed input."""

    def __init__(self, message: str = "Invalid request"):
        super().__init__(message, "validation_error", status.HTTP_400_BAD_REQUEST)


class AuthenticationError(LedgerError):
    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message, "unauthorized", status.HTTP_401_UNAUTHORIZED)


class NotFoundError(LedgerError):
    def __init__(self, message: str = "Not found"):
        super().__init__(message, "not_found", status.HTTP_404_NOT_FOUND)


class ConflictError(LedgerError):
    """The write would duplicate an existing record."""

    def __init__(self, message: str = "Conflict"):
        super().__init__(message, "conflict", status.HTTP_409_CONFLICT)


class StoreError(LedgerError):
    """The database was unavailable or rejected a write."""

    def __init__(self, message: str = "Store unavailable"):
        super().__init__(message, "store_error", status.HTTP_500_INTERNAL_SERVER_ERROR)


def error_response(error: LedgerError) -> Dict[str, Any]:
    return {
        "error": {
            "code": error.code,
            "message": error.message,
        }
    }
