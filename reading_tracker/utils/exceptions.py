"""Custom exceptions for the Reading Tracker API."""
from typing import List

from fastapi import HTTPException


class StorageError(Exception):
    """Raised by a key-value store backend when it cannot be reached."""

    def __init__(self, message: str = "Storage backend unavailable"):
        super().__init__(message)
        self.message = message


class NotFoundError(HTTPException):
    """Requested plan, reading or progress record does not exist."""
    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=404, detail=detail)


class ValidationError(HTTPException):
    """Input validation errors."""
    def __init__(self, detail: str = "Invalid input"):
        super().__init__(status_code=400, detail=detail)


class PlanValidationError(HTTPException):
    """Custom plan rejected; detail carries every violation at once."""
    def __init__(self, errors: List[str]):
        super().__init__(status_code=422, detail=errors)
        self.errors = errors
