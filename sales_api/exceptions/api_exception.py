"""API exception module."""
from typing import Optional

from fastapi import HTTPException, status


class APIException(HTTPException):
    """Base API exception class.

    ``diagnostic`` carries the underlying error text; it is only sent to the
    client when the application runs in debug mode.
    """

    def __init__(
        self,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail: str = "An unexpected error occurred",
        diagnostic: Optional[str] = None,
    ):
        super().__init__(status_code=status_code, detail=detail)
        self.diagnostic = diagnostic


class StorageError(APIException):
    """A query against the sales store failed."""

    def __init__(self, detail: str = "Failed to fetch sales data", diagnostic: Optional[str] = None):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            diagnostic=diagnostic,
        )
