"""Shared error models and HTTP error helpers for API routes."""

from fastapi import HTTPException, status
from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """Error detail structure."""

    code: str
    message: str
    details: dict | None = None


class ErrorResponse(BaseModel):
    """Error response wrapper."""

    error: ErrorDetail


def not_found(code: str, message: str, details: dict | None = None) -> HTTPException:
    """Build a 404 HTTPException with the standard error body."""
    error: dict = {"code": code, "message": message}
    if details is not None:
        error["details"] = details
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail={"error": error})
