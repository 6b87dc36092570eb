"""
Standardized API response models and utilities.
Every endpoint answers with the same envelope, success or failure.
"""

from http import HTTPStatus
from typing import Generic, TypeVar, Optional, Any
from pydantic import BaseModel, Field

T = TypeVar("T")


class Pagination(BaseModel):
    """Pagination block of list responses"""

    total: int = Field(..., description="Number of meals in the store, unfiltered")


class APIResponse(BaseModel, Generic[T]):
    """Generic API response wrapper"""

    message: str = Field(..., description="HTTP reason phrase")
    data: Optional[T] = Field(None, description="Response payload")
    pagination: Optional[Pagination] = Field(None, description="Present on lists")


class ErrorResponse(BaseModel):
    """Standardized error response"""

    error: str = Field(..., description="What went wrong")
    message: str = Field(..., description="HTTP reason phrase")


def success_response(
    data: Any = None, status_code: int = HTTPStatus.OK, total: Optional[int] = None
) -> dict:
    """Create a standardized success response"""
    body = {
        "message": HTTPStatus(status_code).phrase,
        "data": data,
    }
    if total is not None:
        body["pagination"] = {"total": total}
    return body


def error_response(error: str, status_code: int) -> dict:
    """Create a standardized error response"""
    return {
        "error": error,
        "message": HTTPStatus(status_code).phrase,
    }
