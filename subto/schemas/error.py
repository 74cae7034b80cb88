"""
Error response schemas for API documentation and consistent error formatting.
"""

from pydantic import BaseModel, Field
from typing import List, Optional, Any, Dict


class ErrorDetail(BaseModel):
    """Schema for individual error detail."""

    field: Optional[str] = Field(None, description="Field name that caused the error", examples=["asking_price"])
    message: str = Field(..., description="Human-readable error message", examples=["Asking price is required"])
    type: Optional[str] = Field(None, description="Error type identifier", examples=["greater_than"])
    input: Optional[Any] = Field(None, description="Input value that caused the error")


class ErrorResponse(BaseModel):
    """Schema for standardized error responses."""

    code: str = Field(..., description="Error code identifier", examples=["VALIDATION_ERROR"])
    message: str = Field(..., description="Human-readable error message", examples=["Request validation failed"])
    timestamp: str = Field(..., description="Error timestamp in ISO format", examples=["2024-01-01T00:00:00Z"])
    request_id: Optional[str] = Field(None, description="Request identifier for tracking", examples=["abc12345"])
    details: Optional[List[ErrorDetail]] = Field(None, description="Field-level details for validation errors")


class APIErrorResponse(BaseModel):
    """Schema for API error response wrapper."""

    error: ErrorResponse


def _example(code: str, message: str) -> Dict[str, Any]:
    return {
        "error": {
            "code": code,
            "message": message,
            "timestamp": "2024-01-01T00:00:00Z",
            "request_id": "abc12345",
        }
    }


COMMON_ERROR_RESPONSES = {
    400: {
        "description": "Bad Request - Invalid request parameters",
        "model": APIErrorResponse,
        "content": {"application/json": {"example": _example("BAD_REQUEST", "You cannot send a message to yourself")}},
    },
    401: {
        "description": "Unauthorized - Authentication required",
        "model": APIErrorResponse,
        "content": {"application/json": {"example": _example("UNAUTHORIZED", "Authentication required")}},
    },
    403: {
        "description": "Forbidden - Access denied",
        "model": APIErrorResponse,
        "content": {"application/json": {"example": _example("FORBIDDEN", "You don't own this property")}},
    },
    404: {
        "description": "Not Found - Resource not found",
        "model": APIErrorResponse,
        "content": {"application/json": {"example": _example("NOT_FOUND", "Property not found with ID: 123e4567-e89b-12d3-a456-426614174000")}},
    },
    409: {
        "description": "Conflict - Resource conflict",
        "model": APIErrorResponse,
        "content": {"application/json": {"example": _example("CONFLICT", "Favorite with identifier '123e4567-e89b-12d3-a456-426614174000' already exists")}},
    },
    422: {
        "description": "Unprocessable Entity - Validation error",
        "model": APIErrorResponse,
        "content": {
            "application/json": {
                "example": {
                    "error": {
                        "code": "VALIDATION_ERROR",
                        "message": "Listing is incomplete",
                        "timestamp": "2024-01-01T00:00:00Z",
                        "request_id": "abc12345",
                        "details": [
                            {"field": "asking_price", "message": "Asking price is required"},
                            {"field": "lender", "message": "Lender is required"},
                        ],
                    }
                }
            }
        },
    },
    500: {
        "description": "Internal Server Error - Unexpected error",
        "model": APIErrorResponse,
        "content": {"application/json": {"example": _example("INTERNAL_SERVER_ERROR", "An unexpected error occurred. Please try again later.")}},
    },
    502: {
        "description": "Bad Gateway - Supabase returned an unexpected error",
        "model": APIErrorResponse,
        "content": {"application/json": {"example": _example("UPSTREAM_ERROR", "Supabase auth request failed: status 500")}},
    },
    503: {
        "description": "Service Unavailable - Service temporarily unavailable",
        "model": APIErrorResponse,
        "content": {"application/json": {"example": _example("SERVICE_UNAVAILABLE", "Database unavailable")}},
    },
}


def get_error_responses(*status_codes: int) -> Dict[int, Dict[str, Any]]:
    """
    Get error response schemas for specific status codes.

    Args:
        status_codes: HTTP status codes to include

    Returns:
        Dictionary of error response schemas
    """
    return {
        code: COMMON_ERROR_RESPONSES[code]
        for code in status_codes
        if code in COMMON_ERROR_RESPONSES
    }


def get_crud_error_responses() -> Dict[int, Dict[str, Any]]:
    """Get error response schemas for authenticated CRUD operations."""
    return get_error_responses(400, 401, 403, 404, 409, 422, 500)
