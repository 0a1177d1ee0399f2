"""
Shared response schemas - pagination, errors etc
"""

import math
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PaginationInfo(BaseModel):
    """Page metadata returned next to every note list."""

    model_config = ConfigDict(populate_by_name=True)

    current_page: int = Field(alias="currentPage")
    total_pages: int = Field(alias="totalPages")
    total_notes: int = Field(alias="totalNotes")
    has_next: bool = Field(alias="hasNext")
    has_prev: bool = Field(alias="hasPrev")

    @classmethod
    def create(cls, total: int, page: int, per_page: int) -> "PaginationInfo":
        # calculate page info
        return cls(
            current_page=page,
            total_pages=math.ceil(total / per_page) if per_page else 0,
            total_notes=total,
            has_next=page * per_page < total,
            has_prev=page > 1,
        )


class FieldError(BaseModel):
    """A single field-level validation problem."""

    field: str = Field(description="Dotted path of the offending field")
    message: str = Field(description="What is wrong with it")


class ErrorResponse(BaseModel):
    """Standard error response schema."""

    message: str = Field(description="Human-readable error message")
    errors: Optional[List[FieldError]] = Field(default=None, description="Field-level errors")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "message": "Validation failed",
                "errors": [{"field": "title", "message": "String should have at most 100 characters"}],
            }
        }
    )


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str


class HealthCheckResponse(BaseModel):
    """Health check response schema."""

    status: str = Field(description="Overall health status")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    version: str = Field(description="Application version")
    checks: Dict[str, Dict[str, Any]] = Field(description="Individual component health checks")
