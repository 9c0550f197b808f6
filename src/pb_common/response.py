"""Response envelopes.

Success bodies follow the frontend contract: list endpoints return either a
bare array or {"data": [...], "pagination": {...}}; single entities are bare
objects. Errors share one shape:
{
    "code": 4001,
    "error": "Food review not found: 7",
    "timestamp": "...",
    "request_id": "..."
}
"""

import math
import uuid
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    code: int
    error: str
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    request_id: str = Field(default_factory=lambda: f"req_{uuid.uuid4().hex[:12]}")


class Pagination(BaseModel):
    page: int
    limit: int
    totalCount: int  # noqa: N815
    totalPages: int  # noqa: N815
    hasNextPage: bool  # noqa: N815
    hasPrevPage: bool  # noqa: N815

    @classmethod
    def build(cls, page: int, limit: int, total_count: int) -> "Pagination":
        total_pages = math.ceil(total_count / limit) if limit else 0
        return cls(
            page=page,
            limit=limit,
            totalCount=total_count,
            totalPages=total_pages,
            hasNextPage=page < total_pages,
            hasPrevPage=page > 1,
        )


def data_response(data: list[Any], pagination: Pagination | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {"data": data}
    if pagination is not None:
        body["pagination"] = pagination.model_dump()
    return body


def error_response(code: int, message: str) -> ErrorResponse:
    return ErrorResponse(code=code, error=message)
