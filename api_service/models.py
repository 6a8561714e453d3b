"""
Shared Pydantic models for the list API.

These models define the list-fetch envelope every paginated endpoint
returns, plus the error and health payloads.
"""

from datetime import datetime
from functools import lru_cache
from typing import Any, Dict, List, Literal, Optional, Type

from pydantic import BaseModel, Field, create_model


class PaginationModel(BaseModel):
    """Pagination descriptor on the wire. Field names are part of the contract."""

    page: int = Field(..., ge=1, description="Current 1-indexed page")
    limit: int = Field(..., ge=1, description="Items requested per page")
    total: int = Field(..., ge=0, description="Total matching items")
    pages: int = Field(..., ge=0, description="ceil(total / limit)")
    hasNext: bool = Field(..., description="page < pages")
    hasPrev: bool = Field(..., description="page > 1")


class ErrorResponse(BaseModel):
    """Error envelope."""

    status: Literal["error"] = "error"
    message: str
    code: Optional[str] = None
    errors: Optional[List[str]] = None


class DatabaseStatus(BaseModel):
    connected: bool
    status: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    message: str
    timestamp: datetime
    environment: str
    version: str
    database: DatabaseStatus


@lru_cache(maxsize=None)
def list_response_model(resource_key: str, *context: str) -> Type[BaseModel]:
    """
    Response model for a listing whose items live under `resource_key`.

    Produces e.g. JobsListResponse with
    {"status": "success", "data": {"jobs": [...], "pagination": {...}}}.

    `context` names optional documents returned next to the items, such as
    the job a talent search was run for.
    """
    title = "".join(part.capitalize() for part in resource_key.split("_"))
    title += "".join(name.capitalize() for name in context)
    fields: Dict[str, Any] = {
        resource_key: (List[Dict[str, Any]], ...),
        "pagination": (PaginationModel, ...),
    }
    for name in context:
        fields[name] = (Optional[Dict[str, Any]], None)
    data_model = create_model(f"{title}ListData", **fields)
    return create_model(
        f"{title}ListResponse",
        status=(Literal["success"], "success"),
        data=(data_model, ...),
    )
