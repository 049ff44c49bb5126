"""
Notes Backend: Pydantic Request/Response Schemas
================================================

What:  Pydantic models defining the API contract.
How:   FastAPI validates request bodies against these models, serializes
       responses through them and generates the OpenAPI docs from them.

Wire naming:
    Python attributes are snake_case; JSON keys are camelCase
    (created_date → createdDate, total_elements → totalElements) via the
    to_camel alias generator. FastAPI serializes response models by alias.
"""

import math
from datetime import datetime
from typing import Generic, List, Optional, Set, TypeVar

from pydantic import BaseModel, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from notesapp.domain import Note, NoteTag

T = TypeVar("T")

_CAMEL_CONFIG = {
    "alias_generator": to_camel,
    "populate_by_name": True,
}


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteRequest(BaseModel):
    """
    Body of POST /api/notes.

    Without `id` a new note is created; with `id` the existing note is
    overwritten (title, text and tags). Missing `tags` means "no tags".
    """
    id: Optional[str] = Field(default=None, description="Id of the note to update; omit to create")
    title: Optional[str] = Field(default=None, validate_default=True, description="Note title")
    text: Optional[str] = Field(default=None, validate_default=True, description="Note body")
    tags: Optional[Set[NoteTag]] = Field(default=None, description="Tags attached to the note")

    @field_validator("title", "text")
    @classmethod
    def validate_not_blank(cls, v: Optional[str], info: ValidationInfo) -> str:
        """Rejects missing, empty and whitespace-only values."""
        if v is None or not v.strip():
            raise ValueError(f"{info.field_name} must not be blank")
        return v


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteDetailsResponse(BaseModel):
    """Full note, returned by save and get-by-id."""
    id: str = Field(description="Note identifier")
    title: str = Field(description="Note title")
    created_date: datetime = Field(description="Creation timestamp (UTC ISO 8601)")
    text: str = Field(description="Note body")
    tags: Set[NoteTag] = Field(default_factory=set, description="Tags attached to the note")

    model_config = _CAMEL_CONFIG

    @classmethod
    def from_note(cls, note: Note) -> "NoteDetailsResponse":
        return cls(
            id=note.id,
            title=note.title,
            created_date=note.created_date,
            text=note.text,
            tags=set(note.tags),
        )


class NoteSummaryResponse(BaseModel):
    """Listing entry: title and creation time only."""
    title: str = Field(description="Note title")
    created_date: datetime = Field(description="Creation timestamp (UTC ISO 8601)")

    model_config = _CAMEL_CONFIG

    @classmethod
    def from_note(cls, note: Note) -> "NoteSummaryResponse":
        return cls(title=note.title, created_date=note.created_date)


class PageResponse(BaseModel, Generic[T]):
    """
    One page of a zero-based paginated listing.

    `total_elements` counts every item matching the query, across all pages.
    """
    content: List[T] = Field(description="Items on this page")
    total_elements: int = Field(description="Items matching the query across all pages")
    total_pages: int = Field(description="Number of pages at this page size")
    number: int = Field(description="Zero-based index of this page")
    size: int = Field(description="Requested page size")
    number_of_elements: int = Field(description="Items on this page")
    first: bool
    last: bool
    empty: bool

    model_config = _CAMEL_CONFIG

    @classmethod
    def create(cls, content: List[T], total: int, page: int, size: int) -> "PageResponse[T]":
        total_pages = math.ceil(total / size) if size > 0 else 0
        return cls(
            content=content,
            total_elements=total,
            total_pages=total_pages,
            number=page,
            size=size,
            number_of_elements=len(content),
            first=page == 0,
            last=page + 1 >= total_pages,
            empty=not content,
        )


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ApiError(BaseModel):
    """
    Error body shared by every non-2xx response.

    Example:
        {
            "timestamp": "2025-02-27T10:15:00Z",
            "status": 404,
            "error": "Not Found",
            "message": "Note with id missing not found",
            "path": "/api/notes/missing"
        }
    """
    timestamp: datetime = Field(description="When the error occurred (UTC)")
    status: int = Field(description="HTTP status code")
    error: str = Field(description="HTTP reason phrase")
    message: str = Field(description="Error description")
    path: str = Field(description="Request path")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
