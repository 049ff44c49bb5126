"""
Notes Backend: Notes Route Handlers
===================================

What:  HTTP surface for the note resource under /api/notes.
How:   Handlers parse path/query/body, delegate to NoteService and return
       the service result. No business rules live here.

Route Inventory:
    POST   /api/notes             create or update
    GET    /api/notes             paginated listing, optional ?tags=…&tags=…
    GET    /api/notes/{id}        detail view
    DELETE /api/notes/{id}        delete
    GET    /api/notes/{id}/stats  word frequencies
"""

import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Response

from notesapp.config import settings
from notesapp.dependencies import get_note_service
from notesapp.domain import NoteTag
from notesapp.schemas.note import (
    ApiError,
    NoteDetailsResponse,
    NoteRequest,
    NoteSummaryResponse,
    PageResponse,
)
from notesapp.services.note_service import NoteService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/notes", tags=["Notes"])

_NOT_FOUND = {404: {"description": "Note not found", "model": ApiError}}


@router.post(
    "",
    response_model=NoteDetailsResponse,
    responses={
        400: {"description": "Invalid request body", "model": ApiError},
        **_NOT_FOUND,
    },
    summary="Create or update note",
    description="If id is null, creates a new note, otherwise updates the existing one.",
)
async def save_note(
    request: NoteRequest,
    service: NoteService = Depends(get_note_service),
) -> NoteDetailsResponse:
    return await service.create_or_update(request)


@router.get(
    "",
    response_model=PageResponse[NoteSummaryResponse],
    responses={400: {"description": "Invalid query parameters", "model": ApiError}},
    summary="List notes",
    description=(
        "Returns a page of note summaries, newest first. Repeat `tags` to filter; "
        "a note matches when it carries at least one of the requested tags."
    ),
)
async def list_notes(
    response: Response,
    page: int = Query(default=0, ge=0, description="Zero-based page index"),
    size: int = Query(
        default=settings.default_page_size,
        ge=1,
        le=settings.max_page_size,
        description=f"Page size (max {settings.max_page_size})",
    ),
    tags: Optional[List[NoteTag]] = Query(default=None, description="Tag filter (match any)"),
    service: NoteService = Depends(get_note_service),
) -> PageResponse[NoteSummaryResponse]:
    result = await service.list(tags, page, size)
    response.headers["X-Total-Count"] = str(result.total_elements)
    return result


@router.get(
    "/{note_id}",
    response_model=NoteDetailsResponse,
    responses=_NOT_FOUND,
    summary="Get note details",
    description="Returns full details of a single note by id.",
)
async def get_note(
    note_id: str,
    service: NoteService = Depends(get_note_service),
) -> NoteDetailsResponse:
    return await service.get_by_id(note_id)


@router.delete(
    "/{note_id}",
    status_code=200,
    response_class=Response,
    responses=_NOT_FOUND,
    summary="Delete note",
    description="Deletes note by id.",
)
async def delete_note(
    note_id: str,
    service: NoteService = Depends(get_note_service),
) -> Response:
    await service.delete(note_id)
    return Response(status_code=200)


@router.get(
    "/{note_id}/stats",
    response_model=Dict[str, int],
    responses=_NOT_FOUND,
    summary="Get note text statistics",
    description=(
        "Returns unique word counts for the note text, ordered by count "
        "descending and then alphabetically."
    ),
)
async def get_stats(
    note_id: str,
    service: NoteService = Depends(get_note_service),
) -> Dict[str, int]:
    stats = await service.get_stats(note_id)
    # dict keeps insertion order, and so does the JSON object it renders to
    return {entry.word: entry.count for entry in stats}
