"""
Note routes. All of them sit behind the request gate and operate only on
the caller's own notes; someone else's note is reported as not found.
"""
from fastapi import APIRouter, Depends

from notes_database import NoteStore

from ..auth import Identity
from ..deps import get_current_identity, get_note_store
from ..errors import NotFound, require_fields
from ..schemas import (
    ErrorResponse,
    MessageResponse,
    NoteDetailResponse,
    NoteIn,
    NoteListResponse,
    NoteOut,
    NoteResponse,
)

router = APIRouter(
    prefix="/api/notes",
    tags=["Notes"],
    responses={401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)


# PUBLIC_INTERFACE
@router.get("", response_model=NoteListResponse, summary="List all user notes")
def list_notes(
    identity: Identity = Depends(get_current_identity),
    notes: NoteStore = Depends(get_note_store),
):
    """
    Get all notes for the authenticated user, most recently updated first.
    """
    owned = [NoteOut.model_validate(note) for note in notes.list_by_owner(identity.id)]
    return {"notes": owned, "count": len(owned)}


# PUBLIC_INTERFACE
@router.post(
    "",
    status_code=201,
    response_model=NoteResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Create a new note",
)
def create_note(
    payload: NoteIn,
    identity: Identity = Depends(get_current_identity),
    notes: NoteStore = Depends(get_note_store),
):
    """
    Create a new note for the authenticated user. ``tags`` defaults to "".
    """
    require_fields(title=payload.title, content=payload.content)
    note = notes.create(identity.id, payload.title, payload.content, payload.tags or "")
    return {"message": "Note created successfully", "note": NoteOut.model_validate(note)}


# PUBLIC_INTERFACE
@router.get(
    "/{note_id}",
    response_model=NoteDetailResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get a single note",
)
def get_note(
    note_id: int,
    identity: Identity = Depends(get_current_identity),
    notes: NoteStore = Depends(get_note_store),
):
    """
    Retrieve a single note belonging to the authenticated user.
    """
    note = notes.get_owned(note_id, identity.id)
    if note is None:
        raise NotFound()
    return {"note": NoteOut.model_validate(note)}


# PUBLIC_INTERFACE
@router.put(
    "/{note_id}",
    response_model=NoteResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Update a note",
)
def update_note(
    note_id: int,
    payload: NoteIn,
    identity: Identity = Depends(get_current_identity),
    notes: NoteStore = Depends(get_note_store),
):
    """
    Replace title, content and tags of a note belonging to the authenticated user.
    """
    require_fields(title=payload.title, content=payload.content)
    note = notes.update(note_id, identity.id, payload.title, payload.content, payload.tags or "")
    if note is None:
        raise NotFound()
    return {"message": "Note updated successfully", "note": NoteOut.model_validate(note)}


# PUBLIC_INTERFACE
@router.delete(
    "/{note_id}",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Delete a note",
)
def delete_note(
    note_id: int,
    identity: Identity = Depends(get_current_identity),
    notes: NoteStore = Depends(get_note_store),
):
    """
    Delete a note belonging to the authenticated user.
    """
    if not notes.delete(note_id, identity.id):
        raise NotFound()
    return {"message": "Note deleted successfully"}
