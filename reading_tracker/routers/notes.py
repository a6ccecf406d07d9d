"""Routes for per-reading notes."""
from typing import List

from fastapi import APIRouter, Depends, Path

from reading_tracker.models.domain import Note
from reading_tracker.models.schemas import NoteUpsert
from reading_tracker.services.note_service import NoteService, get_note_service

router = APIRouter(prefix="/api/notes", tags=["notes"])


@router.get("", response_model=List[Note])
def list_notes(service: NoteService = Depends(get_note_service)):
    return service.list_notes()


@router.get("/{reading_id}", response_model=Note)
def get_note(
    reading_id: str = Path(..., min_length=1),
    service: NoteService = Depends(get_note_service),
):
    return service.get_note(reading_id)


@router.put("/{reading_id}", response_model=Note)
def save_note(
    payload: NoteUpsert,
    reading_id: str = Path(..., min_length=1),
    service: NoteService = Depends(get_note_service),
):
    return service.save_note(reading_id, payload.content)
