"""Business logic for per-reading notes."""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from fastapi import Depends

from reading_tracker.dependencies import get_note_repository
from reading_tracker.models.domain import Note
from reading_tracker.repositories.notes import NoteRepository
from reading_tracker.services.streak_calculator import utc_now
from reading_tracker.utils.exceptions import NotFoundError
from reading_tracker.utils.ids import generate_id


class NoteService:

    def __init__(self, repository: NoteRepository):
        self.repository = repository

    def list_notes(self) -> List[Note]:
        return self.repository.list_notes()

    def get_note(self, reading_id: str) -> Note:
        note = self.repository.get_for_reading(reading_id)
        if note is None:
            raise NotFoundError(f"No note for reading {reading_id}")
        return note

    def save_note(self, reading_id: str, content: str, now: Optional[datetime] = None) -> Note:
        """Create the note for a reading or update it, keeping its id and creation time."""
        now = now or utc_now()
        existing = self.repository.get_for_reading(reading_id)
        if existing is None:
            note = Note(
                id=generate_id("note"),
                reading_id=reading_id,
                content=content,
                created_at=now,
                updated_at=now,
            )
        else:
            note = existing.model_copy(update={"content": content, "updated_at": now})
        self.repository.save(note)
        return note


def get_note_service(repository: NoteRepository = Depends(get_note_repository)) -> NoteService:
    return NoteService(repository)
