"""Repository for per-reading study notes."""
import logging
from typing import Iterable, List, Optional

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from reading_tracker.models.domain import Note
from reading_tracker.repositories.base import JsonDocumentRepository

logger = logging.getLogger(__name__)

_NOTE_LIST = TypeAdapter(List[Note])


class NoteRepository(JsonDocumentRepository):
    """Flat list of notes, at most one per reading."""

    def list_notes(self) -> List[Note]:
        raw = self._read()
        if self._is_missing(raw):
            return []
        try:
            return _NOTE_LIST.validate_python(raw)
        except PydanticValidationError as e:
            logger.warning(f"Ignoring malformed notes under {self.key}: {e}")
            return []

    def get_for_reading(self, reading_id: str) -> Optional[Note]:
        """First note attached to ``reading_id``."""
        for note in self.list_notes():
            if note.reading_id == reading_id:
                return note
        return None

    def save(self, note: Note) -> bool:
        """Insert or replace a note.

        An existing note with the same id or the same reading is replaced in
        place; any further duplicates for that reading are dropped.
        """
        notes = self.list_notes()
        updated: List[Note] = []
        replaced = False
        for existing in notes:
            if existing.id == note.id or existing.reading_id == note.reading_id:
                if not replaced:
                    updated.append(note)
                    replaced = True
                continue
            updated.append(existing)
        if not replaced:
            updated.append(note)
        return self.replace_all(updated)

    def replace_all(self, notes: List[Note]) -> bool:
        """Overwrite the stored list, keeping only the first note per reading."""
        return self._write(_NOTE_LIST.dump_python(self.unique_per_reading(notes), mode="json", by_alias=True))

    @staticmethod
    def unique_per_reading(notes: List[Note]) -> List[Note]:
        seen = set()
        unique: List[Note] = []
        for note in notes:
            if note.reading_id in seen:
                continue
            seen.add(note.reading_id)
            unique.append(note)
        return unique

    def delete_for_readings(self, reading_ids: Iterable[str]) -> int:
        targets = set(reading_ids)
        notes = self.list_notes()
        kept = [note for note in notes if note.reading_id not in targets]
        removed = len(notes) - len(kept)
        if removed:
            self.replace_all(kept)
        return removed
