"""Export, import and wipe of everything the tracker stores."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import Depends

from reading_tracker.config import Settings
from reading_tracker.dependencies import (
    get_app_settings,
    get_note_repository,
    get_progress_repository,
    get_store,
    get_study_focus_repository,
)
from reading_tracker.models.schemas import ExportBundle, ImportRequest, ImportResult
from reading_tracker.repositories.notes import NoteRepository
from reading_tracker.repositories.preferences import StudyFocusRepository
from reading_tracker.repositories.progress import ProgressRepository
from reading_tracker.services.progress_migration import parse_progress_record
from reading_tracker.services.streak_calculator import utc_now
from reading_tracker.storage import KeyValueStore
from reading_tracker.utils.exceptions import StorageError

logger = logging.getLogger(__name__)


class DataTransferService:

    def __init__(
        self,
        progress: ProgressRepository,
        notes: NoteRepository,
        study_focus: StudyFocusRepository,
        store: KeyValueStore,
        storage_keys: List[str],
    ):
        self.progress = progress
        self.notes = notes
        self.study_focus = study_focus
        self.store = store
        self.storage_keys = storage_keys

    def export_bundle(self, now: Optional[datetime] = None) -> ExportBundle:
        return ExportBundle(
            progress=self.progress.load(now=now),
            notes=self.notes.list_notes(),
            study_focus=self.study_focus.load(),
            exported_at=now or utc_now(),
        )

    def import_bundle(self, payload: ImportRequest, now: Optional[datetime] = None) -> ImportResult:
        """Replace stored data with the sections present in ``payload``.

        Progress goes through the same classification and migration as a
        load; an unrecognized progress section is skipped and reported.
        """
        result = ImportResult()

        if payload.progress is not None:
            progress, migrated = parse_progress_record(payload.progress, now=now)
            if progress is None:
                result.warnings.append("Progress section is not in a recognized format and was skipped")
            else:
                self.progress.save(progress)
                result.progress_imported = True
                result.progress_migrated = migrated

        if payload.notes is not None:
            notes = self.notes.unique_per_reading(payload.notes)
            dropped = len(payload.notes) - len(notes)
            if dropped:
                result.warnings.append(f"Dropped {dropped} duplicate note(s) for readings that already had one")
            self.notes.replace_all(notes)
            result.notes_imported = len(notes)

        if payload.study_focus is not None:
            self.study_focus.save(payload.study_focus)
            result.study_focus_imported = True

        logger.info(
            f"Imported data: progress={result.progress_imported} "
            f"(migrated={result.progress_migrated}), notes={result.notes_imported}"
        )
        return result

    def clear_all(self) -> None:
        for key in self.storage_keys:
            try:
                self.store.delete(key)
            except StorageError as e:
                logger.error(f"Failed to clear {key}: {e}")
        logger.info("Cleared all stored reading data")


def get_data_transfer_service(
    progress: ProgressRepository = Depends(get_progress_repository),
    notes: NoteRepository = Depends(get_note_repository),
    study_focus: StudyFocusRepository = Depends(get_study_focus_repository),
    store: KeyValueStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> DataTransferService:
    return DataTransferService(progress, notes, study_focus, store, settings.storage_keys)
