"""
services/grade_drafts.py

- Unsaved marks a teacher is typing in, kept per (teacher, subject, semester).
- Writes are debounced: every set restarts a timer and only the last state
  is written to storage. Status: idle -> saving -> saved -> (after a moment) idle.
- clear() drops the scope's draft once the marks were committed to the store.
- A non-positive debounce writes synchronously; a non-positive reset keeps "saved".
"""

from __future__ import annotations

import enum
import logging
import math
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, MutableMapping, Optional, Protocol

from pydantic import ValidationError

from academic_records.config.settings import settings
from academic_records.errors import DraftStorageError
from academic_records.schemas.drafts import DraftState

logger = logging.getLogger(__name__)

DRAFT_PREFIX = "ugv_grade_drafts_"


class DraftStatus(str, enum.Enum):
    IDLE = "idle"
    SAVING = "saving"
    SAVED = "saved"


@dataclass(frozen=True)
class DraftScope:
    teacher_id: Optional[str]
    subject_id: Optional[str]
    semester_id: Optional[str]

    @property
    def is_complete(self) -> bool:
        return bool(self.teacher_id and self.subject_id and self.semester_id)

    @property
    def storage_key(self) -> Optional[str]:
        if not self.is_complete:
            return None
        return f"{DRAFT_PREFIX}{self.teacher_id}_{self.subject_id}_{self.semester_id}"


# ==========================================================
# [Storage backends]
# ==========================================================

class DraftStorage(Protocol):
    def get(self, key: str) -> Optional[str]: ...
    def set(self, key: str, value: str) -> None: ...
    def remove(self, key: str) -> None: ...


class MemoryDraftStorage:
    def __init__(self, data: Optional[MutableMapping[str, str]] = None):
        self.data = data if data is not None else {}

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def remove(self, key: str) -> None:
        self.data.pop(key, None)


class JsonFileDraftStorage:
    """One JSON file per scope key under ``directory``."""

    def __init__(self, directory: Optional[str] = None):
        self.directory = Path(directory or settings.DRAFT_DIR)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8") if path.exists() else None
        except OSError as e:
            raise DraftStorageError(f"Cannot read draft {path}: {e}") from e

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            path.write_text(value, encoding="utf-8")
        except OSError as e:
            raise DraftStorageError(f"Cannot write draft {path}: {e}") from e

    def remove(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise DraftStorageError(f"Cannot remove draft {path}: {e}") from e


# ==========================================================
# [Draft store]
# ==========================================================

class GradeDraftStore:
    def __init__(
        self,
        scope: DraftScope,
        storage: Optional[DraftStorage] = None,
        debounce_seconds: Optional[float] = None,
        saved_reset_seconds: Optional[float] = None,
    ):
        self.scope = scope
        self.storage = storage if storage is not None else MemoryDraftStorage()
        self.debounce_seconds = (
            settings.DRAFT_DEBOUNCE_SECONDS if debounce_seconds is None else debounce_seconds
        )
        self.saved_reset_seconds = (
            settings.DRAFT_STATUS_RESET_SECONDS if saved_reset_seconds is None else saved_reset_seconds
        )

        self._lock = threading.RLock()
        self._grades: Dict[str, float] = {}
        self._status = DraftStatus.IDLE
        self._save_timer: Optional[threading.Timer] = None
        self._status_timer: Optional[threading.Timer] = None

        if scope.is_complete:
            self.restore()

    # ------------------------------------------------------------------
    @property
    def status(self) -> DraftStatus:
        with self._lock:
            return self._status

    @property
    def draft_grades(self) -> Dict[str, float]:
        with self._lock:
            return dict(self._grades)

    @property
    def has_drafts(self) -> bool:
        with self._lock:
            return bool(self._grades)

    def draft_count(self) -> int:
        with self._lock:
            return sum(1 for v in self._grades.values() if v is not None and v == v)  # v == v drops NaN

    # ------------------------------------------------------------------
    def restore(self) -> Dict[str, float]:
        key = self.scope.storage_key
        if key is None:
            return {}

        try:
            raw = self.storage.get(key)
            if raw:
                state = DraftState.model_validate_json(raw)
                grades = {k: v for k, v in state.grades.items() if v is not None}
                with self._lock:
                    self._grades = dict(grades)
                return grades
        except (DraftStorageError, ValidationError) as e:
            logger.error("Failed to restore grade drafts for %s: %s", key, e)
        return {}

    def set_draft_grade(self, enrollment_id: str, marks: float) -> None:
        with self._lock:
            self._grades[enrollment_id] = marks
            self._schedule_save()

    def flush(self) -> None:
        """Write pending drafts now instead of waiting for the debounce timer."""
        with self._lock:
            if self._save_timer is not None:
                self._save_timer.cancel()
                self._save_timer = None
                self._write()

    def clear(self) -> None:
        key = self.scope.storage_key
        with self._lock:
            self._cancel_timers()
            if key is not None:
                try:
                    self.storage.remove(key)
                except DraftStorageError as e:
                    logger.error("Failed to clear grade drafts for %s: %s", key, e)
            self._grades = {}
            self._status = DraftStatus.IDLE

    def close(self) -> None:
        with self._lock:
            self._cancel_timers()

    # ------------------------------------------------------------------
    def _cancel_timers(self) -> None:
        for timer in (self._save_timer, self._status_timer):
            if timer is not None:
                timer.cancel()
        self._save_timer = None
        self._status_timer = None

    def _schedule_save(self) -> None:
        if self.scope.storage_key is None:
            return

        if self._save_timer is not None:
            self._save_timer.cancel()
        self._status = DraftStatus.SAVING

        if self.debounce_seconds <= 0:
            self._save_timer = None
            self._write()
            return

        self._save_timer = threading.Timer(self.debounce_seconds, self._on_save_timer)
        self._save_timer.daemon = True
        self._save_timer.start()

    def _on_save_timer(self) -> None:
        with self._lock:
            # cancelled by flush()/clear() after the timer already fired
            if self._save_timer is None:
                return
            self._save_timer = None
            self._write()

    def _write(self) -> None:
        key = self.scope.storage_key
        if key is None:
            return

        # NaN / inf cannot round-trip through JSON; keep them in memory only
        grades = {k: v for k, v in self._grades.items() if v is not None and math.isfinite(v)}
        state = DraftState(grades=grades, last_saved=time.time())
        try:
            self.storage.set(key, state.model_dump_json())
        except DraftStorageError as e:
            logger.error("Failed to save grade drafts for %s: %s", key, e)
            self._status = DraftStatus.IDLE
            return

        self._status = DraftStatus.SAVED
        if self._status_timer is not None:
            self._status_timer.cancel()
        if self.saved_reset_seconds <= 0:
            self._status_timer = None
            return
        self._status_timer = threading.Timer(self.saved_reset_seconds, self._reset_status)
        self._status_timer.daemon = True
        self._status_timer.start()

    def _reset_status(self) -> None:
        with self._lock:
            self._status_timer = None
            if self._status == DraftStatus.SAVED:
                self._status = DraftStatus.IDLE
