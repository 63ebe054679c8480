# -*- coding: utf-8 -*-
"""
RU: Потокобезопасное файловое JSON-хранилище резюме с атомарной записью и квотой размера.

EN: Thread-safe JSON file store for resume entries with atomic writes and a
size quota (the local-storage analogue of the browser editor).

Design:
- On-disk format: JSON object mapping entry id -> {id, name, createdAt,
  updatedAt, resumeData}.
- Atomic writes using a temp file in the same directory + os.replace.
- Writes that would exceed ``quota_bytes`` fail with QUOTA_EXCEEDED and leave
  the file untouched.
- Run order, ids, text and style survive a save/load round trip unchanged.

Thread-safety:
- A re-entrant lock (RLock) guards read-modify-write.
- No global state; each instance isolates its own file.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, Final, List, Optional, Union
from uuid import uuid4

from resume_editor.model.resume import ResumeData

_LOGGER: Final = logging.getLogger(__name__)

DEFAULT_QUOTA_BYTES: Final[int] = 5 * 1024 * 1024

_DbDict = Dict[str, Dict[str, Any]]


class StorageErrorCode(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    QUOTA_EXCEEDED = "QUOTA_EXCEEDED"
    READ_FAILED = "READ_FAILED"
    WRITE_FAILED = "WRITE_FAILED"
    INVALID_DATA = "INVALID_DATA"


class StorageError(Exception):
    """Ошибка хранилища резюме; ``code`` позволяет UI выбрать сообщение."""

    def __init__(self, message: str, code: StorageErrorCode) -> None:
        super().__init__(message)
        self.code = code


def _now() -> datetime:
    return datetime.now(timezone.utc)


def new_entry_id() -> str:
    return f"resume-{uuid4().hex}"


@dataclass(slots=True)
class StoredResume:
    """One saved resume with its bookkeeping metadata."""

    id: str
    name: str
    created_at: datetime
    updated_at: datetime
    resume_data: ResumeData

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
            "resumeData": self.resume_data.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> StoredResume:
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            created_at=datetime.fromisoformat(data["createdAt"]),
            updated_at=datetime.fromisoformat(data["updatedAt"]),
            resume_data=ResumeData.from_dict(data.get("resumeData", {})),
        )


class ResumeStore:
    """
    JSON file store of resume entries.

    Args:
        filepath: path to the store file (created on first write).
        quota_bytes: maximum size of the serialized store.
        clock: timestamp source, UTC ``datetime`` (injectable for tests).

    Raises:
        StorageError: on invalid initialization parameters.
    """

    __slots__ = ("_filepath", "_quota_bytes", "_clock", "_lock")

    def __init__(
        self,
        filepath: Union[str, Path],
        quota_bytes: int = DEFAULT_QUOTA_BYTES,
        clock: Callable[[], datetime] = _now,
    ) -> None:
        if not filepath:
            raise StorageError("Invalid store path", StorageErrorCode.WRITE_FAILED)
        if quota_bytes <= 0:
            raise StorageError("quota_bytes must be positive", StorageErrorCode.WRITE_FAILED)

        self._filepath: Path = Path(filepath).resolve()
        self._quota_bytes = quota_bytes
        self._clock = clock
        self._lock = threading.RLock()

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> ResumeStore:
        """Build a store from a ``load_config()`` dictionary."""
        return cls(
            filepath=config["storage_path"],
            quota_bytes=int(config["storage_quota_bytes"]),
        )

    @property
    def filepath(self) -> Path:
        return self._filepath

    # Public API

    def list_entries(self) -> List[StoredResume]:
        """All entries, most recently updated first."""
        with self._lock:
            db = self._read_db()
        entries = [self._decode(record) for record in db.values()]
        return sorted(entries, key=lambda e: e.updated_at, reverse=True)

    def get(self, entry_id: str) -> Optional[StoredResume]:
        with self._lock:
            record = self._read_db().get(entry_id)
        return self._decode(record) if record is not None else None

    def create(self, name: str, resume_data: Optional[ResumeData] = None) -> StoredResume:
        now = self._clock()
        entry = StoredResume(
            id=new_entry_id(),
            name=name,
            created_at=now,
            updated_at=now,
            resume_data=resume_data if resume_data is not None else ResumeData(title=name),
        )
        with self._lock:
            db = self._read_db()
            db[entry.id] = entry.to_dict()
            self._atomically_write_db(db)
        _LOGGER.info("Resume entry '%s' created.", entry.id)
        return entry

    def update_entry_data(self, entry_id: str, resume_data: ResumeData) -> StoredResume:
        """
        Replace the resume data of an entry and bump ``updated_at``.

        Raises:
            StorageError: NOT_FOUND, QUOTA_EXCEEDED or WRITE_FAILED.
        """
        with self._lock:
            db = self._read_db()
            entry = self._require(db, entry_id)
            entry.resume_data = resume_data
            entry.updated_at = self._clock()
            db[entry_id] = entry.to_dict()
            self._atomically_write_db(db)
        _LOGGER.info("Resume entry '%s' saved.", entry_id)
        return entry

    def rename(self, entry_id: str, name: str) -> StoredResume:
        with self._lock:
            db = self._read_db()
            entry = self._require(db, entry_id)
            entry.name = name
            entry.updated_at = self._clock()
            db[entry_id] = entry.to_dict()
            self._atomically_write_db(db)
        return entry

    def delete(self, entry_id: str) -> None:
        with self._lock:
            db = self._read_db()
            if entry_id not in db:
                raise StorageError(f"Entry '{entry_id}' not found", StorageErrorCode.NOT_FOUND)
            del db[entry_id]
            self._atomically_write_db(db)
        _LOGGER.info("Resume entry '%s' deleted.", entry_id)

    # Internal helpers

    def _require(self, db: _DbDict, entry_id: str) -> StoredResume:
        record = db.get(entry_id)
        if record is None:
            raise StorageError(f"Entry '{entry_id}' not found", StorageErrorCode.NOT_FOUND)
        return self._decode(record)

    @staticmethod
    def _decode(record: Dict[str, Any]) -> StoredResume:
        try:
            return StoredResume.from_dict(record)
        except (KeyError, TypeError, ValueError) as exc:
            _LOGGER.error("Corrupted resume entry: %s", exc.__class__.__name__)
            raise StorageError("Stored entry is corrupted", StorageErrorCode.INVALID_DATA) from exc

    def _read_db(self) -> _DbDict:
        if not self._filepath.exists():
            return {}
        try:
            with open(self._filepath, "r", encoding="utf-8") as f:
                db = json.load(f)
        except json.JSONDecodeError as exc:
            _LOGGER.error("Store file %s is not valid JSON: %s", self._filepath, exc)
            raise StorageError("Store file is corrupted", StorageErrorCode.READ_FAILED) from exc
        except OSError as exc:
            _LOGGER.error("Cannot read store file %s: %s", self._filepath, exc)
            raise StorageError("Store read failed", StorageErrorCode.READ_FAILED) from exc

        if not isinstance(db, dict):
            raise StorageError("Store root must be a JSON object", StorageErrorCode.READ_FAILED)
        return db

    def _atomically_write_db(self, db: _DbDict) -> None:
        payload = json.dumps(db, ensure_ascii=False, indent=2).encode("utf-8")
        if len(payload) > self._quota_bytes:
            _LOGGER.warning(
                "Store write rejected: %d bytes exceeds quota of %d", len(payload), self._quota_bytes
            )
            raise StorageError("Storage quota exceeded", StorageErrorCode.QUOTA_EXCEEDED)

        directory = self._filepath.parent
        tmp_name: Optional[str] = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=str(directory), prefix=self._filepath.name + ".", suffix=".tmp"
            )
            with os.fdopen(fd, "wb") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self._filepath)
            tmp_name = None
        except OSError as exc:
            _LOGGER.error("Cannot write store file %s: %s", self._filepath, exc)
            raise StorageError("Store write failed", StorageErrorCode.WRITE_FAILED) from exc
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)


__all__ = [
    "ResumeStore",
    "StoredResume",
    "StorageError",
    "StorageErrorCode",
    "DEFAULT_QUOTA_BYTES",
]
