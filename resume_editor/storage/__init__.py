"""Локальное хранение резюме и кодек данных для страницы печати."""

from resume_editor.storage.codec import decode_data_param, encode_data_param
from resume_editor.storage.store import (
    ResumeStore,
    StorageError,
    StorageErrorCode,
    StoredResume,
)

__all__ = [
    "ResumeStore",
    "StoredResume",
    "StorageError",
    "StorageErrorCode",
    "encode_data_param",
    "decode_data_param",
]
