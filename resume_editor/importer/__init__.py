"""Импорт старых записей резюме."""

from resume_editor.importer.legacy import (
    LegacyFormatError,
    LegacyResumeModule,
    is_legacy_module,
    migrate_module,
    migrate_modules,
)

__all__ = [
    "LegacyFormatError",
    "LegacyResumeModule",
    "is_legacy_module",
    "migrate_module",
    "migrate_modules",
]
