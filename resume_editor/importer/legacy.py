"""
RU: Миграция старых модулей резюме (plain-text content) в структуру строк и элементов.

EN: Legacy resume module importer. Older records stored a module as a single
plain-text ``content`` string plus optional ``subtitle`` / ``timeRange``.
This module converts them into rows of rich-text elements whose segment
sequences satisfy the engine's import contract.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Final, Iterable, List, Optional, Union

from resume_editor.model.element import ContentElement
from resume_editor.model.enums import Alignment, BlockType
from resume_editor.model.resume import ContentRow, ResumeModule
from resume_editor.model.style import TextStyle

_LOG: Final = logging.getLogger(__name__)

TIME_RANGE_COLOR: Final[str] = "#0066cc"

_BULLET_PREFIXES: Final[tuple[str, ...]] = ("•", "-")
_NUMBERED_RE: Final[re.Pattern[str]] = re.compile(r"^\d+\.")
_BULLET_MARKER_RE: Final[re.Pattern[str]] = re.compile(r"^[•\-]\s*")
_NUMBER_MARKER_RE: Final[re.Pattern[str]] = re.compile(r"^\d+\.\s*")


class LegacyFormatError(ValueError):
    """Запись не похожа ни на старый, ни на новый формат модуля."""


@dataclass(frozen=True, slots=True)
class LegacyResumeModule:
    """Old module layout: one plain-text body plus optional header fields."""

    id: str
    title: str
    content: str = ""
    order: int = 0
    subtitle: Optional[str] = None
    time_range: Optional[str] = None
    icon: Optional[str] = None

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "LegacyResumeModule":
        if not isinstance(data, dict):
            raise TypeError(f"Expected dict, got {type(data).__name__}")
        if "id" not in data:
            raise LegacyFormatError("Legacy module without 'id'")
        return LegacyResumeModule(
            id=data["id"],
            title=data.get("title", ""),
            content=data.get("content") or "",
            order=int(data.get("order", 0)),
            subtitle=data.get("subtitle"),
            time_range=data.get("timeRange"),
            icon=data.get("icon"),
        )


def classify_line(line: str) -> tuple[BlockType, str]:
    """
    Detect a list marker on one content line and strip it.

    Returns:
        (block type, cleaned text). ``•`` or ``-`` means a bullet item,
        ``<digits>.`` a numbered item.
    """
    stripped = line.strip()
    if stripped.startswith(_BULLET_PREFIXES):
        block_type = BlockType.BULLET_LIST
    elif _NUMBERED_RE.match(stripped):
        block_type = BlockType.NUMBERED_LIST
    else:
        block_type = BlockType.TEXT

    clean = _BULLET_MARKER_RE.sub("", stripped, count=1)
    clean = _NUMBER_MARKER_RE.sub("", clean, count=1).strip()
    return block_type, clean


def _header_row(legacy: LegacyResumeModule, order: int) -> ContentRow:
    elements = [
        ContentElement.from_text(legacy.subtitle or "", column_index=0, align=Alignment.LEFT),
        ContentElement.from_text("", column_index=1, align=Alignment.CENTER),
        ContentElement.from_text(
            legacy.time_range or "",
            style=TextStyle(color=TIME_RANGE_COLOR),
            column_index=2,
            align=Alignment.RIGHT,
        ),
    ]
    return ContentRow(columns=3, elements=elements, order=order)


def migrate_module(legacy: Union[LegacyResumeModule, Dict[str, Any]]) -> ResumeModule:
    """
    Convert one legacy module into the row/element structure.

    A subtitle or time range yields a 3-column header row (subtitle left,
    empty middle, time range right in blue). Each non-blank content line
    becomes a 1-column row with one element.
    """
    if isinstance(legacy, dict):
        legacy = LegacyResumeModule.from_dict(legacy)

    rows: List[ContentRow] = []
    row_order = 0

    if legacy.subtitle or legacy.time_range:
        rows.append(_header_row(legacy, row_order))
        row_order += 1

    for line in legacy.content.split("\n"):
        if not line.strip():
            continue
        block_type, text = classify_line(line)
        element = ContentElement.from_text(text, type=block_type, align=Alignment.LEFT)
        rows.append(ContentRow(columns=1, elements=[element], order=row_order))
        row_order += 1

    _LOG.debug("Migrated legacy module %s into %d rows", legacy.id, len(rows))
    return ResumeModule(
        id=legacy.id,
        title=legacy.title,
        order=legacy.order,
        icon=legacy.icon,
        rows=rows,
    )


def is_legacy_module(module: Any) -> bool:
    """Any module record without ``rows`` is in the old layout; ``content`` may be absent."""
    return isinstance(module, dict) and "rows" not in module


def migrate_modules(modules: Iterable[Any]) -> List[ResumeModule]:
    """
    Migrate a mixed list of modules.

    Modules already in the row format (dicts with a ``rows`` list, or
    ResumeModule instances) pass through; every other dict is migrated,
    so a header-only record still yields its header row.

    Raises:
        LegacyFormatError: For non-dict records, a non-list ``rows`` value,
            or a legacy record without ``id``.
    """
    result: List[ResumeModule] = []
    migrated = 0
    for module in modules:
        if isinstance(module, ResumeModule):
            result.append(module)
        elif isinstance(module, dict) and isinstance(module.get("rows"), list):
            result.append(ResumeModule.from_dict(module))
        elif is_legacy_module(module):
            result.append(migrate_module(module))
            migrated += 1
        else:
            raise LegacyFormatError(f"Unrecognized module record: {type(module).__name__}")
    if migrated:
        _LOG.info("Migrated %d legacy modules", migrated)
    return result


__all__ = [
    "LegacyResumeModule",
    "LegacyFormatError",
    "TIME_RANGE_COLOR",
    "classify_line",
    "migrate_module",
    "migrate_modules",
    "is_legacy_module",
]
