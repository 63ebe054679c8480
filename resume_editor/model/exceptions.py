"""
Исключения модели стилизованного текста.

Иерархия:
    SegmentError (базовое, ValueError)
    ├── InvalidRangeError
    ├── InvalidFacetError
    └── InvalidSequenceError

Пустое выделение (start == end) исключением не является: это no-op.

Example:
    >>> from resume_editor.model.exceptions import InvalidRangeError, SegmentError
    >>> err = InvalidRangeError(5, 2)
    >>> isinstance(err, SegmentError)
    True
    >>> str(err)
    'Invalid selection range (end=2, start=5)'
"""

from __future__ import annotations

from typing import Any, Optional

__all__: list[str] = [
    "SegmentError",
    "InvalidRangeError",
    "InvalidFacetError",
    "InvalidSequenceError",
]


class SegmentError(ValueError):
    """
    Базовое исключение для ошибок модели фрагментов.

    Attributes:
        message: Человекочитаемое сообщение об ошибке
        context: Дополнительный контекст для отладки (опционально)
    """

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.context: dict[str, Any] = dict(context or {})

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{k}={v!r}" for k, v in sorted(self.context.items()))
        return f"{self.message} ({details})"


class InvalidRangeError(SegmentError):
    """Selection range is inverted, negative or exceeds the field length."""

    def __init__(self, start: int, end: int, length: Optional[int] = None) -> None:
        context: dict[str, Any] = {"start": start, "end": end}
        if length is not None:
            context["length"] = length
        super().__init__("Invalid selection range", context)
        self.start = start
        self.end = end
        self.length = length


class InvalidFacetError(SegmentError):
    """Unknown style facet or a value of the wrong type for the facet."""


class InvalidSequenceError(SegmentError):
    """Segment sequence violates the total, ordered, non-overlapping contract."""
