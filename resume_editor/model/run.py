"""
Модель текстового фрагмента (Run) с единообразным форматированием.

Text run model: the atomic unit of style inside a rich-text field. A run is
an immutable value ``{id, text, style}``; every character in the run shares
the run's style. Ids are opaque, process-unique strings.

Module: resume_editor/model/run.py
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Final, Optional
from uuid import uuid4

from .style import DEFAULT_STYLE, TextStyle

logger: Final = logging.getLogger(__name__)

RUN_ID_PREFIX: Final[str] = "seg"


def new_run_id() -> str:
    """Mint a fresh run id (uuid4 based, safe across threads and rapid calls)."""
    return f"{RUN_ID_PREFIX}-{uuid4().hex}"


@dataclass(frozen=True, slots=True)
class Run:
    """
    Represents a contiguous span of text with uniform formatting.

    Attributes:
        text: The text content of the run. Empty only as the single run
            of an empty field.
        style: Style facets shared by every character of the run.
        id: Opaque unique identifier, minted automatically when omitted.

    Example:
        >>> run = Run("Hello World", TextStyle(bold=True))
        >>> left, right = run.split_at(5)
        >>> (left.text, right.text)
        ('Hello', ' World')
        >>> left.id != run.id
        True
    """

    text: str
    style: TextStyle = DEFAULT_STYLE
    id: str = field(default_factory=new_run_id)

    def __post_init__(self) -> None:
        if not isinstance(self.text, str):
            raise TypeError(f"Run text must be str, got {type(self.text).__name__}")
        if not isinstance(self.style, TextStyle):
            raise TypeError(f"Run style must be TextStyle, got {type(self.style).__name__}")
        if not isinstance(self.id, str) or not self.id:
            raise ValueError("Run id must be a non-empty string")

    def with_text(self, text: str) -> "Run":
        """New run with the same style, given text and a fresh id."""
        return Run(text=text, style=self.style)

    def with_style(self, style: TextStyle) -> "Run":
        """New run with the same text, given style and a fresh id."""
        return Run(text=self.text, style=style)

    def split_at(self, position: int) -> tuple["Run", "Run"]:
        """
        Split this run at the specified character position.

        Both halves inherit the style and receive fresh ids; the original id
        is not reused for either half.

        Raises:
            ValueError: If position is not strictly inside the text.
        """
        if not (0 < position < len(self.text)):
            raise ValueError(
                f"Split position {position} out of bounds for text length {len(self.text)}"
            )
        return self.with_text(self.text[:position]), self.with_text(self.text[position:])

    def slice(self, start: int, end: int) -> "Run":
        """New run holding ``text[start:end]`` with the same style and a fresh id."""
        return self.with_text(self.text[start:end])

    def can_merge_with(self, other: object) -> bool:
        """Runs merge only when every style facet matches."""
        if not isinstance(other, Run):
            return False
        return self.style == other.style

    def merge_with(self, other: "Run") -> "Run":
        """
        Merge this run with the run that follows it.

        The merged run keeps this (left) run's id.

        Raises:
            ValueError: If runs have different styles.
        """
        if not self.can_merge_with(other):
            raise ValueError(
                f"Cannot merge runs with different formatting: "
                f"{self.style._format_summary()} != {other.style._format_summary()}"
            )

        logger.debug("Merging runs: %r + %r", self.text[:20], other.text[:20])
        return Run(text=self.text + other.text, style=self.style, id=self.id)

    def to_dict(self) -> dict[str, Any]:
        """Serialize run to the wire dictionary ``{id, text, style}``."""
        return {"id": self.id, "text": self.text, "style": self.style.to_dict()}

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "Run":
        """
        Deserialize run from dictionary.

        A missing ``id`` is minted; a missing ``style`` means default style.
        """
        if not isinstance(data, dict):
            raise TypeError(f"Expected dict, got {type(data).__name__}")

        if "text" not in data:
            raise KeyError("Missing required key 'text' in run data")

        run_id: Optional[str] = data.get("id")
        style = TextStyle.from_dict(data.get("style"))
        if run_id is None:
            return Run(text=data["text"], style=style)
        return Run(text=data["text"], style=style, id=run_id)

    def __len__(self) -> int:
        """Return the length of the text content."""
        return len(self.text)

    def __repr__(self) -> str:
        text_preview = self.text[:20] + "..." if len(self.text) > 20 else self.text
        return f"Run(text={text_preview!r}, len={len(self.text)}, {self.style._format_summary()})"


def merge_consecutive_runs(runs: list[Run]) -> list[Run]:
    """
    Merge consecutive runs with identical formatting.

    The left run's id survives every merge. Zero-length runs are absorbed.
    """
    if not runs:
        logger.debug("merge_consecutive_runs: empty list, returning empty")
        return []

    if len(runs) == 1:
        logger.debug("merge_consecutive_runs: single run, no merge needed")
        return [runs[0]]

    merged: list[Run] = [runs[0]]

    for current_run in runs[1:]:
        last_merged = merged[-1]

        if last_merged.can_merge_with(current_run):
            merged[-1] = last_merged.merge_with(current_run)
        elif not current_run.text:
            continue
        elif not last_merged.text:
            merged[-1] = current_run
        else:
            merged.append(current_run)

    logger.debug("Merged %d runs into %d runs", len(runs), len(merged))
    return merged


__all__ = ["Run", "new_run_id", "merge_consecutive_runs", "RUN_ID_PREFIX"]
