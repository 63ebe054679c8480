"""
Движок фрагментов: применение стиля к диапазону символов поверх последовательности runs.

Segment engine for one rich-text field. A segment sequence is an ordered
tuple of :class:`Run` values whose concatenated text is the field's logical
text. Every character offset in ``[0, len)`` belongs to exactly one run.

All functions here are pure: they never mutate their input and either return
a new fully valid sequence or the input itself. Offsets are character counts
(``len(run.text)``) over the concatenated run texts, never rendered widths.

Example:
    >>> runs = (Run("Hello World"),)
    >>> styled = apply_style(runs, (2, 5), StyleFacet.BOLD, True)
    >>> [(r.text, r.style.bold) for r in styled]
    [('He', None), ('llo', True), (' World', None)]
    >>> query_style_at(styled, 3).bold
    True
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Final, Optional, Sequence, Tuple, Union

from .enums import StyleFacet
from .exceptions import InvalidRangeError, InvalidSequenceError
from .run import Run, merge_consecutive_runs
from .style import DEFAULT_STYLE, FacetValue, TextStyle, common_style

logger: Final = logging.getLogger(__name__)

SegmentSequence = Tuple[Run, ...]
RangeLike = Union["SelectionRange", Tuple[int, int]]


@dataclass(frozen=True, slots=True)
class SelectionRange:
    """
    Half-open character interval ``[start, end)`` over the field's text.

    ``start == end`` denotes a collapsed caret (no selection).

    Raises:
        InvalidRangeError: On negative offsets or ``start > end``; use
            :meth:`normalized` for endpoints reported in either order.
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < 0 or self.start > self.end:
            raise InvalidRangeError(self.start, self.end)

    @classmethod
    def normalized(cls, anchor: int, focus: int) -> "SelectionRange":
        """Build a range from two endpoints given in any order."""
        return cls(min(anchor, focus), max(anchor, focus))

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def __len__(self) -> int:
        return self.end - self.start

    def fits(self, length: int) -> bool:
        return self.end <= length


# ---------------------------------------------------------------------------
# Offset bookkeeping
# ---------------------------------------------------------------------------


def text_of(sequence: Sequence[Run]) -> str:
    """Concatenated logical text of the field."""
    return "".join(run.text for run in sequence)


def text_length(sequence: Sequence[Run]) -> int:
    return sum(len(run.text) for run in sequence)


def run_bounds(sequence: Sequence[Run]) -> list[tuple[int, int]]:
    """``(start, end)`` character offsets of every run, in order."""
    bounds: list[tuple[int, int]] = []
    cursor = 0
    for run in sequence:
        bounds.append((cursor, cursor + len(run.text)))
        cursor += len(run.text)
    return bounds


def run_index_at(sequence: Sequence[Run], offset: int) -> Optional[int]:
    """
    Index of the run containing character ``offset``.

    ``offset == len`` maps to the last run (caret at the end of the text).
    Returns None for an empty sequence.

    Raises:
        InvalidRangeError: If offset is negative or past the end.
    """
    length = text_length(sequence)
    if offset < 0 or offset > length:
        raise InvalidRangeError(offset, offset, length)
    if not sequence:
        return None

    cursor = 0
    for index, run in enumerate(sequence):
        run_end = cursor + len(run.text)
        if cursor <= offset < run_end:
            return index
        cursor = run_end
    return len(sequence) - 1


def validate_sequence(sequence: Sequence[Run]) -> SegmentSequence:
    """
    Check the import contract and return the sequence as a tuple.

    Raises:
        InvalidSequenceError: Non-Run items, duplicate ids, or zero-length
            runs in a sequence of more than one run.
    """
    runs = tuple(sequence)
    seen: set[str] = set()
    for index, run in enumerate(runs):
        if not isinstance(run, Run):
            raise InvalidSequenceError(
                "Segment sequence items must be Run", {"index": index, "type": type(run).__name__}
            )
        if run.id in seen:
            raise InvalidSequenceError("Duplicate run id", {"index": index, "id": run.id})
        seen.add(run.id)
        if not run.text and len(runs) > 1:
            raise InvalidSequenceError("Zero-length run in a non-empty field", {"index": index})
    return runs


# ---------------------------------------------------------------------------
# Style application
# ---------------------------------------------------------------------------


def _coerce_range(selection: RangeLike) -> SelectionRange:
    if isinstance(selection, SelectionRange):
        return selection
    anchor, focus = selection
    return SelectionRange.normalized(anchor, focus)


def apply_style(
    sequence: Sequence[Run],
    selection: RangeLike,
    facet: Union[StyleFacet, str],
    value: FacetValue,
    *,
    merge: bool = False,
    strict: bool = False,
) -> SegmentSequence:
    """
    Apply one style facet to the characters in ``selection``.

    Runs entirely outside the range pass through untouched (same object,
    same id). Each intersected run is cut into an untouched prefix, the
    restyled middle and an untouched suffix; empty pieces are dropped and
    every piece gets a fresh id. A run whose style the change would not
    alter is kept whole.

    Args:
        sequence: Current runs of the field.
        selection: ``SelectionRange`` or ``(anchor, focus)`` pair in any order.
        facet: Facet to change (enum, wire name or attribute name).
        value: New facet value, or ``UNSET``/None to clear it.
        merge: Coalesce adjacent equal-style runs afterwards (left id kept).
        strict: Raise on an out-of-range selection instead of returning the
            input unchanged.

    Returns:
        The new sequence, or the input (as a tuple) when nothing applies.

    Raises:
        InvalidFacetError: Unknown facet or wrong value type.
        InvalidRangeError: Only with ``strict=True``.
    """
    runs = tuple(sequence)
    length = text_length(runs)
    DEFAULT_STYLE.with_facet(facet, value)

    try:
        rng = _coerce_range(selection)
    except InvalidRangeError:
        if strict:
            raise
        logger.warning("apply_style rejected selection %r for length %d", selection, length)
        return runs

    if rng.is_empty:
        logger.debug("apply_style: empty selection at %d, nothing to do", rng.start)
        return runs

    if not rng.fits(length):
        if strict:
            raise InvalidRangeError(rng.start, rng.end, length)
        logger.warning(
            "apply_style rejected selection [%d, %d) for length %d", rng.start, rng.end, length
        )
        return runs

    result: list[Run] = []
    cursor = 0

    for run in runs:
        run_start = cursor
        run_end = cursor + len(run.text)
        cursor = run_end

        if run_end <= rng.start or run_start >= rng.end:
            result.append(run)
            continue

        new_style = run.style.with_facet(facet, value)
        if new_style == run.style:
            result.append(run)
            continue

        overlap_start = max(rng.start, run_start) - run_start
        overlap_end = min(rng.end, run_end) - run_start

        if overlap_start > 0:
            result.append(run.slice(0, overlap_start))
        result.append(Run(text=run.text[overlap_start:overlap_end], style=new_style))
        if overlap_end < len(run.text):
            result.append(run.slice(overlap_end, len(run.text)))

    if merge:
        result = merge_consecutive_runs(result)

    logger.debug(
        "apply_style %s=%r on [%d, %d): %d -> %d runs",
        getattr(facet, "value", facet),
        value,
        rng.start,
        rng.end,
        len(runs),
        len(result),
    )
    return tuple(result)


# ---------------------------------------------------------------------------
# Style queries
# ---------------------------------------------------------------------------


def query_style_at(
    sequence: Sequence[Run], offset: int, *, legacy_first_run: bool = False
) -> TextStyle:
    """
    Style of the run containing ``offset``.

    ``offset == len`` reports the last run (caret at the end); an empty
    sequence reports the default style. ``legacy_first_run=True`` always
    reports the first run, as older editor builds did.

    Raises:
        InvalidRangeError: If offset is negative or past the end.
    """
    if legacy_first_run:
        return sequence[0].style if sequence else DEFAULT_STYLE

    index = run_index_at(sequence, offset)
    if index is None:
        return DEFAULT_STYLE
    return sequence[index].style


def query_style_in(sequence: Sequence[Run], selection: RangeLike) -> TextStyle:
    """
    Style shared by every character in ``selection``.

    A facet is kept only when all intersected runs agree on it. An empty
    selection reports the style at the caret.

    Raises:
        InvalidRangeError: If the selection does not fit the text.
    """
    rng = _coerce_range(selection)
    length = text_length(sequence)
    if not rng.fits(length):
        raise InvalidRangeError(rng.start, rng.end, length)
    if rng.is_empty:
        return query_style_at(sequence, rng.start)

    styles = [
        run.style
        for run, (start, end) in zip(sequence, run_bounds(sequence))
        if start < rng.end and end > rng.start
    ]
    return common_style(styles)


# ---------------------------------------------------------------------------
# Bulk updates
# ---------------------------------------------------------------------------


def replace_all(sequence: Sequence[Run], new_text: str) -> SegmentSequence:
    """
    Collapse the field to a single run holding ``new_text``.

    The run inherits the first existing run's style and id; an empty
    sequence yields a default-styled run with a fresh id. Per-range styling
    is discarded on purpose: this is the plain-retype path.
    """
    if not isinstance(new_text, str):
        raise TypeError(f"new_text must be str, got {type(new_text).__name__}")

    if not sequence:
        return (Run(text=new_text),)

    first = sequence[0]
    logger.debug("replace_all: %d runs collapsed into one (%d chars)", len(sequence), len(new_text))
    return (Run(text=new_text, style=first.style, id=first.id),)


def merge_adjacent(sequence: Sequence[Run]) -> SegmentSequence:
    """Coalesce adjacent runs with equal style; the left run's id survives."""
    return tuple(merge_consecutive_runs(list(sequence)))


__all__ = [
    "SegmentSequence",
    "SelectionRange",
    "apply_style",
    "query_style_at",
    "query_style_in",
    "replace_all",
    "merge_adjacent",
    "text_of",
    "text_length",
    "run_bounds",
    "run_index_at",
    "validate_sequence",
]
