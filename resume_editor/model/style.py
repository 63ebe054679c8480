"""
Стиль текстового фрагмента (TextStyle): набор независимых необязательных фасетов.

Text style value object. Every facet (font family, font size, color, bold,
italic, inline code) is optional and independent of the others; ``None``
means "not set, inherit from the surrounding block". Styles are immutable:
changing a facet yields a new TextStyle.

Module: resume_editor/model/style.py
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Final, Iterable, Optional, Union

from .enums import StyleFacet
from .exceptions import InvalidFacetError

logger: Final = logging.getLogger(__name__)


class _UnsetType(Enum):
    UNSET = "unset"

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Final = _UnsetType.UNSET
"""Explicit "remove this facet" value for :meth:`TextStyle.with_facet`."""

FacetValue = Union[str, int, float, bool, None, _UnsetType]


def _resolve(facet: Union[StyleFacet, str]) -> StyleFacet:
    resolved = StyleFacet.parse(facet)
    if resolved is None:
        raise InvalidFacetError("Unknown style facet", {"facet": facet})
    return resolved


def _check_value(facet: StyleFacet, value: Any) -> None:
    if value is None:
        return
    if facet.is_flag:
        if not isinstance(value, bool):
            raise InvalidFacetError(
                f"{facet.value} must be bool", {"value": value, "type": type(value).__name__}
            )
    elif facet is StyleFacet.FONT_SIZE:
        if (
            isinstance(value, bool)
            or not isinstance(value, (int, float))
            or not math.isfinite(value)
            or value <= 0
        ):
            raise InvalidFacetError("fontSize must be a positive finite number", {"value": value})
    elif not isinstance(value, str):
        raise InvalidFacetError(
            f"{facet.value} must be str", {"value": value, "type": type(value).__name__}
        )


@dataclass(frozen=True, slots=True)
class TextStyle:
    """
    Independent optional style facets of a text run.

    Attributes:
        font_family: Font family name, e.g. "Georgia".
        font_size: Font size in points.
        color: Color token, e.g. "#0066cc".
        bold: Bold weight.
        italic: Italic slant.
        code: Render as inline code.

    Example:
        >>> base = TextStyle(color="#333333")
        >>> bold = base.with_facet(StyleFacet.BOLD, True)
        >>> bold
        TextStyle(color='#333333', bold=True)
        >>> bold.with_facet("bold", UNSET) == base
        True
    """

    font_family: Optional[str] = None
    font_size: Optional[float] = None
    color: Optional[str] = None
    bold: Optional[bool] = None
    italic: Optional[bool] = None
    code: Optional[bool] = None

    def __post_init__(self) -> None:
        for facet in StyleFacet:
            _check_value(facet, getattr(self, facet.attr_name))

    def get(self, facet: Union[StyleFacet, str]) -> Any:
        """Return the value of one facet (None when unset)."""
        return getattr(self, _resolve(facet).attr_name)

    def with_facet(self, facet: Union[StyleFacet, str], value: FacetValue) -> "TextStyle":
        """
        Return a copy with ``facet`` overwritten by ``value``.

        ``UNSET`` or ``None`` clears the facet.

        Raises:
            InvalidFacetError: Unknown facet or a value of the wrong type.
        """
        resolved = _resolve(facet)
        new_value = None if value is UNSET else value
        _check_value(resolved, new_value)
        return replace(self, **{resolved.attr_name: new_value})

    def is_default(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the wire form; unset facets are omitted."""
        result: dict[str, Any] = {}
        for facet in StyleFacet:
            value = getattr(self, facet.attr_name)
            if value is not None:
                result[facet.value] = value
        return result

    @staticmethod
    def from_dict(data: Optional[dict[str, Any]]) -> "TextStyle":
        """
        Deserialize from the wire form.

        Accepts wire names (``fontSize``) and attribute names (``font_size``).
        Unknown keys are ignored with a debug log entry.
        """
        if data is None:
            return TextStyle()
        if not isinstance(data, dict):
            raise TypeError(f"Expected dict, got {type(data).__name__}")

        values: dict[str, Any] = {}
        for key, value in data.items():
            facet = StyleFacet.parse(key)
            if facet is None:
                logger.debug("Ignoring unknown style key: %r", key)
                continue
            values[facet.attr_name] = value
        return TextStyle(**values)

    def _format_summary(self) -> str:
        parts: list[str] = []
        if self.font_family:
            parts.append(f"font={self.font_family}")
        if self.font_size is not None:
            parts.append(f"size={self.font_size}")
        if self.color:
            parts.append(f"color={self.color}")
        flags = []
        if self.bold:
            flags.append("B")
        if self.italic:
            flags.append("I")
        if self.code:
            flags.append("C")
        if flags:
            parts.append(f"style={'+'.join(flags)}")
        return ", ".join(parts) if parts else "default"

    def __repr__(self) -> str:
        set_facets = ", ".join(
            f"{f.name}={getattr(self, f.name)!r}"
            for f in fields(self)
            if getattr(self, f.name) is not None
        )
        return f"TextStyle({set_facets})"


DEFAULT_STYLE: Final[TextStyle] = TextStyle()


def common_style(styles: Iterable[TextStyle]) -> TextStyle:
    """
    Facet-wise intersection: keep a facet only where every style agrees.

    An empty iterable yields the default style.
    """
    collected = list(styles)
    if not collected:
        return DEFAULT_STYLE

    first = collected[0]
    values: dict[str, Any] = {}
    for facet in StyleFacet:
        value = getattr(first, facet.attr_name)
        if all(getattr(s, facet.attr_name) == value for s in collected[1:]):
            values[facet.attr_name] = value
    return TextStyle(**values)


__all__ = ["TextStyle", "UNSET", "DEFAULT_STYLE", "FacetValue", "common_style"]
