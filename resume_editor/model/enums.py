"""
model/enums.py

(Краткое RU: Перечисления модели резюме: фасеты стиля, выравнивание, тип блока.)

EN: Domain enums for the resume rich-text model. Wire values match the JSON
the editor front end stores (``fontFamily``, ``bullet-list`` and so on).
No rendering logic here!
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Final, Literal, Optional, Union

_logger: Final[logging.Logger] = logging.getLogger(__name__)

# === DOMAINS ===


class StyleFacet(str, Enum):
    """One independent style attribute of a text run."""

    FONT_FAMILY = "fontFamily"
    FONT_SIZE = "fontSize"
    COLOR = "color"
    BOLD = "bold"
    ITALIC = "italic"
    CODE = "code"

    @property
    def attr_name(self) -> str:
        """Attribute name on :class:`~resume_editor.model.style.TextStyle`."""
        return _ATTR_NAMES[self]

    @property
    def is_flag(self) -> bool:
        return self in {StyleFacet.BOLD, StyleFacet.ITALIC, StyleFacet.CODE}

    def localized_name(self, lang: Literal["ru", "en"] = "ru") -> str:
        names_ru = {
            StyleFacet.FONT_FAMILY: "Шрифт",
            StyleFacet.FONT_SIZE: "Размер шрифта",
            StyleFacet.COLOR: "Цвет",
            StyleFacet.BOLD: "Жирный",
            StyleFacet.ITALIC: "Курсив",
            StyleFacet.CODE: "Код",
        }
        names_en = {
            StyleFacet.FONT_FAMILY: "Font family",
            StyleFacet.FONT_SIZE: "Font size",
            StyleFacet.COLOR: "Color",
            StyleFacet.BOLD: "Bold",
            StyleFacet.ITALIC: "Italic",
            StyleFacet.CODE: "Inline code",
        }
        return names_ru[self] if lang == "ru" else names_en[self]

    @classmethod
    def parse(cls, value: Union["StyleFacet", str]) -> Optional["StyleFacet"]:
        """
        Resolve a facet from the enum, its wire name or its Python attribute name.

        Returns None for unknown names.
        """
        if isinstance(value, StyleFacet):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            pass
        for facet, attr in _ATTR_NAMES.items():
            if attr == value:
                return facet
        _logger.debug("Unknown style facet name: %r", value)
        return None


_ATTR_NAMES: Final[dict[StyleFacet, str]] = {
    StyleFacet.FONT_FAMILY: "font_family",
    StyleFacet.FONT_SIZE: "font_size",
    StyleFacet.COLOR: "color",
    StyleFacet.BOLD: "bold",
    StyleFacet.ITALIC: "italic",
    StyleFacet.CODE: "code",
}


class Alignment(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    JUSTIFY = "justify"

    def localized_name(self, lang: Literal["ru", "en"] = "ru") -> str:
        names_ru = {
            Alignment.LEFT: "По левому краю",
            Alignment.CENTER: "По центру",
            Alignment.RIGHT: "По правому краю",
            Alignment.JUSTIFY: "По ширине",
        }
        return names_ru[self] if lang == "ru" else self.value


class BlockType(str, Enum):
    """Kind of block a rich-text field renders as."""

    TEXT = "text"
    BULLET_LIST = "bullet-list"
    NUMBERED_LIST = "numbered-list"

    @property
    def is_list(self) -> bool:
        return self is not BlockType.TEXT

    def localized_name(self, lang: Literal["ru", "en"] = "ru") -> str:
        names = {
            "text": {"ru": "Текст", "en": "Text"},
            "bullet-list": {"ru": "Маркированный список", "en": "Bulleted list"},
            "numbered-list": {"ru": "Нумерованный список", "en": "Numbered list"},
        }
        return names[self.value][lang]


# === DEFAULTS ===

DEFAULT_ALIGNMENT: Final[Alignment] = Alignment.LEFT
DEFAULT_BLOCK_TYPE: Final[BlockType] = BlockType.TEXT


__all__ = [
    "StyleFacet",
    "Alignment",
    "BlockType",
    "DEFAULT_ALIGNMENT",
    "DEFAULT_BLOCK_TYPE",
]
