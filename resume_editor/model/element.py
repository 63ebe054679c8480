"""
Элемент содержимого (ContentElement): одно поле форматированного текста резюме.

- Владеет последовательностью runs (segments) и единолично её заменяет;
- Выравнивание (align) и тип блока (text / bullet-list / numbered-list) относятся к полю,
  а не к отдельным runs; применение стиля их не затрагивает;
- Методы применения стиля, запроса стиля, полной замены текста, сериализации и сравнения.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Final, Optional, Union
from uuid import uuid4

from resume_editor.model.enums import (
    DEFAULT_ALIGNMENT,
    DEFAULT_BLOCK_TYPE,
    Alignment,
    BlockType,
    StyleFacet,
)
from resume_editor.model.run import Run
from resume_editor.model.segments import (
    RangeLike,
    SegmentSequence,
    apply_style,
    query_style_at,
    query_style_in,
    replace_all,
    text_length,
    text_of,
    validate_sequence,
)
from resume_editor.model.style import FacetValue, TextStyle

logger: Final = logging.getLogger(__name__)


def new_element_id() -> str:
    return f"el-{uuid4().hex}"


@dataclass(slots=True)
class ContentElement:
    """
    Поле форматированного текста в строке модуля резюме.

    Атрибуты:
        id: Идентификатор элемента
        type: Тип блока (текст, маркированный или нумерованный список)
        segments: Упорядоченные runs; пустое поле хранит один пустой run
        column_index: Номер колонки в строке (с нуля)
        align: Выравнивание абзаца
    """

    id: str = field(default_factory=new_element_id)
    type: BlockType = DEFAULT_BLOCK_TYPE
    segments: SegmentSequence = field(default_factory=lambda: (Run(""),))
    column_index: int = 0
    align: Alignment = DEFAULT_ALIGNMENT

    def __post_init__(self) -> None:
        if not self.segments:
            logger.debug("Element %s created without segments, using one empty run", self.id)
            self.segments = (Run(""),)
        else:
            self.segments = validate_sequence(self.segments)
        if not isinstance(self.type, BlockType):
            self.type = BlockType(self.type)
        if not isinstance(self.align, Alignment):
            self.align = Alignment(self.align)
        if not isinstance(self.column_index, int) or self.column_index < 0:
            raise ValueError("column_index должен быть int >= 0")

    @classmethod
    def empty(cls, **kwargs: Any) -> "ContentElement":
        return cls(**kwargs)

    @classmethod
    def from_text(
        cls, text: str, style: Optional[TextStyle] = None, **kwargs: Any
    ) -> "ContentElement":
        """Поле из одного run с заданным текстом и стилем."""
        run = Run(text=text, style=style) if style is not None else Run(text=text)
        return cls(segments=(run,), **kwargs)

    # ---------- STYLE ----------

    def apply_style(
        self,
        selection: RangeLike,
        facet: Union[StyleFacet, str],
        value: FacetValue,
        *,
        merge: bool = False,
    ) -> None:
        """
        Применить фасет стиля к диапазону символов.

        Пустое или выходящее за границы выделение ничего не меняет.
        """
        self.segments = apply_style(self.segments, selection, facet, value, merge=merge)

    def style_at(self, offset: int) -> TextStyle:
        return query_style_at(self.segments, offset)

    def style_in(self, selection: RangeLike) -> TextStyle:
        return query_style_in(self.segments, selection)

    # ---------- TEXT ----------

    def set_text(self, new_text: str) -> None:
        """Полная перепечатка: один run со стилем первого run."""
        self.segments = replace_all(self.segments, new_text)

    def get_text(self) -> str:
        return text_of(self.segments)

    def get_run_count(self) -> int:
        return len(self.segments)

    def __len__(self) -> int:
        return text_length(self.segments)

    # ---------- BLOCK METADATA ----------

    def set_alignment(self, align: Union[Alignment, str]) -> None:
        self.align = Alignment(align)

    def set_block_type(self, block_type: Union[BlockType, str, None]) -> None:
        """None сбрасывает список в обычный текст."""
        self.type = BlockType.TEXT if block_type is None else BlockType(block_type)

    # ---------- SERIALIZATION ----------

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "segments": [run.to_dict() for run in self.segments],
            "columnIndex": self.column_index,
            "align": self.align.value,
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "ContentElement":
        if not isinstance(data, dict):
            raise TypeError(f"Ожидался dict, получено: {type(data).__name__}")
        kwargs: dict[str, Any] = {}
        if "id" in data:
            kwargs["id"] = data["id"]
        return ContentElement(
            type=BlockType(data.get("type", DEFAULT_BLOCK_TYPE.value)),
            segments=tuple(Run.from_dict(r) for r in data.get("segments", [])),
            column_index=int(data.get("columnIndex", 0)),
            align=Alignment(data.get("align") or DEFAULT_ALIGNMENT.value),
            **kwargs,
        )

    def __repr__(self) -> str:
        title = self.get_text()[:20]
        return (
            f"ContentElement(type={self.type.value}, runs={len(self.segments)}, "
            f"align={self.align.name}, col={self.column_index}, text='{title}...')"
        )
