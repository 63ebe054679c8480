"""
Resume document model.

Structure: ResumeData -> ResumeModule (titled section) -> ContentRow (1..n
columns) -> ContentElement (rich-text field) -> runs. Serialization uses the
JSON keys the editor front end stores, so ``to_dict``/``from_dict`` round-trip
losslessly (run order, ids, text and style included).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional
from uuid import uuid4

from resume_editor.model.element import ContentElement

logger = logging.getLogger(__name__)

MAX_COLUMNS = 3


def new_row_id() -> str:
    return f"row-{uuid4().hex}"


@dataclass(slots=True)
class ContentRow:
    """
    Строка модуля: от одной до трёх колонок с элементами.

    Атрибуты:
        id: Идентификатор строки
        columns: Число колонок (1..3)
        elements: Элементы; column_index каждого меньше columns
        order: Порядок строки внутри модуля
    """

    id: str = field(default_factory=new_row_id)
    columns: int = 1
    elements: List[ContentElement] = field(default_factory=list)
    order: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.columns, int) or not (1 <= self.columns <= MAX_COLUMNS):
            raise ValueError(f"columns должен быть в диапазоне 1..{MAX_COLUMNS}: {self.columns!r}")
        for element in self.elements:
            if element.column_index >= self.columns:
                raise ValueError(
                    f"Элемент {element.id} в колонке {element.column_index}, "
                    f"а в строке {self.columns} колонок"
                )

    def element_at(self, column_index: int) -> Optional[ContentElement]:
        for element in self.elements:
            if element.column_index == column_index:
                return element
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "columns": self.columns,
            "elements": [el.to_dict() for el in self.elements],
            "order": self.order,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ContentRow:
        if not isinstance(data, dict):
            raise TypeError(f"Ожидался dict, получено: {type(data).__name__}")
        return cls(
            id=data.get("id") or new_row_id(),
            columns=int(data.get("columns", 1)),
            elements=[ContentElement.from_dict(e) for e in data.get("elements", [])],
            order=int(data.get("order", 0)),
        )


@dataclass(slots=True)
class ResumeModule:
    """A titled resume section (education, experience, ...) made of rows."""

    id: str
    title: str
    order: int = 0
    icon: Optional[str] = None
    rows: List[ContentRow] = field(default_factory=list)

    def sorted_rows(self) -> List[ContentRow]:
        return sorted(self.rows, key=lambda r: r.order)

    def iter_elements(self) -> Iterator[ContentElement]:
        for row in self.sorted_rows():
            yield from row.elements

    def find_element(self, element_id: str) -> Optional[ContentElement]:
        for element in self.iter_elements():
            if element.id == element_id:
                return element
        return None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "order": self.order,
            "rows": [row.to_dict() for row in self.rows],
        }
        if self.icon is not None:
            result["icon"] = self.icon
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ResumeModule:
        if not isinstance(data, dict):
            raise TypeError(f"Ожидался dict, получено: {type(data).__name__}")
        if "id" not in data:
            raise KeyError("Missing required key 'id' in module data")
        return cls(
            id=data["id"],
            title=data.get("title", ""),
            order=int(data.get("order", 0)),
            icon=data.get("icon"),
            rows=[ContentRow.from_dict(r) for r in data.get("rows", [])],
        )


@dataclass(slots=True)
class ResumeData:
    """
    Данные резюме целиком.

    Атрибуты:
        title: Заголовок резюме
        modules: Модули (секции) резюме
    """

    title: str = ""
    modules: List[ResumeModule] = field(default_factory=list)

    def sorted_modules(self) -> List[ResumeModule]:
        return sorted(self.modules, key=lambda m: m.order)

    def get_module(self, module_id: str) -> Optional[ResumeModule]:
        for module in self.modules:
            if module.id == module_id:
                return module
        return None

    def find_element(self, element_id: str) -> Optional[ContentElement]:
        for module in self.modules:
            element = module.find_element(element_id)
            if element is not None:
                return element
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "modules": [m.to_dict() for m in self.modules],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ResumeData:
        """Восстановить ResumeData; старые модули (content без rows) мигрируются."""
        from resume_editor.importer.legacy import migrate_modules

        if not isinstance(data, dict):
            raise TypeError(f"Ожидался dict, получено: {type(data).__name__}")
        modules = migrate_modules(data.get("modules", []))
        return cls(title=data.get("title", ""), modules=modules)

    def __repr__(self) -> str:
        return f"ResumeData(title={self.title!r}, modules={len(self.modules)})"
