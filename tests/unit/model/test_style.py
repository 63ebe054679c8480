"""Tests for resume_editor/model/style.py"""

import importlib.util
import json
import sys

import pytest

import resume_editor.model.style as style_module
from resume_editor.model.enums import StyleFacet
from resume_editor.model.exceptions import InvalidFacetError
from resume_editor.model.style import DEFAULT_STYLE, UNSET, TextStyle, common_style


class TestTextStyle:
    def test_default_has_no_facets(self) -> None:
        assert DEFAULT_STYLE.is_default()
        assert DEFAULT_STYLE.to_dict() == {}
        assert repr(DEFAULT_STYLE) == "TextStyle()"

    def test_with_facet_returns_new_style(self) -> None:
        base = TextStyle(color="#333333")
        bold = base.with_facet(StyleFacet.BOLD, True)
        assert bold == TextStyle(color="#333333", bold=True)
        assert base.bold is None

    @pytest.mark.parametrize("clear", [UNSET, None])
    def test_with_facet_clears(self, clear: object) -> None:
        style = TextStyle(bold=True, italic=True)
        assert style.with_facet("bold", clear) == TextStyle(italic=True)

    @pytest.mark.parametrize("name", ["fontSize", "font_size", StyleFacet.FONT_SIZE])
    def test_facet_name_forms(self, name: object) -> None:
        assert DEFAULT_STYLE.with_facet(name, 12).get(name) == 12

    def test_facets_are_independent(self) -> None:
        style = TextStyle(font_family="Georgia", code=True)
        changed = style.with_facet(StyleFacet.COLOR, "#ff0000")
        assert changed.font_family == "Georgia"
        assert changed.code is True

    @pytest.mark.parametrize(
        "facet,value",
        [
            ("bold", "yes"),
            ("italic", 1),
            ("fontSize", 0),
            ("fontSize", -3),
            ("fontSize", True),
            ("fontSize", "12"),
            ("fontSize", float("nan")),
            ("fontSize", float("inf")),
            ("color", 0x0066CC),
            ("fontFamily", ["Georgia"]),
        ],
    )
    def test_invalid_values_rejected(self, facet: str, value: object) -> None:
        with pytest.raises(InvalidFacetError):
            DEFAULT_STYLE.with_facet(facet, value)

    def test_invalid_value_in_constructor(self) -> None:
        with pytest.raises(InvalidFacetError):
            TextStyle(bold="true")  # type: ignore[arg-type]

    def test_unknown_facet(self) -> None:
        with pytest.raises(InvalidFacetError) as exc_info:
            DEFAULT_STYLE.with_facet("underline", True)
        assert "underline" in str(exc_info.value)

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            DEFAULT_STYLE.bold = True  # type: ignore[misc]


class TestSerialization:
    def test_to_dict_uses_wire_names(self) -> None:
        style = TextStyle(font_family="Inter", font_size=11, color="#0066cc", bold=False)
        assert style.to_dict() == {
            "fontFamily": "Inter",
            "fontSize": 11,
            "color": "#0066cc",
            "bold": False,
        }

    def test_from_dict_round_trip(self) -> None:
        style = TextStyle(font_size=10.5, italic=True, code=True)
        assert TextStyle.from_dict(style.to_dict()) == style

    def test_from_dict_accepts_attr_names_and_ignores_unknown(self) -> None:
        style = TextStyle.from_dict({"font_family": "Arial", "underline": True})
        assert style == TextStyle(font_family="Arial")

    def test_from_dict_none(self) -> None:
        assert TextStyle.from_dict(None) == DEFAULT_STYLE

    def test_from_dict_rejects_non_dict(self) -> None:
        with pytest.raises(TypeError):
            TextStyle.from_dict(["bold"])  # type: ignore[arg-type]


class TestCommonStyle:
    def test_keeps_agreeing_facets(self) -> None:
        styles = [
            TextStyle(bold=True, color="#111111"),
            TextStyle(bold=True, color="#222222"),
        ]
        assert common_style(styles) == TextStyle(bold=True)

    def test_single_style(self) -> None:
        style = TextStyle(italic=True)
        assert common_style([style]) == style

    def test_empty(self) -> None:
        assert common_style([]) == DEFAULT_STYLE


# ---------- MODULE ----------


def test_module_executes_top_to_bottom(monkeypatch: pytest.MonkeyPatch) -> None:
    """A fresh execution of the module builds DEFAULT_STYLE without errors."""
    name = "resume_editor.model._style_fresh"
    spec = importlib.util.spec_from_file_location(name, style_module.__file__)
    module = importlib.util.module_from_spec(spec)
    monkeypatch.setitem(sys.modules, name, module)
    spec.loader.exec_module(module)
    assert module.DEFAULT_STYLE.is_default()
    assert module.common_style([]) is module.DEFAULT_STYLE


def test_font_size_serializes_as_strict_json() -> None:
    style = TextStyle(font_size=10.5)
    assert json.loads(json.dumps(style.to_dict(), allow_nan=False)) == {"fontSize": 10.5}
