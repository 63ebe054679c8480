"""Tests for resume_editor/model/enums.py"""

import pytest

from resume_editor.model.enums import (
    DEFAULT_ALIGNMENT,
    DEFAULT_BLOCK_TYPE,
    Alignment,
    BlockType,
    StyleFacet,
)


class TestStyleFacet:
    def test_wire_values(self) -> None:
        assert [f.value for f in StyleFacet] == [
            "fontFamily",
            "fontSize",
            "color",
            "bold",
            "italic",
            "code",
        ]

    def test_attr_names(self) -> None:
        assert StyleFacet.FONT_FAMILY.attr_name == "font_family"
        assert StyleFacet.CODE.attr_name == "code"

    def test_flags(self) -> None:
        assert {f for f in StyleFacet if f.is_flag} == {
            StyleFacet.BOLD,
            StyleFacet.ITALIC,
            StyleFacet.CODE,
        }

    @pytest.mark.parametrize(
        "value,expected",
        [
            (StyleFacet.COLOR, StyleFacet.COLOR),
            ("fontSize", StyleFacet.FONT_SIZE),
            ("font_size", StyleFacet.FONT_SIZE),
            ("underline", None),
            (42, None),
        ],
    )
    def test_parse(self, value: object, expected: object) -> None:
        assert StyleFacet.parse(value) is expected

    def test_localized_names(self) -> None:
        assert StyleFacet.BOLD.localized_name("ru") == "Жирный"
        assert StyleFacet.CODE.localized_name("en") == "Inline code"


class TestBlockMetadata:
    def test_defaults(self) -> None:
        assert DEFAULT_ALIGNMENT is Alignment.LEFT
        assert DEFAULT_BLOCK_TYPE is BlockType.TEXT

    def test_block_type_values(self) -> None:
        assert BlockType("bullet-list") is BlockType.BULLET_LIST
        assert BlockType("numbered-list") is BlockType.NUMBERED_LIST

    def test_is_list(self) -> None:
        assert not BlockType.TEXT.is_list
        assert BlockType.BULLET_LIST.is_list
        assert BlockType.NUMBERED_LIST.is_list

    def test_alignment_values(self) -> None:
        assert {a.value for a in Alignment} == {"left", "center", "right", "justify"}
        assert Alignment.JUSTIFY.localized_name("en") == "justify"
        assert BlockType.BULLET_LIST.localized_name("en") == "Bulleted list"

    def test_unknown_value(self) -> None:
        with pytest.raises(ValueError):
            Alignment("middle")
