"""Tests for resume_editor/storage/codec.py"""

import base64
import json
import logging
from urllib.parse import quote

import pytest

from resume_editor.model.element import ContentElement
from resume_editor.model.enums import StyleFacet
from resume_editor.model.resume import ContentRow, ResumeData, ResumeModule
from resume_editor.storage.codec import decode_data_param, encode_data_param


def _param(payload: object) -> str:
    raw = json.dumps(payload).encode("utf-8")
    return quote(base64.b64encode(raw).decode("ascii"), safe="")


def test_encode_decode_preserves_styled_runs() -> None:
    element = ContentElement.from_text("Привет, мир", id="el-1")
    element.apply_style((0, 6), StyleFacet.ITALIC, True)
    data = ResumeData(
        title="Резюме",
        modules=[ResumeModule(id="m", title="О себе", rows=[ContentRow(elements=[element])])],
    )

    param = encode_data_param(data)

    assert "+" not in param and "/" not in param and "=" not in param
    decoded = decode_data_param(param)
    assert decoded is not None
    assert decoded.to_dict() == data.to_dict()


def test_decode_legacy_payload() -> None:
    payload = {"title": "Old", "modules": [{"id": "m", "title": "T", "content": "1. One"}]}
    decoded = decode_data_param(_param(payload))
    element = next(decoded.get_module("m").iter_elements())
    assert element.get_text() == "One"


@pytest.mark.parametrize("param", [None, ""])
def test_decode_missing(param: object) -> None:
    assert decode_data_param(param) is None


@pytest.mark.parametrize(
    "param",
    [
        "not base64!!",
        quote(base64.b64encode(b"\xff\xfe").decode("ascii"), safe=""),
        quote(base64.b64encode(b"{broken").decode("ascii"), safe=""),
    ],
    ids=["bad-base64", "bad-utf8", "bad-json"],
)
def test_decode_malformed(param: str, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="resume_editor.storage.codec"):
        assert decode_data_param(param) is None
    assert "Malformed print payload" in caplog.text


@pytest.mark.parametrize(
    "payload",
    [["a", "list"], {"modules": [{"title": "no id or body"}]}],
)
def test_decode_invalid_resume(payload: object) -> None:
    assert decode_data_param(_param(payload)) is None


def test_decode_header_only_legacy_payload() -> None:
    payload = {"title": "t", "modules": [{"id": "m", "title": "Exp", "subtitle": "ACME"}]}
    decoded = decode_data_param(_param(payload))
    assert decoded is not None
    assert decoded.get_module("m").rows[0].element_at(0).get_text() == "ACME"
