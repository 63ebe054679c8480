"""
Print payload codec: resume data carried in a ``?data=`` URL parameter.

The parameter holds URL-quoted base64 of the UTF-8 JSON of ``ResumeData``.
Decoding never raises: missing or malformed input yields ``None`` so the
print view can fall back to data injected by other means.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from typing import Final, Optional
from urllib.parse import quote, unquote

from resume_editor.model.exceptions import SegmentError
from resume_editor.model.resume import ResumeData

_LOG: Final = logging.getLogger(__name__)


def encode_data_param(data: ResumeData) -> str:
    raw = json.dumps(data.to_dict(), ensure_ascii=False, separators=(",", ":")).encode("utf-8")
    return quote(base64.b64encode(raw).decode("ascii"), safe="")


def decode_data_param(param: Optional[str]) -> Optional[ResumeData]:
    if not param:
        return None
    try:
        raw = base64.b64decode(unquote(param), validate=True)
        payload = json.loads(raw.decode("utf-8"))
        return ResumeData.from_dict(payload)
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as exc:
        _LOG.warning("Malformed print payload: %s", exc.__class__.__name__)
        return None
    except (KeyError, TypeError, SegmentError, ValueError) as exc:
        _LOG.warning("Print payload is not valid resume data: %s", exc)
        return None


__all__ = ["encode_data_param", "decode_data_param"]
