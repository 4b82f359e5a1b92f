from __future__ import annotations

import base64
import json
import logging
from typing import Any, Dict, List, Optional

import pytest

from mae.catalog import ARTIFACTS


def data_url(data: bytes, mime: str = "application/octet-stream") -> str:
    return f"data:{mime};base64," + base64.b64encode(data).decode("ascii")


ANALYSIS = {"bpm": 92.5, "key": "A minor", "segments": [{"start": 0.0, "label": "intro"}], "title": "La Muerte"}


def full_bundle() -> Dict[str, Optional[str]]:
    out: Dict[str, Optional[str]] = {}
    for a in ARTIFACTS:
        if a.field == "analyzer_result":
            out[a.field] = data_url(json.dumps(ANALYSIS).encode("utf-8"), "application/json")
        elif a.filename.endswith(".png"):
            out[a.field] = data_url(b"\x89PNG\r\n\x1a\n" + b"\x00" * 16, "image/png")
        elif a.filename.endswith(".mp3"):
            out[a.field] = data_url(b"ID3\x03\x00" + a.field.encode(), "audio/mpeg")
        else:
            out[a.field] = data_url(b"RIFF\x24\x00\x00\x00WAVE" + a.field.encode(), "audio/wav")
    return out


class FakeResponse:
    _NO_JSON = object()

    def __init__(self, status_code: int = 200, obj: Any = _NO_JSON, text: str = "", reason: str = "") -> None:
        self.status_code = status_code
        self._obj = obj
        self.text = text if text or obj is self._NO_JSON else json.dumps(obj)
        self.reason = reason

    def json(self) -> Any:
        if self._obj is self._NO_JSON:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._obj


class FakeSession:
    def __init__(self, response: Optional[FakeResponse] = None, exc: Optional[BaseException] = None) -> None:
        self.response = response
        self.exc = exc
        self.calls: List[Dict[str, Any]] = []

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"url": url, **kwargs})
        if self.exc is not None:
            raise self.exc
        assert self.response is not None
        return self.response


@pytest.fixture
def bundle() -> Dict[str, Optional[str]]:
    return full_bundle()


@pytest.fixture(autouse=True)
def _reset_mae_logger():
    yield
    lg = logging.getLogger("mae")
    for h in list(lg.handlers):
        h.close()
    lg.handlers.clear()
    lg.setLevel(logging.NOTSET)
    lg.propagate = True


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "MAE_API_URL",
        "MAE_MUSIC_URL",
        "MAE_OUTPUT_DIR",
        "MAE_VISUALIZE",
        "MAE_SONIFY",
        "MAE_WORKERS",
        "MAE_CONNECT_TIMEOUT",
        "MAE_READ_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)
