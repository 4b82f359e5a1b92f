from __future__ import annotations

import base64
import logging
from typing import Any, Optional

log = logging.getLogger(__name__)

_BASE64_MARKER = ";base64"


def preview(s: str, n: int = 50) -> str:
    return s[:n] + "..." if len(s) > n else s


def strip_data_url(value: Any, logger: Optional[logging.Logger] = None) -> Optional[str]:
    """
    Return the base64 payload of a ``data:<mime>;base64,<payload>`` string.

    Strings that do not look like a base64 data URL are returned unchanged
    (they may already be raw base64; decoding will surface it if not).
    Empty or non-string input gives None.
    """
    if not value or not isinstance(value, str):
        return None

    head, sep, rest = value.partition(",")
    if sep and _BASE64_MARKER in head:
        return rest

    (logger or log).warning(
        "String does not appear to be a 'data:TYPE;base64,DATA' URL: %s", preview(value)
    )
    return value


def decode_base64(payload: str) -> bytes:
    """
    Lenient base64 decode: characters outside the alphabet (whitespace,
    line breaks) are discarded. Raises binascii.Error on bad padding.
    """
    return base64.b64decode(payload, validate=False)
