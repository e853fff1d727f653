"""Caption text cleanup and title derivation."""

from __future__ import annotations

import html
import re

TITLE_PLACEHOLDER = "Instagram Video"
DESCRIPTION_PLACEHOLDER = "Downloaded from Instagram"
TITLE_LENGTH = 50

_UNICODE_ESCAPE_RE = re.compile(
    r"\\u(d[89ab][0-9a-f]{2})\\u(d[c-f][0-9a-f]{2})|\\u([0-9a-f]{4})",
    re.IGNORECASE,
)
_BACKSLASH_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)
_REPLACEMENT_CHAR = chr(0xFFFD)
_CONTROL_ESCAPES = {"n": "\n", "t": "\t", "r": "\r"}


def _decode_unicode(match: re.Match[str]) -> str:
    if match.group(3) is None:
        # Surrogate pair, as JSON encodes characters outside the BMP.
        high = int(match.group(1), 16) - 0xD800
        low = int(match.group(2), 16) - 0xDC00
        return chr(0x10000 + (high << 10) + low)

    code_point = int(match.group(3), 16)
    if 0xD800 <= code_point <= 0xDFFF:
        return _REPLACEMENT_CHAR
    return chr(code_point)


def _unescape_char(match: re.Match[str]) -> str:
    char = match.group(1)
    return _CONTROL_ESCAPES.get(char, char)


def clean_text(text: str) -> str:
    """Decode JSON-style escapes and HTML entities into readable text."""

    if not text:
        return ""

    decoded = _UNICODE_ESCAPE_RE.sub(_decode_unicode, text)
    decoded = _BACKSLASH_ESCAPE_RE.sub(_unescape_char, decoded)
    return html.unescape(decoded)


def make_title(caption: str | None) -> str:
    """First 50 characters of the cleaned caption followed by '...'."""

    if not caption:
        return TITLE_PLACEHOLDER
    return clean_text(caption)[:TITLE_LENGTH] + "..."


def make_description(caption: str | None) -> str:
    if not caption:
        return DESCRIPTION_PLACEHOLDER
    return clean_text(caption)
