"""URL validation, endpoint URL building and URL-file ingestion."""

from __future__ import annotations

import re
from pathlib import Path

from igfetch.models import MediaReference, PostKind

_POST_URL_RE = re.compile(
    r"^(?:https?://)?(?:www\.)?instagram\.com/(?P<kind>p|reel|tv)/(?P<shortcode>[A-Za-z0-9_-]+)(?=[/?#]|$)",
    re.IGNORECASE,
)
_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)


def _match(value: object) -> re.Match[str] | None:
    if not isinstance(value, str):
        return None
    match = _POST_URL_RE.match(value.strip())
    if match is None:
        return None
    # Only the host is case-insensitive.
    if match.group("kind") not in {kind.value for kind in PostKind}:
        return None
    return match


def is_supported_url(value: object) -> bool:
    """Return True for Instagram /p/, /reel/ and /tv/ post URLs."""

    return _match(value) is not None


def parse_media_reference(value: str) -> MediaReference:
    """Validate an Instagram post URL and extract its shortcode."""

    match = _match(value)
    if match is None:
        raise ValueError(f"Unsupported Instagram URL '{value}'. Expected /p/, /reel/ or /tv/ post URL")

    return MediaReference(
        url=value.strip(),
        kind=PostKind(match.group("kind")),
        shortcode=match.group("shortcode"),
    )


def with_scheme(url: str) -> str:
    """Default scheme-less post URLs to https."""

    return url if _SCHEME_RE.match(url) else f"https://{url}"


def json_endpoint_url(url: str) -> str:
    """Append the query flag that asks for a machine-readable response."""

    url = with_scheme(url).split("#", 1)[0]
    if "?" in url:
        return f"{url}&__a=1"
    return f"{url.rstrip('/')}/?__a=1"


def embed_url(url: str) -> str:
    """Return the embeddable-page variant of a post URL."""

    url = with_scheme(url).split("#", 1)[0].split("?", 1)[0]
    return f"{url.rstrip('/')}/embed/"


def load_url_file(path: Path) -> list[MediaReference]:
    """Load and validate post URLs from a text file (one URL per line)."""

    if not path.exists() or not path.is_file():
        raise ValueError(f"URL file not found: {path}")

    seen: set[str] = set()
    items: list[MediaReference] = []

    for line_number, raw_line in enumerate(path.read_text(encoding="utf-8").splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        try:
            reference = parse_media_reference(line)
        except ValueError as exc:
            raise ValueError(f"Invalid URL at line {line_number}: {exc}") from exc

        if reference.shortcode in seen:
            continue

        seen.add(reference.shortcode)
        items.append(reference)

    if not items:
        raise ValueError("No valid URLs found in URL file")

    return items
