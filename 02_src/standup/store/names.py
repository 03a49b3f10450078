"""Display name helpers."""

import re

DEFAULT_MEMBER_NAME = "Member"

_UUID_RE = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
    re.IGNORECASE,
)


def clean_display_name(raw: str | None, fallback: str = DEFAULT_MEMBER_NAME) -> str:
    """Strip UUID-shaped fragments from a name, falling back when nothing is left."""
    cleaned = _UUID_RE.sub("", (raw or "").strip()).strip()
    return cleaned or fallback
