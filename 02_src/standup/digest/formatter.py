"""Digest formatting: stand-up state -> grouped Markdown text."""

from datetime import date as date_type
from datetime import datetime, timezone

from ..models import StandupState
from ..store.names import clean_display_name

DIGEST_TITLE = "## 📋 Stand-up — {date}"
NO_UPDATES = "_No updates yet._"
MISSING_WARNING = "> ⚠️ No answer from: {names}"

# (header, Answer field), in output order
SECTIONS = (
    ("### ⚠️ Blockers", "blockers"),
    ("### ✅ Today", "today"),
    ("### 🕗 Yesterday", "yesterday"),
    ("### 📝 Notes", "other"),
)


def single_line(text: str | None) -> str:
    """Collapse an answer onto one line so it stays inside its bullet."""
    return " ".join((text or "").split())


def dedupe(lines: list[str]) -> list[str]:
    """Drop case-insensitive duplicate lines, keeping first occurrences in order."""
    seen: set[str] = set()
    result = []
    for line in lines:
        key = line.lower()
        if key not in seen:
            seen.add(key)
            result.append(line)
    return result


def format_digest(
    state: StandupState,
    names: dict[str, str] | None = None,
    today: date_type | None = None,
) -> str:
    """
    Render the stand-up as a digest.

    Args:
        state: Stand-up snapshot.
        names: member_id -> registered display name, used for missing members.
        today: Date used in the header when the stand-up has none.

    Returns:
        Markdown text: a date header, the non-empty sections in fixed order,
        and a warning naming members without an answer.
    """
    names = names or {}
    header_date = state.date or (today or datetime.now(timezone.utc).date()).isoformat()

    section_lines: dict[str, list[str]] = {field: [] for _, field in SECTIONS}
    for member_id, answer in state.responses.items():
        who = clean_display_name(answer.display_name or member_id)
        for _, field in SECTIONS:
            text = single_line(getattr(answer, field))
            if text:
                section_lines[field].append(f"- {who}: {text}")

    out = [DIGEST_TITLE.format(date=header_date)]
    for header, field in SECTIONS:
        lines = section_lines[field]
        if lines:
            out.extend(["", header, *dedupe(lines)])

    if len(out) == 1:
        out.extend(["", NO_UPDATES])

    missing = [
        clean_display_name(names.get(m) or m)
        for m in state.members
        if m not in state.responses
    ]
    if missing:
        listed = ", ".join(f"**{name}**" for name in missing)
        out.extend(["", MISSING_WARNING.format(names=listed)])

    return "\n".join(out)
