"""Summarization pass over a formatted digest."""

import asyncio
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone

from ..llm import IAnswerSummarizer
from ..llm.summarizer import strip_prefix
from ..logging_config import get_logger
from .formatter import DIGEST_TITLE

logger = get_logger(__name__)

# (key, header, empty placeholder), in output order
SUMMARY_SECTIONS = (
    ("blockers", "### ⚠️ Blockers", "- No blockers reported."),
    ("today", "### ✅ Today", "- No update."),
    ("yesterday", "### 🕗 Yesterday", "- No update."),
    ("notes", "### 📝 Notes", "- Nothing to report."),
)

_HEADER_PATTERNS = {
    "blockers": re.compile(r"^###\s*(?:\S+\s+)?(blockers?|blocages?)\b", re.IGNORECASE),
    "today": re.compile(r"^###\s*(?:\S+\s+)?(today|aujourd[’']?hui)\b", re.IGNORECASE),
    "yesterday": re.compile(r"^###\s*(?:\S+\s+)?(yesterday|hier)\b", re.IGNORECASE),
    "notes": re.compile(r"^###\s*(?:\S+\s+)?(notes?)\b", re.IGNORECASE),
}
_BOLD_ITEM_RE = re.compile(r"^-\s*\*\*(.+?)\*\*:\s*(.+)$")
_PLAIN_ITEM_RE = re.compile(r"^-\s*([^:]+):\s*(.+)$")
_WARNING_RE = re.compile(r"^\s*>\s*⚠")
_DATE_RE = re.compile(r"^##\s.*?(\d{4}-\d{2}-\d{2})")

@dataclass
class DigestItem:
    """One `- name: text` line of a digest section."""

    who: str
    text: str


@dataclass
class ParsedDigest:
    """Sections, items and warnings recovered from digest text."""

    date: str | None = None
    sections: dict[str, list[DigestItem]] = field(
        default_factory=lambda: {key: [] for key, _, _ in SUMMARY_SECTIONS}
    )
    warnings: list[str] = field(default_factory=list)


def ensure_period(text: str) -> str:
    text = text.strip()
    return text if re.search(r"[.?!…]$", text) else text + "."


def format_fallback(section: str, who: str, raw: str) -> str:
    """Deterministic rendering of one answer."""
    if section == "blockers":
        return f"**{who}** — Blocker: {ensure_period(strip_prefix(raw))}"
    return f"**{who}** {ensure_period(strip_prefix(raw))}"


def parse_digest(text: str) -> ParsedDigest:
    """Parse digest text back into sections and warning lines."""
    parsed = ParsedDigest()
    current: str | None = None

    for line in text.splitlines():
        if parsed.date is None:
            date_match = _DATE_RE.match(line)
            if date_match:
                parsed.date = date_match.group(1)
                continue

        if _WARNING_RE.match(line):
            parsed.warnings.append(line.strip())
            continue

        if line.startswith("###"):
            current = next(
                (key for key, pattern in _HEADER_PATTERNS.items() if pattern.match(line)),
                None,
            )
            continue

        match = _BOLD_ITEM_RE.match(line) or _PLAIN_ITEM_RE.match(line)
        if match and current:
            parsed.sections[current].append(
                DigestItem(who=match.group(1).strip(), text=match.group(2).strip())
            )

    return parsed


class DigestSummarizer:
    """Rewrites each digest line through an answer summarizer, with fallback."""

    def __init__(self, answer_summarizer: IAnswerSummarizer | None = None):
        self._answer_summarizer = answer_summarizer

    async def summarize(self, digest_text: str) -> str:
        """Return the digest with every line rewritten, in the same section shape."""
        parsed = parse_digest(digest_text)

        rendered = await asyncio.gather(
            *[
                self._summarize_section(key, parsed.sections[key], placeholder)
                for key, _, placeholder in SUMMARY_SECTIONS
            ]
        )

        date = parsed.date or datetime.now(timezone.utc).date().isoformat()
        out = [DIGEST_TITLE.format(date=date)]
        for (_, header, _), lines in zip(SUMMARY_SECTIONS, rendered):
            out.extend(["", header, *lines])

        if parsed.warnings:
            out.extend(["", *parsed.warnings])

        return "\n".join(out)

    async def _summarize_section(
        self,
        section: str,
        items: list[DigestItem],
        placeholder: str,
    ) -> list[str]:
        if not items:
            return [placeholder]

        lines = []
        for item in items:
            sentence = await self._summarize_item(section, item)
            if sentence:
                lines.append(f"- **{item.who}** {ensure_period(sentence)}")
            else:
                lines.append(f"- {format_fallback(section, item.who, item.text)}")
        return lines

    async def _summarize_item(self, section: str, item: DigestItem) -> str | None:
        if self._answer_summarizer is None:
            return None
        try:
            return await self._answer_summarizer.summarize(section, item.who, item.text)
        except Exception as e:
            logger.warning("Summarizer failed for %s (%s): %s", item.who, section, e)
            return None
