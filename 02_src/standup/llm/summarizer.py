"""Per-answer stand-up summaries via the LLM."""

import os
import re
from typing import Protocol

from ..logging_config import get_logger
from .llm_provider import ILLMProvider

logger = get_logger(__name__)

SECTION_TITLES = {
    "blockers": "Blockers",
    "today": "Today",
    "yesterday": "Yesterday",
    "notes": "Notes",
}

SYSTEM_PROMPT = " ".join(
    [
        "You are a stand-up assistant.",
        "Summarize the given answer in ONE SHORT sentence.",
        "STRICT rules:",
        "- Always third person, never 'I'.",
        "- The sentence implicitly starts with '{name} ...'; do not repeat the name, it is added later.",
        "- Keep the names of OTHER people mentioned exactly as written.",
        "- No emoji, no list, no quotes, no name in the output.",
        "- Add no information that was not given.",
        "- Telegraphic style, 12 words max.",
    ]
)

_BULLET_RE = re.compile(r"^[\-\*•]\s*")
_QUOTES_RE = re.compile(r"^[\"'“”«»]+|[\"'“”«»]+$")
_PREFIX_RES = (
    re.compile(r"^(yesterday|hier)\s*[:,\-]\s*", re.IGNORECASE),
    re.compile(r"^(today|aujourd[’']?hui)\s*[:,\-]\s*", re.IGNORECASE),
    re.compile(r"^(yes|yeah|yup|oui)\b[\s,:\-]*", re.IGNORECASE),
)


class IAnswerSummarizer(Protocol):
    """Rewrites one stand-up answer as a single sentence."""

    async def summarize(
        self, section: str, speaker_name: str, raw_answer: str
    ) -> str | None:
        """Return one sentence, or None to fall back to deterministic formatting."""
        ...


class LLMAnswerSummarizer:
    """Answer summarizer backed by an LLM provider."""

    def __init__(self, llm_provider: ILLMProvider, max_tokens: int | None = None):
        self._llm = llm_provider
        self._max_tokens = max_tokens or int(os.getenv("SUMMARY_MAX_TOKENS", "80"))

    async def summarize(
        self, section: str, speaker_name: str, raw_answer: str
    ) -> str | None:
        title = SECTION_TITLES.get(section, section)
        prompt = f"Section: {title}\nRaw answer:\n{strip_prefix(raw_answer)}"

        try:
            reply = await self._llm.complete(
                messages=[{"role": "user", "content": prompt}],
                system=SYSTEM_PROMPT.format(name=speaker_name),
                max_tokens=self._max_tokens,
                temperature=0.2,
            )
        except Exception as e:
            logger.error("Answer summary failed for %s: %s", speaker_name, e)
            return None

        return sanitize_sentence(reply, speaker_name)


def strip_prefix(text: str) -> str:
    """Remove leading 'yesterday:', 'today:' and 'yes,' style prefixes."""
    text = text.strip()
    for pattern in _PREFIX_RES:
        text = pattern.sub("", text)
    return text.strip()


def sanitize_sentence(reply: str, speaker_name: str) -> str | None:
    """Reduce an LLM reply to a bare sentence without bullet, quotes or echoed name."""
    text = (reply or "").strip()
    if not text:
        return None

    line = text.splitlines()[0].strip()
    line = _BULLET_RE.sub("", line)
    line = _QUOTES_RE.sub("", line)
    line = re.sub(
        rf"^{re.escape(speaker_name)}\s*[:\-–]?\s*", "", line, flags=re.IGNORECASE
    )
    return line.strip() or None
