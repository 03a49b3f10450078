"""Digest module."""

from .formatter import SECTIONS, dedupe, format_digest, single_line
from .summary import DigestSummarizer, ParsedDigest, parse_digest

__all__ = [
    "SECTIONS",
    "dedupe",
    "format_digest",
    "single_line",
    "DigestSummarizer",
    "ParsedDigest",
    "parse_digest",
]
