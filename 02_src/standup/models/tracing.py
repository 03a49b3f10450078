"""Tracing and observability data models."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class TraceEvent:
    """A single observability event of the stand-up flow."""

    id: str
    event_type: str  # e.g. "session_started", "standup_frozen"
    actor: str  # component that created this event
    data: dict
    timestamp: datetime
