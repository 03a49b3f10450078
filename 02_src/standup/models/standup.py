"""Stand-up aggregate data models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class StandupStatus(str, Enum):
    """Lifecycle of the current stand-up."""

    IDLE = "idle"
    COLLECTING = "collecting"
    FROZEN = "frozen"


@dataclass
class Answer:
    """One member's answers for the current stand-up cycle."""

    yesterday: str | None = None
    today: str | None = None
    blockers: str | None = None
    other: str | None = None
    submitted_at: datetime | None = None
    display_name: str | None = None  # first name seen, never overwritten


@dataclass
class StandupState:
    """The single stand-up of the day."""

    date: str = ""  # YYYY-MM-DD, set on start
    status: StandupStatus = StandupStatus.IDLE
    members: list[str] = field(default_factory=list)  # join order
    responses: dict[str, Answer] = field(default_factory=dict)  # key=member_id
    cycle: int = 0


@dataclass
class MissingMember:
    """A member without a recorded answer."""

    id: str
    name: str
