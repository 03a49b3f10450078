"""Dialogue-related data models."""

from dataclasses import dataclass, field

ANSWER_FIELDS = ("yesterday", "today", "blockers", "other")


@dataclass
class DialogueSession:
    """Progress of one member through the guided questions."""

    member_id: str
    display_name: str
    cycle: int
    index: int = 0  # 0..len(ANSWER_FIELDS)
    answers: dict[str, str] = field(default_factory=dict)

    @property
    def is_complete(self) -> bool:
        return self.index >= len(ANSWER_FIELDS)

    @property
    def field_name(self) -> str:
        """Answer field the next captured text goes into."""
        return ANSWER_FIELDS[self.index]
