"""Per-member guided dialogue tracking."""

from typing import Protocol

from ..models import DialogueSession
from .questions import QUESTIONS


class IDialogueTracker(Protocol):
    """Sessions of members currently answering the questions."""

    def begin(self, member_id: str, display_name: str, cycle: int) -> DialogueSession:
        """Open a session at the first question, replacing any open one."""
        ...

    def get(self, member_id: str) -> DialogueSession | None:
        """Open session of a member, if any."""
        ...

    def capture(self, member_id: str, text: str) -> DialogueSession:
        """Store the answer to the current question and move to the next."""
        ...

    def discard(self, member_id: str) -> DialogueSession | None:
        """Close a session without committing it."""
        ...


class DialogueTracker:
    """In-memory dialogue sessions keyed by member id."""

    def __init__(self):
        self._sessions: dict[str, DialogueSession] = {}

    def begin(self, member_id: str, display_name: str, cycle: int) -> DialogueSession:
        session = DialogueSession(
            member_id=member_id,
            display_name=display_name,
            cycle=cycle,
        )
        self._sessions[member_id] = session
        return session

    def get(self, member_id: str) -> DialogueSession | None:
        return self._sessions.get(member_id)

    def has_session(self, member_id: str) -> bool:
        return member_id in self._sessions

    def capture(self, member_id: str, text: str) -> DialogueSession:
        session = self._sessions.get(member_id)
        if session is None:
            raise KeyError(f"No open dialogue for {member_id}")
        if session.is_complete:
            raise RuntimeError(f"Dialogue for {member_id} already complete")

        session.answers[session.field_name] = text
        session.index += 1
        return session

    def discard(self, member_id: str) -> DialogueSession | None:
        return self._sessions.pop(member_id, None)

    def active_members(self) -> list[str]:
        return list(self._sessions)

    def clear(self) -> None:
        self._sessions.clear()


def question_for(session: DialogueSession) -> str | None:
    """Question the session is waiting on, or None once all are answered."""
    if session.index >= len(QUESTIONS):
        return None
    return QUESTIONS[session.index]

