"""In-memory store for the current stand-up."""

from datetime import datetime, timezone
from typing import Protocol

from ..logging_config import get_logger
from ..models import Answer, MissingMember, StandupState, StandupStatus
from .names import clean_display_name

logger = get_logger(__name__)

# question index (1-based) -> Answer field
_FIELD_BY_INDEX = {
    1: "yesterday",
    2: "today",
    3: "blockers",
    4: "other",
}


class IAnswerStore(Protocol):
    """Aggregate state of the current stand-up."""

    def start_standup(self, members: list[str]) -> None:
        """Start a new collection cycle for the given members."""
        ...

    def register_user(self, member_id: str, name: str) -> None:
        """Add a member and remember their display name."""
        ...

    def record_answer(
        self,
        member_id: str,
        question_index: int,
        text: str,
        display_name: str | None = None,
    ) -> None:
        """Write one answer field. Ignored unless collecting."""
        ...

    def freeze_standup(self) -> None:
        """Stop accepting answers."""
        ...

    def missing_members(self) -> list[str]:
        """Members without a recorded answer."""
        ...

    def missing_members_detailed(self) -> list[MissingMember]:
        """Members without a recorded answer, with display names."""
        ...

    def get_state(self) -> StandupState:
        """Current state snapshot."""
        ...


class AnswerStore:
    """Holds the single stand-up of the process."""

    def __init__(self):
        self._state = StandupState()
        self._names: dict[str, str] = {}  # member_id -> display name

    def start_standup(self, members: list[str]) -> None:
        """Re-arm the cycle: today's date, collecting, new members, no responses."""
        self._state.date = datetime.now(timezone.utc).date().isoformat()
        self._state.status = StandupStatus.COLLECTING
        self._state.members = list(dict.fromkeys(members))
        self._state.responses.clear()
        self._state.cycle += 1
        logger.info(
            "Stand-up started for %s with %s member(s)",
            self._state.date,
            len(self._state.members),
        )

    def add_member(self, member_id: str) -> None:
        if member_id not in self._state.members:
            self._state.members.append(member_id)

    def register_user(self, member_id: str, name: str) -> None:
        self.add_member(member_id)
        name = (name or "").strip()
        if name and member_id not in self._names:
            self._names[member_id] = name

    def display_name(self, member_id: str) -> str | None:
        """Name registered for a member, if any."""
        return self._names.get(member_id)

    def record_answer(
        self,
        member_id: str,
        question_index: int,
        text: str,
        display_name: str | None = None,
    ) -> None:
        if question_index not in _FIELD_BY_INDEX:
            raise ValueError(f"Invalid question index: {question_index}")

        if self._state.status != StandupStatus.COLLECTING:
            logger.debug(
                "Ignoring answer from %s: stand-up is %s",
                member_id,
                self._state.status.value,
            )
            return

        self.add_member(member_id)
        answer = self._state.responses.get(member_id)
        if answer is None:
            answer = Answer()
            self._state.responses[member_id] = answer

        if display_name and not answer.display_name:
            answer.display_name = display_name

        setattr(answer, _FIELD_BY_INDEX[question_index], text)
        answer.submitted_at = datetime.now(timezone.utc)

    def freeze_standup(self) -> None:
        self._state.status = StandupStatus.FROZEN
        logger.info("Stand-up frozen with %s response(s)", len(self._state.responses))

    def missing_members(self) -> list[str]:
        return [m for m in self._state.members if m not in self._state.responses]

    def missing_members_detailed(self) -> list[MissingMember]:
        return [
            MissingMember(id=m, name=clean_display_name(self.display_name(m) or m))
            for m in self.missing_members()
        ]

    def get_state(self) -> StandupState:
        return self._state

    def names(self) -> dict[str, str]:
        """Copy of the member name lookup."""
        return dict(self._names)

    def reset(self) -> None:
        """Drop everything, back to idle. The cycle counter keeps counting."""
        self._state = StandupState(cycle=self._state.cycle)
        self._names.clear()
