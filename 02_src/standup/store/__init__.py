"""Answer store module."""

from .answer_store import AnswerStore, IAnswerStore
from .names import DEFAULT_MEMBER_NAME, clean_display_name

__all__ = ["AnswerStore", "IAnswerStore", "DEFAULT_MEMBER_NAME", "clean_display_name"]
