"""Dialogue module."""

from .questions import QUESTIONS
from .tracker import DialogueTracker, IDialogueTracker, question_for

__all__ = ["DialogueTracker", "IDialogueTracker", "QUESTIONS", "question_for"]
