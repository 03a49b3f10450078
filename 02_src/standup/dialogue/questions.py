"""Guided stand-up questions, in answer-field order."""

QUESTIONS = (
    "What progress have you made since the last stand-up?",
    "What are your goals before the next stand-up?",
    "Are you blocked by anything right now?",
    "Do you need a clarification meeting or help from the team?",
)
