"""Guided stand-up bot."""

from .app import Application, IApplication
from .commands import Command, CommandKind, parse_command
from .dialogue import QUESTIONS, DialogueTracker, IDialogueTracker
from .digest import DigestSummarizer, format_digest, parse_digest
from .dispatcher import BotContext, IStandupDispatcher, StandupDispatcher
from .gateway import GatewayError, IMessagingGateway, OutboxGateway
from .llm import IAnswerSummarizer, ILLMProvider, LLMAnswerSummarizer, LLMProvider
from .models import (
    Answer,
    ConversationRef,
    DialogueSession,
    Identity,
    IdentityOverride,
    InboundMessage,
    MissingMember,
    OutboundMessage,
    StandupState,
    StandupStatus,
    TraceEvent,
)
from .storage import IStorage, Storage
from .store import AnswerStore, IAnswerStore
from .tracker import ITracker, Tracker

__all__ = [
    # Application
    "Application",
    "IApplication",
    # Models
    "StandupStatus",
    "Answer",
    "StandupState",
    "MissingMember",
    "DialogueSession",
    "ConversationRef",
    "InboundMessage",
    "OutboundMessage",
    "Identity",
    "IdentityOverride",
    "TraceEvent",
    # Components
    "IAnswerStore",
    "AnswerStore",
    "IDialogueTracker",
    "DialogueTracker",
    "QUESTIONS",
    "Command",
    "CommandKind",
    "parse_command",
    "format_digest",
    "parse_digest",
    "DigestSummarizer",
    "IMessagingGateway",
    "OutboxGateway",
    "GatewayError",
    "BotContext",
    "IStandupDispatcher",
    "StandupDispatcher",
    "ILLMProvider",
    "LLMProvider",
    "IAnswerSummarizer",
    "LLMAnswerSummarizer",
    "IStorage",
    "Storage",
    "ITracker",
    "Tracker",
]
