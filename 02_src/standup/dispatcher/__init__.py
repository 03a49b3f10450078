"""Dispatcher module."""

from .context import BotContext, resolve_identity
from .dispatcher import IStandupDispatcher, StandupDispatcher

__all__ = ["BotContext", "resolve_identity", "IStandupDispatcher", "StandupDispatcher"]
