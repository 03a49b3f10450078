"""Commands module."""

from .parser import Command, CommandKind, parse_command

__all__ = ["Command", "CommandKind", "parse_command"]
