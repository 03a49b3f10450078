"""Command parsing: inbound text -> tagged command."""

from dataclasses import dataclass
from enum import Enum


class CommandKind(str, Enum):
    """Commands understood by the bot."""

    START = "start"
    STATUS = "status"
    FREEZE = "freeze"
    DIGEST = "digest"
    DIGEST_POST = "digestpost"
    SET_GENERAL = "setgeneral"
    CLEAR_GENERAL = "cleargeneral"
    AS = "as"
    WHOAMI = "whoami"
    CLEAR_AS = "clearas"
    HELP = "help"


@dataclass(frozen=True)
class Command:
    """A parsed command with its arguments."""

    kind: CommandKind
    args: tuple[str, ...] = ()
    full: bool = False  # /digest full


_SLASH_COMMANDS = {
    "/start": CommandKind.START,
    "/standup": CommandKind.START,
    "/status": CommandKind.STATUS,
    "/freeze": CommandKind.FREEZE,
    "/digest": CommandKind.DIGEST,
    "/digestpost": CommandKind.DIGEST_POST,
    "/setgeneral": CommandKind.SET_GENERAL,
    "/cleargeneral": CommandKind.CLEAR_GENERAL,
    "/as": CommandKind.AS,
    "/whoami": CommandKind.WHOAMI,
    "/clearas": CommandKind.CLEAR_AS,
    "/help": CommandKind.HELP,
    "help": CommandKind.HELP,
}


def parse_command(text: str) -> Command | None:
    """Parse a message into a Command, or None for freeform text."""
    tokens = (text or "").split()
    if not tokens:
        return None

    kind = _SLASH_COMMANDS.get(tokens[0].lower())
    if kind is None:
        return None

    args = tuple(tokens[1:])
    if kind is CommandKind.DIGEST:
        return Command(kind, args, full=bool(args) and args[0].lower() == "full")
    return Command(kind, args)
