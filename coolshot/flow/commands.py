"""
coolshot/flow/commands.py

Purpose: Command table and access control

- Access levels (public, admin, primary admin)
- Single source of truth for command name -> handler mapping
- Aliases resolve to a canonical name used for analytics
- One access check applied before any handler runs
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional, TYPE_CHECKING

from coolshot.core.exceptions import AccessDeniedError
from utils.constants import ACCESS_DENIED_MESSAGE, ADMIN_PANEL_DENIED_MESSAGE, PRIMARY_ONLY_MESSAGE

if TYPE_CHECKING:
    from coolshot.flow.dispatcher import Dispatcher
    from coolshot.models.user import UserRecord
    from coolshot.schemas.webhook import InboundMessage


class Access(str, Enum):
    """Who may run a command."""

    PUBLIC = "public"
    ADMIN = "admin"
    PRIMARY = "primary"


@dataclass
class CommandContext:
    """Everything a handler needs for one invocation."""

    dispatcher: "Dispatcher"
    message: "InboundMessage"
    user: "UserRecord"
    command: str
    args: List[str] = field(default_factory=list)

    @property
    def user_id(self) -> str:
        return self.message.chat_id

    @property
    def text(self) -> str:
        """Arguments joined back with single spaces."""
        return " ".join(self.args)


Handler = Callable[[CommandContext], Awaitable[Dict[str, Any]]]


@dataclass
class CommandSpec:
    name: str
    handler: Handler
    access: Access = Access.PUBLIC
    denied_message: Optional[str] = None


def parse_command(text: str):
    """
    Splits "/Cmd a  b" into ("cmd", ["a", "b"]).

    Returns:
        (command, args) or None if the text is not a command
    """
    stripped = text.strip()
    if not stripped.startswith("/"):
        return None

    tokens = stripped[1:].split()
    if not tokens:
        return "", []
    return tokens[0].lower(), tokens[1:]


def check_access(spec: CommandSpec, user_id: str, store) -> None:
    """
    Raises:
        AccessDeniedError: If the caller is below the command's access level
    """
    if spec.access is Access.PUBLIC:
        return

    if spec.access is Access.PRIMARY:
        if not store.is_primary_admin(user_id):
            raise AccessDeniedError(spec.denied_message or ACCESS_DENIED_MESSAGE)
        return

    if not store.is_admin(user_id):
        raise AccessDeniedError(spec.denied_message or ACCESS_DENIED_MESSAGE)


def build_registry() -> Dict[str, CommandSpec]:
    """
    Builds the command table. Keys are lower-case tokens; aliases map to
    the same spec so they are counted under the canonical name.
    """
    from coolshot.flow.handlers import admin, basic, games, tools

    specs = [
        # Basic
        CommandSpec("start", basic.handle_start),
        CommandSpec("help", basic.handle_help),
        CommandSpec("about", basic.handle_about),
        CommandSpec("support", basic.handle_support),
        CommandSpec("ping", basic.handle_ping),
        CommandSpec("reset", basic.handle_reset),
        CommandSpec("stats", basic.handle_stats),
        CommandSpec("menu", basic.handle_menu),
        CommandSpec("role", basic.handle_role),
        CommandSpec("lang", basic.handle_language),
        # Admin
        CommandSpec("admin", admin.handle_admin, Access.ADMIN, ADMIN_PANEL_DENIED_MESSAGE),
        CommandSpec("admininfo", admin.handle_admin_info),
        CommandSpec("adminstats", admin.handle_admin_stats, Access.ADMIN),
        CommandSpec("broadcast", admin.handle_broadcast, Access.ADMIN),
        CommandSpec(
            "users", admin.handle_users, Access.PRIMARY,
            PRIMARY_ONLY_MESSAGE.format(action="view the user list"),
        ),
        CommandSpec(
            "promote", admin.handle_promote, Access.PRIMARY,
            PRIMARY_ONLY_MESSAGE.format(action="promote users"),
        ),
        CommandSpec(
            "demote", admin.handle_demote, Access.PRIMARY,
            PRIMARY_ONLY_MESSAGE.format(action="demote users"),
        ),
        CommandSpec("apistatus", admin.handle_api_status, Access.ADMIN),
        CommandSpec("commands", admin.handle_commands, Access.ADMIN),
        CommandSpec("topusers", admin.handle_top_users, Access.ADMIN),
        CommandSpec("activity", admin.handle_activity, Access.ADMIN),
        # Games
        CommandSpec("games", games.handle_games),
        CommandSpec("dice", games.handle_dice),
        CommandSpec("coin", games.handle_coin),
        CommandSpec("number", games.handle_number),
        CommandSpec("8ball", games.handle_eight_ball),
        CommandSpec("quote", games.handle_quote),
        CommandSpec("joke", games.handle_joke),
        CommandSpec("fact", games.handle_fact),
        # Text tools
        CommandSpec("tools", tools.handle_tools),
        CommandSpec("count", tools.handle_count),
        CommandSpec("reverse", tools.handle_reverse),
        CommandSpec("upper", tools.handle_upper),
        CommandSpec("lower", tools.handle_lower),
        CommandSpec("title", tools.handle_title),
        CommandSpec("encode", tools.handle_encode),
        CommandSpec("decode", tools.handle_decode),
    ]

    registry = {spec.name: spec for spec in specs}
    registry["language"] = registry["lang"]
    return registry
