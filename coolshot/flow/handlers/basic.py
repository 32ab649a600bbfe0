"""
coolshot/flow/handlers/basic.py

Handles: everyday commands

- /start, /help, /about, /menu, /ping
- /support (direct message or support mode)
- /reset, /stats
- /role and /lang selection
"""

from typing import Any, Dict

from coolshot.flow.commands import CommandContext
from coolshot.core.logging import get_logger
from utils.constants import (
    ABOUT_MESSAGE,
    HELP_MESSAGE,
    LANGUAGE_LIST_MESSAGE,
    LANGUAGE_NOT_FOUND_MESSAGE,
    LANGUAGE_UPDATED_MESSAGE,
    LANGUAGES,
    MENU_MESSAGE,
    PING_MESSAGE,
    RESET_MESSAGE,
    ROLE_LIST_MESSAGE,
    ROLE_NOT_FOUND_MESSAGE,
    ROLE_UPDATED_MESSAGE,
    ROLES,
    ROLES_PREVIEW_COUNT,
    STATS_MESSAGE,
    SUPPORT_MODE_MESSAGE,
    SUPPORT_SENT_MESSAGE,
    WELCOME_MESSAGE,
    find_language,
    find_role,
    language_label,
)

logger = get_logger(__name__)


def _brand(ctx: CommandContext) -> Dict[str, str]:
    settings = ctx.dispatcher.settings
    return {"bot_name": settings.BOT_NAME, "company": settings.COMPANY_NAME}


async def handle_start(ctx: CommandContext) -> Dict[str, Any]:
    return {"message": WELCOME_MESSAGE.format(**_brand(ctx))}


async def handle_help(ctx: CommandContext) -> Dict[str, Any]:
    return {"message": HELP_MESSAGE.format(**_brand(ctx))}


async def handle_about(ctx: CommandContext) -> Dict[str, Any]:
    return {
        "message": ABOUT_MESSAGE.format(
            language_count=len(LANGUAGES),
            role_count=len(ROLES),
            **_brand(ctx),
        )
    }


async def handle_menu(ctx: CommandContext) -> Dict[str, Any]:
    return {"message": MENU_MESSAGE.format(**_brand(ctx))}


async def handle_ping(ctx: CommandContext) -> Dict[str, Any]:
    return {"message": PING_MESSAGE.format(**_brand(ctx))}


async def handle_support(ctx: CommandContext) -> Dict[str, Any]:
    """
    With text: forwards it to every admin right away.
    Without text: turns on support mode so the next message is forwarded.
    """
    if ctx.args:
        await ctx.dispatcher.forward_to_admins(ctx.user, ctx.text)
        logger.info("Support request sent", extra={"user_id": ctx.user_id})
        return {"message": SUPPORT_SENT_MESSAGE}

    ctx.dispatcher.sessions.set_awaiting_support(ctx.user_id, True)
    logger.info("Support mode activated", extra={"user_id": ctx.user_id})
    return {
        "message": SUPPORT_MODE_MESSAGE.format(
            bot_name=ctx.dispatcher.settings.BOT_NAME,
            support_email=ctx.dispatcher.settings.SUPPORT_EMAIL,
        )
    }


async def handle_reset(ctx: CommandContext) -> Dict[str, Any]:
    sessions = ctx.dispatcher.sessions
    sessions.reset(ctx.user_id)
    return {
        "message": RESET_MESSAGE.format(
            default_role=sessions.default_role,
            default_language=language_label(sessions.default_language),
        )
    }


async def handle_stats(ctx: CommandContext) -> Dict[str, Any]:
    store = ctx.dispatcher.store
    sessions = ctx.dispatcher.sessions
    stats = store.stats()
    uptime = store.uptime()

    return {
        "message": STATS_MESSAGE.format(
            days=uptime.days,
            hours=uptime.hours,
            total_users=stats.total_users,
            total_admins=stats.total_admins,
            active_today=stats.active_today,
            total_messages=stats.total_messages,
            total_commands=stats.total_commands,
            role=sessions.get_role(ctx.user_id),
            language=language_label(sessions.get_language(ctx.user_id)),
            **_brand(ctx),
        )
    }


async def handle_role(ctx: CommandContext) -> Dict[str, Any]:
    """
    /role <name> selects a role (case-insensitive exact match).
    /role alone lists the first few roles.
    """
    if not ctx.args:
        shown = ROLES[:ROLES_PREVIEW_COUNT]
        roles = "\n".join(f"{index}. {role}" for index, role in enumerate(shown, 1))
        return {
            "message": ROLE_LIST_MESSAGE.format(
                shown=len(shown),
                roles=roles,
                remaining=len(ROLES) - len(shown),
            )
        }

    requested = ctx.text
    role = find_role(requested)
    if role is None:
        return {"message": ROLE_NOT_FOUND_MESSAGE.format(role=requested)}

    ctx.dispatcher.sessions.set_role(ctx.user_id, role)
    logger.info(f"Role set to {role}", extra={"user_id": ctx.user_id})
    return {"message": ROLE_UPDATED_MESSAGE.format(role=role)}


async def handle_language(ctx: CommandContext) -> Dict[str, Any]:
    """
    /lang <code> matches a language code or part of its label.
    /lang alone lists every language.
    """
    if not ctx.args:
        languages = "\n".join(
            f"{index}. {language['label']} ({language['code']})"
            for index, language in enumerate(LANGUAGES, 1)
        )
        return {"message": LANGUAGE_LIST_MESSAGE.format(languages=languages)}

    requested = ctx.args[0].lower()
    language = find_language(requested)
    if language is None:
        return {"message": LANGUAGE_NOT_FOUND_MESSAGE.format(language=requested)}

    ctx.dispatcher.sessions.set_language(ctx.user_id, language["code"])
    logger.info(f"Language set to {language['code']}", extra={"user_id": ctx.user_id})
    return {"message": LANGUAGE_UPDATED_MESSAGE.format(label=language["label"])}
