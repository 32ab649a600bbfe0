"""
coolshot/flow/handlers/admin.py

Handles: administrative commands

- Admin panel and admin info
- System / command / user statistics
- Broadcast to every known user
- Promotion and demotion (primary admin)
- AI provider status dashboard

Access levels are enforced before these handlers run.
"""

from typing import Any, Dict, List, Tuple

from coolshot.core.exceptions import UsageError
from coolshot.flow.commands import CommandContext
from coolshot.core.logging import get_logger
from utils.constants import (
    ACTIVITY_REPORT,
    ADMIN_INFO_HOW_TO,
    ADMIN_INFO_MESSAGE,
    ADMIN_PANEL_MESSAGE,
    ADMIN_STATS_HEADER,
    API_STATUS_FOOTER,
    BROADCAST_MESSAGE,
    BROADCAST_REPORT,
    BROADCAST_USAGE,
    DEMOTE_USAGE,
    DEMOTED_NOTICE,
    PROMOTE_USAGE,
    PROMOTED_NOTICE,
    USER_NOT_FOUND_MESSAGE,
)
from utils.time_utils import format_date
from utils.whatsapp_utils import jid_from_phone

logger = get_logger(__name__)

USERS_PREVIEW_COUNT = 15

STATUS_ICONS = {"online": "✅", "offline": "❌", "not_configured": "⚠️"}


def _command_lines(top: List[Tuple[str, int]], total: int) -> str:
    lines = []
    for index, (command, count) in enumerate(top, 1):
        percentage = (count / total * 100) if total else 0.0
        lines.append(f"{index}. /{command} - {count} uses ({percentage:.1f}%)")
    return "\n".join(lines)


async def handle_admin(ctx: CommandContext) -> Dict[str, Any]:
    if ctx.dispatcher.store.is_primary_admin(ctx.user_id):
        access_line = "👑 *Primary Admin:* Full access to all features"
    else:
        access_line = "🛡️ *Admin:* Limited management features"
    return {"message": ADMIN_PANEL_MESSAGE.format(access_line=access_line)}


async def handle_admin_info(ctx: CommandContext) -> Dict[str, Any]:
    """Open to everyone: shows the caller's admin status."""
    store = ctx.dispatcher.store
    is_admin = store.is_admin(ctx.user_id)

    if not is_admin:
        footer = ADMIN_INFO_HOW_TO.format(
            admin_number=ctx.dispatcher.settings.PRIMARY_ADMIN_NUMBER,
            phone=ctx.user.phone_number,
        )
    elif store.is_primary_admin(ctx.user_id):
        footer = "🎉 You have admin privileges!\n👑 You are the primary admin with full rights."
    else:
        footer = "🎉 You have admin privileges!\n🛡️ You are a regular admin."

    return {
        "message": ADMIN_INFO_MESSAGE.format(
            phone=ctx.user.phone_number,
            name=ctx.user.name,
            status="✅ Admin" if is_admin else "❌ Not Admin",
            total_admins=len(store.admin_users()),
            total_users=store.stats().total_users,
            footer=footer,
        )
    }


async def handle_admin_stats(ctx: CommandContext) -> Dict[str, Any]:
    store = ctx.dispatcher.store
    stats = store.stats()
    uptime = store.uptime()

    message = ADMIN_STATS_HEADER.format(
        days=uptime.days,
        hours=uptime.hours,
        total_users=stats.total_users,
        total_admins=stats.total_admins,
        active_today=stats.active_today,
        total_messages=stats.total_messages,
        total_commands=stats.total_commands,
    )
    message += _command_lines(store.top_commands(5), stats.total_commands)
    message += f"\n\n✨ _Admin Statistics by {ctx.dispatcher.settings.COMPANY_NAME}_"
    return {"message": message}


async def handle_broadcast(ctx: CommandContext) -> Dict[str, Any]:
    if not ctx.args:
        raise UsageError(BROADCAST_USAGE.format(bot_name=ctx.dispatcher.settings.BOT_NAME))

    text = BROADCAST_MESSAGE.format(name=ctx.user.name, text=ctx.text)
    success, failed, total = await ctx.dispatcher.broadcast(text)

    logger.info(
        f"Broadcast completed: {success} sent, {failed} failed, {total} total",
        extra={"user_id": ctx.user_id},
    )
    return {"message": BROADCAST_REPORT.format(success=success, failed=failed, total=total)}


async def handle_users(ctx: CommandContext) -> Dict[str, Any]:
    store = ctx.dispatcher.store
    users = store.all_users()
    admins = [user for user in users if user.is_admin]
    regular = [user for user in users if not user.is_admin]

    lines = [f"👥 *User Database* ({len(users)} users)", "", f"🛡️ *Admins ({len(admins)}):*"]
    for index, user in enumerate(admins, 1):
        crown = " 👑" if store.is_primary_admin(user.id) else ""
        lines.append(f"{index}. {user.name} ({user.phone_number}){crown}")

    lines.append("")
    lines.append(f"👤 *Regular Users (showing first {USERS_PREVIEW_COUNT} of {len(regular)}):*")
    for index, user in enumerate(regular[:USERS_PREVIEW_COUNT], 1):
        lines.append(f"{index}. {user.name} ({user.phone_number})")
    if len(regular) > USERS_PREVIEW_COUNT:
        lines.append(f"... and {len(regular) - USERS_PREVIEW_COUNT} more users")

    lines.append("")
    lines.append("💡 Use /promote <phone_number> to promote a user to admin")
    lines.append("💡 Use /demote <phone_number> to demote an admin")
    return {"message": "\n".join(lines)}


async def _change_admin(ctx: CommandContext, promote: bool) -> Dict[str, Any]:
    if len(ctx.args) != 1:
        raise UsageError(PROMOTE_USAGE if promote else DEMOTE_USAGE)

    target_phone = ctx.args[0]
    target_id = jid_from_phone(target_phone)
    store = ctx.dispatcher.store

    if promote:
        result = store.promote(target_id, ctx.user_id)
    else:
        result = store.demote(target_id, ctx.user_id)

    if not result.success:
        return {"message": f"❌ {result.error}"}

    target = store.get_user(target_id)
    name = target.name if target else "Unknown User"

    notice = PROMOTED_NOTICE if promote else DEMOTED_NOTICE
    if not await ctx.dispatcher.send(target_id, notice):
        logger.warning("Could not notify target of admin change", extra={"user_id": target_id})

    if promote:
        return {"message": f"✅ {name} ({target_phone}) has been promoted to admin!"}
    return {"message": f"✅ {name} ({target_phone}) has been demoted from admin."}


async def handle_promote(ctx: CommandContext) -> Dict[str, Any]:
    return await _change_admin(ctx, promote=True)


async def handle_demote(ctx: CommandContext) -> Dict[str, Any]:
    return await _change_admin(ctx, promote=False)


async def handle_api_status(ctx: CommandContext) -> Dict[str, Any]:
    """Probes every provider; the wait notice is sent before probing."""
    ai_service = ctx.dispatcher.ai_service
    settings = ctx.dispatcher.settings

    await ctx.dispatcher.send(ctx.user_id, "🔧 Checking API status... Please wait.")
    status = await ai_service.api_status()

    lines = ["🔧 *AI API Status Dashboard*", "", f"🎯 *Primary APIs ({len(status['primary'])}):*"]
    for index, api in enumerate(status["primary"], 1):
        lines.append(f"{index}. {api['name']} {STATUS_ICONS.get(api['status'], '❌')} {api['status']}")

    fallback = status["fallback"]
    lines.append("")
    lines.append("🤖 *Fallback API:*")
    lines.append(f"{STATUS_ICONS.get(fallback['status'], '❌')} {fallback['name']} - {fallback['status']}")

    message = "\n".join(lines) + "\n" + API_STATUS_FOOTER.format(
        primary_count=len(ai_service.primary_apis),
        bot_name=settings.BOT_NAME,
        company=settings.COMPANY_NAME,
    )
    return {"message": message}


async def handle_commands(ctx: CommandContext) -> Dict[str, Any]:
    store = ctx.dispatcher.store
    total = store.stats().total_commands
    top = store.top_commands(15)

    message = (
        "⚡ *Command Usage Statistics*\n\n"
        f"📊 *Total Commands Executed:* {total}\n\n"
        "🏆 *Top Commands:*\n"
    )
    message += _command_lines(top, total) if top else "No command data available yet."
    message += f"\n\n✨ _Analytics by {ctx.dispatcher.settings.COMPANY_NAME}_"
    return {"message": message}


async def handle_top_users(ctx: CommandContext) -> Dict[str, Any]:
    entries = ctx.dispatcher.store.most_active_users(10)
    if not entries:
        return {"message": "👑 *Most Active Users*\n\nNo user activity data available yet."}

    blocks = []
    for index, entry in enumerate(entries, 1):
        badge = " 🛡️" if entry.user.is_admin else ""
        blocks.append(
            f"{index}. {entry.user.name} ({entry.user.phone_number}){badge}\n"
            f"   💬 {entry.messages} msgs | ⚡ {entry.commands} cmds | 🎯 {entry.total} total"
        )

    return {
        "message": "👑 *Most Active Users*\n\n"
        + "\n\n".join(blocks)
        + f"\n\n✨ _Rankings by {ctx.dispatcher.settings.COMPANY_NAME}_"
    }


async def handle_activity(ctx: CommandContext) -> Dict[str, Any]:
    """
    /activity              overview of the top 10 users
    /activity <phone>      detailed report for one user
    """
    store = ctx.dispatcher.store

    if ctx.args:
        target_id = jid_from_phone(ctx.args[0])
        user = store.get_user(target_id)
        if user is None:
            return {"message": USER_NOT_FOUND_MESSAGE}

        activity = store.activity_for(target_id)
        return {
            "message": ACTIVITY_REPORT.format(
                name=user.name,
                phone=user.phone_number,
                admin="✅ Yes" if user.is_admin else "❌ No",
                messages=activity.messages,
                commands=activity.commands,
                total=activity.total,
                first_seen=format_date(user.first_seen),
                last_seen=format_date(user.last_seen),
                notes=user.notes or "No notes",
            )
        }

    blocks = []
    for index, entry in enumerate(store.most_active_users(10), 1):
        badge = " 🛡️" if entry.user.is_admin else ""
        blocks.append(
            f"{index}. {entry.user.name}{badge}\n"
            f"   {entry.user.phone_number} | 🎯 {entry.total} interactions"
        )

    message = "📈 *Recent User Activity*\n\n👑 *Most Active Users (Top 10):*\n\n"
    if blocks:
        message += "\n\n".join(blocks) + "\n\n"
    message += "💡 Use /activity <phone_number> for detailed user stats"
    return {"message": message}
