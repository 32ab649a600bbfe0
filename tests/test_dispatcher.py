import asyncio

import pytest

from utils.constants import (
    ACCESS_DENIED_MESSAGE,
    ADMIN_PANEL_DENIED_MESSAGE,
    DECODE_FAILED_MESSAGE,
    EIGHT_BALL_USAGE,
    PROMOTE_USAGE,
    PROMOTED_NOTICE,
)

PRIMARY_ID = "2348000000000@s.whatsapp.net"
USER_A = "2348011111111@s.whatsapp.net"
USER_B = "2348022222222@s.whatsapp.net"
GROUP_ID = "120363000000000000@g.us"


@pytest.mark.asyncio
async def test_command_is_routed_and_recorded(dispatcher, store, transport, make_message):
    result = await dispatcher.dispatch_message(make_message("/PING"))

    assert result == {"status": "success"}
    assert "ONLINE" in transport.last_to(USER_A)
    assert store.analytics.command_stats == {"ping": 1}
    assert store.get_user(USER_A).name == "Ada"
    assert store.get_user(USER_A).message_count == 1
    assert store.get_user(USER_A).command_count == 1


@pytest.mark.asyncio
async def test_alias_counts_under_canonical_name(dispatcher, store, transport, make_message):
    await dispatcher.dispatch_message(make_message("/language es"))

    assert store.analytics.command_stats == {"lang": 1}
    assert dispatcher.sessions.get_language(USER_A) == "es"
    assert "Spanish" in transport.last_to(USER_A)


@pytest.mark.asyncio
async def test_unknown_command(dispatcher, store, transport, make_message):
    await dispatcher.dispatch_message(make_message("/frobnicate now"))

    assert "`/frobnicate`" in transport.last_to(USER_A)
    assert store.analytics.command_stats == {"unknown": 1}


@pytest.mark.asyncio
async def test_free_text_goes_to_ai_with_session_settings(dispatcher, ai_service, transport, make_message):
    await dispatcher.dispatch_message(make_message("/role doctor"))
    await dispatcher.dispatch_message(make_message("/lang fr"))
    await dispatcher.dispatch_message(make_message("what is a fever?"))

    assert ai_service.calls == [("what is a fever?", "Doctor", "fr")]
    assert transport.last_to(USER_A) == "AI[Doctor|fr] what is a fever?"


@pytest.mark.asyncio
async def test_reset_clears_role_and_language(dispatcher, ai_service, make_message):
    await dispatcher.dispatch_message(make_message("/role Doctor"))
    await dispatcher.dispatch_message(make_message("/reset"))
    await dispatcher.dispatch_message(make_message("hello"))

    assert ai_service.calls == [("hello", "Brain Master", "en")]


@pytest.mark.asyncio
async def test_role_not_found(dispatcher, transport, make_message):
    await dispatcher.dispatch_message(make_message("/role Wizard"))

    assert 'Role "Wizard" not found' in transport.last_to(USER_A)
    assert dispatcher.sessions.get_role(USER_A) == "Brain Master"


@pytest.mark.asyncio
async def test_admin_commands_denied_but_counted(dispatcher, store, transport, make_message):
    await dispatcher.dispatch_message(make_message("/adminstats"))
    await dispatcher.dispatch_message(make_message("/admin"))

    assert transport.messages_to(USER_A) == [ACCESS_DENIED_MESSAGE, ADMIN_PANEL_DENIED_MESSAGE]
    assert store.analytics.command_stats == {"adminstats": 1, "admin": 1}


@pytest.mark.asyncio
async def test_primary_only_commands_deny_regular_admins(dispatcher, store, transport, make_message):
    store.get_or_create_user(USER_A, "Ada")
    store.promote(USER_A, PRIMARY_ID)

    await dispatcher.dispatch_message(make_message("/users"))
    assert transport.last_to(USER_A) == "⛔️ Only the primary admin can view the user list."

    await dispatcher.dispatch_message(make_message("/adminstats"))
    assert "System Statistics" in transport.last_to(USER_A)


@pytest.mark.asyncio
async def test_admininfo_is_open_to_everyone(dispatcher, transport, make_message):
    await dispatcher.dispatch_message(make_message("/admininfo"))

    reply = transport.last_to(USER_A)
    assert "❌ Not Admin" in reply
    assert "/promote 2348011111111" in reply


@pytest.mark.asyncio
async def test_promote_notifies_target(dispatcher, store, transport, make_message):
    await dispatcher.dispatch_message(make_message("hi", chat_id=USER_B, name="Bola"))

    await dispatcher.dispatch_message(make_message("/promote", chat_id=PRIMARY_ID))
    assert transport.last_to(PRIMARY_ID) == PROMOTE_USAGE

    await dispatcher.dispatch_message(make_message("/promote 2348022222222", chat_id=PRIMARY_ID))

    assert store.is_admin(USER_B)
    assert transport.last_to(PRIMARY_ID) == "✅ Bola (2348022222222) has been promoted to admin!"
    assert transport.last_to(USER_B) == PROMOTED_NOTICE


@pytest.mark.asyncio
async def test_demote_primary_admin_fails(dispatcher, store, transport, make_message):
    await dispatcher.dispatch_message(make_message("/demote 2348000000000", chat_id=PRIMARY_ID))

    assert transport.last_to(PRIMARY_ID) == "❌ Primary admin cannot be demoted"
    assert store.is_admin(PRIMARY_ID)


@pytest.mark.asyncio
async def test_broadcast_counts_failures_and_continues(dispatcher, store, transport, make_message):
    store.get_or_create_user(USER_A, "Ada")
    store.get_or_create_user(USER_B, "Bola")
    transport.fail_for.add(USER_A)

    await dispatcher.dispatch_message(make_message("/broadcast Maintenance at noon", chat_id=PRIMARY_ID))

    report = transport.last_to(PRIMARY_ID)
    assert "Successfully sent to: 2 users" in report
    assert "Failed to send to: 1 users" in report
    assert "Total attempted: 3 users" in report
    assert "Maintenance at noon" in transport.last_to(USER_B)


@pytest.mark.asyncio
async def test_support_mode_forwards_next_message_to_admins(dispatcher, store, transport, make_message):
    await dispatcher.dispatch_message(make_message("/support"))
    assert dispatcher.sessions.is_awaiting_support(USER_A)

    await dispatcher.dispatch_message(make_message("/ping"))

    forwarded = transport.last_to(PRIMARY_ID)
    assert "New Support Request" in forwarded
    assert "/ping" in forwarded
    assert "Support Request Sent" in transport.last_to(USER_A)
    assert not dispatcher.sessions.is_awaiting_support(USER_A)
    assert "ping" not in store.analytics.command_stats


@pytest.mark.asyncio
async def test_concurrent_messages_are_processed_one_at_a_time(dispatcher, transport, make_message, monkeypatch):
    deliver = transport.send_message

    async def slow_send(to, text):
        await asyncio.sleep(0.01)
        return await deliver(to, text)

    monkeypatch.setattr(transport, "send_message", slow_send)
    await dispatcher.dispatch_message(make_message("/support"))

    results = await asyncio.gather(
        dispatcher.dispatch_message(make_message("first")),
        dispatcher.dispatch_message(make_message("second")),
    )

    assert results == [{"status": "success"}, {"status": "success"}]
    forwarded = transport.messages_to(PRIMARY_ID)
    assert len(forwarded) == 1
    assert "first" in forwarded[0]
    assert transport.last_to(USER_A).startswith("AI[")


@pytest.mark.asyncio
async def test_support_with_text_forwards_immediately(dispatcher, transport, make_message):
    await dispatcher.dispatch_message(make_message("/support my order is late"))

    assert "my order is late" in transport.last_to(PRIMARY_ID)
    assert not dispatcher.sessions.is_awaiting_support(USER_A)


@pytest.mark.asyncio
async def test_group_messages_need_a_mention(dispatcher, store, ai_service, transport, make_message):
    result = await dispatcher.dispatch_message(
        make_message("hello all", chat_id=GROUP_ID, participant=USER_A)
    )
    assert result == {"status": "ignored"}
    assert store.get_user(GROUP_ID) is None
    assert transport.sent == []

    await dispatcher.dispatch_message(
        make_message("@2349000000000 tell a story", chat_id=GROUP_ID, participant=USER_A)
    )
    assert ai_service.calls[0][0] == "@2349000000000 tell a story"
    assert transport.last_to(GROUP_ID).startswith("AI[")


@pytest.mark.asyncio
async def test_usage_errors_become_replies(dispatcher, transport, make_message):
    await dispatcher.dispatch_message(make_message("/8ball"))
    assert transport.last_to(USER_A) == EIGHT_BALL_USAGE

    await dispatcher.dispatch_message(make_message("/decode %%%"))
    assert transport.last_to(USER_A) == DECODE_FAILED_MESSAGE


@pytest.mark.asyncio
async def test_handler_exception_becomes_error_reply(dispatcher, transport, make_message):
    async def broken(ctx):
        raise RuntimeError("boom")

    dispatcher.registry["dice"].handler = broken

    await dispatcher.dispatch_message(make_message("/dice"))

    assert transport.last_to(USER_A) == "❌ Error executing command /dice. Please try again later."


@pytest.mark.asyncio
async def test_tools_and_games(dispatcher, transport, make_message):
    await dispatcher.dispatch_message(make_message("/upper shout this"))
    assert '"SHOUT THIS"' in transport.last_to(USER_A)

    await dispatcher.dispatch_message(make_message("/encode Hello World"))
    assert "SGVsbG8gV29ybGQ=" in transport.last_to(USER_A)

    await dispatcher.dispatch_message(make_message("/dice"))
    assert "You rolled a" in transport.last_to(USER_A)


@pytest.mark.asyncio
async def test_api_status_dashboard(dispatcher, transport, make_message):
    await dispatcher.dispatch_message(make_message("/apistatus", chat_id=PRIMARY_ID))

    messages = transport.messages_to(PRIMARY_ID)
    assert messages[0].startswith("🔧 Checking API status")
    assert "GPT-4o ✅ online" in messages[-1]
    assert "not_configured" in messages[-1]


@pytest.mark.asyncio
async def test_totals_stay_consistent(dispatcher, store, make_message):
    for text in ["hi", "/ping", "/nope", "/admin", "more text"]:
        await dispatcher.dispatch_message(make_message(text))
    await dispatcher.dispatch_message(make_message("/stats", chat_id=USER_B))

    stats = store.stats()
    activity = store.analytics.user_activity.values()
    assert stats.total_messages == sum(a.messages for a in activity) == 6
    assert stats.total_commands == sum(a.commands for a in activity) == 4


@pytest.mark.asyncio
async def test_startup_notice_goes_to_primary_admin(dispatcher, transport):
    assert await dispatcher.notify_startup()
    assert "is Online" in transport.last_to(PRIMARY_ID)
