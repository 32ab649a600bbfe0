"""
coolshot/flow/dispatcher.py

Purpose: Central message dispatcher

- Receives normalized messages from the webhook
- Applies the group mention gate
- Registers the user and counts the message
- Support mode: forwards the next message to the admins
- Routes slash-commands through the command table (access check first)
- Sends everything else to the AI resolver
- Sends responses via the transport
"""

import asyncio
from typing import Any, Dict, Optional, Tuple

from coolshot.core.exceptions import AccessDeniedError, UsageError
from coolshot.core.logging import get_logger, LogContext
from coolshot.flow.commands import CommandContext, build_registry, check_access, parse_command
from coolshot.models.user import UserRecord
from coolshot.schemas.webhook import InboundMessage
from utils.constants import (
    AI_CHAT_ERROR_MESSAGE,
    COMMAND_ERROR_MESSAGE,
    STARTUP_MESSAGE,
    SUPPORT_REQUEST_MESSAGE,
    SUPPORT_SENT_MESSAGE,
    UNKNOWN_COMMAND_MESSAGE,
)
from utils.time_utils import format_local_datetime
from utils.whatsapp_utils import is_mentioned

logger = get_logger(__name__)


class Dispatcher:
    """
    Processes one inbound message to completion: store updates, command or
    AI resolution, and the outbound reply.
    """

    def __init__(self, store, ai_service, sessions, transport, settings):
        self.store = store
        self.ai_service = ai_service
        self.sessions = sessions
        self.transport = transport
        self.settings = settings
        self.registry = build_registry()
        # One event at a time, including its AI calls and store writes
        self._lock = asyncio.Lock()

    async def dispatch_message(self, message: InboundMessage) -> Dict[str, Any]:
        """
        Main entry point for incoming WhatsApp messages

        Args:
            message: Normalized message object

        Returns:
            Status dict ("ignored", "success" or "error")
        """
        user_id = message.chat_id

        if message.is_group and not is_mentioned(message.text, self.settings.PHONE_NUMBER):
            logger.debug("Group message without mention ignored", extra={"user_id": user_id})
            return {"status": "ignored"}

        logger.info(f"📨 Dispatching message from {user_id} via {message.platform}")

        async with self._lock:
            with LogContext(user_id=user_id):
                return await self._process(message)

    async def _process(self, message: InboundMessage) -> Dict[str, Any]:
        user_id = message.chat_id
        try:
            user = self.store.get_or_create_user(user_id, message.name)
            self.store.record_message(user_id)

            if self.sessions.is_awaiting_support(user_id):
                await self.handle_support_message(user, message.text)
            elif message.text.strip().startswith("/"):
                await self.handle_command(message, user)
            else:
                await self.handle_ai_chat(message)

            return {"status": "success"}

        except Exception as e:
            logger.error(f"❌ Dispatcher error: {e}", exc_info=True)
            return {"status": "error", "error": str(e)}

    async def handle_command(self, message: InboundMessage, user: UserRecord):
        """
        Looks the command up, records it under its canonical name, checks
        access, then runs the handler. Denials and usage errors become
        replies.
        """
        user_id = message.chat_id
        command, args = parse_command(message.text)
        spec = self.registry.get(command)

        if spec is None:
            self.store.record_command("unknown", user_id)
            await self.send(user_id, UNKNOWN_COMMAND_MESSAGE.format(
                command=command,
                bot_name=self.settings.BOT_NAME,
            ))
            return

        self.store.record_command(spec.name, user_id)

        with LogContext(command=spec.name):
            ctx = CommandContext(
                dispatcher=self,
                message=message,
                user=user,
                command=spec.name,
                args=args,
            )
            try:
                check_access(spec, user_id, self.store)
                response = await spec.handler(ctx)
            except AccessDeniedError as e:
                logger.info("Access denied")
                response = {"message": e.message}
            except UsageError as e:
                response = {"message": e.message}
            except Exception as e:
                logger.error(f"❌ Command execution error: {e}", exc_info=True)
                response = {"message": COMMAND_ERROR_MESSAGE.format(command=command)}

        await self.send_response(user_id, response)

    async def handle_support_message(self, user: UserRecord, text: str):
        """Forwards the message to the admins and leaves support mode."""
        await self.forward_to_admins(user, text)
        self.sessions.set_awaiting_support(user.id, False)
        await self.send(user.id, SUPPORT_SENT_MESSAGE)
        logger.info("Support message processed")

    async def handle_ai_chat(self, message: InboundMessage):
        user_id = message.chat_id
        role = self.sessions.get_role(user_id)
        language = self.sessions.get_language(user_id)

        try:
            reply = await self.ai_service.resolve(message.text, role, language)
        except Exception as e:
            logger.error(f"AI chat error: {e}", exc_info=True)
            reply = AI_CHAT_ERROR_MESSAGE.format(
                bot_name=self.settings.BOT_NAME,
                company=self.settings.COMPANY_NAME,
            )

        await self.send(user_id, reply)
        logger.info(f"AI response sent (role={role}, lang={language})")

    async def forward_to_admins(self, user: UserRecord, text: str) -> int:
        """
        Returns:
            Number of admins reached
        """
        request = SUPPORT_REQUEST_MESSAGE.format(name=user.name, phone=user.phone_number, text=text)
        delivered = 0
        for admin_id in self.store.admin_ids():
            if await self.send(admin_id, request):
                delivered += 1
        return delivered

    async def broadcast(self, text: str) -> Tuple[int, int, int]:
        """
        Sends text to every known user, one at a time with a fixed pause.
        A failed send is counted and the loop continues.

        Returns:
            (success, failed, total)
        """
        recipients = self.store.all_user_ids()
        success = 0
        failed = 0

        for recipient in recipients:
            if await self.send(recipient, text):
                success += 1
            else:
                failed += 1
            await asyncio.sleep(self.settings.BROADCAST_DELAY_SECONDS)

        return success, failed, len(recipients)

    async def send(self, to: str, text: str) -> bool:
        result = await self.transport.send_message(to, text)
        if not result.get("success"):
            logger.error(f"❌ Failed to send message to {to}: {result.get('error')}")
            return False
        return True

    async def send_response(self, to: str, response: Optional[Dict[str, Any]]):
        message_text = (response or {}).get("message", "")
        if not message_text:
            logger.warning("⚠️ Empty response message")
            return
        await self.send(to, message_text)

    async def notify_startup(self) -> bool:
        """Tells the primary admin the bot is online. Failure is only logged."""
        text = STARTUP_MESSAGE.format(
            bot_name=self.settings.BOT_NAME,
            version=self.settings.BOT_VERSION,
            time=format_local_datetime(self.settings.TIMEZONE),
        )
        sent = await self.send(self.settings.PRIMARY_ADMIN_ID, text)
        if sent:
            logger.info("Startup notification sent to primary admin")
        else:
            logger.warning("Could not send startup notification")
        return sent
