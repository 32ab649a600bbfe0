"""
coolshot/schemas/webhook.py

Purpose: WhatsApp webhook payload schemas and parsers

- Normalizes Twilio form posts and WhatsApp-Web gateway events into
  InboundMessage
- Drops events the bot must ignore (own messages, status broadcasts, no text)
"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Literal, Optional

from utils.whatsapp_utils import (
    extract_message_text,
    is_broadcast_jid,
    is_group_jid,
    jid_from_phone,
)


class InboundMessage(BaseModel):
    """
    Normalized message format for internal processing.

    `chat_id` keys the user record and session; in group chats that is the
    group JID and `participant` names the author.
    """
    chat_id: str = Field(..., description="JID of the chat the message arrived in")
    participant: Optional[str] = Field(None, description="Author JID inside a group chat")
    name: Optional[str] = Field(None, description="Sender's display name")
    text: str = Field(..., description="Message text content")
    message_id: Optional[str] = None
    platform: Literal["twilio", "gateway"] = "gateway"

    @property
    def is_group(self) -> bool:
        return is_group_jid(self.chat_id)

    class Config:
        json_schema_extra = {
            "example": {
                "chat_id": "2348012345678@s.whatsapp.net",
                "name": "Ada",
                "text": "/help",
                "platform": "gateway",
            }
        }


def parse_twilio_message(
    from_number: str,
    body: Optional[str],
    profile_name: Optional[str] = None,
    message_sid: Optional[str] = None,
) -> Optional[InboundMessage]:
    """
    Parses Twilio WhatsApp webhook payload

    Twilio format (form data):
    - From: whatsapp:+2348012345678
    - Body: message text
    - ProfileName: User's name
    - MessageSid: SMxxx
    """
    if not body or not body.strip():
        return None

    jid = jid_from_phone(from_number)
    return InboundMessage(
        chat_id=jid,
        name=profile_name,
        text=body,
        message_id=message_sid,
        platform="twilio",
    )


def parse_gateway_event(event: Dict[str, Any]) -> Optional[InboundMessage]:
    """
    Parses one WhatsApp-Web style message event:

    {
        "key": {"remoteJid": "...", "fromMe": false, "id": "...", "participant": "..."},
        "pushName": "Ada",
        "message": {"conversation": "hi"}
    }

    Returns None for events that must be ignored.
    """
    key = event.get("key") or {}
    if key.get("fromMe"):
        return None

    chat_id = key.get("remoteJid")
    if not chat_id or is_broadcast_jid(chat_id):
        return None

    text = extract_message_text(event.get("message"))
    if not text:
        return None

    return InboundMessage(
        chat_id=chat_id,
        participant=key.get("participant"),
        name=event.get("pushName"),
        text=text,
        message_id=key.get("id"),
        platform="gateway",
    )


def parse_gateway_events(payload: Any) -> List[InboundMessage]:
    """
    Accepts a single event, a list of events or {"messages": [...]}.
    """
    if isinstance(payload, dict) and isinstance(payload.get("messages"), list):
        events = payload["messages"]
    elif isinstance(payload, list):
        events = payload
    elif isinstance(payload, dict):
        events = [payload]
    else:
        raise ValueError("Unknown webhook format")

    messages = []
    for event in events:
        if not isinstance(event, dict):
            continue
        message = parse_gateway_event(event)
        if message is not None:
            messages.append(message)
    return messages
