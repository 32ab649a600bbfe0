"""
utils/whatsapp_utils.py

Purpose: WhatsApp identifier and payload helpers

- Converts between JIDs (2348012345678@s.whatsapp.net) and phone formats
- Detects group and status-broadcast chats
- Extracts text from WhatsApp-Web style message payloads
"""

from typing import Any, Dict, Optional

USER_JID_SUFFIX = "@s.whatsapp.net"
GROUP_JID_SUFFIX = "@g.us"
BROADCAST_JID_SUFFIX = "@broadcast"


def jid_from_phone(phone: str) -> str:
    """
    Builds a user JID from any phone format.

    Example:
        "whatsapp:+2348012345678" -> "2348012345678@s.whatsapp.net"
    """
    digits = phone.replace("whatsapp:", "").strip().lstrip("+").replace(" ", "")
    if "@" in digits:
        return digits
    return f"{digits}{USER_JID_SUFFIX}"


def phone_from_jid(jid: str) -> str:
    return jid.split("@")[0]


def whatsapp_address(jid: str) -> str:
    """
    Twilio address for a JID.

    Example:
        "2348012345678@s.whatsapp.net" -> "whatsapp:+2348012345678"
    """
    if jid.startswith("whatsapp:"):
        return jid
    return f"whatsapp:+{phone_from_jid(jid)}"


def is_group_jid(jid: Optional[str]) -> bool:
    return bool(jid) and jid.endswith(GROUP_JID_SUFFIX)


def is_broadcast_jid(jid: Optional[str]) -> bool:
    return bool(jid) and jid.endswith(BROADCAST_JID_SUFFIX)


def extract_message_text(message: Optional[Dict[str, Any]]) -> Optional[str]:
    """
    Extracts the text content of a WhatsApp-Web message body.

    Checked in order: plain conversation, extended text, image caption,
    video caption.
    """
    if not message:
        return None

    if message.get("conversation"):
        return message["conversation"]

    for container, field in (
        ("extendedTextMessage", "text"),
        ("imageMessage", "caption"),
        ("videoMessage", "caption"),
    ):
        value = (message.get(container) or {}).get(field)
        if value:
            return value

    return None


def is_mentioned(text: Optional[str], bot_number: str) -> bool:
    """
    Group gate: the bot answers only when the literal "@<number>" appears
    in the text.
    """
    return bool(text) and f"@{bot_number}" in text
