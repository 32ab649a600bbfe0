"""
coolshot/models/user.py

Purpose: User record model

- WhatsApp JID and display phone number
- Admin flag
- First/last seen timestamps
- Message and command counters
"""

from datetime import datetime, timezone
from pydantic import BaseModel, ConfigDict, Field


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class UserRecord(BaseModel):
    """
    One entry of the users document, keyed by `id`.
    Serialized with camelCase keys so the file stays hand-editable.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    phone_number: str = Field(alias="phoneNumber")
    name: str = "Unknown"
    is_admin: bool = Field(default=False, alias="isAdmin")
    first_seen: str = Field(default_factory=utc_now_iso, alias="firstSeen")
    last_seen: str = Field(default_factory=utc_now_iso, alias="lastSeen")
    message_count: int = Field(default=0, alias="messageCount")
    command_count: int = Field(default=0, alias="commandCount")
    notes: str = ""

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True)
