"""
coolshot/models/analytics.py

Purpose: Process-wide analytics model

- Bot start time (fixed at first ever start)
- Per-command invocation counts
- Per-user message/command activity
- Global totals (kept equal to the per-user sums)
"""

from typing import Dict
from pydantic import BaseModel, ConfigDict, Field

from coolshot.models.user import utc_now_iso


class UserActivity(BaseModel):
    commands: int = 0
    messages: int = 0

    @property
    def total(self) -> int:
        return self.commands + self.messages


class AnalyticsRecord(BaseModel):
    """
    The analytics document. Dict fields keep insertion order, which is
    the first-seen order used to break ties in rankings.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    bot_start_time: str = Field(default_factory=utc_now_iso, alias="botStartTime")
    command_stats: Dict[str, int] = Field(default_factory=dict, alias="commandStats")
    user_activity: Dict[str, UserActivity] = Field(default_factory=dict, alias="userActivity")
    total_messages: int = Field(default=0, alias="totalMessages")
    total_commands: int = Field(default=0, alias="totalCommands")

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True)
