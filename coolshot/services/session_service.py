"""
coolshot/services/session_service.py

Purpose: Per-session state

- Selected AI role
- Selected response language
- "Awaiting support message" flag
- Kept in memory only; lost on restart
"""

from dataclasses import dataclass
from typing import Dict, Optional

from coolshot.core.logging import get_logger

logger = get_logger(__name__)


@dataclass
class SessionState:
    role: Optional[str] = None
    language: Optional[str] = None
    awaiting_support: bool = False


class SessionService:
    """
    In-memory session state keyed by user JID. Unset selections fall back
    to the configured defaults.
    """

    def __init__(self, default_role: str, default_language: str):
        self.default_role = default_role
        self.default_language = default_language
        self._sessions: Dict[str, SessionState] = {}

    def _get(self, user_id: str) -> SessionState:
        session = self._sessions.get(user_id)
        if session is None:
            session = SessionState()
            self._sessions[user_id] = session
        return session

    def get_role(self, user_id: str) -> str:
        session = self._sessions.get(user_id)
        return (session and session.role) or self.default_role

    def set_role(self, user_id: str, role: str):
        self._get(user_id).role = role
        logger.debug(f"Role set to {role}", extra={"user_id": user_id})

    def get_language(self, user_id: str) -> str:
        session = self._sessions.get(user_id)
        return (session and session.language) or self.default_language

    def set_language(self, user_id: str, language: str):
        self._get(user_id).language = language
        logger.debug(f"Language set to {language}", extra={"user_id": user_id})

    def is_awaiting_support(self, user_id: str) -> bool:
        session = self._sessions.get(user_id)
        return bool(session and session.awaiting_support)

    def set_awaiting_support(self, user_id: str, awaiting: bool):
        self._get(user_id).awaiting_support = awaiting

    def reset(self, user_id: str):
        """Clears role and language; the support flag is left alone."""
        session = self._sessions.get(user_id)
        if session is not None:
            session.role = None
            session.language = None
