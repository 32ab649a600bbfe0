"""
coolshot/services/user_service.py

Purpose: User and analytics store

- Owns the users and analytics documents (loaded once at startup)
- Creates/refreshes user records on every inbound message
- Tracks message and command counters
- Guarded admin promotion/demotion
- Read-only aggregate queries for the stats commands
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from pydantic import ValidationError

from coolshot.db.json_store import JsonDocument
from coolshot.models.analytics import AnalyticsRecord, UserActivity
from coolshot.models.user import UserRecord, utc_now_iso
from coolshot.core.logging import get_logger, LogContext

logger = get_logger(__name__)

PRIMARY_ADMIN_NOTES = "Primary Admin - Cool Shot AI Owner"


@dataclass
class OperationResult:
    """Outcome of a guarded store operation. `error` is user-facing."""
    success: bool
    error: Optional[str] = None


@dataclass
class StoreStats:
    total_users: int
    total_admins: int
    active_today: int
    total_messages: int
    total_commands: int


@dataclass
class Uptime:
    days: int
    hours: int
    total: int


@dataclass
class ActiveUser:
    user: UserRecord
    messages: int
    commands: int

    @property
    def total(self) -> int:
        return self.messages + self.commands


def phone_from_id(user_id: str) -> str:
    return user_id.split("@")[0]


def parse_timestamp(value: str) -> Optional[datetime]:
    """Parses a stored ISO timestamp; naive values are treated as UTC."""
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (TypeError, ValueError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class UserStore:
    """
    In-memory mirror of the users and analytics documents.

    Every mutating call rewrites the whole affected document before
    returning. Write failures are logged by JsonDocument and the in-memory
    state keeps serving requests.
    """

    def __init__(
        self,
        users_file: Union[str, Path],
        analytics_file: Union[str, Path],
        primary_admin_id: str,
    ):
        self._users_doc = JsonDocument(users_file)
        self._analytics_doc = JsonDocument(analytics_file)
        self.primary_admin_id = primary_admin_id
        self.users: Dict[str, UserRecord] = {}
        self.analytics = AnalyticsRecord()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self):
        """
        Loads both documents and runs the primary admin self-heal.
        Called once during application startup.
        """
        self._load_users()
        self._load_analytics()
        self.ensure_admin_setup()
        logger.info(
            f"User store initialized: {len(self.users)} users, "
            f"{len(self.admin_users())} admins"
        )

    def _load_users(self):
        data = self._users_doc.load()
        if data is None:
            return
        if not isinstance(data, dict):
            logger.error("Users document is not a JSON object, starting empty")
            return

        for user_id, raw in data.items():
            try:
                record = UserRecord.model_validate({"id": user_id, "phoneNumber": phone_from_id(user_id), **raw})
            except (ValidationError, TypeError) as e:
                logger.warning(f"Skipping invalid user entry {user_id}: {e}")
                continue
            self.users[user_id] = record

        logger.info(f"Loaded {len(self.users)} users from storage")

    def _load_analytics(self):
        if not self._analytics_doc.exists():
            # First ever start: persist botStartTime right away
            self.save_analytics()
            return

        data = self._analytics_doc.load()
        if data is None:
            logger.error("Analytics document is unreadable, using defaults until the next save")
            return

        try:
            self.analytics = AnalyticsRecord.model_validate(data)
            logger.info("Analytics data loaded")
        except ValidationError as e:
            logger.error(f"Invalid analytics document, using defaults: {e}")

    def save_users(self) -> bool:
        return self._users_doc.save({uid: user.to_document() for uid, user in self.users.items()})

    def save_analytics(self) -> bool:
        return self._analytics_doc.save(self.analytics.to_document())

    def ensure_admin_setup(self):
        """
        The primary admin always exists and always has isAdmin = true.
        """
        admin_id = self.primary_admin_id
        admin = self.users.get(admin_id)

        if admin is None:
            self.users[admin_id] = UserRecord(
                id=admin_id,
                phone_number=phone_from_id(admin_id),
                name="Admin",
                is_admin=True,
                notes=PRIMARY_ADMIN_NOTES,
            )
            self.save_users()
            logger.info("Primary admin initialized", extra={"user_id": admin_id})
        elif not admin.is_admin:
            admin.is_admin = True
            self.save_users()
            logger.info("Admin status restored", extra={"user_id": admin_id})

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def get_user(self, user_id: str) -> Optional[UserRecord]:
        return self.users.get(user_id)

    def get_or_create_user(self, user_id: str, name: Optional[str] = None) -> UserRecord:
        """
        Retrieves an existing user or creates a new one, refreshing the
        display name and lastSeen.

        Args:
            user_id: WhatsApp JID
            name: Display name reported by the transport, if any

        Returns:
            The user record
        """
        with LogContext(user_id=user_id):
            now = utc_now_iso()
            user = self.users.get(user_id)

            if user is None:
                user = UserRecord(
                    id=user_id,
                    phone_number=phone_from_id(user_id),
                    name=name or "Unknown",
                    first_seen=now,
                    last_seen=now,
                )
                self.users[user_id] = user
                logger.info(f"New user registered: {user.name} ({user.phone_number})")
            else:
                if name:
                    user.name = name
                user.last_seen = now

            self.save_users()
            return user

    def all_users(self) -> List[UserRecord]:
        return list(self.users.values())

    def all_user_ids(self) -> List[str]:
        return list(self.users.keys())

    # ------------------------------------------------------------------
    # Counters
    # ------------------------------------------------------------------

    def _activity(self, user_id: str) -> UserActivity:
        activity = self.analytics.user_activity.get(user_id)
        if activity is None:
            activity = UserActivity()
            self.analytics.user_activity[user_id] = activity
        return activity

    def record_message(self, user_id: str):
        self.analytics.total_messages += 1
        self._activity(user_id).messages += 1

        user = self.users.get(user_id)
        if user is not None:
            user.message_count += 1

        self.save_analytics()
        self.save_users()

    def record_command(self, command: str, user_id: str):
        self.analytics.total_commands += 1
        stats = self.analytics.command_stats
        stats[command] = stats.get(command, 0) + 1
        self._activity(user_id).commands += 1

        user = self.users.get(user_id)
        if user is not None:
            user.command_count += 1

        self.save_analytics()
        self.save_users()

        logger.info(f"Command executed: {command}", extra={"user_id": user_id, "command": command})

    def activity_for(self, user_id: str) -> UserActivity:
        return self.analytics.user_activity.get(user_id, UserActivity())

    # ------------------------------------------------------------------
    # Admins
    # ------------------------------------------------------------------

    def is_admin(self, user_id: str) -> bool:
        user = self.users.get(user_id)
        return bool(user and user.is_admin)

    def is_primary_admin(self, user_id: str) -> bool:
        return user_id == self.primary_admin_id

    def admin_users(self) -> List[UserRecord]:
        return [user for user in self.users.values() if user.is_admin]

    def admin_ids(self) -> List[str]:
        return [user.id for user in self.admin_users()]

    def set_admin(self, user_id: str, is_admin: bool) -> OperationResult:
        """
        Sets the admin flag without a caller check. The primary admin
        cannot lose the flag.
        """
        if not is_admin and self.is_primary_admin(user_id):
            return OperationResult(False, "Primary admin cannot be demoted")

        user = self.users.get(user_id)
        if user is None:
            return OperationResult(False, "User not found in database")

        user.is_admin = is_admin
        self.save_users()
        return OperationResult(True)

    def promote(self, user_id: str, promoted_by: str) -> OperationResult:
        """Promote user to admin (primary admin only)."""
        if not self.is_primary_admin(promoted_by):
            return OperationResult(False, "Only the primary admin can promote users")

        user = self.users.get(user_id)
        if user is None:
            return OperationResult(False, "User not found in database")
        if user.is_admin:
            return OperationResult(False, "User is already an admin")

        result = self.set_admin(user_id, True)
        if result.success:
            logger.info(f"User promoted to admin by {promoted_by}", extra={"user_id": user_id})
        return result

    def demote(self, user_id: str, demoted_by: str) -> OperationResult:
        """Demote an admin (primary admin only; the primary admin is immune)."""
        if not self.is_primary_admin(demoted_by):
            return OperationResult(False, "Only the primary admin can demote users")

        if self.is_primary_admin(user_id):
            return OperationResult(False, "Primary admin cannot be demoted")

        if not self.is_admin(user_id):
            return OperationResult(False, "User is not an admin")

        result = self.set_admin(user_id, False)
        if result.success:
            logger.info(f"Admin demoted by {demoted_by}", extra={"user_id": user_id})
        return result

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------

    def stats(self, now: Optional[datetime] = None) -> StoreStats:
        today = (now or datetime.now(timezone.utc)).date()
        active_today = 0
        for user in self.users.values():
            last_seen = parse_timestamp(user.last_seen)
            if last_seen and last_seen.astimezone(timezone.utc).date() == today:
                active_today += 1

        return StoreStats(
            total_users=len(self.users),
            total_admins=len(self.admin_users()),
            active_today=active_today,
            total_messages=self.analytics.total_messages,
            total_commands=self.analytics.total_commands,
        )

    def uptime(self, now: Optional[datetime] = None) -> Uptime:
        started = parse_timestamp(self.analytics.bot_start_time)
        if started is None:
            return Uptime(days=0, hours=0, total=0)

        elapsed = (now or datetime.now(timezone.utc)) - started
        total_hours = max(int(elapsed.total_seconds() // 3600), 0)
        return Uptime(days=total_hours // 24, hours=total_hours % 24, total=total_hours)

    def top_commands(self, limit: int = 10) -> List[Tuple[str, int]]:
        """
        Commands by descending count. sorted() is stable, so ties keep the
        order in which the commands were first recorded.
        """
        ranked = sorted(self.analytics.command_stats.items(), key=lambda item: item[1], reverse=True)
        return ranked[:limit]

    def most_active_users(self, limit: int = 10) -> List[ActiveUser]:
        entries = [
            ActiveUser(user=self.users[user_id], messages=activity.messages, commands=activity.commands)
            for user_id, activity in self.analytics.user_activity.items()
            if user_id in self.users
        ]
        entries.sort(key=lambda entry: entry.total, reverse=True)
        return entries[:limit]
