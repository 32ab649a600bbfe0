import pytest

from coolshot.core.config import Settings
from coolshot.flow.dispatcher import Dispatcher
from coolshot.schemas.webhook import InboundMessage
from coolshot.services.session_service import SessionService
from coolshot.services.user_service import UserStore

PRIMARY_NUMBER = "2348000000000"
PRIMARY_ID = f"{PRIMARY_NUMBER}@s.whatsapp.net"
BOT_NUMBER = "2349000000000"


class FakeTransport:
    """Records outbound messages; sends to `fail_for` recipients fail."""

    def __init__(self, fail_for=()):
        self.sent = []
        self.fail_for = set(fail_for)

    async def send_message(self, to, text):
        if to in self.fail_for:
            return {"success": False, "error": "recipient unreachable"}
        self.sent.append((to, text))
        return {"success": True, "message_sid": f"SM{len(self.sent)}"}

    def messages_to(self, to):
        return [text for recipient, text in self.sent if recipient == to]

    def last_to(self, to):
        messages = self.messages_to(to)
        return messages[-1] if messages else None


class FakeAIService:
    primary_apis = ["https://ai.test/api/ai/gpt4o"]

    def __init__(self):
        self.calls = []

    async def resolve(self, prompt, role, language):
        self.calls.append((prompt, role, language))
        return f"AI[{role}|{language}] {prompt}"

    async def api_status(self):
        return {
            "primary": [{"name": "GPT-4o", "status": "online"}],
            "fallback": {"name": "Google Gemini", "status": "not_configured"},
            "timestamp": "2026-01-01T00:00:00+00:00",
        }


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        PRIMARY_ADMIN_NUMBER=PRIMARY_NUMBER,
        PHONE_NUMBER=BOT_NUMBER,
        BROADCAST_DELAY_SECONDS=0,
        GOOGLE_API_KEY=None,
    )


@pytest.fixture
def store(tmp_path):
    store = UserStore(
        users_file=tmp_path / "users.json",
        analytics_file=tmp_path / "analytics.json",
        primary_admin_id=PRIMARY_ID,
    )
    store.initialize()
    return store


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def ai_service():
    return FakeAIService()


@pytest.fixture
def dispatcher(store, ai_service, transport, settings):
    return Dispatcher(
        store=store,
        ai_service=ai_service,
        sessions=SessionService(settings.DEFAULT_ROLE, settings.DEFAULT_LANGUAGE),
        transport=transport,
        settings=settings,
    )


@pytest.fixture
def make_message():
    def _make(text, chat_id="2348011111111@s.whatsapp.net", name="Ada", participant=None):
        return InboundMessage(chat_id=chat_id, participant=participant, name=name, text=text)
    return _make
