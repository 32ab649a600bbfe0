import pytest
from fastapi.testclient import TestClient

from coolshot.main import app

GATEWAY_EVENT = {
    "key": {"remoteJid": "2348011111111@s.whatsapp.net", "fromMe": False, "id": "ABC"},
    "pushName": "Ada",
    "message": {"extendedTextMessage": {"text": "/help"}},
}


class RecordingDispatcher:
    def __init__(self):
        self.messages = []

    async def dispatch_message(self, message):
        self.messages.append(message)
        return {"status": "success"}


@pytest.fixture
def recorder():
    recorder = RecordingDispatcher()
    app.state.dispatcher = recorder
    yield recorder
    del app.state.dispatcher


@pytest.fixture
def client():
    # Not used as a context manager: the lifespan (store, Twilio) stays off
    return TestClient(app)


def test_twilio_form_payload(client, recorder):
    response = client.post(
        "/api/v1/webhook",
        data={"From": "whatsapp:+2348011111111", "Body": "Hi", "ProfileName": "Ada", "MessageSid": "SM1"},
    )

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/xml")
    assert "<Response></Response>" in response.text

    message = recorder.messages[0]
    assert message.chat_id == "2348011111111@s.whatsapp.net"
    assert message.name == "Ada"
    assert message.text == "Hi"
    assert message.platform == "twilio"


def test_twilio_empty_body_is_ignored(client, recorder):
    response = client.post("/api/v1/webhook", data={"From": "whatsapp:+2348011111111", "Body": ""})

    assert response.status_code == 200
    assert recorder.messages == []


def test_gateway_events_are_filtered(client, recorder):
    own = {**GATEWAY_EVENT, "key": {**GATEWAY_EVENT["key"], "fromMe": True}}
    status = {**GATEWAY_EVENT, "key": {"remoteJid": "status@broadcast"}}
    empty = {**GATEWAY_EVENT, "message": {"reactionMessage": {}}}

    response = client.post("/api/v1/webhook", json={"messages": [own, GATEWAY_EVENT, status, empty]})

    assert response.status_code == 200
    assert response.json()["processed"] == 1
    assert [m.text for m in recorder.messages] == ["/help"]
    assert recorder.messages[0].platform == "gateway"


def test_gateway_group_event_keeps_participant(client, recorder):
    event = {
        "key": {"remoteJid": "1203630000@g.us", "participant": "2348022222222@s.whatsapp.net"},
        "message": {"conversation": "@2349000000000 hi"},
    }

    client.post("/api/v1/webhook", json=event)

    message = recorder.messages[0]
    assert message.is_group
    assert message.chat_id == "1203630000@g.us"
    assert message.participant == "2348022222222@s.whatsapp.net"


def test_invalid_payload_is_400(client, recorder):
    response = client.post(
        "/api/v1/webhook",
        content="not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["code"] == "HTTP_ERROR"


def test_webhook_verification(client):
    response = client.get("/api/v1/webhook")
    assert response.json()["status"] == "ok"


def test_health_endpoints(client):
    health = client.get("/health").json()
    assert health["status"] == "healthy"
    assert health["bot"] == "Cool Shot AI"
    assert health["uptime"] >= 0

    assert "is alive" in client.get("/ping").text
    assert client.get("/live").json() == {"status": "alive"}
    assert client.get("/").json()["status"] == "running"
