import json

import httpx
import pytest

from coolshot.services.ai_service import AIService

PRIMARY_APIS = [
    "https://ai.test/api/ai/gpt4o",
    "https://ai.test/api/ai/geminiaipro",
    "https://ai.test/api/ai/meta-llama",
    "https://ai.test/api/ai/copilot",
]
GEMINI_HOST = "generativelanguage.googleapis.com"


class ProviderStub:
    """
    Serves canned responses per path and records every request.
    Unlisted primary paths answer 500.
    """

    def __init__(self, responses=None, gemini=None):
        self.responses = responses or {}
        self.gemini = gemini
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == GEMINI_HOST:
            if self.gemini is None:
                return httpx.Response(500)
            return self.gemini(request)

        response = self.responses.get(request.url.path, httpx.Response(500))
        if isinstance(response, Exception):
            raise response
        return response

    def primary_paths(self):
        return [r.url.path for r in self.requests if r.url.host != GEMINI_HOST]


def make_service(stub, google_api_key=None, primary_apis=PRIMARY_APIS):
    return AIService(
        primary_apis=primary_apis,
        api_key="secret",
        bot_name="Cool Shot AI",
        company="Cool Shot Systems",
        default_role="Brain Master",
        google_api_key=google_api_key,
        client=httpx.AsyncClient(transport=httpx.MockTransport(stub)),
    )


@pytest.mark.asyncio
async def test_first_success_short_circuits_later_providers():
    stub = ProviderStub({
        "/api/ai/geminiaipro": httpx.Response(200, json={"result": "   "}),
        "/api/ai/meta-llama": httpx.Response(200, json={"result": "Hello, I am ChatGPT."}),
        "/api/ai/copilot": httpx.Response(200, json={"result": "should not be used"}),
    })
    service = make_service(stub)

    reply = await service.resolve("hi", "Doctor", "fr")

    assert stub.primary_paths() == ["/api/ai/gpt4o", "/api/ai/geminiaipro", "/api/ai/meta-llama"]
    assert "Hello, I am Cool Shot AI." in reply
    assert "ChatGPT" not in reply
    assert "*Doctor*" in reply
    assert "French" in reply
    await service.close()


@pytest.mark.asyncio
async def test_primary_request_parameters():
    stub = ProviderStub({"/api/ai/gpt4o": httpx.Response(200, json={"result": "ok"})})
    service = make_service(stub)

    await service.resolve("what is 2+2?", "Mathematician", "es")

    params = stub.requests[0].url.params
    assert stub.requests[0].method == "GET"
    assert params["apikey"] == "secret"
    assert params["q"] == "Mathematician: what is 2+2?"
    assert params["lang"] == "es"
    await service.close()


@pytest.mark.asyncio
async def test_timeouts_and_bad_payloads_fall_through():
    request = httpx.Request("GET", PRIMARY_APIS[0])
    stub = ProviderStub({
        "/api/ai/gpt4o": httpx.ConnectTimeout("timed out", request=request),
        "/api/ai/geminiaipro": httpx.Response(200, text="<html>not json</html>"),
        "/api/ai/meta-llama": httpx.Response(200, json={"status": 200}),
        "/api/ai/copilot": httpx.Response(200, json={"result": "fourth time lucky"}),
    })
    service = make_service(stub)

    reply = await service.resolve("hi", "Brain Master", "en")

    assert len(stub.primary_paths()) == 4
    assert "fourth time lucky" in reply
    await service.close()


@pytest.mark.asyncio
async def test_malformed_provider_url_is_skipped():
    stub = ProviderStub({
        "/api/ai/gpt4o": httpx.InvalidURL("Invalid URL component 'host'"),
        "/api/ai/geminiaipro": httpx.Response(200, json={"result": "second opinion"}),
    })
    service = make_service(stub)

    reply = await service.resolve("hi", "Brain Master", "en")

    assert "second opinion" in reply
    status = await service.api_status()
    assert status["primary"][0]["status"] == "offline"
    await service.close()


@pytest.mark.asyncio
async def test_all_fail_without_fallback_returns_unavailable_message():
    stub = ProviderStub()
    service = make_service(stub)

    reply = await service.resolve("hi", "Doctor", "en")

    assert "technical difficulties" in reply
    assert "*Doctor*" in reply
    assert len(stub.requests) == len(PRIMARY_APIS)
    await service.close()


@pytest.mark.asyncio
async def test_fallback_used_after_all_primaries_fail():
    def gemini(request):
        return httpx.Response(200, json={
            "candidates": [{"content": {"parts": [{"text": "I am Gemini, a model trained by Google."}]}}],
        })

    stub = ProviderStub(gemini=gemini)
    service = make_service(stub, google_api_key="g-key")

    reply = await service.resolve("who are you?", "Doctor", "en")

    gemini_requests = [r for r in stub.requests if r.url.host == GEMINI_HOST]
    assert len(gemini_requests) == 1
    request = gemini_requests[0]
    assert request.method == "POST"
    assert request.url.params["key"] == "g-key"
    assert request.url.path.endswith("gemini-1.5-flash:generateContent")

    prompt = json.loads(request.content)["contents"][0]["parts"][0]["text"]
    assert "You are Cool Shot AI" in prompt
    assert "Doctor" in prompt
    assert "User Query: who are you?" in prompt

    assert "I am Cool Shot AI, a model trained by Cool Shot AI." in reply
    assert "Gemini" not in reply
    await service.close()


@pytest.mark.asyncio
async def test_fallback_failure_returns_unavailable_message():
    stub = ProviderStub(gemini=lambda request: httpx.Response(200, json={"candidates": []}))
    service = make_service(stub, google_api_key="g-key")

    reply = await service.resolve("hi", "Doctor", "en")

    assert "technical difficulties" in reply
    await service.close()


@pytest.mark.asyncio
async def test_unknown_role_uses_default_in_header():
    stub = ProviderStub({"/api/ai/gpt4o": httpx.Response(200, json={"result": "ok"})})
    service = make_service(stub)

    reply = await service.resolve("hi", "Wizard", "xx")

    assert "*Brain Master*" in reply
    assert "English" in reply
    # The raw role still goes to the provider
    assert stub.requests[0].url.params["q"] == "Wizard: hi"
    await service.close()


def test_api_names():
    assert [AIService.api_name(url) for url in PRIMARY_APIS] == ["GPT-4o", "Gemini Pro", "Meta Llama", "Copilot"]
    assert AIService.api_name("https://api.giftedtech.co.ke/api/ai/ai") == "GiftedTech AI"


@pytest.mark.asyncio
async def test_api_status_reports_each_provider():
    stub = ProviderStub({
        "/api/ai/gpt4o": httpx.Response(200, json={"result": "pong"}),
        "/api/ai/geminiaipro": httpx.Response(503),
    })
    service = make_service(stub, primary_apis=PRIMARY_APIS[:2])

    status = await service.api_status()

    assert [api["status"] for api in status["primary"]] == ["online", "offline"]
    assert "error" in status["primary"][1]
    assert status["fallback"] == {"name": "Google Gemini", "status": "not_configured"}
    assert status["timestamp"]
    assert stub.requests[0].url.params["q"] == "test"
    await service.close()


@pytest.mark.asyncio
async def test_api_status_checks_configured_fallback():
    stub = ProviderStub(gemini=lambda request: httpx.Response(200, json={"candidates": []}))
    service = make_service(stub, google_api_key="g-key", primary_apis=[])

    status = await service.api_status()

    assert status["primary"] == []
    assert status["fallback"]["status"] == "online"
    await service.close()
