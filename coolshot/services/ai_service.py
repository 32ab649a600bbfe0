"""
coolshot/services/ai_service.py

Purpose: AI response resolution

- Tries the primary endpoints in order; first non-empty answer wins
- Falls back to Gemini when every primary endpoint fails
- Normalizes branding and wraps the answer in the display template
- Never raises to the caller: total failure returns a canned message
- Endpoint status probes for the admin dashboard
"""

import httpx
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from coolshot.core.exceptions import ProviderError
from coolshot.core.logging import get_logger
from utils.constants import (
    AI_RESPONSE_TEMPLATE,
    AI_UNAVAILABLE_TEMPLATE,
    FALLBACK_SYSTEM_PROMPT,
    ROLES,
    language_label,
)
from utils.text_utils import normalize_branding
from utils.time_utils import format_local_time

logger = get_logger(__name__)

FALLBACK_NAME = "Google Gemini"

API_NAMES = (
    ("gpt4o", "GPT-4o"),
    ("geminiaipro", "Gemini Pro"),
    ("meta-llama", "Meta Llama"),
    ("copilot", "Copilot"),
)


class AIService:
    """
    Resolves free-text prompts against the configured AI providers.
    """

    def __init__(
        self,
        primary_apis: List[str],
        api_key: str,
        bot_name: str,
        company: str,
        default_role: str,
        timeout: float = 8.0,
        status_timeout: float = 5.0,
        google_api_key: Optional[str] = None,
        gemini_model: str = "gemini-1.5-flash",
        gemini_api_url: str = "https://generativelanguage.googleapis.com/v1beta/models",
        tz_name: str = "Africa/Lagos",
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.primary_apis = list(primary_apis)
        self._api_key = api_key
        self.bot_name = bot_name
        self.company = company
        self.default_role = default_role
        self._timeout = timeout
        self._status_timeout = status_timeout
        self._google_api_key = google_api_key
        self._gemini_model = gemini_model
        self._gemini_api_url = gemini_api_url.rstrip("/")
        self._tz_name = tz_name
        self._client = client or httpx.AsyncClient(follow_redirects=True)

        if self.fallback_configured:
            logger.info("Gemini fallback provider configured")
        else:
            logger.warning("GOOGLE_API_KEY not set. Gemini fallback is disabled.")

    @classmethod
    def from_settings(cls, settings, client: Optional[httpx.AsyncClient] = None) -> "AIService":
        return cls(
            primary_apis=settings.AI_PRIMARY_APIS,
            api_key=settings.AI_API_KEY,
            bot_name=settings.BOT_NAME,
            company=settings.COMPANY_NAME,
            default_role=settings.DEFAULT_ROLE,
            timeout=settings.AI_TIMEOUT_SECONDS,
            status_timeout=settings.AI_STATUS_TIMEOUT_SECONDS,
            google_api_key=settings.GOOGLE_API_KEY,
            gemini_model=settings.GEMINI_MODEL,
            gemini_api_url=settings.GEMINI_API_URL,
            tz_name=settings.TIMEZONE,
            client=client,
        )

    @property
    def fallback_configured(self) -> bool:
        return bool(self._google_api_key)

    async def resolve(self, prompt: str, role: str, language: str) -> str:
        """
        Gets a formatted AI answer for the prompt.

        Args:
            prompt: User's message
            role: Persona label prefixed to the prompt
            language: Language code

        Returns:
            Formatted reply text (the unavailable message if every provider failed)
        """
        response = None

        for url in self.primary_apis:
            name = self.api_name(url)
            try:
                response = await self._call_primary(url, prompt, role, language)
                logger.info("Primary API response successful", extra={"provider": name})
                break
            except ProviderError as e:
                logger.warning(f"Primary API failed: {e.message}", extra={"provider": name})

        if response is None and self.fallback_configured:
            try:
                logger.info("Trying Gemini as fallback...", extra={"provider": FALLBACK_NAME})
                response = await self._call_fallback(prompt, role, language)
                logger.info("Gemini response successful", extra={"provider": FALLBACK_NAME})
            except ProviderError as e:
                logger.warning(f"Gemini fallback failed: {e.message}", extra={"provider": FALLBACK_NAME})

        if response is None:
            logger.warning("All AI APIs failed to provide a response")
            return self.unavailable_response(role, language)

        return self.format_response(response, role, language)

    async def _call_primary(self, url: str, prompt: str, role: str, language: str) -> str:
        """
        GET <url>?apikey=..&q=<role>: <prompt>&lang=..

        Raises:
            ProviderError: On timeout, non-2xx, bad JSON or an empty result
        """
        try:
            response = await self._client.get(
                url,
                params={"apikey": self._api_key, "q": f"{role}: {prompt}", "lang": language},
                timeout=self._timeout,
            )
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException:
            raise ProviderError("Request timed out", details={"url": url})
        except httpx.HTTPStatusError as e:
            raise ProviderError(f"HTTP {e.response.status_code}", details={"url": url})
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise ProviderError(f"Network error: {e}", details={"url": url})
        except ValueError:
            raise ProviderError("Response was not valid JSON", details={"url": url})

        result = data.get("result") if isinstance(data, dict) else None
        if not isinstance(result, str) or not result.strip():
            raise ProviderError("Empty result", details={"url": url})

        return self.clean_response(result)

    async def _call_fallback(self, prompt: str, role: str, language: str) -> str:
        """
        Single-turn Gemini generateContent call with the persona preamble.

        Raises:
            ProviderError: On any failure or an empty completion
        """
        url = f"{self._gemini_api_url}/{self._gemini_model}:generateContent"
        system_prompt = FALLBACK_SYSTEM_PROMPT.format(
            bot_name=self.bot_name,
            company=self.company,
            role=role,
            language=language_label(language),
            prompt=prompt,
        )
        payload = {"contents": [{"parts": [{"text": system_prompt}]}]}

        try:
            response = await self._client.post(
                url,
                params={"key": self._google_api_key},
                json=payload,
                timeout=self._timeout,
            )
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException:
            raise ProviderError("Gemini request timed out")
        except httpx.HTTPStatusError as e:
            raise ProviderError(f"Gemini HTTP {e.response.status_code}")
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise ProviderError(f"Gemini network error: {e}")
        except ValueError:
            raise ProviderError("Gemini response was not valid JSON")

        text = self._extract_gemini_text(data)
        if not text.strip():
            raise ProviderError("Empty response from Gemini")

        return self.clean_response(text)

    def _extract_gemini_text(self, data: Any) -> str:
        """Extract text content from a generateContent response."""
        try:
            candidates = data.get("candidates") or []
            if candidates:
                parts = candidates[0].get("content", {}).get("parts", [])
                return "".join(part.get("text", "") for part in parts)
        except (AttributeError, IndexError, TypeError):
            pass
        return ""

    def clean_response(self, text: str) -> str:
        return normalize_branding(text, self.bot_name, self.company)

    def _header_fields(self, role: str, language: str) -> Dict[str, str]:
        return {
            "bot_name": self.bot_name,
            "company": self.company,
            "role": role if role in ROLES else self.default_role,
            "language": language_label(language),
            "time": format_local_time(self._tz_name),
        }

    def format_response(self, content: str, role: str, language: str) -> str:
        return AI_RESPONSE_TEMPLATE.format(content=content, **self._header_fields(role, language))

    def unavailable_response(self, role: str, language: str) -> str:
        return AI_UNAVAILABLE_TEMPLATE.format(**self._header_fields(role, language))

    @staticmethod
    def api_name(url: str) -> str:
        for marker, name in API_NAMES:
            if marker in url:
                return name
        return "GiftedTech AI"

    async def api_status(self) -> Dict[str, Any]:
        """
        Probes every provider once.

        Returns:
            {"primary": [{"name", "status", "error"?}], "fallback": {...}, "timestamp": iso}
        """
        status: Dict[str, Any] = {
            "primary": [],
            "fallback": None,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

        for url in self.primary_apis:
            name = self.api_name(url)
            try:
                response = await self._client.get(
                    url,
                    params={"apikey": self._api_key, "q": "test", "lang": "en"},
                    timeout=self._status_timeout,
                )
                response.raise_for_status()
                status["primary"].append({"name": name, "status": "online"})
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                status["primary"].append({"name": name, "status": "offline", "error": str(e)})

        if self.fallback_configured:
            try:
                url = f"{self._gemini_api_url}/{self._gemini_model}:generateContent"
                response = await self._client.post(
                    url,
                    params={"key": self._google_api_key},
                    json={"contents": [{"parts": [{"text": "test"}]}]},
                    timeout=self._status_timeout,
                )
                response.raise_for_status()
                status["fallback"] = {"name": FALLBACK_NAME, "status": "online"}
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                status["fallback"] = {"name": FALLBACK_NAME, "status": "offline", "error": str(e)}
        else:
            status["fallback"] = {"name": FALLBACK_NAME, "status": "not_configured"}

        return status

    async def close(self):
        await self._client.aclose()
