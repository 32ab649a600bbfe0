"""
coolshot/services/twilio_service.py

Purpose: Twilio WhatsApp message sending

- Outbound text messages via the Twilio Messages REST API
- Recipients are WhatsApp JIDs; converted to whatsapp:+<digits> here
- Returns a result dict instead of raising
"""

import httpx
from typing import Any, Dict, Optional

from coolshot.core.logging import get_logger
from utils.whatsapp_utils import whatsapp_address

logger = get_logger(__name__)

TWILIO_API_BASE = "https://api.twilio.com/2010-04-01"


class TwilioService:
    """Service for sending WhatsApp messages via Twilio"""

    def __init__(
        self,
        account_sid: Optional[str],
        auth_token: Optional[str],
        whatsapp_number: Optional[str],
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.account_sid = account_sid
        self.auth_token = auth_token
        self.whatsapp_number = whatsapp_number  # whatsapp:+14155238886
        self.base_url = f"{TWILIO_API_BASE}/Accounts/{account_sid}"
        self._timeout = timeout
        self._client = client or httpx.AsyncClient()

    @classmethod
    def from_settings(cls, settings, client: Optional[httpx.AsyncClient] = None) -> "TwilioService":
        return cls(
            account_sid=settings.TWILIO_ACCOUNT_SID,
            auth_token=settings.TWILIO_AUTH_TOKEN,
            whatsapp_number=settings.TWILIO_WHATSAPP_NUMBER,
            client=client,
        )

    async def send_message(self, to: str, text: str) -> Dict[str, Any]:
        """
        Sends a WhatsApp text message via Twilio

        Args:
            to: Recipient JID (2348012345678@s.whatsapp.net)
            text: Message text

        Returns:
            {
                "success": True/False,
                "message_sid": "SMxxx...",
                "error": "Optional error message"
            }
        """
        if not self.is_configured():
            logger.warning(f"Twilio not configured, dropping message to {to}")
            return {"success": False, "error": "Twilio is not configured"}

        address = whatsapp_address(to)
        data = {
            "From": self.whatsapp_number,
            "To": address,
            "Body": text,
        }

        logger.info(f"📤 Sending Twilio message to {address}")

        try:
            response = await self._client.post(
                f"{self.base_url}/Messages.json",
                data=data,
                auth=(self.account_sid, self.auth_token),
                timeout=self._timeout,
            )
        except httpx.TimeoutException:
            logger.error("Twilio API timeout")
            return {"success": False, "error": "Twilio API timeout"}
        except httpx.RequestError as e:
            logger.error(f"Error sending Twilio message: {e}")
            return {"success": False, "error": str(e)}

        if response.status_code in (200, 201):
            result = response.json()
            logger.info(f"✅ Message sent: SID={result.get('sid')}")
            return {
                "success": True,
                "message_sid": result.get("sid"),
                "status": result.get("status"),
            }

        logger.error(f"❌ Twilio API error: {response.status_code} - {response.text}")
        return {"success": False, "error": f"Twilio API error: {response.status_code}"}

    def is_configured(self) -> bool:
        """Check if Twilio is properly configured"""
        return bool(
            self.account_sid
            and self.auth_token
            and self.whatsapp_number
            and self.account_sid != "your_twilio_sid"
        )

    async def close(self):
        await self._client.aclose()
