"""
Test Twilio WhatsApp Integration

Run this script to verify Twilio is configured correctly
and can send messages.

Usage: python scripts/send_test_message.py
"""

import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from coolshot.core.config import settings
from coolshot.services.twilio_service import TwilioService
from utils.whatsapp_utils import jid_from_phone


def check_config(service: TwilioService) -> bool:
    """Test if Twilio is properly configured"""
    print("=" * 60)
    print("  Twilio Configuration Test")
    print("=" * 60 + "\n")

    print(f"Account SID: {settings.TWILIO_ACCOUNT_SID[:10]}..." if settings.TWILIO_ACCOUNT_SID else "❌ Not set")
    print(f"Auth Token: {'✅ Set' if settings.TWILIO_AUTH_TOKEN else '❌ Not set'}")
    print(f"WhatsApp Number: {settings.TWILIO_WHATSAPP_NUMBER}")
    print(f"\nConfiguration valid: {'✅ Yes' if service.is_configured() else '❌ No'}\n")

    if not service.is_configured():
        print("⚠️  Please update the TWILIO_* settings in .env")
        return False
    return True


async def send_message(service: TwilioService):
    phone = input("Enter a WhatsApp number (with country code, e.g. 2348012345678): ")

    print(f"\n📤 Sending test message to {phone}...")
    result = await service.send_message(
        jid_from_phone(phone),
        f"🧪 *Test Message from {settings.BOT_NAME}*\n\nIf you received this, Twilio integration is working! ✅",
    )

    if result["success"]:
        print("\n✅ Message sent successfully!")
        print(f"Message SID: {result.get('message_sid')}")
        print(f"Status: {result.get('status')}")
    else:
        print("\n❌ Failed to send message")
        print(f"Error: {result.get('error')}")


async def main():
    print(f"\n🧪 {settings.BOT_NAME} Twilio Integration Test\n")

    service = TwilioService.from_settings(settings)
    try:
        if not check_config(service):
            return

        print(f"Webhook path: {settings.API_PREFIX}/webhook")
        print("Set it as 'When a message comes in' in the Twilio sandbox configuration.\n")

        if input("Do you want to send a test message? (y/n): ").lower() == "y":
            await send_message(service)
    finally:
        await service.close()


if __name__ == "__main__":
    asyncio.run(main())
