"""
Probe every configured AI provider and print a status table.

Optionally resolves a prompt end to end.

Usage:
    python scripts/check_ai_providers.py
    python scripts/check_ai_providers.py "What is the capital of Nigeria?"
"""

import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from coolshot.core.config import settings
from coolshot.services.ai_service import AIService


async def main():
    service = AIService.from_settings(settings)
    try:
        status = await service.api_status()

        print("=" * 60)
        print("  AI Provider Status")
        print("=" * 60 + "\n")
        for api in status["primary"]:
            icon = "✅" if api["status"] == "online" else "❌"
            print(f"{icon} {api['name']:<16} {api['status']} {api.get('error', '')}")

        fallback = status["fallback"]
        print(f"\nFallback: {fallback['name']} - {fallback['status']}")

        if len(sys.argv) > 1:
            prompt = " ".join(sys.argv[1:])
            print(f"\n📝 Resolving: {prompt}\n")
            print(await service.resolve(prompt, settings.DEFAULT_ROLE, settings.DEFAULT_LANGUAGE))
    finally:
        await service.close()


if __name__ == "__main__":
    asyncio.run(main())
