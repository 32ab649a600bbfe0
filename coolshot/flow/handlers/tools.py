"""
coolshot/flow/handlers/tools.py

Handles: text utility commands

- /count word and character statistics
- /reverse, /upper, /lower, /title conversions
- /encode and /decode Base64
"""

from typing import Any, Dict

from coolshot.core.exceptions import UsageError
from coolshot.flow.commands import CommandContext
from coolshot.core.logging import get_logger
from utils.constants import (
    CONVERSION_MESSAGE,
    COUNT_MESSAGE,
    DECODE_FAILED_MESSAGE,
    DECODE_MESSAGE,
    ENCODE_MESSAGE,
    TOOL_USAGE,
    TOOLS_MESSAGE,
)
from utils.text_utils import count_text, decode_base64, encode_base64, reverse_text, title_case

logger = get_logger(__name__)

# command -> (icon, title, label, transform)
CONVERSIONS = {
    "reverse": ("🔄", "Text Reversed", "Reversed", reverse_text),
    "upper": ("🔠", "Uppercase Conversion", "Uppercase", str.upper),
    "lower": ("🔡", "Lowercase Conversion", "Lowercase", str.lower),
    "title": ("🔤", "Title Case Conversion", "Title Case", title_case),
}


def _require_text(ctx: CommandContext) -> str:
    if not ctx.args:
        raise UsageError(TOOL_USAGE[ctx.command])
    return ctx.text


async def handle_tools(ctx: CommandContext) -> Dict[str, Any]:
    return {"message": TOOLS_MESSAGE}


async def handle_count(ctx: CommandContext) -> Dict[str, Any]:
    text = _require_text(ctx)
    counts = count_text(text)
    return {
        "message": COUNT_MESSAGE.format(
            text=text,
            company=ctx.dispatcher.settings.COMPANY_NAME,
            **counts,
        )
    }


async def _convert(ctx: CommandContext) -> Dict[str, Any]:
    text = _require_text(ctx)
    icon, title, label, transform = CONVERSIONS[ctx.command]
    return {
        "message": CONVERSION_MESSAGE.format(
            icon=icon,
            title=title,
            text=text,
            label=label,
            result=transform(text),
            company=ctx.dispatcher.settings.COMPANY_NAME,
        )
    }


handle_reverse = _convert
handle_upper = _convert
handle_lower = _convert
handle_title = _convert


async def handle_encode(ctx: CommandContext) -> Dict[str, Any]:
    text = _require_text(ctx)
    return {
        "message": ENCODE_MESSAGE.format(
            text=text,
            result=encode_base64(text),
            company=ctx.dispatcher.settings.COMPANY_NAME,
        )
    }


async def handle_decode(ctx: CommandContext) -> Dict[str, Any]:
    text = _require_text(ctx)
    try:
        decoded = decode_base64(text)
    except ValueError as e:
        logger.info(f"Decode failed: {e}", extra={"user_id": ctx.user_id})
        return {"message": DECODE_FAILED_MESSAGE}

    return {
        "message": DECODE_MESSAGE.format(
            text=text,
            result=decoded,
            company=ctx.dispatcher.settings.COMPANY_NAME,
        )
    }
