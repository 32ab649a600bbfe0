"""
coolshot/api/webhook.py

Purpose: Unified WhatsApp webhook endpoint

- Receives incoming messages from Twilio (form data) or a WhatsApp-Web
  gateway (JSON events)
- Auto-detects the format and normalizes messages
- Passes each message to the dispatcher, one at a time
- Returns platform-compatible responses
"""

from fastapi import APIRouter, Form, HTTPException, Request
from fastapi.responses import Response
from typing import Optional

from coolshot.core.logging import get_logger
from coolshot.schemas.webhook import parse_gateway_events, parse_twilio_message

logger = get_logger(__name__)
router = APIRouter()

EMPTY_TWIML = '<?xml version="1.0" encoding="UTF-8"?><Response></Response>'


@router.post("/webhook")
async def webhook_handler(
    request: Request,
    # Twilio sends form data
    From: Optional[str] = Form(None),
    Body: Optional[str] = Form(None),
    ProfileName: Optional[str] = Form(None),
    MessageSid: Optional[str] = Form(None),
):
    """
    Unified webhook endpoint for WhatsApp messages

    Supports:
    - Twilio WhatsApp (form data); always answered with empty TwiML
    - Gateway events (JSON): a single event, a list, or {"messages": [...]}
    """
    dispatcher = request.app.state.dispatcher

    if From is not None:
        logger.info(f"📱 Twilio webhook received from {From}")
        message = parse_twilio_message(
            from_number=From,
            body=Body,
            profile_name=ProfileName,
            message_sid=MessageSid,
        )
        if message is not None:
            await dispatcher.dispatch_message(message)
        # Replies go out through the REST API, not TwiML
        return Response(content=EMPTY_TWIML, media_type="application/xml")

    try:
        payload = await request.json()
        messages = parse_gateway_events(payload)
    except ValueError as e:
        logger.error(f"Failed to parse JSON payload: {e}")
        raise HTTPException(status_code=400, detail="Invalid webhook payload")

    results = [await dispatcher.dispatch_message(message) for message in messages]

    return {
        "status": "success",
        "processed": sum(1 for result in results if result["status"] == "success"),
        "ignored": sum(1 for result in results if result["status"] == "ignored"),
    }


@router.get("/webhook")
async def webhook_verification():
    """
    Webhook verification endpoint (for platforms that require GET verification)
    """
    return {"status": "ok", "message": "Webhook endpoint is active"}
