"""
WhatsApp Inbound Message Extraction

PURE CONVERSION - NO I/O

Pulls the first message out of a WhatsApp Business webhook callback:

    {"object": "whatsapp_business_account",
     "entry": [{"changes": [{"value": {"messages": [{"from", "id", ...}]}}]}]}

Anything else (status updates, other products, malformed bodies) is not a
message event and yields None.
"""

from typing import Any, List, Optional

from .schemas import InboundMessage

WHATSAPP_OBJECT = "whatsapp_business_account"


def _first_dict(items: Any) -> Optional[dict]:
    """First element of a non-empty list, if it is a dict."""
    if not isinstance(items, list) or not items:
        return None
    first = items[0]
    return first if isinstance(first, dict) else None


def extract_message(payload: Any) -> Optional[InboundMessage]:
    """
    Extract the first message of a webhook callback.

    Args:
        payload: Parsed JSON body

    Returns:
        InboundMessage, or None if the body is not a message event
    """
    if not isinstance(payload, dict):
        return None
    if payload.get("object") != WHATSAPP_OBJECT:
        return None

    entry = _first_dict(payload.get("entry"))
    if entry is None:
        return None

    change = _first_dict(entry.get("changes"))
    if change is None:
        return None

    value = change.get("value")
    if not isinstance(value, dict):
        return None

    message = _first_dict(value.get("messages"))
    if message is None:
        return None

    sender_id = message.get("from")
    message_id = message.get("id")
    if not sender_id or not message_id:
        return None

    return InboundMessage(
        sender_id=str(sender_id),
        message_id=str(message_id),
        message_type=message.get("type"),
        payload=message,
    )


def extract_statuses(payload: Any) -> List[dict]:
    """
    Status updates (sent, delivered, read, failed) carried by a callback.

    Returns an empty list when the callback has none.
    """
    if not isinstance(payload, dict) or payload.get("object") != WHATSAPP_OBJECT:
        return []

    entry = _first_dict(payload.get("entry"))
    change = _first_dict(entry.get("changes")) if entry else None
    value = change.get("value") if change else None
    if not isinstance(value, dict):
        return []

    statuses = value.get("statuses")
    if not isinstance(statuses, list):
        return []
    return [status for status in statuses if isinstance(status, dict)]
