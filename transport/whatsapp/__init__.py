"""WhatsApp Transport Layer - Module Exports

The FastAPI router is not re-exported here; import it from
transport.whatsapp.webhook (it depends on the conversation and infra layers).
"""

from .client import WhatsAppMessageClient, WhatsAppSenderError
from .normalize import extract_message, extract_statuses
from .payloads import (
    build_interactive_message,
    build_list_message,
    build_location_message,
    build_mark_read,
    build_media_message,
    build_product_list_message,
    build_product_message,
    build_product_sections,
    build_template_message,
    build_text_message,
)
from .schemas import (
    PRODUCTS_PER_SECTION,
    InboundMessage,
    ListRow,
    ListSection,
    MediaType,
    ProductSection,
)
from .security import verify_webhook_challenge

__all__ = [
    # Schemas
    "InboundMessage",
    "ListRow",
    "ListSection",
    "MediaType",
    "ProductSection",
    "PRODUCTS_PER_SECTION",
    # Extraction
    "extract_message",
    "extract_statuses",
    # Payloads
    "build_text_message",
    "build_interactive_message",
    "build_template_message",
    "build_media_message",
    "build_location_message",
    "build_list_message",
    "build_product_message",
    "build_product_list_message",
    "build_product_sections",
    "build_mark_read",
    # Security
    "verify_webhook_challenge",
    # Client
    "WhatsAppMessageClient",
    "WhatsAppSenderError",
]
