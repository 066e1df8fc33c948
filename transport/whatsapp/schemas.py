"""
WhatsApp Transport Layer - Pydantic Schemas

PURE DATA MODELS - NO LOGIC
One typed contract per outbound message kind, so that Graph API format
changes stay local to this module.

ref: https://developers.facebook.com/docs/whatsapp/cloud-api/reference/messages
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field


MediaType = Literal["image", "audio", "document", "video"]

# Media kinds that accept a caption
CAPTIONED_MEDIA_TYPES = ("image", "document", "video")

# Graph API limit on products per product_list section
PRODUCTS_PER_SECTION = 30


# ============================================================================
# INBOUND MESSAGE (WEBHOOK → CONVERSATION MANAGER)
# ============================================================================

class InboundMessage(BaseModel):
    """
    First message extracted from a webhook callback.

    The raw platform payload is preserved untouched in `payload`.
    """

    sender_id: str = Field(..., description="Platform 'from' (sender phone number)")
    message_id: str = Field(..., description="Platform 'id' (wamid.*)")
    message_type: Optional[str] = Field(None, description="Platform 'type'")
    payload: Dict[str, Any] = Field(..., description="Raw message object")

    class Config:
        """Pydantic config."""
        frozen = True


# ============================================================================
# OUTBOUND ENVELOPE
# ============================================================================

class OutboundMessage(BaseModel):
    """Fields shared by every send-message request."""

    messaging_product: Literal["whatsapp"] = "whatsapp"
    recipient_type: Literal["individual"] = "individual"
    to: str
    type: str

    def to_payload(self) -> Dict[str, Any]:
        """JSON body for the Graph API."""
        return self.model_dump(exclude_none=True)


# ============================================================================
# TEXT
# ============================================================================

class TextBody(BaseModel):
    preview_url: bool = False
    body: str


class TextMessage(OutboundMessage):
    type: Literal["text"] = "text"
    text: TextBody


# ============================================================================
# TEMPLATE
# ============================================================================

class TemplateParameter(BaseModel):
    type: Literal["text"] = "text"
    text: str


class TemplateComponent(BaseModel):
    type: Literal["body"] = "body"
    parameters: List[TemplateParameter]


class TemplateLanguage(BaseModel):
    code: str


class Template(BaseModel):
    name: str
    language: TemplateLanguage
    components: List[TemplateComponent] = Field(default_factory=list)


class TemplateMessage(OutboundMessage):
    type: Literal["template"] = "template"
    template: Template


# ============================================================================
# MEDIA
# ============================================================================

class MediaObject(BaseModel):
    link: str
    caption: Optional[str] = None


class MediaMessage(OutboundMessage):
    """Media message. Exactly one of the media fields matches `type`."""

    type: MediaType
    image: Optional[MediaObject] = None
    audio: Optional[MediaObject] = None
    document: Optional[MediaObject] = None
    video: Optional[MediaObject] = None


# ============================================================================
# LOCATION
# ============================================================================

class LocationObject(BaseModel):
    latitude: float
    longitude: float
    name: Optional[str] = None
    address: Optional[str] = None


class LocationMessage(OutboundMessage):
    type: Literal["location"] = "location"
    location: LocationObject


# ============================================================================
# INTERACTIVE
# ============================================================================

class TextHeader(BaseModel):
    type: Literal["text"] = "text"
    text: str


class InteractiveBody(BaseModel):
    text: str


class ListRow(BaseModel):
    id: str
    title: str
    description: Optional[str] = None


class ListSection(BaseModel):
    title: str
    rows: List[ListRow]


class ListAction(BaseModel):
    button: str
    sections: List[ListSection]


class ListInteractive(BaseModel):
    type: Literal["list"] = "list"
    header: TextHeader
    body: InteractiveBody
    action: ListAction


class ProductAction(BaseModel):
    catalog_id: str
    product_retailer_id: str


class ProductInteractive(BaseModel):
    type: Literal["product"] = "product"
    body: InteractiveBody
    action: ProductAction


class ProductItem(BaseModel):
    product_retailer_id: str


class ProductSection(BaseModel):
    title: str
    product_items: List[ProductItem]


class ProductListAction(BaseModel):
    catalog_id: str
    sections: List[ProductSection]


class ProductListInteractive(BaseModel):
    type: Literal["product_list"] = "product_list"
    header: TextHeader
    body: InteractiveBody
    action: ProductListAction


class InteractiveMessage(OutboundMessage):
    """
    Interactive message.

    `interactive` is sent verbatim, so callers may pass any interactive
    object the Graph API accepts (buttons, flows, ...).
    """

    type: Literal["interactive"] = "interactive"
    interactive: Dict[str, Any]

    def to_payload(self) -> Dict[str, Any]:
        payload = super().to_payload()
        payload["interactive"] = self.interactive
        return payload


# ============================================================================
# READ RECEIPT
# ============================================================================

class MarkReadRequest(BaseModel):
    """Mark an inbound message as read."""

    messaging_product: Literal["whatsapp"] = "whatsapp"
    status: Literal["read"] = "read"
    message_id: str

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump()
