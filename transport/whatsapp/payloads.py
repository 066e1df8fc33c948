"""
WhatsApp Outbound Payload Builders

PURE CONVERSION - NO I/O
Turns send arguments into the JSON bodies defined in schemas.py.
Invalid arguments raise pydantic.ValidationError.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from .schemas import (
    CAPTIONED_MEDIA_TYPES,
    PRODUCTS_PER_SECTION,
    InteractiveBody,
    InteractiveMessage,
    ListAction,
    ListInteractive,
    ListSection,
    LocationMessage,
    LocationObject,
    MarkReadRequest,
    MediaMessage,
    MediaObject,
    ProductAction,
    ProductInteractive,
    ProductItem,
    ProductListAction,
    ProductListInteractive,
    ProductSection,
    Template,
    TemplateComponent,
    TemplateLanguage,
    TemplateMessage,
    TemplateParameter,
    TextBody,
    TextHeader,
    TextMessage,
)

DEFAULT_PRODUCT_BODY = "Check out this product"


def build_text_message(to: str, body: str) -> Dict[str, Any]:
    """Plain text message, link previews disabled."""
    return TextMessage(to=to, text=TextBody(body=body)).to_payload()


def build_interactive_message(to: str, interactive: Mapping[str, Any]) -> Dict[str, Any]:
    """Interactive message with a caller-supplied interactive object."""
    return InteractiveMessage(to=to, interactive=dict(interactive)).to_payload()


def build_template_message(
    to: str,
    template_name: str,
    language_code: str,
    template_params: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Template message.

    Each template parameter becomes a text parameter of a single body
    component, in mapping order. The mapping keys are not sent; the
    template placeholders are positional.

    Raises:
        ValueError: A parameter value is None
    """
    components = []
    if template_params:
        missing = [key for key, value in template_params.items() if value is None]
        if missing:
            raise ValueError(f"Template parameters without a value: {', '.join(map(str, missing))}")
        components.append(
            TemplateComponent(
                parameters=[
                    TemplateParameter(text=str(value))
                    for value in template_params.values()
                ]
            )
        )

    return TemplateMessage(
        to=to,
        template=Template(
            name=template_name,
            language=TemplateLanguage(code=language_code),
            components=components,
        ),
    ).to_payload()


def build_media_message(
    to: str,
    media_type: str,
    media_url: str,
    caption: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Media message (image, audio, document, video).

    Captions are dropped for audio, which the Graph API rejects.
    """
    if media_type not in CAPTIONED_MEDIA_TYPES:
        caption = None
    media = MediaObject(link=media_url, caption=caption or None)

    return MediaMessage(to=to, type=media_type, **{media_type: media}).to_payload()


def build_location_message(
    to: str,
    latitude: float,
    longitude: float,
    name: Optional[str] = None,
    address: Optional[str] = None,
) -> Dict[str, Any]:
    """Location pin; empty name/address are omitted."""
    return LocationMessage(
        to=to,
        location=LocationObject(
            latitude=latitude,
            longitude=longitude,
            name=name or None,
            address=address or None,
        ),
    ).to_payload()


def build_list_message(
    to: str,
    header_text: str,
    body_text: str,
    button_text: str,
    sections: Sequence[Union[ListSection, Mapping[str, Any]]],
) -> Dict[str, Any]:
    """List message (menus, catalogs browsed as rows)."""
    interactive = ListInteractive(
        header=TextHeader(text=header_text),
        body=InteractiveBody(text=body_text),
        action=ListAction(button=button_text, sections=list(sections)),
    )
    return InteractiveMessage(
        to=to,
        interactive=interactive.model_dump(exclude_none=True),
    ).to_payload()


def build_product_message(
    to: str,
    catalog_id: str,
    product_retailer_id: str,
    body_text: str = DEFAULT_PRODUCT_BODY,
) -> Dict[str, Any]:
    """Single catalog product."""
    interactive = ProductInteractive(
        body=InteractiveBody(text=body_text),
        action=ProductAction(
            catalog_id=catalog_id,
            product_retailer_id=product_retailer_id,
        ),
    )
    return InteractiveMessage(to=to, interactive=interactive.model_dump()).to_payload()


def build_product_sections(
    product_retailer_ids: Sequence[str],
    per_section: int = PRODUCTS_PER_SECTION,
) -> List[ProductSection]:
    """
    Split product ids into consecutive sections of at most `per_section`.

    N ids yield ceil(N / per_section) sections, titled by 1-based position,
    e.g. "Products 1 - 30", "Products 31 - 45".
    """
    if per_section < 1:
        raise ValueError("per_section must be positive")

    sections = []
    for start in range(0, len(product_retailer_ids), per_section):
        chunk = product_retailer_ids[start:start + per_section]
        sections.append(
            ProductSection(
                title=f"Products {start + 1} - {start + len(chunk)}",
                product_items=[
                    ProductItem(product_retailer_id=product_id)
                    for product_id in chunk
                ],
            )
        )
    return sections


def build_product_list_message(
    to: str,
    catalog_id: str,
    product_retailer_ids: Sequence[str],
    header_text: str,
    body_text: str,
) -> Dict[str, Any]:
    """Multi-product message, chunked into sections."""
    interactive = ProductListInteractive(
        header=TextHeader(text=header_text),
        body=InteractiveBody(text=body_text),
        action=ProductListAction(
            catalog_id=catalog_id,
            sections=build_product_sections(product_retailer_ids),
        ),
    )
    return InteractiveMessage(to=to, interactive=interactive.model_dump()).to_payload()


def build_mark_read(message_id: str) -> Dict[str, Any]:
    """Read receipt for an inbound message."""
    return MarkReadRequest(message_id=message_id).to_payload()
