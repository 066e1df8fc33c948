"""
WhatsApp Outbound Payload Tests

Each builder must produce the Graph API body for its message kind.
"""

import math

import pytest
from pydantic import ValidationError

from transport.whatsapp.payloads import (
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
from transport.whatsapp.schemas import ListRow, ListSection


ENVELOPE = {
    "messaging_product": "whatsapp",
    "recipient_type": "individual",
    "to": "15551234567",
}


class TestTextAndInteractive:

    def test_text_message(self):
        assert build_text_message("15551234567", "Your order shipped") == {
            **ENVELOPE,
            "type": "text",
            "text": {"preview_url": False, "body": "Your order shipped"},
        }

    def test_interactive_passthrough(self):
        interactive = {
            "type": "button",
            "body": {"text": "Confirm order?"},
            "action": {"buttons": [
                {"type": "reply", "reply": {"id": "yes", "title": "Yes"}},
                {"type": "reply", "reply": {"id": "no", "title": "No"}},
            ]},
        }

        payload = build_interactive_message("15551234567", interactive)

        assert payload == {**ENVELOPE, "type": "interactive", "interactive": interactive}


class TestTemplate:

    def test_template_without_params(self):
        payload = build_template_message("15551234567", "order_update", "en_US")

        assert payload == {
            **ENVELOPE,
            "type": "template",
            "template": {
                "name": "order_update",
                "language": {"code": "en_US"},
                "components": [],
            },
        }

    def test_empty_params_give_no_components(self):
        payload = build_template_message("15551234567", "order_update", "en_US", {})
        assert payload["template"]["components"] == []

    def test_params_become_body_text_parameters_in_order(self):
        payload = build_template_message(
            "15551234567",
            "order_update",
            "pt_BR",
            {"name": "Ana", "order": "#1042", "total": 59.9},
        )

        assert payload["template"]["language"] == {"code": "pt_BR"}
        assert payload["template"]["components"] == [{
            "type": "body",
            "parameters": [
                {"type": "text", "text": "Ana"},
                {"type": "text", "text": "#1042"},
                {"type": "text", "text": "59.9"},
            ],
        }]

    def test_none_param_rejected(self):
        with pytest.raises(ValueError, match="order"):
            build_template_message(
                "15551234567", "order_update", "en_US", {"name": "Ana", "order": None}
            )


class TestMedia:

    @pytest.mark.parametrize("media_type", ["image", "document", "video"])
    def test_caption_kept_for_captioned_media(self, media_type):
        payload = build_media_message(
            "15551234567", media_type, "https://cdn.example.com/f", "Catalog"
        )

        assert payload == {
            **ENVELOPE,
            "type": media_type,
            media_type: {"link": "https://cdn.example.com/f", "caption": "Catalog"},
        }

    def test_caption_dropped_for_audio(self):
        payload = build_media_message(
            "15551234567", "audio", "https://cdn.example.com/a.mp3", "ignored"
        )

        assert payload["audio"] == {"link": "https://cdn.example.com/a.mp3"}

    def test_no_caption(self):
        payload = build_media_message("15551234567", "image", "https://cdn.example.com/i.jpg")
        assert payload["image"] == {"link": "https://cdn.example.com/i.jpg"}
        assert set(payload) == {*ENVELOPE, "type", "image"}

    def test_unknown_media_type_rejected(self):
        with pytest.raises(ValidationError):
            build_media_message("15551234567", "sticker", "https://cdn.example.com/s.webp")


class TestLocation:

    def test_location_with_name_and_address(self):
        payload = build_location_message(
            "15551234567", -23.55, -46.63, "Main Store", "Av. Paulista, 1000"
        )

        assert payload == {
            **ENVELOPE,
            "type": "location",
            "location": {
                "latitude": -23.55,
                "longitude": -46.63,
                "name": "Main Store",
                "address": "Av. Paulista, 1000",
            },
        }

    def test_optional_fields_omitted(self):
        payload = build_location_message("15551234567", 1.5, 2.5, "", None)
        assert payload["location"] == {"latitude": 1.5, "longitude": 2.5}


class TestList:

    def test_list_message(self):
        sections = [
            {
                "title": "Shoes",
                "rows": [
                    {"id": "sku-1", "title": "Runner", "description": "Size 40-44"},
                    {"id": "sku-2", "title": "Trail"},
                ],
            },
        ]

        payload = build_list_message("15551234567", "Catalog", "Pick one", "View", sections)

        assert payload == {
            **ENVELOPE,
            "type": "interactive",
            "interactive": {
                "type": "list",
                "header": {"type": "text", "text": "Catalog"},
                "body": {"text": "Pick one"},
                "action": {"button": "View", "sections": sections},
            },
        }

    def test_list_accepts_typed_sections(self):
        section = ListSection(title="Menu", rows=[ListRow(id="1", title="Track order")])

        payload = build_list_message("15551234567", "Help", "Choose", "Options", [section])

        assert payload["interactive"]["action"]["sections"] == [
            {"title": "Menu", "rows": [{"id": "1", "title": "Track order"}]}
        ]

    def test_row_without_id_rejected(self):
        with pytest.raises(ValidationError):
            build_list_message(
                "15551234567", "h", "b", "v", [{"title": "s", "rows": [{"title": "x"}]}]
            )


class TestProduct:

    def test_product_message(self):
        payload = build_product_message("15551234567", "cat-1", "sku-9")

        assert payload == {
            **ENVELOPE,
            "type": "interactive",
            "interactive": {
                "type": "product",
                "body": {"text": "Check out this product"},
                "action": {"catalog_id": "cat-1", "product_retailer_id": "sku-9"},
            },
        }

    def test_product_message_custom_body(self):
        payload = build_product_message("15551234567", "cat-1", "sku-9", "Back in stock!")
        assert payload["interactive"]["body"] == {"text": "Back in stock!"}


class TestProductSections:
    """N product ids are split into ceil(N/30) sections."""

    @pytest.mark.parametrize("count", [1, 29, 30, 31, 60, 61, 95])
    def test_section_count(self, count):
        ids = [f"sku-{i}" for i in range(count)]
        sections = build_product_sections(ids)
        assert len(sections) == math.ceil(count / 30)

    def test_no_ids_no_sections(self):
        assert build_product_sections([]) == []

    def test_sections_preserve_order_and_titles(self):
        ids = [f"sku-{i}" for i in range(65)]

        sections = build_product_sections(ids)

        assert [s.title for s in sections] == [
            "Products 1 - 30",
            "Products 31 - 60",
            "Products 61 - 65",
        ]
        assert [len(s.product_items) for s in sections] == [30, 30, 5]
        flattened = [item.product_retailer_id for s in sections for item in s.product_items]
        assert flattened == ids

    def test_custom_section_size(self):
        sections = build_product_sections(["a", "b", "c"], per_section=2)
        assert [s.title for s in sections] == ["Products 1 - 2", "Products 3 - 3"]

    def test_invalid_section_size(self):
        with pytest.raises(ValueError):
            build_product_sections(["a"], per_section=0)

    def test_product_list_message(self):
        ids = [f"sku-{i}" for i in range(31)]

        payload = build_product_list_message(
            "15551234567", "cat-1", ids, "New arrivals", "This week's picks"
        )

        interactive = payload["interactive"]
        assert payload["type"] == "interactive"
        assert interactive["type"] == "product_list"
        assert interactive["header"] == {"type": "text", "text": "New arrivals"}
        assert interactive["body"] == {"text": "This week's picks"}
        assert interactive["action"]["catalog_id"] == "cat-1"
        assert interactive["action"]["sections"][1] == {
            "title": "Products 31 - 31",
            "product_items": [{"product_retailer_id": "sku-30"}],
        }


def test_mark_read():
    assert build_mark_read("wamid.msg_123") == {
        "messaging_product": "whatsapp",
        "status": "read",
        "message_id": "wamid.msg_123",
    }
