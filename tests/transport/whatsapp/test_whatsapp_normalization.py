"""
WhatsApp Inbound Extraction Tests

Test the flat shape check that pulls the first message out of a callback.
"""

import copy

import pytest

from transport.whatsapp.normalize import extract_message, extract_statuses
from transport.whatsapp.schemas import InboundMessage


TEXT_CALLBACK = {
    "object": "whatsapp_business_account",
    "entry": [{
        "id": "WABA_ID",
        "changes": [{
            "field": "messages",
            "value": {
                "messaging_product": "whatsapp",
                "metadata": {"phone_number_id": "1098765432"},
                "contacts": [{"wa_id": "15551234567", "profile": {"name": "Ana"}}],
                "messages": [{
                    "from": "15551234567",
                    "id": "wamid.msg_123",
                    "timestamp": "1707500000",
                    "type": "text",
                    "text": {"body": "Hello store"},
                }],
            },
        }],
    }],
}


def _callback(**value_overrides):
    payload = copy.deepcopy(TEXT_CALLBACK)
    payload["entry"][0]["changes"][0]["value"].update(value_overrides)
    return payload


class TestExtractMessage:
    """Messages are extracted from well-formed callbacks."""

    def test_extract_text_message(self):
        result = extract_message(TEXT_CALLBACK)

        assert isinstance(result, InboundMessage)
        assert result.sender_id == "15551234567"
        assert result.message_id == "wamid.msg_123"
        assert result.message_type == "text"
        assert result.payload["text"] == {"body": "Hello store"}

    def test_payload_is_raw_platform_message(self):
        """The conversation manager receives the message object untouched."""
        result = extract_message(TEXT_CALLBACK)
        assert result.payload == TEXT_CALLBACK["entry"][0]["changes"][0]["value"]["messages"][0]

    def test_only_first_message_is_extracted(self):
        payload = _callback(messages=[
            {"from": "111", "id": "wamid.first", "type": "text"},
            {"from": "222", "id": "wamid.second", "type": "text"},
        ])

        result = extract_message(payload)
        assert result.message_id == "wamid.first"
        assert result.sender_id == "111"

    def test_interactive_reply_is_extracted(self):
        payload = _callback(messages=[{
            "from": "15551234567",
            "id": "wamid.reply",
            "type": "interactive",
            "interactive": {
                "type": "list_reply",
                "list_reply": {"id": "row-1", "title": "Shoes"},
            },
        }])

        result = extract_message(payload)
        assert result.message_type == "interactive"
        assert result.payload["interactive"]["list_reply"]["id"] == "row-1"

    def test_message_without_type(self):
        payload = _callback(messages=[{"from": "111", "id": "wamid.x"}])
        assert extract_message(payload).message_type is None


class TestNonMessageEvents:
    """Anything that is not a message event yields None."""

    @pytest.mark.parametrize("payload", [
        None,
        "not a dict",
        [],
        {},
        {"object": "page", "entry": TEXT_CALLBACK["entry"]},
        {"object": "whatsapp_business_account"},
        {"object": "whatsapp_business_account", "entry": []},
        {"object": "whatsapp_business_account", "entry": "nope"},
        {"object": "whatsapp_business_account", "entry": ["nope"]},
        {"object": "whatsapp_business_account", "entry": [{}]},
        {"object": "whatsapp_business_account", "entry": [{"changes": []}]},
        {"object": "whatsapp_business_account", "entry": [{"changes": [{}]}]},
        {"object": "whatsapp_business_account", "entry": [{"changes": [{"value": None}]}]},
        {"object": "whatsapp_business_account", "entry": [{"changes": [{"value": {}}]}]},
    ])
    def test_malformed_shapes(self, payload):
        assert extract_message(payload) is None

    def test_empty_messages(self):
        assert extract_message(_callback(messages=[])) is None

    def test_message_not_an_object(self):
        assert extract_message(_callback(messages=["wamid.msg_123"])) is None

    def test_message_missing_sender(self):
        assert extract_message(_callback(messages=[{"id": "wamid.msg_123"}])) is None

    def test_message_missing_id(self):
        assert extract_message(_callback(messages=[{"from": "15551234567"}])) is None

    def test_status_update_is_not_a_message(self):
        payload = copy.deepcopy(TEXT_CALLBACK)
        value = payload["entry"][0]["changes"][0]["value"]
        del value["messages"]
        value["statuses"] = [{
            "id": "wamid.sent_1",
            "status": "delivered",
            "timestamp": "1707500001",
            "recipient_id": "15551234567",
        }]

        assert extract_message(payload) is None
        assert extract_statuses(payload) == value["statuses"]


class TestExtractStatuses:

    def test_no_statuses_on_message_callback(self):
        assert extract_statuses(TEXT_CALLBACK) == []

    def test_garbage_yields_empty_list(self):
        assert extract_statuses({"object": "whatsapp_business_account", "entry": []}) == []
        assert extract_statuses(None) == []
