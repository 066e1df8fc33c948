"""Pytest configuration and fixtures."""

import json
import sys
from pathlib import Path

import httpx
import pytest

# Add project root to sys.path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from stores import StoreCredentials, StubCredentialStore  # noqa: E402


class GraphAPIRecorder:
    """
    Fake WhatsApp Cloud API.

    Records every request and answers with `status_code`.
    Set `error` to make the transport raise instead.
    """

    def __init__(self):
        self.requests = []
        self.status_code = 200
        self.error = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if 200 <= self.status_code < 300:
            body = {
                "messaging_product": "whatsapp",
                "contacts": [{"input": "15551234567", "wa_id": "15551234567"}],
                "messages": [{"id": "wamid.sent_1"}],
            }
        else:
            body = {"error": {"message": "Invalid parameter", "code": 100}}
        return httpx.Response(self.status_code, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def store_credentials():
    return StoreCredentials(
        store_id="store-1",
        access_token="token-abc",
        phone_number_id="1098765432",
        webhook_secret="secret-xyz",
    )


@pytest.fixture
def credential_store(store_credentials):
    return StubCredentialStore([
        store_credentials,
        StoreCredentials(store_id="store-unconfigured"),
    ])


@pytest.fixture
def graph_api():
    return GraphAPIRecorder()
