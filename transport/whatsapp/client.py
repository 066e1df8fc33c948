"""
WhatsApp Message Client

Sends outbound messages for one store via the WhatsApp Cloud API.
One method per message kind. No retries. No batching.

Every public method returns True iff the Graph API answered 2xx.
Failures are logged and reported as False, never raised.
"""

import logging
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Union

import httpx

from config import Config
from stores import CredentialStore

from .payloads import (
    DEFAULT_PRODUCT_BODY,
    build_interactive_message,
    build_list_message,
    build_location_message,
    build_mark_read,
    build_media_message,
    build_product_list_message,
    build_product_message,
    build_template_message,
    build_text_message,
)
from .schemas import ListSection

logger = logging.getLogger(__name__)


class WhatsAppSenderError(Exception):
    """Failed to deliver a request to WhatsApp."""
    pass


class WhatsAppMessageClient:
    """
    Outbound message client bound to a single store.

    Call initialize() once before sending; it loads the store's access
    token and phone number id from the credential store.
    """

    def __init__(
        self,
        store_id: str,
        credential_store: CredentialStore,
        graph_url: Optional[str] = None,
        api_version: Optional[str] = None,
        template_language: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            store_id: Store whose credentials are used
            credential_store: Where the credentials are read from
            graph_url: Graph API base URL (default from Config)
            api_version: Graph API version, e.g. "v18.0" (default from Config)
            template_language: Default template language code
            timeout: HTTP timeout in seconds
            transport: Optional httpx transport (tests inject a MockTransport)
        """
        self.store_id = store_id
        self._credential_store = credential_store
        self.graph_url = (graph_url or Config.WHATSAPP_GRAPH_URL).rstrip("/")
        self.api_version = api_version or Config.WHATSAPP_API_VERSION
        self.template_language = template_language or Config.WHATSAPP_TEMPLATE_LANGUAGE
        self.timeout = timeout if timeout is not None else Config.WHATSAPP_HTTP_TIMEOUT
        self._transport = transport

        self._access_token: Optional[str] = None
        self._phone_number_id: Optional[str] = None

    @property
    def initialized(self) -> bool:
        return bool(self._access_token and self._phone_number_id)

    @property
    def messages_url(self) -> str:
        return f"{self.graph_url}/{self.api_version}/{self._phone_number_id}/messages"

    async def initialize(self) -> bool:
        """
        Load the store's WhatsApp credentials.

        Returns:
            False if the store is unknown, not configured for WhatsApp,
            or the credential store fails
        """
        try:
            credentials = self._credential_store.get(self.store_id)
        except Exception as e:
            logger.error(
                f"Error initializing WhatsApp message client: {e}",
                exc_info=True,
                extra={"store_id": self.store_id},
            )
            return False

        if credentials is None or not credentials.can_send:
            logger.error(
                f"WhatsApp Business API not configured for store: {self.store_id}",
                extra={"store_id": self.store_id},
            )
            return False

        self._access_token = credentials.access_token
        self._phone_number_id = credentials.phone_number_id
        return True

    # ------------------------------------------------------------------
    # Message kinds
    # ------------------------------------------------------------------

    async def send_text_message(self, to: str, message: str) -> bool:
        """Send a text message."""
        return await self._send("text message", to, build_text_message, to, message)

    async def send_interactive_message(self, to: str, interactive: Mapping[str, Any]) -> bool:
        """Send an interactive message (buttons or lists) built by the caller."""
        return await self._send(
            "interactive message", to, build_interactive_message, to, interactive
        )

    async def send_template_message(
        self,
        to: str,
        template_name: str,
        template_params: Optional[Mapping[str, Any]] = None,
        language_code: Optional[str] = None,
    ) -> bool:
        """Send an approved template, filling its body placeholders in order."""
        return await self._send(
            "template message",
            to,
            build_template_message,
            to,
            template_name,
            language_code or self.template_language,
            template_params,
        )

    async def send_media_message(
        self,
        to: str,
        media_type: str,
        media_url: str,
        caption: Optional[str] = None,
    ) -> bool:
        """Send an image, audio, document or video by URL."""
        return await self._send(
            f"{media_type} message",
            to,
            build_media_message,
            to,
            media_type,
            media_url,
            caption,
        )

    async def send_location_message(
        self,
        to: str,
        latitude: float,
        longitude: float,
        name: Optional[str] = None,
        address: Optional[str] = None,
    ) -> bool:
        """Send a location pin."""
        return await self._send(
            "location message",
            to,
            build_location_message,
            to,
            latitude,
            longitude,
            name,
            address,
        )

    async def send_list_message(
        self,
        to: str,
        header_text: str,
        body_text: str,
        button_text: str,
        sections: Sequence[Union[ListSection, Mapping[str, Any]]],
    ) -> bool:
        """Send a list message (product catalogs, menus, etc.)."""
        return await self._send(
            "list message",
            to,
            build_list_message,
            to,
            header_text,
            body_text,
            button_text,
            sections,
        )

    async def send_product_message(
        self,
        to: str,
        catalog_id: str,
        product_retailer_id: str,
        body_text: str = DEFAULT_PRODUCT_BODY,
    ) -> bool:
        """Send a single product from the store catalog."""
        return await self._send(
            "product message",
            to,
            build_product_message,
            to,
            catalog_id,
            product_retailer_id,
            body_text,
        )

    async def send_product_list_message(
        self,
        to: str,
        catalog_id: str,
        product_retailer_ids: Sequence[str],
        header_text: str,
        body_text: str,
    ) -> bool:
        """Send a multi-product message; ids are chunked 30 per section."""
        return await self._send(
            "product list message",
            to,
            build_product_list_message,
            to,
            catalog_id,
            product_retailer_ids,
            header_text,
            body_text,
        )

    async def mark_message_as_read(self, message_id: str) -> bool:
        """Mark an inbound message as read."""
        return await self._send("read receipt", None, build_mark_read, message_id)

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------

    async def _send(
        self,
        description: str,
        to: Optional[str],
        builder: Callable[..., Dict[str, Any]],
        *args: Any,
    ) -> bool:
        """Build a payload, POST it once and report success."""
        log_extra = {"store_id": self.store_id, "to": to, "kind": description}

        try:
            payload = builder(*args)
            response = await self._post(payload)
        except Exception as e:
            logger.error(
                f"Error sending WhatsApp {description}: {e}",
                exc_info=True,
                extra=log_extra,
            )
            return False

        if not response.is_success:
            logger.error(
                f"Failed to send WhatsApp {description}: "
                f"{response.status_code} - {response.text}",
                extra={**log_extra, "status_code": response.status_code},
            )
            return False

        logger.info(f"WhatsApp {description} sent", extra=log_extra)
        return True

    async def _post(self, payload: Dict[str, Any]) -> httpx.Response:
        """
        POST a payload to the send-message endpoint.

        Raises:
            WhatsAppSenderError: Client not initialized or request failed
        """
        if not self.initialized:
            raise WhatsAppSenderError(
                f"Message client for store {self.store_id} is not initialized"
            )

        headers = {
            "Authorization": f"Bearer {self._access_token}",
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                timeout=self.timeout,
            ) as client:
                return await client.post(self.messages_url, json=payload, headers=headers)
        except httpx.RequestError as e:
            raise WhatsAppSenderError(f"HTTP request failed: {e}") from e
