"""
Stub conversation-state manager.

Owns the store's message client and records what it receives.
No dialogue logic: used when no conversation backend is wired in,
and in tests.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from stores import CredentialStore
from transport.whatsapp.client import WhatsAppMessageClient

from .base import ConversationManagerFactory, ConversationStateManager

logger = logging.getLogger(__name__)


class StubConversationStateManager(ConversationStateManager):
    """
    Deterministic placeholder manager.

    Properties:
    - initialize() succeeds iff the store's message client initializes
    - process_message() only logs and keeps the message in `received`
    """

    def __init__(
        self,
        store_id: str,
        credential_store: CredentialStore,
        message_client: Optional[WhatsAppMessageClient] = None,
    ):
        super().__init__(store_id)
        self._message_client = message_client or WhatsAppMessageClient(
            store_id, credential_store
        )
        self.received: List[Tuple[str, Dict[str, Any]]] = []

    async def initialize(self) -> bool:
        return await self._message_client.initialize()

    async def process_message(self, sender_id: str, message: Dict[str, Any]) -> None:
        logger.info(
            f"Received message from {sender_id}",
            extra={
                "store_id": self.store_id,
                "sender_id": sender_id,
                "message_id": message.get("id"),
                "message_type": message.get("type"),
            },
        )
        self.received.append((sender_id, message))

    def get_message_client(self) -> Optional[WhatsAppMessageClient]:
        return self._message_client


def create_stub_manager_factory(credential_store: CredentialStore) -> ConversationManagerFactory:
    """Factory building a StubConversationStateManager per store."""

    def factory(store_id: str) -> ConversationStateManager:
        return StubConversationStateManager(store_id, credential_store)

    return factory
