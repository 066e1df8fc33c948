"""
Abstract conversation-state manager interface.

The dialogue logic lives outside this service. The webhook depends only on
this boundary: initialize once per request, hand over the inbound message,
then use the manager's message client for the read receipt.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional

from transport.whatsapp.client import WhatsAppMessageClient


class ConversationStateManager(ABC):
    """
    Conversation boundary for one store.

    Key properties:
    - initialize() returns False instead of raising when the store cannot
      be served
    - process_message() is only called after a successful initialize()
    """

    def __init__(self, store_id: str):
        self.store_id = store_id

    @abstractmethod
    async def initialize(self) -> bool:
        """Prepare the manager (credentials, message client, state)."""
        raise NotImplementedError

    @abstractmethod
    async def process_message(self, sender_id: str, message: Dict[str, Any]) -> None:
        """
        Handle one inbound message.

        Args:
            sender_id: Sender phone number (platform 'from')
            message: Raw platform message object
        """
        raise NotImplementedError

    @abstractmethod
    def get_message_client(self) -> Optional[WhatsAppMessageClient]:
        """Outbound client used to reply, or None if there is none."""
        raise NotImplementedError


# Builds one manager per webhook request, keyed by store id
ConversationManagerFactory = Callable[[str], ConversationStateManager]
