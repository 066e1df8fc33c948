"""
Conversation module exports.
"""

from conversation.base import ConversationManagerFactory, ConversationStateManager
from conversation.stub import StubConversationStateManager, create_stub_manager_factory

__all__ = [
    "ConversationManagerFactory",
    "ConversationStateManager",
    "StubConversationStateManager",
    "create_stub_manager_factory",
]
