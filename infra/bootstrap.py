"""
Process-wide wiring of the webhook backends.

The credential store is built once; the conversation manager factory is
bound to that same store so managers and the webhook see the same tenants.
"""

from typing import Optional

from conversation import ConversationManagerFactory
from stores import CredentialStore

from .config import InfraConfig, get_config


class InfraBootstrap:
    """
    Holds the backends selected by InfraConfig.

    One instance per process, created on first use.
    """

    _instance: Optional["InfraBootstrap"] = None

    def __init__(self, config: Optional[InfraConfig] = None):
        self.config = config or get_config()
        self.credential_store = self.config.create_credential_store()
        self.conversation_manager_factory = self.config.create_conversation_manager_factory(
            self.credential_store
        )

    @classmethod
    def get_instance(cls, config: Optional[InfraConfig] = None) -> "InfraBootstrap":
        """
        Return the process instance, building it on first call.

        `config` is ignored once the instance exists.
        """
        if cls._instance is None:
            cls._instance = cls(config)
        return cls._instance

    @classmethod
    def reset(cls):
        """Forget the process instance (tests)."""
        cls._instance = None

    def get_credential_store(self) -> CredentialStore:
        return self.credential_store

    def get_conversation_manager_factory(self) -> ConversationManagerFactory:
        return self.conversation_manager_factory

    def __repr__(self) -> str:
        return (
            f"InfraBootstrap(stores={self.config.store_backend}, "
            f"conversation={self.config.conversation_backend})"
        )


def bootstrap_infrastructure(config: Optional[InfraConfig] = None) -> InfraBootstrap:
    """Shared InfraBootstrap for the webhook dependencies."""
    return InfraBootstrap.get_instance(config)
