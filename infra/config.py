"""
Infrastructure configuration system.

Environment-based backend selection with sensible defaults.
Store credentials default to a local SQLite file.
"""

import os
from typing import Literal
from dataclasses import dataclass

from conversation import ConversationManagerFactory, create_stub_manager_factory
from stores import CredentialStore, SQLiteCredentialStore, StubCredentialStore


StoreBackendType = Literal["sqlite", "stub"]
ConversationBackendType = Literal["stub"]


@dataclass
class InfraConfig:
    """Infrastructure configuration from environment."""

    # Credential store
    store_backend: StoreBackendType
    store_db_path: str

    # Conversation manager
    conversation_backend: ConversationBackendType

    @classmethod
    def from_env(cls) -> "InfraConfig":
        """
        Load configuration from environment variables.

        Defaults:
        - Stores: sqlite (./stores.db)
        - Conversation: stub
        """
        return cls(
            store_backend=os.getenv("STORE_BACKEND", "sqlite"),  # type: ignore
            store_db_path=os.getenv("STORE_DB_PATH", "./stores.db"),
            conversation_backend=os.getenv("CONVERSATION_BACKEND", "stub"),  # type: ignore
        )

    def create_credential_store(self) -> CredentialStore:
        """Create credential store instance based on configuration."""
        if self.store_backend == "stub":
            return StubCredentialStore()
        else:
            # Default to sqlite
            return SQLiteCredentialStore(self.store_db_path)

    def create_conversation_manager_factory(
        self,
        credential_store: CredentialStore,
    ) -> ConversationManagerFactory:
        """
        Create the per-request conversation manager factory.

        Raises:
            ValueError: Unknown conversation backend
        """
        if self.conversation_backend == "stub":
            return create_stub_manager_factory(credential_store)
        raise ValueError(f"Unknown CONVERSATION_BACKEND: {self.conversation_backend!r}")


def get_config() -> InfraConfig:
    """Get global infrastructure configuration."""
    return InfraConfig.from_env()
