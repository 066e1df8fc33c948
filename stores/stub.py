"""
Stub credential store for testing and CI.

In-memory, deterministic, no external dependencies.
"""

from typing import Dict, Iterable, Optional

from stores.base import CredentialStore
from stores.types import StoreCredentials


class StubCredentialStore(CredentialStore):
    """
    Dict-backed credential store.

    Seed it with StoreCredentials at construction or via save().
    """

    def __init__(self, stores: Optional[Iterable[StoreCredentials]] = None):
        self.storage: Dict[str, StoreCredentials] = {}
        for credentials in stores or []:
            self.save(credentials)

    def get(self, store_id: str) -> Optional[StoreCredentials]:
        return self.storage.get(store_id)

    def save(self, credentials: StoreCredentials) -> None:
        """Insert or replace a store's credentials."""
        self.storage[credentials.store_id] = credentials
