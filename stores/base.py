"""
Abstract credential store interface.

Credentials are owned by an external store-management system.
The webhook and the message client depend only on this read interface.
"""

from abc import ABC, abstractmethod
from typing import Optional

from stores.types import StoreCredentials


class CredentialStore(ABC):
    """
    Read boundary for store credentials.

    Key properties:
    - get() returns None for unknown stores
    - Storage faults raise CredentialStoreError
    """

    @abstractmethod
    def get(self, store_id: str) -> Optional[StoreCredentials]:
        """
        Look up the credentials of a store.

        Args:
            store_id: Store identifier (path parameter of the webhook)

        Returns:
            StoreCredentials, or None if the store does not exist
        """
        raise NotImplementedError
