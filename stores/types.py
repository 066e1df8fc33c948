"""
Store credential types.

A store is a tenant that owns its own WhatsApp Business credentials.
"""

from dataclasses import dataclass
from typing import Optional


class CredentialStoreError(Exception):
    """Credential storage is unavailable or corrupted."""
    pass


@dataclass(frozen=True)
class StoreCredentials:
    """WhatsApp credentials for a single store."""

    store_id: str
    access_token: Optional[str] = None      # Graph API bearer token
    phone_number_id: Optional[str] = None   # Sending phone number
    webhook_secret: Optional[str] = None    # hub.verify_token expected on GET

    @property
    def can_send(self) -> bool:
        """True when both the token and the phone number id are configured."""
        return bool(self.access_token and self.phone_number_id)

    def __repr__(self) -> str:
        return (
            f"StoreCredentials(store_id={self.store_id!r}, "
            f"phone_number_id={self.phone_number_id!r}, "
            f"access_token={'***' if self.access_token else None}, "
            f"webhook_secret={'***' if self.webhook_secret else None})"
        )
