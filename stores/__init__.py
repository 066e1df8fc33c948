"""
Store credentials module exports.
"""

from stores.base import CredentialStore
from stores.stub import StubCredentialStore
from stores.sqlite import SQLiteCredentialStore
from stores.types import CredentialStoreError, StoreCredentials

__all__ = [
    "CredentialStore",
    "StubCredentialStore",
    "SQLiteCredentialStore",
    "CredentialStoreError",
    "StoreCredentials",
]
