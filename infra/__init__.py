"""
Infrastructure module exports.

Configuration and bootstrap for the credential store and conversation backends.
"""

from .config import InfraConfig, get_config, StoreBackendType, ConversationBackendType
from .bootstrap import InfraBootstrap, bootstrap_infrastructure

__all__ = [
    "InfraConfig",
    "get_config",
    "StoreBackendType",
    "ConversationBackendType",
    "InfraBootstrap",
    "bootstrap_infrastructure",
]
