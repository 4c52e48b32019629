"""
ots — client library and CLI for One-Time Secret (onetimesecret.com).

Public API:
    OTSClient(username, key)        → API client
    client.put(secret, ...)         → Metadata
    client.get(secret_key, ...)     → secret value (consumes it)
    client.generate(...)            → (secret value, Metadata)
    client.burn(metadata_key, ...)  → Metadata
    client.get_metadata(key)        → Metadata
    client.get_recent_metadata()    → list[PartialMetadata]
    client.get_system_status()      → SystemStatus
"""

from __future__ import annotations

from ots.client import OTSClient
from ots.errors import (
    APIError,
    ConfigurationError,
    DestroyedError,
    InvalidArgumentError,
    NotFoundError,
    OTSError,
    UsageError,
)
from ots.models import Metadata, PartialMetadata, SecretState, SystemStatus

__version__ = "0.1.0"

__all__ = [
    "APIError",
    "ConfigurationError",
    "DestroyedError",
    "InvalidArgumentError",
    "Metadata",
    "NotFoundError",
    "OTSClient",
    "OTSError",
    "PartialMetadata",
    "SecretState",
    "SystemStatus",
    "UsageError",
    "__version__",
]
