"""
Public result types for the One-Time Secret API.

All models are plain frozen dataclasses. Every field reflects the last server
response; nothing here is mutated locally.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from ots.urls import DEFAULT_BASE_URL, metadata_url, secret_url


class SecretState(StrEnum):
    NEW = "new"
    VIEWED = "viewed"
    RECEIVED = "received"
    BURNED = "burned"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str | None) -> SecretState:
        """Map a server state string, falling back to OTHER for unknown values."""
        try:
            return cls(value or "")
        except ValueError:
            return cls.OTHER


class SystemStatus(StrEnum):
    NOMINAL = "nominal"
    OFFLINE = "offline"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str | None) -> SystemStatus:
        try:
            return cls(value or "")
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True)
class Metadata:
    """Lifecycle record of one stored secret.

    An empty secret_key means the secret was already retrieved or burned.
    """

    customer_id: str
    metadata_key: str
    secret_key: str
    initial_metadata_ttl: int
    metadata_ttl: int
    secret_ttl: int
    state: SecretState
    updated: datetime
    created: datetime
    obfuscated_recipient: str = ""
    has_passphrase: bool = False

    def secret_url(self, base_url: str = DEFAULT_BASE_URL) -> str:
        """URL that reveals the secret. Raises DestroyedError once it is gone."""
        return secret_url(self.secret_key, base_url)

    def metadata_url(self, base_url: str = DEFAULT_BASE_URL) -> str:
        """URL for viewing metadata and burning the secret."""
        return metadata_url(self.metadata_key, base_url)


@dataclass(frozen=True)
class PartialMetadata:
    """Metadata as listed by the recent-secrets endpoint (no secret key)."""

    customer_id: str
    metadata_key: str
    initial_metadata_ttl: int
    metadata_ttl: int
    secret_ttl: int
    state: SecretState
    updated: datetime
    created: datetime
    recipient: str = ""

    def metadata_url(self, base_url: str = DEFAULT_BASE_URL) -> str:
        return metadata_url(self.metadata_key, base_url)
