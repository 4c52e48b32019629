"""
Wire records for the One-Time Secret v1 JSON API.

These pydantic models mirror the service's response envelopes field for
field and convert them into the public dataclasses in ots.models. Unknown
fields are ignored so new server attributes do not break decoding.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ots.models import Metadata, PartialMetadata, SecretState


def _from_epoch(seconds: int) -> datetime:
    return datetime.fromtimestamp(seconds, tz=UTC)


class KeyResponse(BaseModel):
    """Secret record returned by share, generate, secret and private endpoints."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    customer_id: str = Field("", alias="custid")
    metadata_key: str = ""
    secret_key: str = ""
    ttl: int = 0
    metadata_ttl: int = 0
    secret_ttl: int = 0
    state: str = ""
    updated: int = 0
    created: int = 0
    recipient: list[str] = Field(default_factory=list)
    value: str = ""
    passphrase_required: bool = False

    @field_validator(
        "customer_id", "metadata_key", "secret_key", "state", "value", mode="before"
    )
    @classmethod
    def _null_as_empty(cls, v: object) -> object:
        return "" if v is None else v

    @field_validator("ttl", "metadata_ttl", "secret_ttl", "updated", "created", mode="before")
    @classmethod
    def _null_as_zero(cls, v: object) -> object:
        return 0 if v is None else v

    @field_validator("recipient", mode="before")
    @classmethod
    def _recipient_list(cls, v: object) -> object:
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return v

    @property
    def first_recipient(self) -> str:
        return self.recipient[0] if self.recipient else ""

    def to_metadata(self) -> Metadata:
        return Metadata(
            customer_id=self.customer_id,
            metadata_key=self.metadata_key,
            secret_key=self.secret_key,
            initial_metadata_ttl=self.ttl,
            metadata_ttl=self.metadata_ttl,
            secret_ttl=self.secret_ttl,
            state=SecretState.parse(self.state),
            updated=_from_epoch(self.updated),
            created=_from_epoch(self.created),
            obfuscated_recipient=self.first_recipient,
            has_passphrase=self.passphrase_required,
        )

    def to_partial_metadata(self) -> PartialMetadata:
        return PartialMetadata(
            customer_id=self.customer_id,
            metadata_key=self.metadata_key,
            initial_metadata_ttl=self.ttl,
            metadata_ttl=self.metadata_ttl,
            secret_ttl=self.secret_ttl,
            state=SecretState.parse(self.state),
            updated=_from_epoch(self.updated),
            created=_from_epoch(self.created),
            recipient=self.first_recipient,
        )


class BurnResponse(BaseModel):
    """Envelope returned by the burn endpoint; the record sits under "state"."""

    model_config = ConfigDict(extra="ignore")

    state: KeyResponse
    secret_shortkey: str | None = None


class ErrorResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: str | None = None


class StatusResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    status: str = ""
