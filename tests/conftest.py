"""
Test fixtures for the ots client and CLI.

FakeService is an in-memory stand-in for onetimesecret.com served through
httpx.MockTransport. It keeps the service's observable rules: secrets are
readable once, wrong passphrases and unknown keys both answer
"Unknown secret", empty secrets are rejected, and the metadata TTL is twice
the secret TTL.
"""

from __future__ import annotations

import base64
import itertools
import json
from dataclasses import dataclass, field
from urllib.parse import parse_qsl, unquote

import httpx
import pytest

from ots.client import OTSClient

USERNAME = "tester@example.com"
API_KEY = "test-api-key"
CREATED = 1_700_000_000
DEFAULT_TTL = 604_800


def obfuscate(recipient: str) -> str:
    """foo@example.com → fo*****@e*****.com"""
    local, _, domain = recipient.partition("@")
    host, _, tld = domain.rpartition(".")
    return f"{local[:2]}*****@{host[:1]}*****.{tld}"


@dataclass
class StoredSecret:
    value: str
    passphrase: str
    secret_key: str
    metadata_key: str
    ttl: int
    recipient: str = ""
    state: str = "new"

    def record(self, include_secret_key: bool = True) -> dict:
        return {
            "custid": USERNAME,
            "metadata_key": self.metadata_key,
            "secret_key": self.secret_key if include_secret_key and self.state == "new" else "",
            "ttl": 2 * self.ttl,
            "metadata_ttl": 2 * self.ttl,
            "secret_ttl": self.ttl,
            "state": self.state,
            "updated": CREATED + 10,
            "created": CREATED,
            "recipient": [obfuscate(self.recipient)] if self.recipient else [],
            "passphrase_required": bool(self.passphrase),
        }


@dataclass
class FakeService:
    status: str = "nominal"
    by_secret: dict[str, StoredSecret] = field(default_factory=dict)
    by_metadata: dict[str, StoredSecret] = field(default_factory=dict)
    requests: list[httpx.Request] = field(default_factory=list)
    _ids: itertools.count = field(default_factory=lambda: itertools.count(1))

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        expected = base64.b64encode(f"{USERNAME}:{API_KEY}".encode()).decode()
        if request.headers.get("Authorization") != f"Basic {expected}":
            return _error(401, "Not authorized")

        path = request.url.path.removeprefix("/api/v1/")
        form = dict(parse_qsl(request.read().decode(), keep_blank_values=True))
        parts = [unquote(p) for p in request.url.raw_path.decode().split("?")[0].split("/")[3:]]

        if request.method == "GET" and path == "status":
            return httpx.Response(200, json={"status": self.status})
        if request.method == "GET" and path == "private/recent":
            records = [s.record(include_secret_key=False) for s in self.by_metadata.values()]
            return httpx.Response(200, json=records)
        if path == "share":
            return self._store(form.get("secret", ""), form)
        if path == "generate":
            return self._store(f"gen{next(self._ids)}", form, generated=True)
        if len(parts) == 2 and parts[0] == "secret":
            return self._retrieve(parts[1], form.get("passphrase", ""))
        if len(parts) == 3 and parts[0] == "private" and parts[2] == "burn":
            return self._burn(parts[1], form.get("passphrase", ""))
        if len(parts) == 2 and parts[0] == "private":
            stored = self.by_metadata.get(parts[1])
            if stored is None:
                return _error(404, "Unknown secret")
            return httpx.Response(200, json=stored.record())
        return _error(404, "Not found")

    def _store(self, value: str, form: dict, generated: bool = False) -> httpx.Response:
        if not value:
            return _error(404, "You did not provide anything to share")
        n = next(self._ids)
        stored = StoredSecret(
            value=value,
            passphrase=form.get("passphrase", ""),
            secret_key=f"sk{n}",
            metadata_key=f"mk{n}",
            ttl=int(form.get("ttl") or 0) or DEFAULT_TTL,
            recipient=form.get("recipient", ""),
        )
        self.by_secret[stored.secret_key] = stored
        self.by_metadata[stored.metadata_key] = stored
        body = stored.record()
        if generated:
            body["value"] = value
        return httpx.Response(200, json=body)

    def _retrieve(self, secret_key: str, passphrase: str) -> httpx.Response:
        stored = self.by_secret.get(secret_key)
        if stored is None or stored.passphrase != passphrase:
            return _error(404, "Unknown secret")
        del self.by_secret[secret_key]
        stored.state = "received"
        return httpx.Response(
            200, json={"value": stored.value, "secret_key": secret_key, "share_domain": ""}
        )

    def _burn(self, metadata_key: str, passphrase: str) -> httpx.Response:
        stored = self.by_metadata.get(metadata_key)
        if stored is None or stored.state != "new" or stored.passphrase != passphrase:
            return _error(404, "Unknown secret")
        self.by_secret.pop(stored.secret_key, None)
        stored.state = "burned"
        return httpx.Response(
            200, json={"state": stored.record(), "secret_shortkey": stored.secret_key[:8]}
        )


def _error(status: int, message: str) -> httpx.Response:
    return httpx.Response(status, content=json.dumps({"message": message}).encode())


@pytest.fixture
def service() -> FakeService:
    return FakeService()


@pytest.fixture
def client(service: FakeService):
    """OTSClient wired to the in-memory service."""
    c = OTSClient(USERNAME, API_KEY, transport=httpx.MockTransport(service.handle))
    yield c
    c.close()


@pytest.fixture
def creds() -> tuple[str, str]:
    """Username and key the fake service accepts."""
    return USERNAME, API_KEY
