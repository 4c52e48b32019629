"""
HTTP client for the One-Time Secret v1 API.

Wraps httpx.Client with Basic authentication. Every method issues exactly one
synchronous request; nothing is retried or cached. Responses are decoded into
wire records (ots.wire) and returned as the public types in ots.models.

Usage:
    from ots.client import OTSClient

    with OTSClient("me@example.com", "api-key") as client:
        meta = client.put("the launch codes", ttl=3600)
        print(meta.secret_url())
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from ots.errors import APIError, InvalidArgumentError, NotFoundError
from ots.models import Metadata, PartialMetadata, SystemStatus
from ots.urls import DEFAULT_BASE_URL
from ots.wire import BurnResponse, ErrorResponse, KeyResponse, StatusResponse

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1/"
DEFAULT_TIMEOUT = 30.0

# Service error texts with a dedicated exception
ERROR_MESSAGES: dict[str, type[InvalidArgumentError] | type[NotFoundError]] = {
    "You did not provide anything to share": InvalidArgumentError,
    "Unknown secret": NotFoundError,
}


def _segment(key: str) -> str:
    return quote(key, safe="")


class OTSClient:
    """Client for the One-Time Secret API.

    The credentials are fixed at construction and never mutated, so one
    instance can be shared between callers.
    """

    def __init__(
        self,
        username: str,
        key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.username = username
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(
            base_url=self.base_url + API_PREFIX,
            auth=(username, key),
            timeout=timeout,
            transport=transport,
            follow_redirects=True,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> OTSClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def get(self, secret_key: str, passphrase: str = "") -> str:
        """Retrieve a secret's value. The service destroys it on success.

        Raises NotFoundError if the key is unknown, the secret was already
        retrieved, or the passphrase is wrong.
        """
        data = self._do(
            "POST",
            f"secret/{_segment(secret_key)}",
            {"passphrase": passphrase},
            route="secret/<key>",
        )
        return KeyResponse.model_validate(data).value

    def put(
        self, secret: str, passphrase: str = "", ttl: int = 0, recipient: str = ""
    ) -> Metadata:
        """Store a secret and return its metadata.

        A ttl of 0 lets the service apply its default. Raises
        InvalidArgumentError if the secret is empty.
        """
        params = {
            "secret": secret,
            "passphrase": passphrase,
            "ttl": str(ttl),
            "recipient": recipient,
        }
        data = self._do("POST", "share", params)
        return KeyResponse.model_validate(data).to_metadata()

    def generate(
        self, passphrase: str = "", ttl: int = 0, recipient: str = ""
    ) -> tuple[str, Metadata]:
        """Have the service create a short random secret. Returns (value, metadata)."""
        params = {"passphrase": passphrase, "ttl": str(ttl), "recipient": recipient}
        kr = KeyResponse.model_validate(self._do("POST", "generate", params))
        return kr.value, kr.to_metadata()

    def burn(self, metadata_key: str, passphrase: str = "") -> Metadata:
        """Destroy a secret before it is read.

        Raises NotFoundError if the key is unknown, the secret is already gone,
        or the passphrase is wrong.
        """
        path = f"private/{_segment(metadata_key)}/burn"
        data = self._do("POST", path, {"passphrase": passphrase}, route="private/<key>/burn")
        return BurnResponse.model_validate(data).state.to_metadata()

    def get_metadata(self, metadata_key: str) -> Metadata:
        """Metadata for one secret. Raises NotFoundError for unknown keys."""
        data = self._do("POST", f"private/{_segment(metadata_key)}", {}, route="private/<key>")
        return KeyResponse.model_validate(data).to_metadata()

    def get_recent_metadata(self) -> list[PartialMetadata]:
        """Partial metadata for secrets recently created by this account."""
        data = self._do("GET", "private/recent")
        return [KeyResponse.model_validate(item).to_partial_metadata() for item in data or []]

    def get_system_status(self) -> SystemStatus:
        data = self._do("GET", "status")
        return SystemStatus.parse(StatusResponse.model_validate(data).status)

    def _do(
        self,
        method: str,
        path: str,
        params: dict[str, str] | None = None,
        route: str | None = None,
    ) -> Any:
        """Send one request and return the decoded JSON body.

        Only route is logged; it names the endpoint with any key masked.

        POST parameters are form-encoded; empty values are sent, not dropped.
        Non-2xx responses are translated into ots.errors exceptions. Transport
        and JSON decode errors propagate unchanged.
        """
        kwargs: dict[str, Any] = {}
        if method == "GET":
            if params:
                kwargs["params"] = params
        else:
            kwargs["data"] = params or {}

        route = route or path
        logger.debug("%s %s", method, route)
        resp = self._client.request(method, path, **kwargs)
        logger.debug("%s %s -> %d", method, route, resp.status_code)

        if not resp.is_success:
            raise _error_from_response(resp)
        return resp.json()


def _error_from_response(resp: httpx.Response) -> Exception:
    """Map a non-2xx response onto the error taxonomy."""
    message = ErrorResponse.model_validate(resp.json()).message or ""
    exc_type = ERROR_MESSAGES.get(message)
    if exc_type is not None:
        return exc_type()
    logger.info("Service error %d: %s", resp.status_code, message)
    return APIError(message, status_code=resp.status_code)
