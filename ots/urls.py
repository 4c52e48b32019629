"""Sharing URLs for stored secrets. Pure string composition, no network access."""

from __future__ import annotations

from urllib.parse import quote

from ots.errors import DestroyedError

DEFAULT_BASE_URL = "https://onetimesecret.com"


def _join(base_url: str, *segments: str) -> str:
    path = "/".join(quote(s, safe="") for s in segments)
    return f"{base_url.rstrip('/')}/{path}"


def secret_url(secret_key: str, base_url: str = DEFAULT_BASE_URL) -> str:
    """Public URL that reveals (and consumes) the secret.

    Raises DestroyedError if the secret key is empty, which is how the
    service reports a secret that was already burned or retrieved.
    """
    if not secret_key:
        raise DestroyedError()
    return _join(base_url, "secret", secret_key)


def metadata_url(metadata_key: str, base_url: str = DEFAULT_BASE_URL) -> str:
    """Private URL for inspecting or burning the secret."""
    return _join(base_url, "private", metadata_key)
