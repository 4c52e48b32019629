"""
Exception hierarchy for the One-Time Secret client and CLI.

Every error raised by this package derives from OTSError, so library callers
can catch them all with one clause. Transport failures (httpx.HTTPError) and
malformed response bodies are not wrapped; they propagate unchanged.

Usage:
    from ots.errors import NotFoundError

    try:
        value = client.get(secret_key, passphrase)
    except NotFoundError:
        print("Unknown secret, already read, or wrong passphrase")
"""

from __future__ import annotations


class OTSError(Exception):
    """Base exception for all ots errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidArgumentError(OTSError):
    """The service rejected an empty secret."""

    def __init__(self, message: str = "onetimesecret: invalid argument") -> None:
        super().__init__(message)


class NotFoundError(OTSError):
    """No secret matches the key, it was already consumed, or the passphrase is wrong.

    The service reports all three cases identically and so does this client.
    """

    def __init__(self, message: str = "onetimesecret: unknown secret") -> None:
        super().__init__(message)


class DestroyedError(OTSError):
    """A sharing URL was requested for a secret that was burned or retrieved."""

    def __init__(self, message: str = "onetimesecret: burned or retrieved") -> None:
        super().__init__(message)


class APIError(OTSError):
    """Any other error message reported by the service."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.detail = message  # service text, unprefixed
        self.status_code = status_code
        super().__init__(f"error: {message}")


class ConfigurationError(OTSError):
    """Missing credentials or an unreadable config file."""


class UsageError(OTSError):
    """Malformed command-line invocation."""
