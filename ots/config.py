"""
Configuration for the ots CLI.

Two layers:

- Settings: process-wide knobs (service URL, timeout, log level, config file
  location) loaded from environment variables with sensible defaults.
- Credentials: username and API key, resolved once per invocation from an
  ordered list of sources. The first non-empty value wins, independently for
  each field: command-line flag, then environment, then config file.

The config file is TOML:

    username = "my-username"
    key = "my-key"

Usage:
    from ots.config import get_settings, load_config_file, resolve_credentials

    settings = get_settings()
    file_cfg = load_config_file(settings.config_file)
    creds = resolve_credentials(flag_username, flag_key, file_cfg)
"""

from __future__ import annotations

import os
import sys
import tomllib
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError

from ots.errors import ConfigurationError
from ots.urls import DEFAULT_BASE_URL

USERNAME_ENV = "OTS_USERNAME"
KEY_ENV = "OTS_KEY"

RELATIVE_CONFIG_PATH = Path("ots") / "config.toml"


def user_config_dir() -> Path:
    """Platform configuration directory ($XDG_CONFIG_HOME, ~/Library/..., %APPDATA%)."""
    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        if not appdata:
            raise ConfigurationError("%APPDATA% is not defined")
        return Path(appdata)
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg)
    return Path.home() / ".config"


def default_config_file() -> Path:
    return user_config_dir() / RELATIVE_CONFIG_PATH


@dataclass(frozen=True)
class Settings:
    """Environment-driven settings for one process."""

    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0
    log_level: str = "WARNING"
    config_file: Path = field(default_factory=default_config_file)


# Singleton
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the singleton settings from environment variables."""
    global _settings
    if _settings is not None:
        return _settings
    _settings = _load_from_env()
    return _settings


def _load_from_env() -> Settings:
    timeout = os.environ.get("OTS_TIMEOUT", "30")
    try:
        timeout_s = float(timeout)
    except ValueError as e:
        raise ConfigurationError(f"invalid OTS_TIMEOUT '{timeout}'") from e

    base_url = os.environ.get("OTS_BASE_URL") or DEFAULT_BASE_URL
    try:
        scheme = httpx.URL(base_url).scheme
    except (httpx.InvalidURL, ValueError) as e:
        raise ConfigurationError(f"invalid OTS_BASE_URL '{base_url}'") from e
    if scheme not in ("http", "https"):
        raise ConfigurationError(f"invalid OTS_BASE_URL '{base_url}'")

    return Settings(
        base_url=base_url,
        timeout=timeout_s,
        log_level=os.environ.get("OTS_LOG_LEVEL", "WARNING").upper(),
        config_file=default_config_file(),
    )


def reset_settings() -> None:
    """Reset the singleton settings (for testing)."""
    global _settings
    _settings = None


class FileConfig(BaseModel):
    """Contents of config.toml. Unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore", strict=True)

    username: str = ""
    key: str = ""


def load_config_file(path: Path) -> FileConfig:
    """Read the config file. A missing file yields an empty config.

    Raises ConfigurationError if the file exists but is not valid TOML or
    holds fields of the wrong type.
    """
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return FileConfig()
    except (tomllib.TOMLDecodeError, OSError) as e:
        raise ConfigurationError(f"invalid config file '{path}': {e}") from e

    try:
        return FileConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"invalid config file '{path}': {e}") from e


@dataclass(frozen=True)
class Credentials:
    username: str
    key: str


# A resolver returns a value for a credential field ("username" or "key"),
# or "" when its source has nothing.
Resolver = Callable[[str], str]


def flag_resolver(username: str | None, key: str | None) -> Resolver:
    values = {"username": username or "", "key": key or ""}
    return lambda name: values[name]


def env_resolver(environ: Mapping[str, str] | None = None) -> Resolver:
    env = os.environ if environ is None else environ
    names = {"username": USERNAME_ENV, "key": KEY_ENV}
    return lambda name: env.get(names[name], "")


def file_resolver(cfg: FileConfig) -> Resolver:
    return lambda name: getattr(cfg, name)


def resolve(name: str, resolvers: list[Resolver]) -> str:
    """First non-empty value for one field, in resolver order."""
    for resolver in resolvers:
        value = resolver(name)
        if value:
            return value
    return ""


def resolve_credentials(
    username: str | None,
    key: str | None,
    file_cfg: FileConfig,
    environ: Mapping[str, str] | None = None,
) -> Credentials:
    """Resolve credentials with precedence flag > environment > config file.

    Raises ConfigurationError if either field is still empty.
    """
    resolvers = [
        flag_resolver(username, key),
        env_resolver(environ),
        file_resolver(file_cfg),
    ]
    creds = Credentials(username=resolve("username", resolvers), key=resolve("key", resolvers))
    if not creds.username:
        raise ConfigurationError("missing username; run 'ots help'")
    if not creds.key:
        raise ConfigurationError("missing key; run 'ots help'")
    return creds
