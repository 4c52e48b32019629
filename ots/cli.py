"""
ots CLI — command-line interface to One-Time Secret (onetimesecret.com).

Usage:
    ots put [secret]             # Store a secret (reads stdin if omitted)
    ots get <secret-key>         # Retrieve and destroy a secret
    ots gen                      # Generate a random secret
    ots burn <metadata-key>      # Destroy a secret unread
    ots meta <metadata-key>      # Show a secret's metadata
    ots recent                   # List recently created secrets
    ots status                   # Show service status
    ots help [command]           # Show help
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import TextIO

import httpx
from pydantic import ValidationError

from ots.client import OTSClient
from ots.commands import COMMANDS, Command, Context, usage
from ots.config import (
    KEY_ENV,
    RELATIVE_CONFIG_PATH,
    USERNAME_ENV,
    get_settings,
    load_config_file,
    resolve_credentials,
)
from ots.errors import ConfigurationError, OTSError, UsageError
from ots.output import print_result

logger = logging.getLogger(__name__)

HELP_ARGS = ("help", "-h", "-help", "--help")


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting."""

    def error(self, message: str):  # type: ignore[override]
        raise UsageError(message)


def _build_parser(cmd: Command) -> _ArgumentParser:
    parser = _ArgumentParser(prog=f"ots {cmd.name}", add_help=False, allow_abbrev=False)
    parser.add_argument("-username", "--username", default="", metavar="<string>")
    parser.add_argument("-key", "--key", default="", metavar="<string>")
    parser.add_argument("-json", "--json", action="store_true")
    cmd.add_flags(parser)
    parser.add_argument("args", nargs="*")
    return parser


def _config_path_display() -> str:
    try:
        return str(get_settings().config_file)
    except OTSError:
        return str(Path("$XDG_CONFIG_HOME") / RELATIVE_CONFIG_PATH)


def print_help(out: TextIO) -> None:
    width = max(len(name) for name in COMMANDS) + 4
    lines = [
        "ots is a command-line interface to One-Time Secret (onetimesecret.com).",
        "",
        usage("<command>", "<command args>"),
        "",
        "Commands:",
        "",
    ]
    lines += [f"  {name:<{width}}{cmd.summary}" for name, cmd in sorted(COMMANDS.items())]
    lines += [
        "",
        'Run "ots help <command>" for help on each command.',
        "",
        "ots requires a username and API key from onetimesecret.com. Provide these "
        f"with the -username and -key options, in the environment variables {USERNAME_ENV} "
        f'and {KEY_ENV}, or in the config file "{_config_path_display()}". For example:',
        "",
        '  username = "my-username"',
        '  key = "my-key"',
        "",
        "If -json is specified, ots prints JSON.",
    ]
    out.write("\n".join(lines) + "\n")


def _unknown_command(name: str) -> int:
    print(f"Unknown command: {name}", file=sys.stderr)
    print("Run 'ots help' for usage.", file=sys.stderr)
    return 1


def _cmd_help(argv: list[str]) -> int:
    if not argv:
        print_help(sys.stdout)
        return 0
    cmd = COMMANDS.get(argv[0])
    if cmd is None:
        return _unknown_command(argv[0])
    print(usage(cmd.name, cmd.params))
    print()
    print(cmd.help)
    return 0


def _setup_logging() -> None:
    level = logging.WARNING
    try:
        level = logging.getLevelName(get_settings().log_level)
        if not isinstance(level, int):
            level = logging.WARNING
    except OTSError:
        pass
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )
    # Request lines carry secret and metadata keys in the URL
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv

    if not argv:
        print_help(sys.stderr)
        return 1

    name, rest = argv[0], argv[1:]
    if name in HELP_ARGS:
        return _cmd_help(rest)
    if name in ("version", "--version"):
        from ots import __version__

        print(f"ots {__version__}")
        return 0

    cmd = COMMANDS.get(name)
    if cmd is None:
        return _unknown_command(name)

    _setup_logging()

    try:
        flags = _build_parser(cmd).parse_args(rest)
    except UsageError as e:
        print(e, file=sys.stderr)
        print(usage(cmd.name, cmd.params), file=sys.stderr)
        return 1

    try:
        settings = get_settings()
        file_cfg = load_config_file(settings.config_file)
        creds = resolve_credentials(flags.username, flags.key, file_cfg)
    except ConfigurationError as e:
        print(e, file=sys.stderr)
        return 1

    client = OTSClient(
        creds.username, creds.key, base_url=settings.base_url, timeout=settings.timeout
    )
    ctx = Context(client=client, json=flags.json)
    try:
        result = cmd.run(ctx, flags, flags.args)
    except UsageError as e:
        print(e, file=sys.stderr)
        print(usage(cmd.name, cmd.params), file=sys.stderr)
        return 1
    except (
        OTSError,
        httpx.HTTPError,
        json.JSONDecodeError,
        ValidationError,
        OSError,
        EOFError,
    ) as e:
        logger.debug("%s failed", cmd.name, exc_info=True)
        print(e, file=sys.stderr)
        return 1
    finally:
        client.close()

    print_result(result, ctx.json, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
