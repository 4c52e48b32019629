"""
Command registry for the ots CLI.

Each verb maps to a handler with two hooks: add_flags() declares its
command-specific flags, run() performs the request with the parsed flags and
positional arguments and returns a result for ots.output to render.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Any, Protocol

from ots.client import OTSClient
from ots.errors import UsageError
from ots.models import Metadata, PartialMetadata
from ots.terminal import STDIN_ARG, read_long, read_short


@dataclass
class Context:
    client: OTSClient
    json: bool = False


class Command(Protocol):
    name: str
    params: str
    summary: str
    help: str

    def add_flags(self, parser: argparse.ArgumentParser) -> None: ...

    def run(self, ctx: Context, flags: argparse.Namespace, args: list[str]) -> Any: ...


# CLI result shapes

@dataclass(frozen=True)
class PutResult:
    secret_key: str
    metadata_key: str


@dataclass(frozen=True)
class GetResult:
    secret: str


@dataclass(frozen=True)
class GenerateResult:
    secret: str
    secret_key: str
    metadata_key: str


@dataclass(frozen=True)
class BurnResult:
    metadata_key: str


@dataclass(frozen=True)
class StatusResult:
    status: str


def usage(name: str, params: str = "") -> str:
    s = f"Usage: ots {name} [-username <string>] [-key <string>] [-json]"
    if params:
        s += " " + params
    return s


def _expect_args(args: list[str], *names: str) -> None:
    if len(args) < len(names):
        raise UsageError(f"missing arg: {names[len(args)]}")
    if len(args) > len(names):
        raise UsageError("too many args")


def _add_passphrase(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-passphrase", "--passphrase", default="", metavar="<string>")


def _add_ttl(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-ttl", "--ttl", type=int, default=0, metavar="<seconds>")


def _passphrase(flags: argparse.Namespace) -> str:
    if flags.passphrase == STDIN_ARG:
        return read_short("passphrase")
    return str(flags.passphrase)


class BurnCommand:
    name = "burn"
    params = "[-passphrase <string>] metadata-key"
    summary = "Destroys a secret"
    help = (
        "Destroys a secret. Prints the destroyed secret's metadata key. "
        'If passphrase is "-", reads a line from stdin. '
        'A passphrase starting with "-" must be given as -passphrase=<value>.'
    )

    def add_flags(self, parser: argparse.ArgumentParser) -> None:
        _add_passphrase(parser)

    def run(self, ctx: Context, flags: argparse.Namespace, args: list[str]) -> BurnResult:
        _expect_args(args, "metadata-key")
        passphrase = _passphrase(flags)
        meta = ctx.client.burn(args[0], passphrase)
        return BurnResult(metadata_key=meta.metadata_key)


class GenerateCommand:
    name = "gen"
    params = "[-passphrase <string>] [-ttl <seconds>]"
    summary = "Generates a secret"
    help = (
        "Generates a secret. Prints the secret, secret key, and metadata key. "
        'If passphrase is "-", reads a line from stdin. '
        'A passphrase starting with "-" must be given as -passphrase=<value>.'
    )

    def add_flags(self, parser: argparse.ArgumentParser) -> None:
        _add_passphrase(parser)
        _add_ttl(parser)

    def run(self, ctx: Context, flags: argparse.Namespace, args: list[str]) -> GenerateResult:
        _expect_args(args)
        passphrase = _passphrase(flags)
        secret, meta = ctx.client.generate(passphrase, flags.ttl)
        return GenerateResult(
            secret=secret, secret_key=meta.secret_key, metadata_key=meta.metadata_key
        )


class GetCommand:
    name = "get"
    params = "[-passphrase <string>] secret-key"
    summary = "Retrieves a secret"
    help = (
        "Retrieves, prints, and destroys a secret. "
        'If passphrase is "-", reads a line from stdin. '
        'A passphrase starting with "-" must be given as -passphrase=<value>.'
    )

    def add_flags(self, parser: argparse.ArgumentParser) -> None:
        _add_passphrase(parser)

    def run(self, ctx: Context, flags: argparse.Namespace, args: list[str]) -> GetResult:
        _expect_args(args, "secret-key")
        passphrase = _passphrase(flags)
        return GetResult(secret=ctx.client.get(args[0], passphrase))


class MetadataCommand:
    name = "meta"
    params = "metadata-key"
    summary = "Prints a secret's metadata"
    help = "Prints a secret's metadata."

    def add_flags(self, parser: argparse.ArgumentParser) -> None:
        pass

    def run(self, ctx: Context, flags: argparse.Namespace, args: list[str]) -> Metadata:
        _expect_args(args, "metadata-key")
        return ctx.client.get_metadata(args[0])


class PutCommand:
    name = "put"
    params = "[-passphrase <string>] [-ttl <seconds>] [secret]"
    summary = "Stores a secret"
    help = (
        "Stores a secret. Prints the secret key and metadata key. "
        'If passphrase is "-", reads a line from stdin. '
        'A passphrase starting with "-" must be given as -passphrase=<value>. '
        'If secret is "-" or omitted, '
        "reads a line from stdin or, if stdin is not a terminal, reads until EOF."
    )

    def add_flags(self, parser: argparse.ArgumentParser) -> None:
        _add_passphrase(parser)
        _add_ttl(parser)

    def run(self, ctx: Context, flags: argparse.Namespace, args: list[str]) -> PutResult:
        if len(args) > 1:
            raise UsageError("too many args")
        passphrase = _passphrase(flags)
        if args and args[0] != STDIN_ARG:
            secret = args[0]
        else:
            secret = read_long("secret")
        meta = ctx.client.put(secret, passphrase, flags.ttl)
        return PutResult(secret_key=meta.secret_key, metadata_key=meta.metadata_key)


class RecentCommand:
    name = "recent"
    params = ""
    summary = "Prints metadata of recently created secrets"
    help = "Prints metadata of recently created secrets."

    def add_flags(self, parser: argparse.ArgumentParser) -> None:
        pass

    def run(
        self, ctx: Context, flags: argparse.Namespace, args: list[str]
    ) -> list[PartialMetadata]:
        _expect_args(args)
        return ctx.client.get_recent_metadata()


class StatusCommand:
    name = "status"
    params = ""
    summary = "Prints system status"
    help = "Prints system status."

    def add_flags(self, parser: argparse.ArgumentParser) -> None:
        pass

    def run(self, ctx: Context, flags: argparse.Namespace, args: list[str]) -> StatusResult:
        _expect_args(args)
        return StatusResult(status=ctx.client.get_system_status().value)


# Command registry: name → handler
COMMANDS: dict[str, Command] = {
    cmd.name: cmd
    for cmd in (
        BurnCommand(),
        GenerateCommand(),
        GetCommand(),
        MetadataCommand(),
        PutCommand(),
        RecentCommand(),
        StatusCommand(),
    )
}
