"""
Reading passphrases and secrets from standard input.

When stdin is a terminal the value is read with a masked prompt (getpass).
Otherwise it is piped: read_short takes a single line, read_long takes
everything until end of stream, which is the only way to store multi-line
secrets.
"""

from __future__ import annotations

import getpass
import sys
from typing import TextIO

STDIN_ARG = "-"


def _is_terminal(stream: TextIO) -> bool:
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


def _read_masked(prompt: str) -> str:
    return getpass.getpass(f"{prompt}: ", stream=sys.stderr)


def read_short(prompt: str, stream: TextIO | None = None) -> str:
    """Read one line; the trailing newline is dropped."""
    stream = sys.stdin if stream is None else stream
    if _is_terminal(stream):
        return _read_masked(prompt)
    line = stream.readline()
    return line.removesuffix("\n").removesuffix("\r")


def read_long(prompt: str, stream: TextIO | None = None) -> str:
    """Read one masked line from a terminal, or the whole stream when piped."""
    stream = sys.stdin if stream is None else stream
    if _is_terminal(stream):
        return _read_masked(prompt)
    return stream.read()
