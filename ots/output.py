"""
Result rendering for the CLI: tab-separated text or indented JSON.

Plain output prints one record per line with fields joined by tabs. Nested
records are flattened into the same line and lists print one record per line.
"""

from __future__ import annotations

import json
from dataclasses import asdict, fields, is_dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Any, TextIO


def format_time(value: datetime) -> str:
    """RFC 3339 in UTC, e.g. 2024-01-02T03:04:05Z."""
    return value.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")


def _scalar(value: Any) -> str:
    if isinstance(value, datetime):
        return format_time(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def _fields_inline(record: Any) -> str:
    parts = []
    for f in fields(record):
        value = getattr(record, f.name)
        parts.append(_fields_inline(value) if is_dataclass(value) else _scalar(value))
    return "\t".join(parts)


def render_plain(result: Any) -> str:
    if isinstance(result, list | tuple):
        return "".join(render_plain(item) for item in result)
    if is_dataclass(result) and not isinstance(result, type):
        return _fields_inline(result) + "\n"
    return _scalar(result)


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return format_time(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _to_jsonable(result: Any) -> Any:
    if isinstance(result, list | tuple):
        return [_to_jsonable(item) for item in result]
    if is_dataclass(result) and not isinstance(result, type):
        return asdict(result)
    return result


def render_json(result: Any) -> str:
    return json.dumps(_to_jsonable(result), indent=2, default=_json_default) + "\n"


def print_result(result: Any, as_json: bool, out: TextIO) -> None:
    out.write(render_json(result) if as_json else render_plain(result))
