"""Tests for ots.output — tab-separated and JSON rendering."""

from __future__ import annotations

import io
import json
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta, timezone

from ots.commands import PutResult, StatusResult
from ots.models import Metadata, PartialMetadata, SecretState
from ots.output import format_time, print_result, render_json, render_plain

T0 = datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)


def _meta(state: SecretState = SecretState.NEW) -> Metadata:
    return Metadata(
        customer_id="anon",
        metadata_key="mk",
        secret_key="sk",
        initial_metadata_ttl=7200,
        metadata_ttl=7100,
        secret_ttl=3500,
        state=state,
        updated=T0,
        created=T0,
        obfuscated_recipient="",
        has_passphrase=True,
    )


class TestFormatTime:
    def test_utc(self):
        assert format_time(T0) == "2024-01-02T03:04:05Z"

    def test_converted_to_utc(self):
        t = datetime(2024, 1, 2, 5, 4, 5, tzinfo=timezone(timedelta(hours=2)))
        assert format_time(t) == "2024-01-02T03:04:05Z"


class TestPlain:
    def test_simple_record(self):
        assert render_plain(PutResult("sk", "mk")) == "sk\tmk\n"

    def test_metadata_field_order(self):
        out = render_plain(_meta())
        assert out == (
            "anon\tmk\tsk\t7200\t7100\t3500\tnew\t"
            "2024-01-02T03:04:05Z\t2024-01-02T03:04:05Z\t\ttrue\n"
        )

    def test_list_one_record_per_line(self):
        partial = PartialMetadata(
            customer_id="anon",
            metadata_key="mk",
            initial_metadata_ttl=1,
            metadata_ttl=1,
            secret_ttl=1,
            state=SecretState.BURNED,
            updated=T0,
            created=T0,
        )
        lines = render_plain([partial, partial]).splitlines()
        assert len(lines) == 2
        assert lines[0].split("\t")[5] == "burned"

    def test_empty_list(self):
        assert render_plain([]) == ""

    def test_nested_records_flattened(self):
        @dataclass
        class Outer:
            label: str
            inner: StatusResult

        assert render_plain(Outer("x", StatusResult("nominal"))) == "x\tnominal\n"

    def test_other_state_renders(self):
        assert "\tother\t" in render_plain(_meta(SecretState.OTHER))

    def test_secret_with_newlines_printed_verbatim(self):
        assert render_plain(StatusResult("a\nb")) == "a\nb\n"


class TestJson:
    def test_metadata(self):
        data = json.loads(render_json(_meta()))
        assert data["metadata_key"] == "mk"
        assert data["state"] == "new"
        assert data["created"] == "2024-01-02T03:04:05Z"
        assert data["has_passphrase"] is True

    def test_indented(self):
        assert render_json(PutResult("sk", "mk")).startswith('{\n  "secret_key"')

    def test_list(self):
        assert json.loads(render_json([PutResult("a", "b")])) == [
            {"secret_key": "a", "metadata_key": "b"}
        ]


def test_print_result_selects_format():
    plain, as_json = io.StringIO(), io.StringIO()
    print_result(StatusResult("nominal"), False, plain)
    print_result(StatusResult("nominal"), True, as_json)
    assert plain.getvalue() == "nominal\n"
    assert json.loads(as_json.getvalue()) == {"status": "nominal"}
