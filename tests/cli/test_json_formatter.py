"""Tests for the JSON output envelope."""

from __future__ import annotations

import orjson

from mediagallery.cli.json_formatter import format_json_output


def test_success_envelope() -> None:
    payload = orjson.loads(format_json_output(True, "build", data={"total": 3}))

    assert payload["success"] is True
    assert payload["command"] == "build"
    assert payload["data"] == {"total": 3}
    assert payload["errors"] == []
    assert payload["warnings"] == []
    assert payload["timestamp"]


def test_errors_force_failure() -> None:
    payload = orjson.loads(format_json_output(True, "inspect", errors=["bad"]))

    assert payload["success"] is False
    assert payload["errors"] == ["bad"]


def test_unserializable_data() -> None:
    payload = orjson.loads(format_json_output(True, "build", data={"x": object()}))

    assert payload["success"] is False
    assert payload["data"] is None
    assert payload["errors"][0].startswith("JSON serialization failed")
