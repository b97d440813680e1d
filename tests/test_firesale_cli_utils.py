from __future__ import annotations

import json
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from firesale_cli.cli_shared import (
    Environment,
    Options,
    _json_default,
    _print_json,
    gather_environment,
)


def test_gather_environment_reads_both_variables(monkeypatch):
    monkeypatch.setenv("GOOGLE_APPLICATION_CREDENTIALS", "/keys/sa.json")
    monkeypatch.setenv("PROJECT_ID", "demo-project")

    assert gather_environment() == Environment(
        service_account_path="/keys/sa.json",
        project_id="demo-project",
    )


def test_gather_environment_represents_absence_as_none(monkeypatch):
    monkeypatch.delenv("GOOGLE_APPLICATION_CREDENTIALS", raising=False)
    monkeypatch.setenv("PROJECT_ID", "   ")

    environ = gather_environment()

    assert environ.service_account_path is None
    assert environ.project_id is None


def test_gather_environment_does_not_validate_credentials_path(monkeypatch, tmp_path):
    missing = tmp_path / "nope.json"
    monkeypatch.setenv("GOOGLE_APPLICATION_CREDENTIALS", str(missing))
    monkeypatch.delenv("PROJECT_ID", raising=False)

    assert gather_environment().service_account_path == str(missing)


def test_options_pretty_tracks_plain_json_flag():
    assert Options(environment=Environment()).pretty is True
    assert Options(environment=Environment(), plain_json=True).pretty is False


def test_json_default_renders_firestore_values():
    ts = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
    ref = SimpleNamespace(path="users/alice")
    point = SimpleNamespace(latitude=51.5, longitude=-0.12)

    assert _json_default(ts) == "2024-05-01T12:30:00+00:00"
    assert _json_default(b"\x00\x01") == "AAE="
    assert _json_default(ref) == "users/alice"
    assert _json_default(point) == {"latitude": 51.5, "longitude": -0.12}


def test_json_default_rejects_unknown_objects():
    with pytest.raises(TypeError, match="not JSON serializable"):
        _json_default(object())


def test_print_json_plain_is_compact(capsys):
    _print_json({"b": 1, "a": [1, 2]}, pretty=False)
    out = capsys.readouterr().out

    assert out == '{"a":[1,2],"b":1}\n'


def test_print_json_pretty_is_indented(capsys):
    _print_json({"a": 1}, pretty=True)
    out = capsys.readouterr().out

    assert out == '{\n  "a": 1\n}\n'
    assert json.loads(out) == {"a": 1}
