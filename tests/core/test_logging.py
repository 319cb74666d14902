"""Tests for enrollhub/core/logging.py and request logging helpers."""

import json
import logging

import pytest

from enrollhub.core.logging import JsonFormatter, env_bool
from enrollhub.core.request_logging import _loggable_path


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("1", True), ("true", True), (" Yes ", True), ("0", False), ("off", False)],
)
def test_env_bool(monkeypatch, raw, expected):
    monkeypatch.setenv("SOME_FLAG", raw)

    assert env_bool("SOME_FLAG", default=not expected) is expected


def test_env_bool_default(monkeypatch):
    monkeypatch.delenv("SOME_FLAG", raising=False)

    assert env_bool("SOME_FLAG", default=True) is True


def test_json_formatter_includes_known_extras():
    record = logging.LogRecord(
        "enrollhub.test", logging.INFO, __file__, 1, "user %s", (7,), None
    )
    record.user_id = 7
    record.event = "login"
    record.secret = "hidden"

    payload = json.loads(JsonFormatter().format(record))

    assert payload["msg"] == "user 7"
    assert payload["level"] == "INFO"
    assert payload["user_id"] == 7
    assert payload["event"] == "login"
    assert "secret" not in payload


def test_activation_token_is_redacted_from_logged_paths():
    path = "/api/v1/user/activation/eyJhbGciOiJIUzI1NiJ9.payload.sig"

    assert _loggable_path(path) == "/api/v1/user/activation/***"
    assert _loggable_path("/api/v1/course/get-courses") == "/api/v1/course/get-courses"
