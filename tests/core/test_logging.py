"""Tests for wikiadmin/core/logging.py."""

import json
import logging

import pytest

from wikiadmin.core.logging import JsonFormatter, env_bool


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("1", True), ("TRUE", True), (" yes ", True), ("0", False), ("off", False)],
)
def test_env_bool(monkeypatch, raw, expected):
    monkeypatch.setenv("WIKIADMIN_TEST_FLAG", raw)

    assert env_bool("WIKIADMIN_TEST_FLAG", default=not expected) is expected


def test_env_bool_default(monkeypatch):
    monkeypatch.delenv("WIKIADMIN_TEST_FLAG", raising=False)

    assert env_bool("WIKIADMIN_TEST_FLAG", default=True) is True


def test_json_formatter_includes_extras():
    record = logging.LogRecord(
        name="wikiadmin.user.router",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="Failed to invite %s",
        args=("a@example.com",),
        exc_info=None,
    )
    record.user_id = "42"
    record.unrelated = "dropped"

    payload = json.loads(JsonFormatter().format(record))

    assert payload["level"] == "WARNING"
    assert payload["logger"] == "wikiadmin.user.router"
    assert payload["msg"] == "Failed to invite a@example.com"
    assert payload["user_id"] == "42"
    assert "unrelated" not in payload
