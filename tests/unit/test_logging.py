"""Tests for logging helpers and error display."""

import uuid

from jmap_webmail.core.logging import REDACTED, redact_secrets, sanitize_for_log, short_token
from jmap_webmail.exceptions import (
    ApiError,
    AuthenticationFailed,
    ConfigurationError,
    HttpError,
    ParseError,
    describe_error,
)


def test_sanitize_for_log_removes_control_chars():
    assert sanitize_for_log("hello\x00world") == "helloworld"


def test_sanitize_for_log_removes_ansi_codes():
    assert sanitize_for_log("\x1b[31mred\x1b[0m") == "red"


def test_sanitize_for_log_truncates():
    long_text = "x" * 200
    assert len(sanitize_for_log(long_text, 50)) == 50


def test_redact_secrets_masks_credentials():
    event = {"event": "login", "username": "alice", "password": "s3cret", "authorization": "Basic x"}

    result = redact_secrets(None, "info", event)

    assert result["password"] == REDACTED
    assert result["authorization"] == REDACTED
    assert result["username"] == "alice"


def test_redact_secrets_leaves_other_events_alone():
    event = {"event": "jmap_call_complete", "methods": ["Mailbox/get"]}
    assert redact_secrets(None, "debug", dict(event)) == event


def test_short_token():
    token = uuid.UUID("01890a5d-ac96-774b-bcce-b302099a8057")
    assert short_token(token) == "01890a5d"


def test_describe_error_prefixes_kind():
    assert describe_error(HttpError("Too many redirects")) == "HTTP error: Too many redirects"
    assert describe_error(AuthenticationFailed()).startswith("HTTP error: Authentication failed")
    assert describe_error(ParseError("bad json")) == "Parse error: bad json"
    assert describe_error(ApiError("No mail account found")) == "API error: No mail account found"
    assert describe_error(ConfigurationError("missing")) == "missing"
    assert describe_error(RuntimeError("boom")) == "boom"


def test_authentication_failed_is_http_error():
    error = AuthenticationFailed()
    assert isinstance(error, HttpError)
    assert error.status == 401
