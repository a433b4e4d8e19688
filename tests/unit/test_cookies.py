"""Tests for session cookie helpers."""

import uuid

from jmap_webmail.sessions import clear_session_cookie, make_session_cookie, parse_session_cookie

TOKEN = uuid.UUID("01890a5d-ac96-774b-bcce-b302099a8057")


def test_make_session_cookie():
    assert make_session_cookie(TOKEN) == (
        "session=01890a5d-ac96-774b-bcce-b302099a8057; HttpOnly; SameSite=Strict; Path=/"
    )


def test_clear_session_cookie_expires():
    cookie = clear_session_cookie()
    assert cookie.startswith("session=;")
    assert "Max-Age=0" in cookie


def test_parse_session_cookie_among_others():
    header = "theme=dark; session=01890a5d-ac96-774b-bcce-b302099a8057; lang=en"
    assert parse_session_cookie(header) == TOKEN


def test_parse_session_cookie_round_trip():
    assert parse_session_cookie(make_session_cookie(TOKEN).split(";")[0]) == TOKEN


def test_parse_session_cookie_missing():
    assert parse_session_cookie("theme=dark") is None
    assert parse_session_cookie("") is None


def test_parse_session_cookie_garbage():
    assert parse_session_cookie("session=not-a-uuid") is None


def test_parse_session_cookie_ignores_similar_names():
    assert parse_session_cookie("xsession=01890a5d-ac96-774b-bcce-b302099a8057") is None
