from jmap_webmail.sessions.cookies import (
    clear_session_cookie,
    make_session_cookie,
    parse_session_cookie,
)
from jmap_webmail.sessions.store import SessionRecord, SessionStore, new_session_token

__all__ = [
    "SessionRecord",
    "SessionStore",
    "clear_session_cookie",
    "make_session_cookie",
    "new_session_token",
    "parse_session_cookie",
]
