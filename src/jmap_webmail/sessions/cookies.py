"""Session cookie helpers.

The cookie holds only the session token; everything else stays in the
server-side SessionStore.
"""

import uuid

SESSION_COOKIE = "session"
COOKIE_ATTRIBUTES = "HttpOnly; SameSite=Strict; Path=/"


def parse_session_cookie(cookie_header: str) -> uuid.UUID | None:
    """Extract the session token from a ``Cookie`` request header.

    Returns None if there is no session cookie or it is not a UUID.
    """
    for cookie in cookie_header.split(";"):
        name, sep, value = cookie.strip().partition("=")
        if sep and name == SESSION_COOKIE:
            try:
                return uuid.UUID(value)
            except ValueError:
                return None
    return None


def make_session_cookie(token: uuid.UUID) -> str:
    """Build the ``Set-Cookie`` value issued after login."""
    return f"{SESSION_COOKIE}={token}; {COOKIE_ATTRIBUTES}"


def clear_session_cookie() -> str:
    """Build the ``Set-Cookie`` value that expires the session on logout."""
    return f"{SESSION_COOKIE}=; {COOKIE_ATTRIBUTES}; Max-Age=0"
