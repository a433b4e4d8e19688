"""Shared HTTP helpers for the JMAP client."""

from collections.abc import Iterator
from contextlib import contextmanager

import httpx

from jmap_webmail.models.auth import Credentials


def basic_auth(credentials: Credentials) -> httpx.BasicAuth:
    """Build the Basic authorization used for every JMAP request."""
    return httpx.BasicAuth(credentials.username, credentials.password.get_secret_value())


@contextmanager
def client_scope(http_client: httpx.Client | None) -> Iterator[httpx.Client]:
    """Yield ``http_client``, or a fresh client closed on exit.

    The fresh client never follows redirects on its own.
    """
    if http_client is not None:
        yield http_client
        return
    with httpx.Client(follow_redirects=False) as client:
        yield client
