"""Redirect handling for JMAP session discovery.

Discovery follows redirects by hand so the Authorization header can be
presented at every hop, including cross-origin ones. This module holds
the pure parts: resolving a Location header against the current URL and
deciding what to do with one hop's response.
"""

from dataclasses import dataclass

import httpx

from jmap_webmail.exceptions import AuthenticationFailed, HttpError, JmapWebmailError

# Cap on the error body carried in HttpError
ERROR_BODY_LIMIT = 200


@dataclass(frozen=True)
class Follow:
    """Issue the next hop against ``url``."""

    url: str


@dataclass(frozen=True)
class Succeed:
    """Stop; ``body`` is the session document."""

    body: str


@dataclass(frozen=True)
class Fail:
    """Stop; discovery fails with ``error``."""

    error: JmapWebmailError


HopAction = Follow | Succeed | Fail


def resolve_redirect(base_url: str, location: str) -> str:
    """Resolve a Location header against the URL that produced it.

    - Absolute URLs are returned unchanged.
    - Absolute paths keep the scheme and host of ``base_url``.
    - Anything else is relative to the directory of ``base_url``.

    Args:
        base_url: The URL of the request that was redirected.
        location: The raw Location header value.

    Returns:
        The absolute URL of the next hop.
    """
    if location.startswith(("http://", "https://")):
        return location

    scheme_end = base_url.find("://")

    if location.startswith("/"):
        if scheme_end == -1:
            return location
        path_start = base_url.find("/", scheme_end + 3)
        if path_start == -1:
            # No path on the base, e.g. https://host
            return base_url + location
        return base_url[:path_start] + location

    last_slash = base_url.rfind("/")
    if scheme_end != -1 and last_slash < scheme_end + 3:
        return f"{base_url}/{location}"
    if last_slash == -1:
        return location
    return base_url[: last_slash + 1] + location


def next_action(current_url: str, response: httpx.Response) -> HopAction:
    """Decide what one discovery hop's response means.

    Args:
        current_url: The URL the response came from.
        response: The (fully read) response.

    Returns:
        Follow, Succeed or Fail.
    """
    status = response.status_code

    if 200 <= status < 300:
        body = response.text
        if not body:
            return Fail(HttpError(f"Server returned empty response (status {status})", status=status))
        return Succeed(body)

    if 300 <= status < 400:
        location = response.headers.get("location")
        if not location:
            return Fail(HttpError(f"Redirect {status} without Location header", status=status))
        return Follow(resolve_redirect(current_url, location))

    if status == 401:
        return Fail(AuthenticationFailed())

    body = response.content[:ERROR_BODY_LIMIT].decode("utf-8", errors="ignore")
    return Fail(
        HttpError(
            f"HTTP {status} error: {body or '(empty response)'}",
            status=status,
            body=body,
        )
    )
