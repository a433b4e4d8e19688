"""JMAP protocol client for jmap-webmail.

This package provides:
- discover: session discovery with credential-preserving redirects
- JmapClient: read-only mail operations for one account
- JmapTransport: batched method calls against the API endpoint
"""

from jmap_webmail.jmap.client import JmapClient
from jmap_webmail.jmap.discovery import MAX_REDIRECTS, discover
from jmap_webmail.jmap.redirects import next_action, resolve_redirect
from jmap_webmail.jmap.transport import JmapTransport

__all__ = [
    "MAX_REDIRECTS",
    "JmapClient",
    "JmapTransport",
    "discover",
    "next_action",
    "resolve_redirect",
]
