"""In-memory session store for jmap-webmail.

Maps an opaque browser token to the data needed to rebuild a JMAP
client for that user. Lookups run concurrently; logins and logouts
take the table exclusively.
"""

import secrets
import time
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

import structlog
from pydantic import SecretStr

from jmap_webmail.core.locks import ReadWriteLock
from jmap_webmail.core.logging import short_token
from jmap_webmail.models.auth import AuthenticatedContext, Credentials

logger = structlog.get_logger(__name__)

R = TypeVar("R")

_TIMESTAMP_MASK = (1 << 48) - 1
_RAND_B_BITS = 62


def new_session_token() -> uuid.UUID:
    """Generate a UUIDv7 session token.

    The top 48 bits are the Unix time in milliseconds, so tokens sort
    roughly by creation time; the remaining 74 free bits come from
    ``secrets`` and make tokens unguessable.
    """
    millis = time.time_ns() // 1_000_000
    rand = secrets.randbits(12 + _RAND_B_BITS)
    value = (millis & _TIMESTAMP_MASK) << 80
    value |= 0x7 << 76
    value |= (rand >> _RAND_B_BITS) << 64
    value |= 0b10 << 62
    value |= rand & ((1 << _RAND_B_BITS) - 1)
    return uuid.UUID(int=value)


@dataclass(frozen=True)
class SessionRecord:
    """What the server remembers about a logged-in browser.

    Attributes:
        username: Login name.
        password: Password, kept to authenticate each JMAP request.
        api_url: API endpoint found during discovery.
        account_id: Mail account id found during discovery.
        download_url: Blob download template, when the server sent one.
    """

    username: str
    password: SecretStr
    api_url: str
    account_id: str
    download_url: str | None = None

    def context(self) -> AuthenticatedContext:
        """Rebuild the authenticated context without rediscovery."""
        return AuthenticatedContext(
            credentials=Credentials(username=self.username, password=self.password),
            api_url=self.api_url,
            account_id=self.account_id,
        )


class SessionStore:
    """Concurrent ``token -> SessionRecord`` table.

    Created once at server start and passed to request handlers. There
    is no expiry: a token stays valid until :meth:`remove` or
    :meth:`clear`.
    """

    def __init__(self) -> None:
        self._sessions: dict[uuid.UUID, SessionRecord] = {}
        self._lock = ReadWriteLock()

    def create(self, record: SessionRecord) -> uuid.UUID:
        """Store ``record`` under a fresh token and return the token."""
        with self._lock.write_locked():
            token = new_session_token()
            while token in self._sessions:
                token = new_session_token()
            self._sessions[token] = record
        logger.info("session_created", token=short_token(token), username=record.username)
        return token

    def get(self, token: uuid.UUID, projector: Callable[[SessionRecord], R]) -> R | None:
        """Apply ``projector`` to the record for ``token`` under the read lock.

        Only the projector's result leaves the store; it should copy out
        what it needs rather than return the record itself.

        Returns:
            The projected value, or None if the token is unknown.
        """
        with self._lock.read_locked():
            record = self._sessions.get(token)
            if record is None:
                return None
            return projector(record)

    def remove(self, token: uuid.UUID) -> SessionRecord | None:
        """Delete the record for ``token`` and return it, if present."""
        with self._lock.write_locked():
            record = self._sessions.pop(token, None)
        if record is not None:
            logger.info("session_removed", token=short_token(token), username=record.username)
        return record

    def exists(self, token: uuid.UUID) -> bool:
        with self._lock.read_locked():
            return token in self._sessions

    def clear(self) -> int:
        """Drop every session (server shutdown). Returns how many were held."""
        with self._lock.write_locked():
            count = len(self._sessions)
            self._sessions.clear()
        logger.info("sessions_cleared", count=count)
        return count

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._sessions)
