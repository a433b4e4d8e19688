"""Login, logout and per-request client lookup for the web front end."""

import uuid
from typing import TYPE_CHECKING

import httpx
import structlog

from jmap_webmail.core.logging import sanitize_for_log, short_token
from jmap_webmail.exceptions import LoginRejected
from jmap_webmail.jmap import JmapClient, discover
from jmap_webmail.sessions import SessionRecord, SessionStore

if TYPE_CHECKING:
    from jmap_webmail.config import Settings

logger = structlog.get_logger(__name__)


class WebmailService:
    """Glue between the web layer, JMAP discovery and the session store.

    The web layer calls :meth:`login` on form submission, keeps the
    returned token in a cookie, and calls :meth:`client_for` on every
    authenticated request.
    """

    def __init__(
        self,
        settings: "Settings",
        store: SessionStore | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.settings = settings
        self.store = store if store is not None else SessionStore()
        self._http_client = http_client

    def login(self, username: str, password: str) -> uuid.UUID:
        """Authenticate against the JMAP server and open a session.

        Args:
            username: Submitted login name.
            password: Submitted password.

        Returns:
            The new session token.

        Raises:
            LoginRejected: If either field is empty.
            JmapWebmailError: Any discovery failure, unchanged.
        """
        if not username or not password:
            logger.warning("login_missing_credentials")
            raise LoginRejected()

        logger.info("login_attempt", username=sanitize_for_log(username))
        descriptor, client = discover(
            self.settings.jmap.well_known_url,
            username,
            password,
            http_client=self._http_client,
        )

        record = SessionRecord(
            username=username,
            password=client.context.credentials.password,
            api_url=client.api_url,
            account_id=client.account_id,
            download_url=descriptor.download_url,
        )
        token = self.store.create(record)
        logger.info(
            "login_succeeded",
            username=sanitize_for_log(username),
            account_id=client.account_id,
            token=short_token(token),
        )
        return token

    def logout(self, token: uuid.UUID) -> bool:
        """Close a session. Returns False if it was already gone."""
        return self.store.remove(token) is not None

    def is_authenticated(self, token: uuid.UUID | None) -> bool:
        return token is not None and self.store.exists(token)

    def client_for(self, token: uuid.UUID) -> JmapClient | None:
        """Rebuild the JMAP client for a session, or None if unknown."""
        return self.store.get(
            token,
            lambda record: JmapClient(record.context(), self._http_client),
        )

    def username_for(self, token: uuid.UUID) -> str | None:
        return self.store.get(token, lambda record: record.username)

    def shutdown(self) -> None:
        """Drop all sessions."""
        self.store.clear()
