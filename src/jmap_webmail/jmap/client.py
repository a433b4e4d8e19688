"""JMAP mail client.

Read-only mail operations (mailboxes, message ids, message bodies) for
one account, built on the method-call transport.
"""

from typing import Any

import httpx
import structlog
from pydantic import SecretStr

from jmap_webmail.jmap.transport import JmapTransport
from jmap_webmail.models.auth import AuthenticatedContext, Credentials
from jmap_webmail.models.jmap import (
    Email,
    EmailFilter,
    EmailGetArguments,
    EmailGetResponse,
    EmailQueryArguments,
    EmailQueryResponse,
    Mailbox,
    MailboxGetArguments,
    MailboxGetResponse,
    RawGetResponse,
    missing_email_ids,
)

logger = structlog.get_logger(__name__)

# Page size used by the web front end
DEFAULT_QUERY_LIMIT = 50


class JmapClient:
    """Mail operations bound to a single JMAP account.

    Instances are cheap: the web layer rebuilds one per request from the
    stored session with :meth:`from_session`.
    """

    def __init__(
        self,
        context: AuthenticatedContext,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            context: Credentials, API URL and account id.
            http_client: Optional shared httpx client.
        """
        self.context = context
        self.transport = JmapTransport(context.api_url, context.credentials, http_client)

    @classmethod
    def from_session(
        cls,
        username: str,
        password: str | SecretStr,
        api_url: str,
        account_id: str,
        http_client: httpx.Client | None = None,
    ) -> "JmapClient":
        """Rebuild a client from stored session data without rediscovery."""
        secret = password if isinstance(password, SecretStr) else SecretStr(password)
        credentials = Credentials(username=username, password=secret)
        context = AuthenticatedContext(credentials=credentials, api_url=api_url, account_id=account_id)
        return cls(context, http_client)

    @property
    def account_id(self) -> str:
        return self.context.account_id

    @property
    def api_url(self) -> str:
        return self.context.api_url

    @property
    def username(self) -> str:
        return self.context.credentials.username

    def get_mailboxes(self) -> list[Mailbox]:
        """Return every mailbox visible to the account."""
        result = self.transport.call_single(
            "Mailbox/get",
            MailboxGetArguments(account_id=self.account_id, ids=None),
            MailboxGetResponse,
        )
        logger.debug("jmap_mailboxes_fetched", count=len(result.items))
        return result.items

    def query_emails(
        self, mailbox_id: str, limit: int = DEFAULT_QUERY_LIMIT, position: int = 0
    ) -> list[str]:
        """Return up to ``limit`` email ids in a mailbox, newest first.

        ``position`` skips that many of the newest messages, for paging.
        Ids are returned in server order.
        """
        result = self.transport.call_single(
            "Email/query",
            EmailQueryArguments(
                account_id=self.account_id,
                filter=EmailFilter(in_mailbox=mailbox_id),
                position=position,
                limit=limit,
            ),
            EmailQueryResponse,
        )
        logger.debug(
            "jmap_email_query",
            mailbox_id=mailbox_id,
            position=position,
            count=len(result.ids),
            total=result.total,
        )
        return result.ids

    def get_emails(self, ids: list[str]) -> list[Email]:
        """Fetch emails by id.

        An empty ``ids`` returns an empty list without a request. Ids the
        server does not return are logged and skipped; the found subset
        is still returned.
        """
        if not ids:
            return []

        result = self.transport.call_single(
            "Email/get",
            EmailGetArguments(account_id=self.account_id, ids=list(ids)),
            EmailGetResponse,
        )
        emails = result.items

        if len(emails) != len(ids):
            logger.warning(
                "jmap_email_get_mismatch",
                requested=len(ids),
                returned=len(emails),
                missing_ids=missing_email_ids(list(ids), emails),
                not_found=result.not_found,
            )
        return emails

    def get_email(self, email_id: str) -> Email | None:
        """Fetch one email, or None if the server does not return it."""
        emails = self.get_emails([email_id])
        return emails[0] if emails else None

    def get_email_raw(self, email_id: str) -> dict[str, Any] | None:
        """Fetch one email as the raw JSON object the server sent."""
        result = self.transport.call_single(
            "Email/get",
            EmailGetArguments(account_id=self.account_id, ids=[email_id]),
            RawGetResponse,
        )
        return result.items[0] if result.items else None
