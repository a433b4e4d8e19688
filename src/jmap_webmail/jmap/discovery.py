"""JMAP session discovery.

Fetches the session document from a well-known URL, following redirects
by hand so the same credentials reach the final host, then picks the
mail account and API endpoint out of it.
"""

import httpx
import structlog
from pydantic import ValidationError

from jmap_webmail.core.logging import sanitize_for_log
from jmap_webmail.exceptions import ApiError, HttpError, ParseError
from jmap_webmail.jmap.client import JmapClient
from jmap_webmail.jmap.connection import basic_auth, client_scope
from jmap_webmail.jmap.redirects import Fail, Follow, next_action
from jmap_webmail.models.auth import AuthenticatedContext, Credentials
from jmap_webmail.models.jmap import SessionDescriptor

logger = structlog.get_logger(__name__)

# Number of GETs issued before giving up on a redirect chain
MAX_REDIRECTS = 5

# Cap on the raw session body quoted in errors
SESSION_EXCERPT_LIMIT = 500
DIAGNOSTIC_LIMIT = 200


def fetch_session_document(
    well_known_url: str,
    auth: httpx.Auth,
    http_client: httpx.Client | None = None,
    max_redirects: int = MAX_REDIRECTS,
) -> tuple[str, str]:
    """GET the session document, following redirects with ``auth`` on every hop.

    Args:
        well_known_url: Where discovery starts.
        auth: Authorization presented at each hop.
        http_client: Optional shared httpx client.
        max_redirects: Maximum number of requests issued.

    Returns:
        The final URL and the response body.

    Raises:
        AuthenticationFailed: On a 401 at any hop.
        HttpError: On connection failures, error statuses, empty bodies
            or when the hop budget runs out.
    """
    current_url = well_known_url

    with client_scope(http_client) as client:
        for hop in range(1, max_redirects + 1):
            logger.debug("jmap_discovery_hop", hop=hop, url=current_url)
            try:
                response = client.get(current_url, auth=auth, follow_redirects=False)
            except httpx.HTTPError as e:
                logger.error("jmap_discovery_connection_failed", url=current_url, error=str(e))
                raise HttpError(str(e)) from e

            action = next_action(current_url, response)
            if isinstance(action, Follow):
                logger.info(
                    "jmap_redirect",
                    status=response.status_code,
                    source=current_url,
                    target=action.url,
                )
                current_url = action.url
                continue
            if isinstance(action, Fail):
                logger.warning(
                    "jmap_discovery_failed",
                    url=current_url,
                    status=response.status_code,
                    error=action.error.message,
                )
                raise action.error
            return current_url, action.body

    logger.error("jmap_too_many_redirects", url=well_known_url, hops=max_redirects)
    raise HttpError("Too many redirects")


def parse_session_document(body: str) -> SessionDescriptor:
    """Decode a session document.

    Raises:
        ParseError: With an excerpt of ``body`` if it is not a valid
            session document.
    """
    try:
        return SessionDescriptor.model_validate_json(body)
    except ValidationError as e:
        excerpt = body.encode("utf-8")[:SESSION_EXCERPT_LIMIT].decode("utf-8", errors="ignore")
        raise ParseError(
            f"Failed to parse session: {e}. Response was: {excerpt}",
            excerpt=excerpt,
        ) from e


def resolve_account_id(descriptor: SessionDescriptor, body: str = "") -> str:
    """Return the mail account id of a session document.

    ``body`` is the raw document, quoted in the error for diagnosis.

    Raises:
        ApiError: If no account offers the mail capability.
    """
    account_id = descriptor.mail_account_id()
    if account_id is None:
        primary_caps = str(list(descriptor.primary_accounts))[:DIAGNOSTIC_LIMIT]
        account_ids = str(list(descriptor.accounts))[:DIAGNOSTIC_LIMIT]
        excerpt = body.encode("utf-8")[:SESSION_EXCERPT_LIMIT].decode("utf-8", errors="ignore")
        raise ApiError(
            f"No mail account found. primaryAccounts: {primary_caps}, accounts: {account_ids}."
            f" Full response: {excerpt}"
        )
    return account_id


def discover(
    well_known_url: str,
    username: str,
    password: str,
    http_client: httpx.Client | None = None,
) -> tuple[SessionDescriptor, JmapClient]:
    """Log in: discover the API endpoint and mail account for a user.

    Args:
        well_known_url: The server's ``/.well-known/jmap`` URL.
        username: Login name.
        password: Password.
        http_client: Optional shared httpx client, also handed to the
            returned JmapClient.

    Returns:
        The session document and a client bound to the mail account.

    Raises:
        AuthenticationFailed: If the server rejects the credentials.
        HttpError: On transport failures and bad statuses.
        ParseError: If the session document cannot be decoded.
        ApiError: If the session has no mail account.
    """
    credentials = Credentials.from_plain(username, password)
    auth = basic_auth(credentials)

    logger.info("jmap_discovery_started", url=well_known_url, username=sanitize_for_log(username))
    final_url, body = fetch_session_document(well_known_url, auth, http_client)

    descriptor = parse_session_document(body)
    account_id = resolve_account_id(descriptor, body)

    context = AuthenticatedContext(
        credentials=credentials,
        api_url=descriptor.api_url,
        account_id=account_id,
    )
    logger.info(
        "jmap_discovery_complete",
        session_url=final_url,
        api_url=descriptor.api_url,
        account_id=account_id,
    )
    return descriptor, JmapClient(context, http_client)
