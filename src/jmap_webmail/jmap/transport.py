"""Method-call transport for the JMAP API endpoint.

One POST carries a batch of method calls; the response envelope is
decoded into typed method responses.
"""

from typing import Any, TypeVar

import httpx
import structlog
from pydantic import BaseModel, ValidationError

from jmap_webmail.core.logging import sanitize_for_log
from jmap_webmail.exceptions import ApiError, AuthenticationFailed, HttpError, ParseError
from jmap_webmail.jmap.connection import basic_auth, client_scope
from jmap_webmail.models.auth import Credentials
from jmap_webmail.models.jmap import (
    JmapRequest,
    JmapResponse,
    MethodCall,
    MethodError,
    MethodResponse,
)

logger = structlog.get_logger(__name__)

# Correlation id used when a request carries exactly one call
SINGLE_CALL_ID = "0"

# Cap on raw body excerpts carried in ParseError
PARSE_EXCERPT_LIMIT = 500
ERROR_BODY_LIMIT = 200

ResultT = TypeVar("ResultT", bound=BaseModel)


class JmapTransport:
    """Authenticated POST of method-call batches to a JMAP API URL.

    Attributes:
        api_url: The API endpoint from the session document.
        credentials: Credentials sent as Basic authorization.
    """

    def __init__(
        self,
        api_url: str,
        credentials: Credentials,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            api_url: The API endpoint.
            credentials: The user's credentials.
            http_client: Optional shared client; a short-lived one is
                opened per call otherwise.
        """
        self.api_url = api_url
        self.credentials = credentials
        self._http_client = http_client
        self._auth = basic_auth(credentials)

    def call(self, method_calls: list[MethodCall]) -> list[MethodResponse]:
        """POST a batch of method calls and return the method responses.

        Response order is returned as sent by the server; callers
        correlate by call id.

        Raises:
            HttpError: On connection failure or a non-2xx status.
            AuthenticationFailed: On HTTP 401.
            ParseError: If the body is not a valid response envelope.
        """
        payload = JmapRequest(method_calls=method_calls).model_dump(mode="json", by_alias=True)
        methods = [call.name for call in method_calls]
        logger.debug("jmap_call", api_url=self.api_url, methods=methods)

        try:
            with client_scope(self._http_client) as client:
                response = client.post(
                    self.api_url,
                    json=payload,
                    auth=self._auth,
                    headers={"Content-Type": "application/json"},
                )
        except httpx.HTTPError as e:
            logger.error("jmap_call_failed", api_url=self.api_url, error=str(e))
            raise HttpError(str(e)) from e

        if response.status_code == 401:
            logger.warning("jmap_call_unauthorized", api_url=self.api_url)
            raise AuthenticationFailed()
        if not response.is_success:
            body = response.content[:ERROR_BODY_LIMIT].decode("utf-8", errors="ignore")
            logger.error(
                "jmap_call_http_error",
                status=response.status_code,
                body=sanitize_for_log(body, ERROR_BODY_LIMIT),
            )
            raise HttpError(
                f"HTTP {response.status_code} error: {body or '(empty response)'}",
                status=response.status_code,
                body=body,
            )

        try:
            envelope = JmapResponse.model_validate_json(response.content)
        except ValidationError as e:
            excerpt = response.content[:PARSE_EXCERPT_LIMIT].decode("utf-8", errors="ignore")
            logger.error("jmap_response_invalid", error=str(e), excerpt=sanitize_for_log(excerpt, 200))
            raise ParseError(f"Invalid response envelope: {e}", excerpt=excerpt) from e

        logger.debug(
            "jmap_call_complete",
            methods=methods,
            responses=[r.name for r in envelope.method_responses],
        )
        return envelope.method_responses

    def call_single(
        self,
        name: str,
        arguments: BaseModel | dict[str, Any],
        result_model: type[ResultT],
    ) -> ResultT:
        """Issue one method call and decode its result.

        Args:
            name: The JMAP method name, e.g. ``Mailbox/get``.
            arguments: Typed arguments, or a raw dict for methods
                without a model.
            result_model: Model the result arguments are validated into.

        Returns:
            The decoded result.

        Raises:
            ApiError: If no response came back or it is for another method.
            ParseError: If the result does not match ``result_model``.
        """
        if isinstance(arguments, BaseModel):
            raw_arguments = arguments.model_dump(mode="json", by_alias=True)
        else:
            raw_arguments = dict(arguments)

        responses = self.call([MethodCall(name, raw_arguments, SINGLE_CALL_ID)])
        if not responses:
            raise ApiError(f"Empty methodResponses for {name}")

        first = responses[0]
        if first.name == "error":
            try:
                error = MethodError.model_validate(first.arguments)
            except ValidationError as e:
                raise ParseError(f"Invalid error response for {name}: {e}") from e
            detail = f": {error.description}" if error.description else ""
            logger.warning("jmap_method_error", method=name, type=error.type)
            raise ApiError(f"{name} failed with {error.type}{detail}")
        if first.name != name:
            logger.warning("jmap_unexpected_response", expected=name, received=first.name)
            raise ApiError(f"Unexpected response: expected {name}, got {first.name}")

        try:
            return result_model.model_validate(first.arguments)
        except ValidationError as e:
            raise ParseError(f"Invalid {name} response: {e}") from e
