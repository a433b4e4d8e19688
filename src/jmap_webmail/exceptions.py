"""Custom exceptions for jmap-webmail.

This module defines the exception hierarchy used throughout the
jmap_webmail package. Protocol failures fall into three kinds:
transport (HttpError), decoding (ParseError) and semantics (ApiError).
"""


class JmapWebmailError(Exception):
    """Base exception for all jmap-webmail errors.

    All custom exceptions in the jmap_webmail package inherit from
    this class, allowing for broad exception catching when needed.

    Attributes:
        message: A human-readable description of the error.
    """

    def __init__(self, message: str = "An error occurred in jmap-webmail") -> None:
        """Initialize the exception with an optional message.

        Args:
            message: A description of the error that occurred.
        """
        self.message = message
        super().__init__(self.message)


class ConfigurationError(JmapWebmailError):
    """Raised when there is an error in the configuration.

    This exception is raised when configuration files are missing,
    malformed, or contain invalid values.
    """

    def __init__(self, message: str = "Configuration error") -> None:
        super().__init__(message)


class HttpError(JmapWebmailError):
    """Raised when an HTTP exchange with the JMAP server fails.

    Covers connection failures, non-2xx statuses, redirects without a
    Location header, empty bodies and an exhausted redirect budget.

    Attributes:
        status: HTTP status code, if a response was received.
        body: Truncated response body, if any.
    """

    def __init__(
        self,
        message: str = "HTTP error",
        status: int | None = None,
        body: str | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: A description of the HTTP failure.
            status: Optional HTTP status code.
            body: Optional (already truncated) response body.
        """
        self.status = status
        self.body = body
        super().__init__(message)


class AuthenticationFailed(HttpError):
    """Raised when the server rejects the credentials (HTTP 401)."""

    def __init__(self, message: str = "Authentication failed (401 Unauthorized)") -> None:
        super().__init__(message, status=401)


class ParseError(JmapWebmailError):
    """Raised when a response body is not valid JSON or has the wrong shape.

    Attributes:
        excerpt: Truncated raw body kept for diagnosis.
    """

    def __init__(self, message: str = "Parse error", excerpt: str | None = None) -> None:
        self.excerpt = excerpt
        super().__init__(message)


class ApiError(JmapWebmailError):
    """Raised when a well-formed response is semantically wrong.

    Examples are a session without a mail account, an empty
    methodResponses list, or a response for an unexpected method.
    """

    def __init__(self, message: str = "API error") -> None:
        super().__init__(message)


class LoginRejected(JmapWebmailError):
    """Raised when a login attempt is missing its username or password."""

    def __init__(self, message: str = "Username and password required") -> None:
        super().__init__(message)


def describe_error(error: Exception) -> str:
    """Format an exception for display to an end user.

    Args:
        error: Any exception raised by the package (or an unexpected one).

    Returns:
        A one-line, kind-prefixed description.
    """
    if isinstance(error, HttpError):
        return f"HTTP error: {error.message}"
    if isinstance(error, ParseError):
        return f"Parse error: {error.message}"
    if isinstance(error, ApiError):
        return f"API error: {error.message}"
    if isinstance(error, JmapWebmailError):
        return error.message
    return str(error)
