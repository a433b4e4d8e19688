"""Authentication data for jmap-webmail.

This module provides the immutable credential and context objects
shared by discovery, the method-call transport and the session store.
"""

from dataclasses import dataclass

from pydantic import SecretStr


@dataclass(frozen=True)
class Credentials:
    """Username and password presented with every JMAP request.

    Attributes:
        username: The login name.
        password: The password, wrapped so it never appears in repr or logs.
    """

    username: str
    password: SecretStr

    @classmethod
    def from_plain(cls, username: str, password: str) -> "Credentials":
        return cls(username=username, password=SecretStr(password))


@dataclass(frozen=True)
class AuthenticatedContext:
    """Everything needed to talk to one JMAP account without rediscovery.

    Attributes:
        credentials: The user's credentials.
        api_url: The API endpoint taken from the session document.
        account_id: The mail account all operations are scoped to.
    """

    credentials: Credentials
    api_url: str
    account_id: str
