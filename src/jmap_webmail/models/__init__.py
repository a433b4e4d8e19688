from jmap_webmail.models.auth import AuthenticatedContext, Credentials
from jmap_webmail.models.jmap import (
    CORE_CAPABILITY,
    MAIL_CAPABILITY,
    Email,
    EmailAddress,
    Mailbox,
    MethodCall,
    MethodResponse,
    SessionDescriptor,
    missing_email_ids,
    sort_mailboxes,
)

__all__ = [
    "CORE_CAPABILITY",
    "MAIL_CAPABILITY",
    "AuthenticatedContext",
    "Credentials",
    "Email",
    "EmailAddress",
    "Mailbox",
    "MethodCall",
    "MethodResponse",
    "SessionDescriptor",
    "missing_email_ids",
    "sort_mailboxes",
]
