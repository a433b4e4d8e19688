"""JMAP wire models for jmap-webmail.

Typed request and response structures for the handful of JMAP methods
the webmail uses, validated with pydantic at the transport boundary.
Field names are snake_case in Python and camelCase on the wire.
"""

from typing import Any, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

CORE_CAPABILITY = "urn:ietf:params:jmap:core"
MAIL_CAPABILITY = "urn:ietf:params:jmap:mail"

# Properties requested by Email/get
EMAIL_PROPERTIES: tuple[str, ...] = (
    "id",
    "from",
    "to",
    "cc",
    "subject",
    "receivedAt",
    "preview",
    "textBody",
    "bodyValues",
    "keywords",
)

# Display order of mailboxes by role; unknown roles sort after these
ROLE_ORDER: dict[str, int] = {
    "inbox": 0,
    "drafts": 1,
    "sent": 2,
    "trash": 3,
    "junk": 4,
    "spam": 4,
    "archive": 5,
}
OTHER_ROLE_ORDER = 10


class JmapModel(BaseModel):
    """Base for JMAP objects: camelCase aliases, unknown keys ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


# ---------------------------------------------------------------------------
# Session document
# ---------------------------------------------------------------------------


class Account(JmapModel):
    """One entry of the session document's ``accounts`` map."""

    name: str | None = None
    is_personal: bool | None = None
    is_read_only: bool | None = None
    account_capabilities: dict[str, Any] = Field(default_factory=dict)

    def supports(self, capability: str) -> bool:
        """Return True if the account advertises ``capability``."""
        return capability in self.account_capabilities


class SessionDescriptor(JmapModel):
    """The session document returned by the well-known JMAP endpoint."""

    api_url: str
    primary_accounts: dict[str, str] = Field(default_factory=dict)
    accounts: dict[str, Account] = Field(default_factory=dict)
    capabilities: dict[str, Any] = Field(default_factory=dict)
    download_url: str | None = None
    upload_url: str | None = None
    username: str | None = None
    state: str | None = None

    @field_validator("accounts", mode="before")
    @classmethod
    def _accounts_null_as_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    def mail_account_id(self) -> str | None:
        """Pick the account id used for mail.

        The primary mail account wins. Otherwise the first account, in
        document order, that advertises the mail capability.
        """
        primary = self.primary_accounts.get(MAIL_CAPABILITY)
        if primary:
            return primary
        for account_id, account in self.accounts.items():
            if account.supports(MAIL_CAPABILITY):
                return account_id
        return None


# ---------------------------------------------------------------------------
# Envelope
# ---------------------------------------------------------------------------


class MethodCall(NamedTuple):
    """One method invocation: ``[name, arguments, callId]`` on the wire."""

    name: str
    arguments: dict[str, Any]
    call_id: str


class MethodResponse(NamedTuple):
    """One method result: ``[name, arguments, callId]`` on the wire."""

    name: str
    arguments: dict[str, Any]
    call_id: str


class JmapRequest(JmapModel):
    """Request envelope POSTed to the API endpoint."""

    using: list[str] = Field(default_factory=lambda: [CORE_CAPABILITY, MAIL_CAPABILITY])
    method_calls: list[MethodCall]


class JmapResponse(JmapModel):
    """Response envelope returned by the API endpoint."""

    method_responses: list[MethodResponse]
    session_state: str | None = None


class MethodError(JmapModel):
    """Arguments of an ``error`` method response."""

    type: str = "unknown"
    description: str | None = None


# ---------------------------------------------------------------------------
# Mail objects
# ---------------------------------------------------------------------------


class Mailbox(JmapModel):
    """A mailbox (folder) visible to the account."""

    id: str
    name: str
    parent_id: str | None = None
    role: str | None = None
    sort_order: int = 0
    total_emails: int = 0
    unread_emails: int = 0

    @property
    def role_rank(self) -> int:
        """Position of this mailbox's role in the display order."""
        if self.role is None:
            return OTHER_ROLE_ORDER
        return ROLE_ORDER.get(self.role.lower(), OTHER_ROLE_ORDER)


class EmailAddress(JmapModel):
    """A display name and address pair."""

    name: str | None = None
    email: str | None = None

    @property
    def short(self) -> str:
        """Name if present, else the address."""
        return self.name or self.email or "(unknown)"

    def __str__(self) -> str:
        if self.name and self.email:
            return f"{self.name} <{self.email}>"
        return self.email or self.name or "(unknown)"


class EmailBodyPart(JmapModel):
    part_id: str | None = None
    type: str | None = None


class EmailBodyValue(JmapModel):
    value: str = ""
    is_truncated: bool = False


class Email(JmapModel):
    """An email with the properties requested by Email/get."""

    id: str
    from_: list[EmailAddress] = Field(default_factory=list, alias="from")
    to: list[EmailAddress] = Field(default_factory=list)
    cc: list[EmailAddress] = Field(default_factory=list)
    subject: str | None = None
    received_at: str = ""
    preview: str = ""
    text_body: list[EmailBodyPart] = Field(default_factory=list)
    body_values: dict[str, EmailBodyValue] = Field(default_factory=dict)
    keywords: dict[str, bool] = Field(default_factory=dict)

    @field_validator("from_", "to", "cc", "text_body", "body_values", "keywords", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return {} if info.field_name in ("body_values", "keywords") else []
        return value

    @property
    def is_unread(self) -> bool:
        return not self.keywords.get("$seen", False)

    def body_text(self) -> str:
        """Return the first text part with a fetched value, else the preview."""
        for part in self.text_body:
            if part.part_id is not None and part.part_id in self.body_values:
                return self.body_values[part.part_id].value
        return self.preview or "(no body)"


# ---------------------------------------------------------------------------
# Method arguments and results
# ---------------------------------------------------------------------------


class MailboxGetArguments(JmapModel):
    account_id: str
    # None means every mailbox visible to the account
    ids: list[str] | None = None


class MailboxGetResponse(JmapModel):
    account_id: str | None = None
    state: str | None = None
    items: list[Mailbox] = Field(default_factory=list, alias="list")
    not_found: list[str] = Field(default_factory=list)


class EmailFilter(JmapModel):
    in_mailbox: str


class Comparator(JmapModel):
    property: str
    is_ascending: bool = False


class EmailQueryArguments(JmapModel):
    account_id: str
    filter: EmailFilter
    sort: list[Comparator] = Field(
        default_factory=lambda: [Comparator(property="receivedAt", is_ascending=False)]
    )
    position: int = Field(0, ge=0)
    limit: int


class EmailQueryResponse(JmapModel):
    account_id: str | None = None
    ids: list[str] = Field(default_factory=list)
    position: int = 0
    total: int | None = None


class EmailGetArguments(JmapModel):
    account_id: str
    ids: list[str]
    properties: list[str] = Field(default_factory=lambda: list(EMAIL_PROPERTIES))
    fetch_text_body_values: bool = True


class EmailGetResponse(JmapModel):
    account_id: str | None = None
    state: str | None = None
    items: list[Email] = Field(default_factory=list, alias="list")
    not_found: list[str] = Field(default_factory=list)

    @field_validator("not_found", mode="before")
    @classmethod
    def _not_found_null_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


def sort_mailboxes(mailboxes: list[Mailbox]) -> list[Mailbox]:
    """Order mailboxes by role (inbox first), then by name."""
    return sorted(mailboxes, key=lambda m: (m.role_rank, m.name))


def missing_email_ids(requested: list[str], emails: list[Email]) -> list[str]:
    """Return requested ids absent from ``emails``, in request order."""
    returned = {email.id for email in emails}
    return [email_id for email_id in requested if email_id not in returned]


class RawGetResponse(JmapModel):
    """A ``*/get`` result with the objects left as raw JSON."""

    items: list[dict[str, Any]] = Field(default_factory=list, alias="list")
    not_found: list[str] | None = None
