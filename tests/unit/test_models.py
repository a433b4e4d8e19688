"""Tests for JMAP wire models."""

from jmap_webmail.models.jmap import (
    Email,
    EmailAddress,
    EmailQueryArguments,
    EmailFilter,
    JmapRequest,
    Mailbox,
    MethodCall,
    SessionDescriptor,
    missing_email_ids,
    sort_mailboxes,
)


class TestSessionDescriptor:
    """Tests for SessionDescriptor."""

    def test_parses_camel_case_document(self, session_document) -> None:
        """Test decoding of a session document."""
        descriptor = SessionDescriptor.model_validate(session_document)

        assert descriptor.api_url == "https://jmap.example.com/api"
        assert descriptor.primary_accounts == {"urn:ietf:params:jmap:mail": "u1234"}
        assert list(descriptor.accounts) == ["u1234"]
        assert descriptor.mail_account_id() == "u1234"

    def test_no_mail_account(self) -> None:
        """Test mail_account_id when nothing offers mail."""
        descriptor = SessionDescriptor.model_validate(
            {"apiUrl": "https://x/api", "primaryAccounts": {}, "accounts": {"a": {}}}
        )
        assert descriptor.mail_account_id() is None


class TestEnvelope:
    """Tests for request serialization."""

    def test_method_calls_serialize_as_arrays(self) -> None:
        """Test the [name, arguments, callId] wire shape."""
        request = JmapRequest(method_calls=[MethodCall("Mailbox/get", {"accountId": "a"}, "0")])

        assert request.model_dump(mode="json", by_alias=True) == {
            "using": ["urn:ietf:params:jmap:core", "urn:ietf:params:jmap:mail"],
            "methodCalls": [["Mailbox/get", {"accountId": "a"}, "0"]],
        }

    def test_query_arguments_default_sort(self) -> None:
        """Test that Email/query sorts newest first by default."""
        arguments = EmailQueryArguments(account_id="a", filter=EmailFilter(in_mailbox="mb"), limit=10)

        assert arguments.model_dump(mode="json", by_alias=True) == {
            "accountId": "a",
            "filter": {"inMailbox": "mb"},
            "sort": [{"property": "receivedAt", "isAscending": False}],
            "position": 0,
            "limit": 10,
        }


class TestEmail:
    """Tests for Email helpers."""

    def test_body_text_prefers_text_part(self, sample_emails) -> None:
        email = Email.model_validate(sample_emails["m3"])
        assert email.body_text() == "Third body"

    def test_body_text_falls_back_to_preview(self, sample_emails) -> None:
        email = Email.model_validate(sample_emails["m2"])
        assert email.body_text() == "second"

    def test_body_text_without_preview(self) -> None:
        email = Email.model_validate({"id": "x"})
        assert email.body_text() == "(no body)"

    def test_unread_from_keywords(self, sample_emails) -> None:
        assert Email.model_validate(sample_emails["m3"]).is_unread is True
        assert Email.model_validate(sample_emails["m2"]).is_unread is False

    def test_null_lists_become_empty(self, sample_emails) -> None:
        email = Email.model_validate(sample_emails["m1"])
        assert email.from_ == []
        assert email.cc == []
        assert email.text_body == []

    def test_address_display(self) -> None:
        assert str(EmailAddress(name="Bob", email="bob@example.com")) == "Bob <bob@example.com>"
        assert str(EmailAddress(email="bob@example.com")) == "bob@example.com"
        assert str(EmailAddress()) == "(unknown)"
        assert EmailAddress(email="bob@example.com").short == "bob@example.com"


def test_sort_mailboxes_by_role_then_name():
    boxes = [
        Mailbox(id="5", name="Zeta"),
        Mailbox(id="4", name="Trash", role="trash"),
        Mailbox(id="3", name="Alpha"),
        Mailbox(id="2", name="Sent", role="sent"),
        Mailbox(id="1", name="Inbox", role="inbox"),
        Mailbox(id="6", name="Spam", role="junk"),
    ]
    assert [m.name for m in sort_mailboxes(boxes)] == ["Inbox", "Sent", "Trash", "Spam", "Alpha", "Zeta"]


def test_missing_email_ids_keeps_request_order():
    emails = [Email(id="c"), Email(id="a")]
    assert missing_email_ids(["a", "b", "c", "d"], emails) == ["b", "d"]
