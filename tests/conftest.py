"""Pytest configuration and fixtures."""

import os

import pytest

# Set test environment variables before importing settings
os.environ.update(
    {
        "JMAP_WEBMAIL_JMAP__WELL_KNOWN_URL": "https://mail.example.com/.well-known/jmap",
    }
)


@pytest.fixture
def session_document() -> dict:
    """Session document naming a primary mail account."""
    return {
        "apiUrl": "https://jmap.example.com/api",
        "downloadUrl": "https://jmap.example.com/download/{accountId}/{blobId}/{name}",
        "primaryAccounts": {"urn:ietf:params:jmap:mail": "u1234"},
        "accounts": {"u1234": {}},
    }


@pytest.fixture
def sample_emails() -> dict[str, dict]:
    """Three Email objects as a JMAP server returns them, keyed by id."""
    return {
        "m3": {
            "id": "m3",
            "from": [{"name": "Carol", "email": "carol@example.com"}],
            "to": [{"name": None, "email": "alice@example.com"}],
            "cc": None,
            "subject": "Newest",
            "receivedAt": "2024-05-03T08:00:00Z",
            "preview": "third",
            "textBody": [{"partId": "1", "type": "text/plain"}],
            "bodyValues": {"1": {"value": "Third body", "isTruncated": False}},
            "keywords": {},
        },
        "m2": {
            "id": "m2",
            "from": [{"name": "Bob", "email": "bob@example.com"}],
            "to": [{"email": "alice@example.com"}],
            "subject": None,
            "receivedAt": "2024-05-02T08:00:00Z",
            "preview": "second",
            "textBody": [],
            "bodyValues": {},
            "keywords": {"$seen": True},
        },
        "m1": {
            "id": "m1",
            "from": None,
            "to": [],
            "subject": "Oldest",
            "receivedAt": "2024-05-01T08:00:00Z",
            "preview": "first",
            "keywords": {"$seen": True},
        },
    }
