"""Fixtures for unit tests that talk to a fake JMAP server."""

import httpx
import pytest
from fakes import Handler, RecordingHandler


@pytest.fixture
def make_http_client():
    """Build an httpx.Client backed by a recording MockTransport."""
    clients: list[httpx.Client] = []

    def factory(handler: Handler) -> tuple[httpx.Client, RecordingHandler]:
        recorder = RecordingHandler(handler)
        client = httpx.Client(transport=httpx.MockTransport(recorder))
        clients.append(client)
        return client, recorder

    yield factory

    for client in clients:
        client.close()
