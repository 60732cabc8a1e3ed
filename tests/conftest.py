"""Pytest fixtures for logglysend tests."""

import threading
import time

import pytest
import requests
import responses

from logglysend import Client

ENDPOINT = "http://logs.test/bulk/test-token"


def wait_for(condition, timeout=5.0):
    """Poll ``condition`` until it is true or ``timeout`` expires."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if condition():
            return True
        time.sleep(0.01)
    return condition()


def sent_lines(calls):
    """All newline-separated entries posted across ``calls``."""
    lines = []
    for call in calls:
        lines.extend(call.request.body.split(b"\n"))
    return lines


@pytest.fixture
def bulk():
    """Fake bulk endpoint; requests to any other URL fail to connect."""
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        rsps.add(responses.POST, ENDPOINT, status=200)
        yield rsps


@pytest.fixture
def make_client(bulk):
    """Factory for clients pointed at the fake endpoint, closed on teardown."""
    clients = []

    def factory(*tags, **kwargs):
        kwargs.setdefault("endpoint", ENDPOINT)
        kwargs.setdefault("flush_interval", 60.0)
        client = Client("test-token", *tags, **kwargs)
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.close()


@pytest.fixture
def lock():
    return threading.Lock()


def fail_bulk(rsps):
    """Make the fake endpoint refuse connections."""
    rsps.replace(
        responses.POST,
        ENDPOINT,
        body=requests.exceptions.ConnectionError("connection refused"),
    )
