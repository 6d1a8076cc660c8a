"""Shared fixtures for cdr_client tests."""

import json

import httpx
import pytest

from cdr_client import CDRClient


class RecordingHandler:
    """MockTransport handler that records requests and replays one response."""

    def __init__(self, response: httpx.Response):
        self.response = response
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(
            self.response.status_code,
            headers=self.response.headers,
            content=self.response.content,
        )

    def sent_json(self, index=0):
        return json.loads(self.requests[index].content)


@pytest.fixture
def make_config():
    def _make(url="https://cdr.example.org/ehrbase", username="alice", password="secret"):
        return {
            "url": url,
            "authentication": {"type": "basic", "username": username, "password": password},
        }
    return _make


@pytest.fixture
def make_client(make_config):
    """Build a CDRClient whose requests are answered by handler."""
    def _make(handler, **config_kwargs) -> CDRClient:
        return CDRClient(make_config(**config_kwargs), transport=httpx.MockTransport(handler))
    return _make


@pytest.fixture
def recording_handler():
    return RecordingHandler
