"""Shared fixtures for datasource adapter tests."""

from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it was asked to send."""

    def __init__(self, handler: Callable) -> None:
        super().__init__(handler)
        self.requests: list[httpx.Request] = []

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return await super().handle_async_request(request)

    @property
    def call_count(self) -> int:
        return len(self.requests)


@pytest.fixture
def make_client():
    """Return a factory ``handler -> (AsyncClient, RecordingTransport)``."""

    def _make(handler: Callable) -> tuple[httpx.AsyncClient, RecordingTransport]:
        transport = RecordingTransport(handler)
        client = httpx.AsyncClient(transport=transport)
        return client, transport

    return _make
