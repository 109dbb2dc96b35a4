"""Shared fixtures: an ``AutoApiClient`` wired to an ``httpx.MockTransport``."""

from __future__ import annotations

from typing import Callable

import httpx
import pytest

from auto_api_client import AutoApiClient

API_KEY = "test-key"
BASE_URL = "https://auto-api.test"


class Recorder:
    """Answers every request with a canned response and keeps the requests."""

    def __init__(self, status: int = 200, body: str = "{}") -> None:
        self.status = status
        self.body = body
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(
            self.status,
            text=self.body,
            headers={"content-type": "application/json"},
        )

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def make_client() -> Callable[..., tuple[AutoApiClient, Recorder]]:
    def factory(status: int = 200, body: str = "{}", **kwargs) -> tuple[AutoApiClient, Recorder]:
        recorder = Recorder(status, body)
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(recorder))
        client = AutoApiClient(API_KEY, base_url=BASE_URL, http_client=http_client, **kwargs)
        return client, recorder

    return factory
