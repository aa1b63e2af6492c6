import json

import httpx
import pytest

from client.gitlab_manager import GitLabClient
from config.settings import Settings

TOKEN = "glpat-test-token"
BASE_URL = "https://gitlab.example.com"


class FakeGitLab:
    """Records every request and answers with a fixed response."""

    def __init__(self, status_code: int = 200, body=None):
        self.status_code = status_code
        self.body = body
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.body is None:
            return httpx.Response(self.status_code)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last.content)


def offline(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("Network is unreachable", request=request)


@pytest.fixture
def settings():
    return Settings(GITLAB_TOKEN=TOKEN, GITLAB_API_URL=BASE_URL, REQUEST_TIMEOUT="30")


@pytest.fixture
def gitlab():
    return FakeGitLab(body=[])


@pytest.fixture
def client(settings, gitlab):
    return GitLabClient.from_settings(settings, transport=gitlab.transport)


@pytest.fixture
def offline_client(settings):
    return GitLabClient.from_settings(settings, transport=httpx.MockTransport(offline))
