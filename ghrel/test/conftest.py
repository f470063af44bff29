from __future__ import annotations

import pytest

from ghrel.core.config import GitHubConfig
from ghrel.hosting.client import HostingClient
from ghrel.hosting.http import MockHttpClient

API = "https://api.github.com"


@pytest.fixture
def http() -> MockHttpClient:
    return MockHttpClient()


@pytest.fixture
def client(http: MockHttpClient) -> HostingClient:
    return HostingClient(http=http, token="ghp_test", settings=GitHubConfig())
