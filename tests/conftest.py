"""
Shared fixtures for the back-office client tests.
"""

import json
from unittest.mock import MagicMock

import pytest
import requests

from backoffice_client.config import ApiConfig
from backoffice_client.http import HttpClient
from backoffice_client.repository import ApiRepository
from backoffice_client.token_store import MemoryTokenStore

BASE_URL = "https://api.backoffice.test"


def make_response(status_code, payload=None, text=None):
    """Build a real requests.Response with the given body."""
    response = requests.Response()
    response.status_code = status_code
    response.encoding = "utf-8"
    if text is not None:
        response._content = text.encode("utf-8")
    elif payload is not None:
        response._content = json.dumps(payload).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    else:
        response._content = b""
    return response


def sent_requests(session):
    """(method, url, kwargs) for every request the mocked session received."""
    return [(c.args[0], c.args[1], c.kwargs) for c in session.request.call_args_list]


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def token_store():
    return MemoryTokenStore()


@pytest.fixture
def make_repository(session, token_store):
    def _make(**config_overrides):
        config = ApiConfig(base_url=BASE_URL, **config_overrides)
        return ApiRepository(config, token_store=token_store, http_client=HttpClient(session=session))

    return _make


@pytest.fixture
def repository(make_repository):
    return make_repository()
