"""
Pytest configuration and shared fixtures.

Every test gets its own SQLite file under ``tmp_path``.  The identity
service is replaced by :class:`FakeIdentityService`, patched in place of
``requests.get``, so no network access is needed.
"""

import uuid

import pytest
from fastapi.testclient import TestClient

from poptape_lists_api.app.core import security
from poptape_lists_api.app.core.config import settings
from poptape_lists_api.app.core.db import init_db
from poptape_lists_api.app.main import create_app

AUTHY_URL = "http://authy.test/authy/checkaccess"

USER_ONE = "0b6c3c0e-8a5e-4c1a-9a57-3d2f7c1e9b01"
USER_TWO = "6f1d2a4b-3c5e-4d7f-8a9b-0c1d2e3f4a5b"
USER_THREE = "9a8b7c6d-5e4f-4a3b-8c2d-1e0f9a8b7c6d"

TOKEN_ONE = "token-one"
TOKEN_TWO = "token-two"
TOKEN_THREE = "token-three"


def new_item_id() -> str:
    return str(uuid.uuid4())


class FakeResponse:
    """Just enough of ``requests.Response`` for the identity gate."""

    def __init__(self, status_code=200, body=None, invalid_json=False):
        self.status_code = status_code
        self._body = body
        self._invalid_json = invalid_json

    def json(self):
        if self._invalid_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._body


class FakeIdentityService:
    """Stand-in for ``requests.get`` against the identity service.

    Tokens registered with :meth:`register` answer ``200`` with their
    ``public_id``; :meth:`respond` installs an arbitrary response for a
    token; unknown tokens answer ``401``.  Setting ``error`` makes every
    call raise it instead.
    """

    def __init__(self):
        self.responses = {}
        self.calls = []
        self.error = None

    def register(self, token, public_id):
        self.responses[token] = FakeResponse(200, {"public_id": public_id})

    def respond(self, token, response):
        self.responses[token] = response

    def __call__(self, url, headers=None, timeout=None, **kwargs):
        self.calls.append({"url": url, "headers": dict(headers or {}), "timeout": timeout})
        if self.error is not None:
            raise self.error
        token = (headers or {}).get("X-Access-Token")
        return self.responses.get(token, FakeResponse(401, {"message": "Invalid token"}))


@pytest.fixture
def database(tmp_path, monkeypatch):
    """Point the settings at a fresh, migrated database file."""
    db_path = tmp_path / "lists.db"
    monkeypatch.setattr(settings, "database_url", str(db_path))
    init_db()
    return db_path


@pytest.fixture
def identity_service(monkeypatch):
    fake = FakeIdentityService()
    fake.register(TOKEN_ONE, USER_ONE)
    fake.register(TOKEN_TWO, USER_TWO)
    fake.register(TOKEN_THREE, USER_THREE)
    monkeypatch.setattr(settings, "authy_url", AUTHY_URL)
    monkeypatch.setattr(security.requests, "get", fake)
    return fake


@pytest.fixture
def client(database, identity_service):
    with TestClient(create_app()) as test_client:
        yield test_client


def auth(token=TOKEN_ONE):
    return {"X-Access-Token": token}
