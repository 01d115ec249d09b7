"""Test fixtures for microsling tests."""

import pytest

from starlette.testclient import TestClient

from microsling import create_app, create_asgi_app


def context_document(title="Hello", body="World"):
    return {"content": {"resource": {"content": {"title": title, "body": body}}}}


_ENV_VARS = (
    "MICROSLING_ESCAPE_HTML",
    "DEBUG",
    "WORKERS",
    "THREADS",
    "GUNICORN_LOG_LEVEL",
    "REQUEST_TIMEOUT_SECONDS",
    "HOST",
    "PORT",
    "GATEWAY_INTERFACE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_document():
    return context_document


@pytest.fixture
def client():
    """Create a test client for the WSGI application."""

    def _create_client(escape_html=None):
        return create_app(escape_html).test_client()

    return _create_client


@pytest.fixture
def asgi_client():
    """Create a test client for the ASGI application."""

    def _create_client(escape_html=None):
        app = create_asgi_app(escape_html)
        return TestClient(app, raise_server_exceptions=False)

    return _create_client
