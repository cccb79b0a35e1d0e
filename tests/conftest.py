"""Shared fixtures for todo-relay tests."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from fastapi.testclient import TestClient

from todo_relay.core.config import Settings
from todo_relay.core.credentials import CredentialSource, DatabaseHandle
from todo_relay.core.slack import SlackWebhookClient
from todo_relay.main import create_app

WEBHOOK_URL = "https://hooks.slack.com/services/T000/B000/XXXX"


def make_settings(**overrides) -> Settings:
    """Settings isolated from the developer's .env file."""
    values = {
        "gemini_api_key": "test-key",
        "slack_webhook_url": WEBHOOK_URL,
        "cors_allowed_origins": "*",
        "firebase_use_application_default": False,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class WebhookStub:
    """Records webhook requests and answers with a fixed response."""

    def __init__(self, status_code: int = 200, body: str = "ok"):
        self.status_code = status_code
        self.body = body
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, text=self.body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def llm():
    """LLM client stub returning a fixed summary."""
    client = MagicMock()
    client.generate_content = AsyncMock(return_value="Buy milk by Jan 1.")
    return client


@pytest.fixture
def webhook():
    return WebhookStub()


@pytest.fixture
def database():
    return DatabaseHandle(source=CredentialSource.FILE, app=MagicMock())


@pytest.fixture
def app(settings, llm, webhook, database):
    return create_app(
        settings,
        database=database,
        llm_client=llm,
        slack_client=SlackWebhookClient(settings.slack_webhook_url, transport=webhook.transport),
    )


@pytest.fixture
def client(app):
    """Create a test client."""
    return TestClient(app)
