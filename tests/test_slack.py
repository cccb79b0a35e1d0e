"""
Tests for the Slack webhook client and notifier service
"""

import json
from unittest.mock import MagicMock

import httpx
import pytest

from tests.conftest import WEBHOOK_URL, WebhookStub
from todo_relay.core.errors import ClientInputError, ConfigurationError, UpstreamProviderError
from todo_relay.core.slack import SlackMessage, SlackWebhookClient, SlackWebhookError
from todo_relay.llm import LLMProviderError
from todo_relay.services.slack_notifier.service import (
    SlackNotifierService,
    build_block_message,
    build_text_message,
)
from todo_relay.services.todo_summarizer.models import TodoInput
from todo_relay.services.todo_summarizer.service import TodoSummarizerService


def sent_payload(webhook: WebhookStub) -> dict:
    assert len(webhook.requests) == 1
    return json.loads(webhook.requests[0].content)


class TestSlackWebhookClient:
    """Test webhook delivery."""

    @pytest.mark.asyncio
    async def test_posts_json_payload(self, webhook):
        client = SlackWebhookClient(WEBHOOK_URL, transport=webhook.transport)

        await client.send_message(SlackMessage(text="hello"))

        request = webhook.requests[0]
        assert request.method == "POST"
        assert str(request.url) == WEBHOOK_URL
        assert sent_payload(webhook) == {"text": "hello"}

    @pytest.mark.asyncio
    async def test_non_2xx_raises_with_status_and_body(self):
        webhook = WebhookStub(status_code=404, body="no_service")
        client = SlackWebhookClient(WEBHOOK_URL, transport=webhook.transport)

        with pytest.raises(SlackWebhookError) as exc_info:
            await client.send_message(SlackMessage(text="hello"))

        assert exc_info.value.status_code == 404
        assert exc_info.value.body == "no_service"
        assert exc_info.value.message == "Failed to send message to Slack: no_service"
        assert len(webhook.requests) == 1

    @pytest.mark.asyncio
    async def test_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = SlackWebhookClient(WEBHOOK_URL, transport=httpx.MockTransport(handler))

        with pytest.raises(UpstreamProviderError) as exc_info:
            await client.send_message(SlackMessage(text="hello"))

        assert exc_info.value.status_code == 500
        assert "Could not send message to Slack" in exc_info.value.message

    @pytest.mark.asyncio
    @pytest.mark.parametrize("url", ["", "   ", "YOUR_SLACK_WEBHOOK_URL_HERE"])
    async def test_unconfigured_url(self, webhook, url):
        client = SlackWebhookClient(url, transport=webhook.transport)

        assert client.is_configured is False
        with pytest.raises(ConfigurationError):
            await client.send_message(SlackMessage(text="hello"))

        assert webhook.requests == []


class TestMessageBuilders:
    """Test Slack message layouts."""

    def test_block_message(self):
        todo = TodoInput(text="Buy milk", due_date="2024-01-01", user_id="user-42")

        payload = build_block_message(todo, "Get 2 litres", "Mozilla/5.0").to_payload()

        assert payload["text"] == "*New Todo Update from user-42 (Mozilla/5.0):*\nGet 2 litres"
        header, fields, context = payload["blocks"]
        assert header == {
            "type": "section",
            "text": {"type": "mrkdwn", "text": "*New Todo Update from `user-42`*:"},
        }
        assert [f["text"] for f in fields["fields"]] == [
            "*Todo:*\nBuy milk",
            "*Summary:*\nGet 2 litres",
        ]
        assert context["type"] == "context"
        assert context["elements"][0]["text"] == "*Due:* 2024-01-01 N/A | *Sent by:* Mozilla/5.0"

    def test_text_message(self):
        todo = TodoInput(text="Buy milk", due_time="09:00")

        payload = build_text_message(todo, "Get 2 litres").to_payload()

        assert "blocks" not in payload
        assert "*Task:* Buy milk" in payload["text"]
        assert "*Due Date:* N/A" in payload["text"]
        assert "*Due Time:* 09:00" in payload["text"]
        assert payload["text"].endswith("*Summary:*\nGet 2 litres")


class TestSlackNotifierService:
    """Test the notify operation."""

    @pytest.fixture
    def notifier(self, llm, webhook):
        return SlackNotifierService(
            TodoSummarizerService(llm),
            SlackWebhookClient(WEBHOOK_URL, transport=webhook.transport),
        )

    @pytest.mark.asyncio
    async def test_uses_supplied_summary(self, notifier, llm, webhook):
        summary = await notifier.notify(TodoInput(text="Buy milk"), summary="Already done")

        assert summary == "Already done"
        llm.generate_content.assert_not_awaited()
        assert "*Summary:*\nAlready done" in json.dumps(sent_payload(webhook))

    @pytest.mark.asyncio
    async def test_generates_missing_summary(self, notifier, llm, webhook):
        summary = await notifier.notify(TodoInput(text="Buy milk"), user_agent="curl/8.0")

        assert summary == "Buy milk by Jan 1."
        llm.generate_content.assert_awaited_once()
        payload = sent_payload(webhook)
        assert payload["blocks"][2]["elements"][0]["text"].endswith("*Sent by:* curl/8.0")

    @pytest.mark.asyncio
    async def test_default_user_agent(self, notifier, webhook):
        await notifier.notify(TodoInput(text="Buy milk"), summary="s")

        assert "Unknown User-Agent" in sent_payload(webhook)["text"]

    @pytest.mark.asyncio
    async def test_summary_failure_still_posts(self, notifier, llm, webhook):
        llm.generate_content.side_effect = LLMProviderError("quota exceeded")

        summary = await notifier.notify(TodoInput(text="Buy milk"))

        assert summary == 'Could not generate summary for: "Buy milk".'
        fields = sent_payload(webhook)["blocks"][1]["fields"]
        assert fields[1]["text"] == '*Summary:*\nCould not generate summary for: "Buy milk".'

    @pytest.mark.asyncio
    async def test_missing_text(self, notifier, llm, webhook):
        with pytest.raises(ClientInputError) as exc_info:
            await notifier.notify(TodoInput(text=""))

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Todo text is required."
        llm.generate_content.assert_not_awaited()
        assert webhook.requests == []

    @pytest.mark.asyncio
    async def test_unconfigured_webhook_skips_llm(self, llm, webhook):
        notifier = SlackNotifierService(
            TodoSummarizerService(llm),
            SlackWebhookClient("", transport=webhook.transport),
        )

        with pytest.raises(ConfigurationError):
            await notifier.notify(TodoInput(text="Buy milk"))

        llm.generate_content.assert_not_awaited()
        assert webhook.requests == []

    def test_text_format(self, llm, webhook):
        notifier = SlackNotifierService(
            TodoSummarizerService(llm),
            SlackWebhookClient(WEBHOOK_URL, transport=webhook.transport),
            message_format="text",
        )

        message = notifier.build_message(TodoInput(text="Buy milk"), "s", "ua")

        assert message.blocks is None

    def test_unknown_format(self):
        with pytest.raises(ValueError):
            SlackNotifierService(MagicMock(), MagicMock(), message_format="html")
