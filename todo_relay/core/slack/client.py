"""Slack incoming-webhook HTTP client."""

import logging
from typing import Optional

import httpx

from todo_relay.core.errors import ConfigurationError, UpstreamProviderError
from todo_relay.core.slack.models import SlackMessage

logger = logging.getLogger(__name__)

SLACK_WEBHOOK_PLACEHOLDER = "YOUR_SLACK_WEBHOOK_URL_HERE"
WEBHOOK_NOT_CONFIGURED = (
    "Slack Webhook URL is not configured in the backend environment variables."
)


class SlackWebhookError(UpstreamProviderError):
    """Raised when the webhook answers with a non-2xx status."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"Failed to send message to Slack: {body}", status_code)
        self.body = body


class SlackWebhookClient:
    """HTTP client for a Slack incoming webhook."""

    def __init__(
        self,
        webhook_url: str = "",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.webhook_url = webhook_url.strip()
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        """Check that the URL is set and not the placeholder."""
        return bool(self.webhook_url) and self.webhook_url != SLACK_WEBHOOK_PLACEHOLDER

    def ensure_configured(self) -> None:
        """
        Raises:
            ConfigurationError: If the webhook URL is missing or a placeholder
        """
        if not self.is_configured:
            raise ConfigurationError(WEBHOOK_NOT_CONFIGURED)

    def _get_client(self) -> httpx.AsyncClient:
        """Create an async HTTP client with the library default timeout."""
        return httpx.AsyncClient(transport=self._transport)

    async def send_message(self, message: SlackMessage) -> None:
        """
        Post a message to the webhook. Exactly one request, no retries.

        Args:
            message: Message to deliver

        Raises:
            ConfigurationError: If the webhook URL is not configured
            SlackWebhookError: If Slack answers with a non-2xx status
            UpstreamProviderError: If the request could not be sent
        """
        self.ensure_configured()

        try:
            async with self._get_client() as client:
                response = await client.post(self.webhook_url, json=message.to_payload())
        except httpx.HTTPError as e:
            logger.error(f"Error sending message to Slack: {e}")
            raise UpstreamProviderError(
                "Internal server error: Could not send message to Slack."
            ) from e

        if not response.is_success:
            body = response.text
            logger.error(f"Slack API error: {response.status_code} {body}")
            raise SlackWebhookError(response.status_code, body)

        logger.info("Message delivered to Slack webhook")
