"""Slack incoming-webhook integration."""

from todo_relay.core.slack.client import SlackWebhookClient, SlackWebhookError
from todo_relay.core.slack.models import SlackMessage

__all__ = ["SlackWebhookClient", "SlackWebhookError", "SlackMessage"]
