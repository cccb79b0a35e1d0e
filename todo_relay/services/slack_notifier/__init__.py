"""Slack notifier service module."""

from todo_relay.services.slack_notifier.router import router
from todo_relay.services.slack_notifier.service import SlackNotifierService

__all__ = ["router", "SlackNotifierService"]
