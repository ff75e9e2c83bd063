"""Slack ingress and egress: event webhook, directory lookups, and message posting."""

from lunch_scheduler.slack.client import get_slack_client, reset_client
from lunch_scheduler.slack.directory import lookup_user_emails
from lunch_scheduler.slack.notifier import send_message

__all__ = [
    "get_slack_client",
    "lookup_user_emails",
    "reset_client",
    "send_message",
]
