"""Shared test fixtures."""

import pytest
from fastapi.testclient import TestClient

from lunch_scheduler.app import app
from lunch_scheduler.notion.client import reset_client as reset_notion_client
from lunch_scheduler.slack.client import reset_client as reset_slack_client
from lunch_scheduler.storage import reset_store


@pytest.fixture(scope="session")
def client() -> TestClient:
    """Create a TestClient for the FastAPI app."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def _reset_singletons():
    """Clear cached clients and the booking store between tests."""
    reset_store()
    reset_slack_client()
    reset_notion_client()
    yield
    reset_store()
    reset_slack_client()
    reset_notion_client()
