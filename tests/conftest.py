"""
Test configuration and fixtures for Slack logger tests.

This module provides:
- Test configuration values
- Pytest fixtures for common test scenarios
- Mock objects for the HTTP transport
"""

import sys
from pathlib import Path
from unittest.mock import patch

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tests.fixtures.test_data import (  # noqa: E402
    AUTHOR,
    FIXED_TS,
    USERNAME,
    WEBHOOK_URL,
)
from tests.fixtures.responses import make_response  # noqa: E402


# ==================== Mock Fixtures ====================

@pytest.fixture
def mock_post():
    """Patch requests.post used by the webhook client."""
    with patch(
        'slack_logger.infrastructure.notification.slack.webhook_client.requests.post'
    ) as post:
        post.return_value = make_response()
        yield post


# ==================== Component Fixtures ====================

@pytest.fixture
def builder():
    """AttachmentBuilder with a fixed clock."""
    from slack_logger.infrastructure.notification.slack.attachment_builder import (
        AttachmentBuilder
    )
    return AttachmentBuilder(clock=lambda: FIXED_TS)


@pytest.fixture
def slack(builder):
    """Safe-mode SlackLogger with the minimal configuration."""
    from slack_logger.infrastructure.notification.slack.slack_logger import SlackLogger

    logger = SlackLogger(WEBHOOK_URL, USERNAME, AUTHOR, attachment_builder=builder)
    yield logger
    logger.close()

