"""
Slack Logger.

Formats automation run status messages into Slack attachments and delivers
them through an inbound webhook.
"""

from slack_logger.core.config import SlackLoggerConfig, SlackLoggerSettings
from slack_logger.core.exceptions import (
    ConfigurationError,
    DeliveryError,
    SlackLoggerError,
    ValidationError,
)
from slack_logger.core.interfaces.notifications import LogEvent, LogResult
from slack_logger.infrastructure.notification.slack import SlackLogger

__version__ = '4.0.1'

__all__ = [
    'SlackLogger',
    'SlackLoggerConfig',
    'SlackLoggerSettings',
    'LogEvent',
    'LogResult',
    'SlackLoggerError',
    'ConfigurationError',
    'ValidationError',
    'DeliveryError',
]
