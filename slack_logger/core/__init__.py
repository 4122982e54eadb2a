"""
Core layer module.

Contains configuration, interfaces, and exception definitions.
"""

from slack_logger.core.exceptions import (
    ConfigurationError,
    DeliveryError,
    SlackLoggerError,
    ValidationError,
)

__all__ = [
    # Exceptions
    'SlackLoggerError',
    'ConfigurationError',
    'ValidationError',
    'DeliveryError',
]
