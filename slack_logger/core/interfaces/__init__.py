"""
Interfaces module.

Contains abstract base classes defining the notifier contract, plus the
log event and result data classes.
"""

from slack_logger.core.interfaces.notifications import (
    ILogNotifier,
    LogEvent,
    LogResult,
)

__all__ = [
    'ILogNotifier',
    'LogEvent',
    'LogResult',
]
