"""
Custom action module.

Contains host-platform action adapters built on SlackLogger.
"""

from slack_logger.interface.action.log_to_slack import LogToSlackAction

__all__ = ['LogToSlackAction']
