"""
Webhook interface module.

Contains HTTP handlers exposing the Log to Slack action.
"""

from slack_logger.interface.webhook.handler import create_action_blueprint

__all__ = [
    'create_action_blueprint',
]
