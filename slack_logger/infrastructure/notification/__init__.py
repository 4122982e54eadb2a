"""
通知服务模块。

提供各种通知渠道的实现。
"""

from slack_logger.infrastructure.notification.slack import (
    AttachmentBuilder,
    SlackLogger,
    SlackWebhookClient,
)

__all__ = [
    'AttachmentBuilder',
    'SlackLogger',
    'SlackWebhookClient',
]
