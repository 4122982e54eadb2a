"""
基础设施层模块。

提供外部服务集成实现，包括：
- 通知服务（Slack Webhook）
"""

from slack_logger.infrastructure.notification.slack import (
    AttachmentBuilder,
    SlackLogger,
    SlackWebhookClient,
)

__all__ = [
    # Slack Notification
    'AttachmentBuilder',
    'SlackLogger',
    'SlackWebhookClient',
]
