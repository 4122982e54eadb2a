"""
Slack 通知模块。

提供 Slack inbound webhook 集成，包括：
- Webhook 客户端（HTTP 通信）
- Attachment 构建器（消息格式化）
- Slack logger（校验、格式化、发送、错误策略）
"""

from slack_logger.infrastructure.notification.slack.attachment_builder import (
    AttachmentBuilder,
    AttachmentStyle,
)
from slack_logger.infrastructure.notification.slack.slack_logger import SlackLogger
from slack_logger.infrastructure.notification.slack.webhook_client import (
    SlackWebhookClient,
    WebhookResponse,
)

__all__ = [
    'AttachmentBuilder',
    'AttachmentStyle',
    'SlackLogger',
    'SlackWebhookClient',
    'WebhookResponse',
]
