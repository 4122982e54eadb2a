"""
Dependency Injection Container module.

Contains the Container class for managing the Slack logger dependencies.
"""

from dependency_injector import containers, providers

from slack_logger.core.config import SlackLoggerConfig, SlackLoggerSettings
from slack_logger.infrastructure.notification.slack.attachment_builder import AttachmentBuilder
from slack_logger.infrastructure.notification.slack.slack_logger import SlackLogger
from slack_logger.infrastructure.notification.slack.webhook_client import SlackWebhookClient
from slack_logger.interface.action.log_to_slack import LogToSlackAction


def build_config(settings: SlackLoggerSettings) -> SlackLoggerConfig:
    """将加载的配置转换为不可变的 logger 配置"""
    return settings.to_config()


class Container(containers.DeclarativeContainer):
    """
    依赖注入容器。

    服务层次结构:
    1. Settings（环境变量 / JSON 文件）
    2. Notification Components（客户端、构建器）
    3. Slack Logger / Custom Action
    """

    # ===== Configuration =====
    settings = providers.Singleton(SlackLoggerSettings.load)
    logger_config = providers.Singleton(build_config, settings=settings)

    # ===== Notification Components =====
    webhook_client = providers.Singleton(
        SlackWebhookClient,
        timeout=logger_config.provided.timeout,
        expect_ok_body=logger_config.provided.expect_ok_body
    )
    attachment_builder = providers.Singleton(AttachmentBuilder)

    slack_logger = providers.Singleton(
        SlackLogger,
        config=logger_config,
        webhook_client=webhook_client,
        attachment_builder=attachment_builder
    )

    # ===== Custom Action =====
    # action 只把响应体为 'ok' 视为成功
    action_webhook_client = providers.Singleton(
        SlackWebhookClient,
        expect_ok_body=True
    )
    log_action = providers.Singleton(
        LogToSlackAction,
        webhook_client=action_webhook_client
    )


# 全局容器实例
container = Container()
