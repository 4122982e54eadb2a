"""
Slack logger 模块。

将自动化任务的成功/失败状态格式化为 Slack attachment 并通过
inbound webhook 发送。实现 ILogNotifier 接口。
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Dict, Mapping, Optional

from slack_logger.core.config import SlackLoggerConfig
from slack_logger.core.exceptions import DeliveryError, SlackLoggerError, ValidationError
from slack_logger.core.interfaces.notifications import ILogNotifier, LogEvent, LogResult

from .attachment_builder import (
    STYLE_QUESTION,
    STYLE_WARNING,
    AttachmentBuilder,
    AttachmentStyle,
)
from .webhook_client import SlackWebhookClient, WebhookResponse

logger = logging.getLogger(__name__)


class SlackLogger(ILogNotifier):
    """
    Slack 日志通知器。

    用于在 Slack 中记录自动化事务，方便了解自动化方案的运行情况。

    约定：
    - success=True: 颜色 good，emoji ✅
    - success=False: 颜色 danger，emoji ❌

    错误策略：
    - 安全模式（默认）: log/notify/post 从不抛出异常，失败以 LogResult 返回，
      并写入错误日志
    - 严格模式 (raise_on_error=True): 抛出 ValidationError / DeliveryError

    Example:
        >>> slack = SlackLogger(
        ...     'https://hooks.slack.com/services/xxx',
        ...     'production environment',
        ...     'MyApp',
        ...     author_url='https://www.example.com/myapp/readme',
        ...     fields={'account': 'abc123'}
        ... )
        >>> result = slack.log(True, 'synced ok', details=transcript)
        >>> result.success
        True
    """

    def __init__(
        self,
        webhook_url: Optional[str] = None,
        username: Optional[str] = None,
        author: Optional[str] = None,
        *,
        config: Optional[SlackLoggerConfig] = None,
        webhook_client: Optional[SlackWebhookClient] = None,
        attachment_builder: Optional[AttachmentBuilder] = None,
        **options: Any
    ):
        """
        初始化 Slack logger。

        Args:
            webhook_url: Slack inbound webhook（需要先在 Slack 中配置）
            username: 频道中显示的用户名。相同用户名的消息会聚在一起，
                建议使用环境名（"production environment"）或服务器名
            author: 作者名称，建议使用应用名
            config: 已构建的配置（提供时忽略上面三个参数和 options）
            webhook_client: Webhook 客户端（可选）
            attachment_builder: Attachment 构建器（可选）
            **options: SlackLoggerConfig 的其它字段，如 author_url、fields、
                customer_id、measure_timing、raise_on_error

        Raises:
            ConfigurationError: webhook_url、username、author 缺失或为空
        """
        self._config = config or SlackLoggerConfig.create(
            webhook_url=webhook_url,
            username=username,
            author=author,
            **options
        )
        self._client = webhook_client or SlackWebhookClient(
            timeout=self._config.timeout,
            expect_ok_body=self._config.expect_ok_body
        )
        self._builder = attachment_builder or AttachmentBuilder()
        self._executor: ThreadPoolExecutor | None = None
        self._executor_lock = threading.Lock()

    def __repr__(self) -> str:
        """隐藏 webhook URL，避免在日志中泄露"""
        mode = 'strict' if self.is_strict else 'safe'
        return (
            f'<{type(self).__name__} username={self._config.username!r} '
            f'author={self._config.author!r} mode={mode}>'
        )

    @property
    def config(self) -> SlackLoggerConfig:
        return self._config

    @property
    def is_strict(self) -> bool:
        """是否为严格（抛出异常）模式"""
        return self._config.raise_on_error

    def strict(self) -> 'SlackLogger':
        """返回使用相同配置的严格模式 logger"""
        return self._with_config(self._config.with_overrides(raise_on_error=True))

    def safe(self) -> 'SlackLogger':
        """返回使用相同配置的安全模式 logger"""
        return self._with_config(self._config.with_overrides(raise_on_error=False))

    def _with_config(self, config: SlackLoggerConfig) -> 'SlackLogger':
        return SlackLogger(
            config=config,
            webhook_client=self._client,
            attachment_builder=self._builder
        )

    # ========== 主要接口 ==========

    def log(
        self,
        success: Optional[bool],
        summary: Optional[str],
        details: Optional[str] = None,
        fields: Optional[Mapping[str, Any]] = None,
        entity: Optional[str] = None,
        entity_id: Optional[str] = None
    ) -> LogResult:
        """
        记录一条日志到 Slack。

        Args:
            success: （必填）事务是否成功
            summary: （必填）简短摘要，如 "synced ok"、"error processing account"
            details: （可选）以等宽字体显示在消息下方的详情，最多输出
                7500 字符，超出部分被截断
            fields: （可选）本条消息附加的字段，位于默认字段之后
            entity: （可选）相关实体类型
            entity_id: （可选）相关实体 ID，与 entity 同时提供

        Returns:
            LogResult: 发送结果。安全模式下 Slack 错误（如限流）会被记录到
            错误日志，不会抛出
        """
        event = LogEvent(
            success=success,
            summary=summary,
            details=details,
            fields=dict(fields or {}),
            entity=entity,
            entity_id=entity_id
        )
        return self.notify(event)

    def notify(self, event: LogEvent) -> LogResult:
        """
        格式化并发送日志事件。

        Args:
            event: 日志事件

        Returns:
            LogResult: 发送结果
        """
        return self._send_event(event, style=None)

    def post(
        self,
        attachment: Dict[str, Any],
        username: Optional[str] = None
    ) -> LogResult:
        """
        直接发送调用方构建好的 attachment。

        Args:
            attachment: Slack attachment 字典
            username: 显示用户名（默认使用配置中的 username）

        Returns:
            LogResult: 发送结果
        """
        if not isinstance(attachment, dict) or not attachment:
            return self._fail(ValidationError(
                'Invalid SlackLogger post() invocation. '
                'A non-empty attachment is required.',
                field_name='attachment'
            ))

        payload = self._builder.wrap(username or self._config.username, attachment)
        return self._deliver(payload)

    # ========== 快捷方法 ==========

    def ok(
        self,
        summary: str,
        details: Optional[str] = None,
        fields: Optional[Mapping[str, Any]] = None
    ) -> LogResult:
        """记录成功消息"""
        return self.log(True, summary, details, fields)

    def error(
        self,
        summary: str,
        details: Optional[str] = None,
        fields: Optional[Mapping[str, Any]] = None
    ) -> LogResult:
        """记录失败消息"""
        return self.log(False, summary, details, fields)

    def warn(
        self,
        summary: str,
        details: Optional[str] = None,
        fields: Optional[Mapping[str, Any]] = None
    ) -> LogResult:
        """记录警告消息（warning 颜色，不输出 success 字段）"""
        return self._send_styled(STYLE_WARNING, summary, details, fields)

    def question(
        self,
        summary: str,
        details: Optional[str] = None,
        fields: Optional[Mapping[str, Any]] = None
    ) -> LogResult:
        """记录疑问消息（无颜色，不输出 success 字段）"""
        return self._send_styled(STYLE_QUESTION, summary, details, fields)

    # ========== 后台发送 ==========

    def log_nowait(self, *args: Any, **kwargs: Any) -> Future:
        """
        在后台线程中调用 log()，立即返回 Future。

        调用方可以等待 Future 的结果，也可以直接忽略。多个后台调用之间
        没有顺序保证。

        Returns:
            Future[LogResult]
        """
        return self._get_executor().submit(self.log, *args, **kwargs)

    def _get_executor(self) -> ThreadPoolExecutor:
        with self._executor_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self._config.max_workers,
                    thread_name_prefix='slack-logger'
                )
            return self._executor

    def close(self, wait: bool = True) -> None:
        """关闭后台线程池"""
        with self._executor_lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=wait)

    def __enter__(self) -> 'SlackLogger':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ========== 内部实现 ==========

    def _send_styled(
        self,
        style: AttachmentStyle,
        summary: str,
        details: Optional[str],
        fields: Optional[Mapping[str, Any]]
    ) -> LogResult:
        event = LogEvent(
            success=None,
            summary=summary,
            details=details,
            fields=dict(fields or {})
        )
        return self._send_event(event, style=style)

    def _send_event(
        self,
        event: LogEvent,
        style: Optional[AttachmentStyle]
    ) -> LogResult:
        try:
            self._validate(event, require_success=style is None)
        except ValidationError as e:
            return self._fail(e)

        payload = self._builder.build_payload(self._config, event, style)
        return self._deliver(payload)

    @staticmethod
    def _validate(event: LogEvent, require_success: bool = True) -> None:
        """
        校验调用参数，失败时不会发起任何网络请求。

        Raises:
            ValidationError: success 或 summary 缺失，details 不是文本，
                或 entity 对不完整
        """
        if require_success and not isinstance(event.success, bool):
            raise ValidationError(
                'Invalid SlackLogger log() invocation. '
                'The success and summary parameters are required.',
                field_name='success'
            )

        if not isinstance(event.summary, str) or not event.summary.strip():
            raise ValidationError(
                'Invalid SlackLogger log() invocation. '
                'The success and summary parameters are required.',
                field_name='summary'
            )

        if event.details is not None and not isinstance(event.details, str):
            raise ValidationError(
                'Invalid SlackLogger log() invocation. '
                'The details parameter must be text.',
                field_name='details'
            )

        if event.has_entity:
            for name in ('entity', 'entity_id'):
                value = getattr(event, name)
                if not isinstance(value, str) or not value.strip():
                    raise ValidationError(
                        'Invalid SlackLogger log() invocation. '
                        'The entity and entity_id parameters must be '
                        'provided together.',
                        field_name=name
                    )

    def _deliver(self, payload: Dict[str, Any]) -> LogResult:
        response = self._client.send(self._config.webhook_url, payload)
        elapsed = response.elapsed if self._config.measure_timing else None

        if elapsed is not None:
            logger.debug(f'⏱️ Slack webhook 耗时 {elapsed:.3f}s')

        if response.success:
            return LogResult(
                success=True,
                status_code=response.status_code,
                elapsed=elapsed
            )

        return self._fail(self._delivery_error(response), elapsed=elapsed)

    @staticmethod
    def _delivery_error(response: WebhookResponse) -> DeliveryError:
        return DeliveryError(
            response.error_message or 'Slack webhook delivery failed',
            status_code=response.status_code,
            body=response.body
        )

    def _fail(
        self,
        error: SlackLoggerError,
        elapsed: Optional[float] = None
    ) -> LogResult:
        """
        按错误策略处理失败：严格模式抛出，安全模式记录日志并返回失败结果。
        """
        logger.error(f'❌ {error.message}')
        if self.is_strict:
            raise error

        return LogResult(
            success=False,
            status_code=getattr(error, 'status_code', None),
            error=error.message,
            code=error.code,
            elapsed=elapsed
        )
