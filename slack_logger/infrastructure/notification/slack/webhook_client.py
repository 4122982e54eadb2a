"""
Slack Webhook 客户端模块。

提供 Slack inbound webhook 的 HTTP 通信功能。
"""

import logging
import time
from dataclasses import dataclass
from typing import Any

import requests

logger = logging.getLogger(__name__)


@dataclass
class WebhookResponse:
    """
    Webhook 响应数据类。

    Attributes:
        success: 请求是否成功
        status_code: HTTP 状态码
        error_message: 错误消息（失败时）
        body: 响应体文本
        elapsed: 请求耗时（秒）
    """
    success: bool
    status_code: int | None = None
    error_message: str | None = None
    body: str | None = None
    elapsed: float | None = None


class SlackWebhookClient:
    """
    Slack Webhook 客户端。

    只负责 HTTP 通信，不包含消息格式化逻辑。
    每次 send 只发送一次请求，不重试、不退避。

    Example:
        >>> client = SlackWebhookClient(timeout=10)
        >>> response = client.send(
        ...     'https://hooks.slack.com/services/xxx',
        ...     {'username': 'bot', 'attachments': [...]}
        ... )
        >>> response.success
        True
    """

    OK_BODY = 'ok'
    MAX_BODY_LENGTH = 500

    def __init__(self, timeout: float = 10.0, expect_ok_body: bool = False):
        """
        初始化客户端。

        Args:
            timeout: 请求超时时间（秒），默认 10 秒
            expect_ok_body: 只有响应体为 'ok' 时才视为成功
        """
        self._timeout = timeout
        self._expect_ok_body = expect_ok_body

    def send(self, webhook_url: str, payload: dict[str, Any]) -> WebhookResponse:
        """
        发送 payload 到 Slack。

        传输层错误不会抛出，而是以失败的 WebhookResponse 返回。

        Args:
            webhook_url: Slack inbound webhook URL
            payload: JSON payload

        Returns:
            WebhookResponse: 响应结果
        """
        started = time.perf_counter()
        try:
            response = requests.post(
                webhook_url,
                json=payload,
                headers={'Content-Type': 'application/json'},
                timeout=self._timeout
            )
        except requests.Timeout:
            return WebhookResponse(
                success=False,
                error_message=f'Request timeout after {self._timeout}s',
                elapsed=time.perf_counter() - started
            )
        except requests.RequestException as e:
            return WebhookResponse(
                success=False,
                error_message=f'SlackLogger exception: {e}',
                elapsed=time.perf_counter() - started
            )

        elapsed = time.perf_counter() - started
        return self._interpret(response, elapsed)

    def _interpret(
        self,
        response: requests.Response,
        elapsed: float
    ) -> WebhookResponse:
        """
        解析 HTTP 响应。

        Args:
            response: HTTP 响应
            elapsed: 请求耗时（秒）

        Returns:
            WebhookResponse: 响应结果
        """
        body = (response.text or '')[:self.MAX_BODY_LENGTH]
        status = response.status_code

        if not 200 <= status < 300:
            return WebhookResponse(
                success=False,
                status_code=status,
                error_message=f'Slack returned an error (HTTP-{status}): {body}',
                body=body,
                elapsed=elapsed
            )

        if self._expect_ok_body and body.strip() != self.OK_BODY:
            return WebhookResponse(
                success=False,
                status_code=status,
                error_message=f'Slack responded with: {body}',
                body=body,
                elapsed=elapsed
            )

        logger.debug(f'✅ Slack 消息发送成功 (HTTP-{status}, {elapsed:.3f}s)')
        return WebhookResponse(
            success=True,
            status_code=status,
            body=body,
            elapsed=elapsed
        )
