"""
Slack Attachment 构建器模块。

提供 Slack 消息 attachment 的构建功能，不包含任何网络通信。
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from slack_logger.core.config import SlackLoggerConfig
from slack_logger.core.interfaces.notifications import LogEvent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttachmentStyle:
    """
    Attachment 的颜色/emoji 组合。

    Attributes:
        color: Slack attachment 颜色 ('good', 'danger', 'warning', '')
        emoji: 标题前缀 emoji
        include_success: 是否输出 success 字段
    """
    color: str
    emoji: str
    include_success: bool = True


STYLE_SUCCESS = AttachmentStyle(color='good', emoji='✅')
STYLE_FAILURE = AttachmentStyle(color='danger', emoji='❌')
STYLE_WARNING = AttachmentStyle(color='warning', emoji='⚠️', include_success=False)
STYLE_QUESTION = AttachmentStyle(color='', emoji='❓', include_success=False)


class AttachmentBuilder:
    """
    Slack Attachment 构建器。

    Attachment 结构：
    - color: 颜色条
    - author_name / author_link: 作者
    - title: emoji + 摘要
    - text: 代码块格式的详情（最多 7500 字符）
    - ts: Unix 时间戳（秒）
    - mrkdwn_in: 允许 markdown 的字段
    - fields: 字段列表

    字段顺序固定：内置字段 -> 默认字段 -> 本次调用字段 -> customer id。

    Example:
        >>> builder = AttachmentBuilder()
        >>> payload = builder.build_payload(
        ...     config,
        ...     LogEvent(success=True, summary='sync ok')
        ... )
        >>> payload['attachments'][0]['title']
        '✅ sync ok'
    """

    DETAILS_LIMIT = 7500
    TRUNCATION_MARKER = '...'
    CODE_FENCE = '```'

    def __init__(self, clock=time.time):
        """
        初始化构建器。

        Args:
            clock: 返回 Unix 秒数的时间函数
        """
        self._clock = clock

    @staticmethod
    def select_style(success: bool) -> AttachmentStyle:
        """根据成功标志选择颜色和 emoji"""
        return STYLE_SUCCESS if success else STYLE_FAILURE

    @staticmethod
    def build_title(emoji: str, summary: str) -> str:
        return f'{emoji} {summary}'

    def format_details(self, details: Optional[str]) -> str:
        """
        格式化详情文本。

        超过 7500 字符时截断并追加省略号；非空白文本包裹在代码块中。

        Args:
            details: 原始详情

        Returns:
            text 字段内容，空白详情返回空字符串
        """
        if not details:
            return ''

        text = details
        if len(text) > self.DETAILS_LIMIT:
            logger.debug(
                f'✂️ 详情过长，截断 {len(text)} -> {self.DETAILS_LIMIT} 字符'
            )
            text = text[:self.DETAILS_LIMIT] + self.TRUNCATION_MARKER

        if not text.strip():
            return ''

        return f'{self.CODE_FENCE}{text}{self.CODE_FENCE}'

    @staticmethod
    def format_value(value: Any) -> str:
        """字段值字符串化，布尔值输出为 'true'/'false'"""
        if isinstance(value, bool):
            return 'true' if value else 'false'
        if value is None:
            return ''
        return str(value)

    def _field(self, title: str, value: Any) -> Dict[str, Any]:
        return {'title': title, 'value': self.format_value(value), 'short': True}

    def build_fields(
        self,
        config: SlackLoggerConfig,
        event: LogEvent,
        style: AttachmentStyle
    ) -> List[Dict[str, Any]]:
        """
        按固定顺序构建字段列表。

        Args:
            config: Logger 配置
            event: 日志事件
            style: Attachment 样式（决定是否输出 success 字段）

        Returns:
            字段列表 [{title, value, short}]
        """
        fields = [self._field(config.author_field_title, config.author)]

        if style.include_success:
            fields.append(self._field('success', bool(event.success)))

        if event.has_entity:
            fields.append(self._field('entity', event.entity))
            fields.append(self._field('entity id', event.entity_id))

        # 默认字段只读取，不修改配置
        fields.extend(self._map_fields(config.fields))
        fields.extend(self._map_fields(event.fields))

        if config.customer_id:
            fields.append(self._field('customer id', config.customer_id))

        return fields

    def _map_fields(self, values: Optional[Mapping[str, Any]]) -> List[Dict[str, Any]]:
        if not values:
            return []
        return [self._field(name, value) for name, value in values.items()]

    def build_attachment(
        self,
        config: SlackLoggerConfig,
        event: LogEvent,
        style: Optional[AttachmentStyle] = None
    ) -> Dict[str, Any]:
        """
        构建单个 attachment。

        Args:
            config: Logger 配置
            event: 日志事件
            style: 指定样式（warn/question），默认根据 success 选择

        Returns:
            Attachment 字典
        """
        style = style or self.select_style(bool(event.success))

        return {
            'color': style.color,
            'author_name': config.author or '',
            'author_link': config.author_url or '',
            'title': self.build_title(style.emoji, event.summary),
            'text': self.format_details(event.details),
            'ts': self._clock(),
            'mrkdwn_in': list(config.mrkdwn_in),
            'fields': self.build_fields(config, event, style),
        }

    @staticmethod
    def wrap(username: str, attachment: Dict[str, Any]) -> Dict[str, Any]:
        """将 attachment 包装为顶层 payload"""
        return {
            'username': username,
            'attachments': [attachment],
        }

    def build_payload(
        self,
        config: SlackLoggerConfig,
        event: LogEvent,
        style: Optional[AttachmentStyle] = None
    ) -> Dict[str, Any]:
        """构建完整的 webhook payload"""
        return self.wrap(
            config.username,
            self.build_attachment(config, event, style)
        )
