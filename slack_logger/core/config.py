"""
Configuration module.

Contains Pydantic-based configuration classes for the Slack logger.
"""

import json
import os
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic_settings import BaseSettings

from slack_logger.core.exceptions import ConfigurationError

# 必填的身份字段，每条消息都会用到
REQUIRED_FIELDS = ('webhook_url', 'username', 'author')


class SlackLoggerConfig(BaseModel):
    """
    Slack logger 配置（构造后不可变）。

    Attributes:
        webhook_url: Slack inbound webhook URL
        username: 频道中显示的用户名（建议用环境名或服务器名）
        author: 作者名称（建议用应用名）
        author_url: 作者链接，例如应用的 README
        fields: 每条消息都会附加的默认字段
        customer_id: 客户/账号标识，作为最后一个字段输出
        measure_timing: 是否记录 HTTP 请求耗时
        author_field_title: 内置作者字段的标题（'author' 或 'solution'）
        mrkdwn_in: 允许 markdown 的字段
        raise_on_error: 严格模式，失败时抛出异常而不是返回失败结果
        expect_ok_body: 只有响应体为 'ok' 时才视为成功
        timeout: 请求超时时间（秒）
        max_workers: 后台发送线程数
    """

    model_config = ConfigDict(frozen=True)

    webhook_url: str
    username: str
    author: str
    author_url: str = ''
    fields: Dict[str, Any] = Field(default_factory=dict)
    customer_id: Optional[str] = None
    measure_timing: bool = False
    author_field_title: str = 'author'
    mrkdwn_in: Tuple[str, ...] = ('pretext', 'text')
    raise_on_error: bool = False
    expect_ok_body: bool = False
    timeout: float = Field(default=10.0, gt=0)
    max_workers: int = Field(default=4, ge=1, le=64)

    @model_validator(mode='before')
    @classmethod
    def check_required(cls, data: Any) -> Any:
        """webhook_url、username、author 均不能为空"""
        if not isinstance(data, dict):
            return data

        missing = [
            name for name in REQUIRED_FIELDS
            if not isinstance(data.get(name), str) or not data[name].strip()
        ]
        if missing:
            raise ConfigurationError(
                'Misconfigured Slack Logger. The inbound_webhook, username, '
                'and author parameters are all required.',
                missing=missing
            )
        return data

    @classmethod
    def create(cls, **values: Any) -> 'SlackLoggerConfig':
        """
        创建配置，所有校验错误统一转换为 ConfigurationError。

        Raises:
            ConfigurationError: 必填参数缺失或参数值非法
        """
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(
                f'Invalid Slack Logger configuration: {e}'
            ) from e

    def with_overrides(self, **changes: Any) -> 'SlackLoggerConfig':
        """返回修改了部分值的新配置，原配置不变"""
        return self.create(**{**self.model_dump(), **changes})


class SlackLoggerSettings(BaseSettings):
    """
    主配置（环境变量 / JSON 文件）

    环境变量示例:
        SLACK_LOGGER_WEBHOOK_URL=https://hooks.slack.com/services/...
        SLACK_LOGGER_FIELDS='{"account": "abc123"}'
    """

    webhook_url: str = ''
    username: str = ''
    author: str = ''
    author_url: str = ''
    fields: Dict[str, Any] = Field(default_factory=dict)
    customer_id: Optional[str] = None
    measure_timing: bool = False
    raise_on_error: bool = False
    expect_ok_body: bool = False
    timeout: float = Field(default=10.0, gt=0)
    max_workers: int = Field(default=4, ge=1, le=64)

    model_config = ConfigDict(
        env_prefix='SLACK_LOGGER_',
        env_nested_delimiter='__'
    )

    def to_config(self, **overrides: Any) -> SlackLoggerConfig:
        """
        转换为不可变的 SlackLoggerConfig。

        Args:
            **overrides: 覆盖的值（值为 None 的项会被忽略）

        Raises:
            ConfigurationError: 必填参数缺失
        """
        values = self.model_dump()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return SlackLoggerConfig.create(**values)

    @classmethod
    def load(cls, config_path: str = None) -> 'SlackLoggerSettings':
        """
        加载配置，配置文件不存在时只使用环境变量。

        Raises:
            ConfigurationError: 配置文件无法读取或解析，或环境变量值非法
        """
        if config_path is None:
            config_path = os.getenv('CONFIG_PATH', 'slack_logger.json')

        # pydantic 的 ValidationError、SettingsError 和 JSONDecodeError 都是 ValueError
        try:
            if os.path.exists(config_path):
                with open(config_path, 'r', encoding='utf-8') as f:
                    config_data = json.load(f)
                return cls(**config_data)

            return cls()
        except (OSError, TypeError, ValueError) as e:
            raise ConfigurationError(
                f'Unable to load Slack Logger settings from {config_path}: {e}'
            ) from e

    def save(self, config_path: str = None):
        """保存配置"""
        if config_path is None:
            config_path = os.getenv('CONFIG_PATH', 'slack_logger.json')

        with open(config_path, 'w', encoding='utf-8') as f:
            f.write(self.model_dump_json(indent=2))
