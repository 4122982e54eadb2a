"""
Slack Logger command line entry point.

Sends a single status message from the shell, or serves the Log to Slack
custom action over HTTP.
"""

import argparse
import logging
import os
import sys
from datetime import datetime
from typing import Dict, List, Optional

from dependency_injector import providers
from dependency_injector.wiring import Provide, inject
from flask import Flask

from slack_logger.container import Container, container
from slack_logger.core.config import SlackLoggerSettings
from slack_logger.core.exceptions import SlackLoggerError
from slack_logger.core.interfaces.notifications import LogResult
from slack_logger.infrastructure.notification.slack.slack_logger import SlackLogger
from slack_logger.interface.action.log_to_slack import LogToSlackAction
from slack_logger.interface.webhook.handler import create_action_blueprint

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(verbose: bool = False) -> None:
    """配置日志，设置 LOG_PATH 时同时写入按日期命名的日志文件"""
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    log_path = os.getenv('LOG_PATH')
    if log_path:
        os.makedirs(log_path, exist_ok=True)
        today = datetime.now().strftime('%Y-%m-%d')
        log_file = os.path.join(log_path, f'slack_logger_{today}.log')
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True
    )


def parse_field(value: str) -> tuple:
    """解析 name=value 格式的字段"""
    name, sep, field_value = value.partition('=')
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(
            f'Invalid field {value!r}, expected name=value'
        )
    return name.strip(), field_value


def read_details(args: argparse.Namespace) -> Optional[str]:
    """读取详情文本，--details-file 为 '-' 时读取标准输入"""
    if args.details_file:
        if args.details_file == '-':
            return sys.stdin.read()
        with open(args.details_file, 'r', encoding='utf-8') as f:
            return f.read()
    return args.details


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='slack-logger',
        description='Slack Logger - 通过 inbound webhook 记录自动化任务状态'
    )
    parser.add_argument('--config', help='JSON 配置文件路径（默认 CONFIG_PATH）')
    parser.add_argument('--verbose', action='store_true', help='输出 debug 日志')
    subparsers = parser.add_subparsers(dest='command', required=True)

    # log 命令
    log_parser = subparsers.add_parser('log', help='发送一条日志消息')
    log_parser.add_argument('--webhook', help='Slack inbound webhook URL')
    log_parser.add_argument('--username', help='显示用户名')
    log_parser.add_argument('--author', help='作者（应用名）')
    log_parser.add_argument('--author-url', help='作者链接')
    log_parser.add_argument('--customer-id', help='客户 ID')
    status = log_parser.add_mutually_exclusive_group(required=True)
    status.add_argument('--success', dest='status', action='store_const', const='ok')
    status.add_argument('--failure', dest='status', action='store_const', const='error')
    status.add_argument('--warn', dest='status', action='store_const', const='warn')
    status.add_argument('--question', dest='status', action='store_const', const='question')
    log_parser.add_argument('--summary', required=True, help='简短摘要')
    details = log_parser.add_mutually_exclusive_group()
    details.add_argument('--details', help='详情文本')
    details.add_argument('--details-file', help="详情文件（'-' 表示标准输入）")
    log_parser.add_argument(
        '--field',
        dest='fields',
        action='append',
        type=parse_field,
        default=[],
        metavar='NAME=VALUE',
        help='附加字段，可重复'
    )
    log_parser.add_argument('--entity', help='相关实体类型')
    log_parser.add_argument('--entity-id', help='相关实体 ID')
    log_parser.add_argument('--strict', action='store_true', help='失败时抛出异常')

    # serve 命令
    serve_parser = subparsers.add_parser('serve', help='以 HTTP 方式提供 Log to Slack action')
    serve_parser.add_argument('--host', default='0.0.0.0')
    serve_parser.add_argument('--port', type=int, default=5678)

    return parser


def configure_container(args: argparse.Namespace) -> None:
    """
    根据配置文件和命令行参数覆盖容器中的 logger 配置。

    Raises:
        ConfigurationError: 必填参数缺失
    """
    settings = SlackLoggerSettings.load(args.config)
    config = settings.to_config(
        webhook_url=args.webhook,
        username=args.username,
        author=args.author,
        author_url=args.author_url,
        customer_id=args.customer_id,
        raise_on_error=True if args.strict else None
    )
    container.reset_singletons()
    container.logger_config.override(providers.Object(config))


@inject
def send_log(
    args: argparse.Namespace,
    slack: SlackLogger = Provide[Container.slack_logger]
) -> LogResult:
    """发送一条日志消息"""
    fields: Dict[str, str] = dict(args.fields)
    details = read_details(args)

    if args.status == 'warn':
        return slack.warn(args.summary, details, fields)
    if args.status == 'question':
        return slack.question(args.summary, details, fields)

    return slack.log(
        args.status == 'ok',
        args.summary,
        details=details,
        fields=fields,
        entity=args.entity,
        entity_id=args.entity_id
    )


@inject
def create_app(
    action: LogToSlackAction = Provide[Container.log_action]
) -> Flask:
    """创建提供 Log to Slack action 的 Flask 应用"""
    app = Flask(__name__)
    app.register_blueprint(create_action_blueprint(action))
    return app


def main(argv: Optional[List[str]] = None) -> int:
    """主程序入口"""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    container.wire(modules=[sys.modules[__name__]])

    if args.command == 'serve':
        logger.info(f'🚀 Log to Slack action 启动: http://{args.host}:{args.port}/action')
        create_app().run(host=args.host, port=args.port)
        return 0

    try:
        configure_container(args)
        result = send_log(args)
    except SlackLoggerError as e:
        logger.error(f'❌ {e}')
        return 2
    except OSError as e:
        logger.error(f'❌ 无法读取详情文件: {e}')
        return 2
    finally:
        container.logger_config.reset_override()
        container.reset_singletons()

    if result.success:
        logger.info('✅ 日志已发送到 Slack')
        return 0

    logger.error(f'❌ 日志发送失败: {result.error}')
    return 1


if __name__ == '__main__':
    sys.exit(main())
