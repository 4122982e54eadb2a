"""
"Log to Slack" custom action module.

Adapts a workflow host's custom-action calling convention (input/output
schema objects and a callback-based ``execute``) onto SlackLogger.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from slack_logger.core.exceptions import SlackLoggerError
from slack_logger.core.interfaces.notifications import LogResult
from slack_logger.infrastructure.notification.slack import SlackLogger, SlackWebhookClient

logger = logging.getLogger(__name__)

OutputCallback = Callable[[Optional[Exception], Dict[str, Any]], Any]


class LogToSlackAction:
    """
    Posts a log message to a Slack channel.

    The action attempts to handle all errors itself: if logging fails it is
    reported through the output callback and never fails the calling flow.

    Example:
        >>> action = LogToSlackAction()
        >>> action.execute(
        ...     {'inbound_webhook': url, 'solution': 'Sync Orders',
        ...      'success': True, 'entity': 'order', 'entity_id': '42',
        ...      'summary': 'synced ok'},
        ...     lambda err, out: print(out)
        ... )
        {'success': True}
    """

    id = 'apigrate-slack-logger'

    label = 'Log to Slack'

    help = (
        'Posts a log message to a Slack channel. Please note that you must '
        'configure an inbound-webhook prior to using this action.'
    )

    username = 'Built.io'

    input = {
        'title': 'Parameters',
        'type': 'object',
        'properties': {
            'inbound_webhook': {
                'title': 'Slack Inbound Webhook',
                'type': 'string',
                'description': 'The slack inbound webhook to use.',
                'minLength': 1
            },
            'solution': {
                'title': 'Flow',
                'type': 'string',
                'description': 'The name of the flow triggering the log message.',
                'minLength': 1
            },
            'solution_url': {
                'title': 'Flow URL',
                'type': 'string',
                'description': '(optional) The URL to the flow (not the webhook url).'
            },
            'success': {
                'title': 'Success',
                'type': 'boolean',
                'description': (
                    'Indicates whether the log will register success or not. '
                    'Either true or false.'
                ),
                'minLength': 1
            },
            'entity': {
                'title': 'Entity',
                'type': 'string',
                'description': 'The type of entity related to this log message.',
                'minLength': 1
            },
            'entity_id': {
                'title': 'Entity ID',
                'type': 'string',
                'description': 'The identifier for the entity related to this log message.',
                'minLength': 1
            },
            'summary': {
                'title': 'Summary',
                'type': 'string',
                'description': 'A short summary of the log message.',
                'minLength': 1
            },
            'details': {
                'title': 'Details',
                'type': 'string',
                'description': '(optional) The detailed contents of the log message, if any.'
            }
        }
    }

    output = {
        'title': 'output',
        'type': 'object',
        'properties': {
            'success': {
                'title': 'success',
                'type': 'boolean',
                'description': (
                    'Whether the log was written. Note that this action will '
                    'attempt to handle all errors; in other words, if logging '
                    'fails for some reason, it should not cause the flow to fail.'
                )
            },
            'error': {
                'title': 'error',
                'type': 'string',
                'description': 'An error message returned, if any.'
            }
        }
    }

    def __init__(self, webhook_client: Optional[SlackWebhookClient] = None):
        """
        Args:
            webhook_client: Optional client shared by every execution.
        """
        self._client = webhook_client

    def describe(self) -> Dict[str, Any]:
        """Return the action metadata as the host expects it."""
        return {
            'id': self.id,
            'label': self.label,
            'help': self.help,
            'input': self.input,
            'output': self.output,
        }

    def missing_inputs(self, data: Dict[str, Any]) -> List[str]:
        """Names of required inputs (``minLength`` in the schema) that are empty."""
        missing = []
        for name, schema in self.input['properties'].items():
            if 'minLength' not in schema:
                continue
            value = data.get(name)
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(name)
        return missing

    def run(self, data: Dict[str, Any]) -> LogResult:
        """
        Execute the action and return the structured result.

        Never raises: configuration and validation problems are returned as
        failed results.
        """
        missing = self.missing_inputs(data)
        if missing:
            logger.warning(f'⚠️ Log to Slack action missing inputs: {missing}')
            return LogResult(
                success=False,
                error=f'Missing required input(s): {", ".join(missing)}',
                code='VALIDATION_ERROR'
            )

        if not isinstance(data['success'], bool):
            logger.warning(f'⚠️ Log to Slack action got non-boolean success: {data["success"]!r}')
            return LogResult(
                success=False,
                error='Invalid input: success must be true or false',
                code='VALIDATION_ERROR'
            )

        try:
            slack = SlackLogger(
                data['inbound_webhook'],
                self.username,
                data['solution'],
                webhook_client=self._client,
                author_url=data.get('solution_url') or '',
                author_field_title='solution',
                mrkdwn_in=('text',),
                expect_ok_body=True
            )
        except SlackLoggerError as e:
            return LogResult(success=False, error=e.message, code=e.code)

        return slack.log(
            data['success'],
            data['summary'],
            details=data.get('details'),
            entity=str(data['entity']),
            entity_id=str(data['entity_id'])
        )

    def execute(self, data: Dict[str, Any], output: OutputCallback) -> Any:
        """
        Host entry point.

        Args:
            data: Input values matching ``input``.
            output: Callback invoked as ``output(None, {'success': ..., 'error': ...})``.

        Returns:
            Whatever the callback returns.
        """
        result = self.run(data)
        return output(None, result.to_dict())
