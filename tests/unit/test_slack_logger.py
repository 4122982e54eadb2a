"""
Tests for SlackLogger.

Tests construction, call validation, delivery and the safe/strict error
policies.
"""

import pytest
import requests

from slack_logger.core.exceptions import ConfigurationError, DeliveryError, ValidationError
from slack_logger.core.interfaces.notifications import LogEvent
from slack_logger.infrastructure.notification.slack.slack_logger import SlackLogger
from tests.fixtures.responses import make_response, sent_payload
from tests.fixtures.test_data import (
    AUTHOR,
    CALL_FIELDS,
    CUSTOMER_ID,
    DEFAULT_FIELDS,
    LONG_DETAILS,
    USERNAME,
    WEBHOOK_URL,
)


class TestConstruction:
    """Tests for mandatory configuration."""

    @pytest.mark.parametrize('webhook_url, username, author', [
        (None, USERNAME, AUTHOR),
        ('', USERNAME, AUTHOR),
        (WEBHOOK_URL, None, AUTHOR),
        (WEBHOOK_URL, '  ', AUTHOR),
        (WEBHOOK_URL, USERNAME, None),
        (WEBHOOK_URL, USERNAME, ''),
    ])
    def test_missing_identity_raises(self, webhook_url, username, author):
        with pytest.raises(ConfigurationError):
            SlackLogger(webhook_url, username, author)

    def test_missing_lists_parameters(self):
        with pytest.raises(ConfigurationError) as exc_info:
            SlackLogger(None, USERNAME, None)

        assert exc_info.value.missing == ['webhook_url', 'author']
        assert exc_info.value.code == 'CONFIGURATION_ERROR'

    def test_invalid_option_raises_configuration_error(self):
        with pytest.raises(ConfigurationError):
            SlackLogger(WEBHOOK_URL, USERNAME, AUTHOR, timeout=-1)

    def test_optional_defaults(self):
        slack = SlackLogger(WEBHOOK_URL, USERNAME, AUTHOR)

        assert slack.config.author_url == ''
        assert slack.config.fields == {}
        assert slack.config.customer_id is None
        assert slack.is_strict is False

    def test_repr_hides_webhook(self):
        slack = SlackLogger(WEBHOOK_URL, USERNAME, AUTHOR)

        assert WEBHOOK_URL not in repr(slack)
        assert 'safe' in repr(slack)


class TestValidation:
    """Tests that invalid calls never reach the network."""

    @pytest.mark.parametrize('success, summary', [
        (None, 'sync ok'),
        (True, None),
        (True, ''),
        (False, '   '),
    ])
    def test_safe_mode_returns_failure(self, slack, mock_post, success, summary):
        result = slack.log(success, summary)

        assert result.success is False
        assert result.code == 'VALIDATION_ERROR'
        mock_post.assert_not_called()

    def test_strict_mode_raises(self, slack, mock_post):
        with pytest.raises(ValidationError) as exc_info:
            slack.strict().log(None, 'sync ok')

        assert exc_info.value.field_name == 'success'
        mock_post.assert_not_called()

    @pytest.mark.parametrize('details', [12345, ['line'], {'a': 1}])
    def test_non_text_details_rejected(self, slack, mock_post, details):
        result = slack.log(True, 'sync ok', details=details)

        assert result.success is False
        assert result.code == 'VALIDATION_ERROR'
        mock_post.assert_not_called()

    def test_non_text_details_rejected_for_warn(self, slack, mock_post):
        result = slack.warn('slow', details=12345)

        assert result.code == 'VALIDATION_ERROR'
        mock_post.assert_not_called()

    def test_non_text_details_strict_mode(self, slack, mock_post):
        with pytest.raises(ValidationError) as exc_info:
            slack.strict().log(True, 'sync ok', details=12345)

        assert exc_info.value.field_name == 'details'
        mock_post.assert_not_called()

    def test_incomplete_entity_pair(self, slack, mock_post):
        result = slack.log(True, 'sync ok', entity='order')

        assert result.success is False
        assert result.code == 'VALIDATION_ERROR'
        mock_post.assert_not_called()


class TestLog:
    """Tests for successful delivery."""

    def test_end_to_end(self, slack, mock_post):
        result = slack.log(True, 'sync ok')

        assert result.success is True
        assert result.status_code == 200
        mock_post.assert_called_once()
        assert mock_post.call_args.args[0] == WEBHOOK_URL
        attachment = sent_payload(mock_post)['attachments'][0]
        assert attachment['title'] == '✅ sync ok'
        assert attachment['color'] == 'good'
        assert attachment['text'] == ''
        assert attachment['fields'] == [
            {'title': 'author', 'value': 'MyApp', 'short': True},
            {'title': 'success', 'value': 'true', 'short': True},
        ]

    def test_result_is_truthy(self, slack, mock_post):
        assert slack.log(True, 'sync ok')
        assert not slack.log(None, 'sync ok')

    def test_failure_message(self, slack, mock_post):
        slack.log(False, 'sync failed', details=LONG_DETAILS)

        attachment = sent_payload(mock_post)['attachments'][0]
        assert attachment['color'] == 'danger'
        assert attachment['title'] == '❌ sync failed'
        assert attachment['text'].endswith('...```')

    def test_fields_in_order(self, builder, mock_post):
        slack = SlackLogger(
            WEBHOOK_URL, USERNAME, AUTHOR,
            attachment_builder=builder,
            fields=DEFAULT_FIELDS,
            customer_id=CUSTOMER_ID
        )

        slack.log(True, 'sync ok', fields=CALL_FIELDS, entity='order', entity_id='SO-1001')

        titles = [f['title'] for f in sent_payload(mock_post)['attachments'][0]['fields']]
        assert titles == [
            'author', 'success', 'entity', 'entity id',
            'account', 'apigrate_account',
            'order', 'dry_run',
            'customer id',
        ]

    def test_notify_accepts_event(self, slack, mock_post):
        result = slack.notify(LogEvent(success=False, summary='failed'))

        assert result.success is True
        assert sent_payload(mock_post)['attachments'][0]['color'] == 'danger'

    def test_identical_calls_send_twice(self, slack, mock_post):
        slack.log(True, 'sync ok')
        slack.log(True, 'sync ok')

        assert mock_post.call_count == 2


class TestDeliveryFailures:
    """Tests for the safe and strict error policies."""

    def test_connection_refused_does_not_raise(self, slack, mock_post):
        mock_post.side_effect = requests.ConnectionError('Connection refused')

        result = slack.log(True, 'sync ok')

        assert result.success is False
        assert result.code == 'DELIVERY_ERROR'
        assert 'Connection refused' in result.error

    def test_http_500_reports_status_and_body(self, slack, mock_post):
        mock_post.return_value = make_response(500, 'error')

        result = slack.log(True, 'sync ok')

        assert result.success is False
        assert result.status_code == 500
        assert '500' in result.error
        assert 'error' in result.error

    def test_strict_mode_raises_delivery_error(self, slack, mock_post):
        mock_post.return_value = make_response(500, 'error')

        with pytest.raises(DeliveryError) as exc_info:
            slack.strict().log(True, 'sync ok')

        assert exc_info.value.status_code == 500
        assert exc_info.value.body == 'error'

    def test_strict_mode_raises_on_transport_error(self, mock_post):
        mock_post.side_effect = requests.ConnectionError('Connection refused')
        slack = SlackLogger(WEBHOOK_URL, USERNAME, AUTHOR, raise_on_error=True)

        with pytest.raises(DeliveryError):
            slack.log(True, 'sync ok')

    def test_failure_is_logged(self, slack, mock_post, caplog):
        mock_post.return_value = make_response(500, 'error')

        slack.log(True, 'sync ok')

        assert 'HTTP-500' in caplog.text

    def test_safe_copy_of_strict_logger(self, mock_post):
        strict = SlackLogger(WEBHOOK_URL, USERNAME, AUTHOR, raise_on_error=True)
        mock_post.return_value = make_response(500, 'error')

        assert strict.safe().log(True, 'sync ok').success is False
        assert strict.is_strict is True


class TestShortcuts:
    """Tests for ok/error/warn/question and raw post."""

    def test_ok_and_error(self, slack, mock_post):
        slack.ok('fine')
        assert sent_payload(mock_post)['attachments'][0]['color'] == 'good'

        slack.error('broken')
        assert sent_payload(mock_post)['attachments'][0]['color'] == 'danger'

    def test_warn(self, slack, mock_post):
        result = slack.warn('slow', fields={'duration': '12s'})

        attachment = sent_payload(mock_post)['attachments'][0]
        assert result.success is True
        assert attachment['color'] == 'warning'
        assert [f['title'] for f in attachment['fields']] == ['author', 'duration']

    def test_question(self, slack, mock_post):
        slack.question('unknown state')

        attachment = sent_payload(mock_post)['attachments'][0]
        assert attachment['color'] == ''
        assert attachment['title'].startswith('❓')

    def test_warn_requires_summary(self, slack, mock_post):
        assert slack.warn('').success is False
        mock_post.assert_not_called()

    def test_post_raw_attachment(self, slack, mock_post):
        attachment = {'color': '#439FE0', 'title': 'custom', 'text': 'hello'}

        result = slack.post(attachment, username='ops')

        assert result.success is True
        assert sent_payload(mock_post) == {'username': 'ops', 'attachments': [attachment]}

    def test_post_uses_configured_username(self, slack, mock_post):
        slack.post({'title': 'custom'})

        assert sent_payload(mock_post)['username'] == USERNAME

    def test_post_rejects_empty_attachment(self, slack, mock_post):
        result = slack.post({})

        assert result.success is False
        mock_post.assert_not_called()


class TestTimingAndBackground:
    """Tests for timing measurement and background delivery."""

    def test_elapsed_only_when_measured(self, mock_post):
        plain = SlackLogger(WEBHOOK_URL, USERNAME, AUTHOR)
        timed = SlackLogger(WEBHOOK_URL, USERNAME, AUTHOR, measure_timing=True)

        assert plain.log(True, 'ok').elapsed is None
        assert timed.log(True, 'ok').elapsed >= 0

    def test_log_nowait_returns_future(self, mock_post):
        with SlackLogger(WEBHOOK_URL, USERNAME, AUTHOR) as slack:
            futures = [slack.log_nowait(True, f'run {i}') for i in range(5)]
            results = [f.result(timeout=5) for f in futures]

        assert all(r.success for r in results)
        assert mock_post.call_count == 5

    def test_log_nowait_failure_does_not_raise(self, mock_post):
        mock_post.side_effect = requests.ConnectionError('Connection refused')

        with SlackLogger(WEBHOOK_URL, USERNAME, AUTHOR) as slack:
            result = slack.log_nowait(True, 'ok').result(timeout=5)

        assert result.success is False
