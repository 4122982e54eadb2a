"""
Action HTTP handler module.

Exposes the "Log to Slack" custom action as Flask endpoints so that hosts
which call actions over HTTP can use it.
"""

import logging
from typing import Optional

from flask import Blueprint, jsonify, request

from slack_logger.interface.action.log_to_slack import LogToSlackAction

logger = logging.getLogger(__name__)

# 客户端错误对应 400，其余失败视为上游（Slack）错误
_CLIENT_ERROR_CODES = ('VALIDATION_ERROR', 'CONFIGURATION_ERROR')


def create_action_blueprint(
    action: Optional[LogToSlackAction] = None,
    prefix: str = '/action'
) -> Blueprint:
    """
    Create a Flask Blueprint for the Log to Slack action.

    Args:
        action: Action instance (a new one is created if omitted).
        prefix: URL prefix for the blueprint.

    Returns:
        Configured Flask Blueprint.
    """
    bp = Blueprint('slack_action', __name__, url_prefix=prefix)
    log_action = action or LogToSlackAction()

    @bp.route('/log', methods=['POST'])
    def handle_log() -> tuple:
        """
        Run the action with the JSON request body.

        Returns:
            JSON action output ({'success', 'error'}).
        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or not data:
            logger.warning('⚠️ Action received empty data')
            return jsonify({'success': False, 'error': 'No data provided'}), 400

        logger.info(f'📨 收到 Log to Slack 请求: {str(data.get("summary") or "")[:50]}')

        result = log_action.run(data)
        if result.success:
            return jsonify(result.to_dict()), 200

        status = 400 if result.code in _CLIENT_ERROR_CODES else 502
        return jsonify(result.to_dict()), status

    @bp.route('/schema', methods=['GET'])
    def action_schema() -> tuple:
        """Return the action metadata and input/output schemas."""
        return jsonify(log_action.describe()), 200

    @bp.route('/health', methods=['GET'])
    def action_health() -> tuple:
        """Health check endpoint for the action service."""
        return jsonify({
            'status': 'healthy',
            'service': 'slack_action'
        }), 200

    return bp
