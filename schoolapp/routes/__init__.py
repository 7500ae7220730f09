"""
Shared JSON error handling for the API blueprints
"""
from flask import jsonify
import logging

from schoolapp.rbac.exceptions import AuthorizationError
from schoolapp.rbac.utils import get_denial_message
from schoolapp.services.base_service import RecordNotFoundError

logger = logging.getLogger(__name__)


def register_error_handlers(bp):
    """Translate service exceptions into JSON responses."""

    @bp.errorhandler(AuthorizationError)
    def handle_denied(e):
        return jsonify({
            'error': get_denial_message(e.reason),
            'reason': e.reason.value if e.reason else None,
            'permission': e.permission.value,
        }), 403

    @bp.errorhandler(RecordNotFoundError)
    def handle_not_found(e):
        return jsonify({'error': str(e)}), 404

    @bp.errorhandler(ValueError)
    def handle_bad_request(e):
        # Covers PolicyInputError and pydantic validation errors
        logger.info(f"Rejected request: {str(e)}")
        return jsonify({'error': str(e)}), 400


def require_fields(data, *fields):
    """Raise ValueError unless every field is present in the JSON body."""
    if not isinstance(data, dict):
        raise ValueError("Request body must be a JSON object")
    missing = [f for f in fields if data.get(f) in (None, '')]
    if missing:
        raise ValueError(f"Missing required fields: {', '.join(missing)}")
    return data
