"""
RBAC routes: permission tables and decisions for the signed-in teacher
"""
from flask import Blueprint, request, jsonify, g
import logging

from schoolapp.rbac.utils import get_policy_engine, get_denial_message
from schoolapp.routes import register_error_handlers, require_fields
from schoolapp.utils.auth import login_required

logger = logging.getLogger(__name__)
bp = Blueprint('rbac', __name__)
register_error_handlers(bp)


def _sorted_values(permissions):
    return sorted(p.value for p in permissions)


@bp.route('/roles/<role>/permissions', methods=['GET'])
@login_required
def role_permissions(role):
    """Baseline permissions of a role (empty for an unknown role)"""
    permissions = get_policy_engine().permissions_for_role(role)
    return jsonify({'role': role, 'permissions': _sorted_values(permissions)})


@bp.route('/me/permissions', methods=['GET'])
@login_required
def my_permissions():
    subject = g.subject
    permissions = get_policy_engine().permissions_for_subject(subject)
    return jsonify({
        'user_id': subject.id,
        'role': subject.role.value,
        'permissions': _sorted_values(permissions),
    })


@bp.route('/me/features', methods=['GET'])
@login_required
def my_features():
    return jsonify({'features': get_policy_engine().accessible_features(g.subject)})


@bp.route('/me/features/<feature_id>', methods=['GET'])
@login_required
def my_feature(feature_id):
    allowed = get_policy_engine().can_access_feature(g.subject, feature_id)
    return jsonify({'feature': feature_id, 'allowed': allowed})


@bp.route('/evaluate', methods=['POST'])
@login_required
def evaluate():
    """
    Evaluate a permission for the signed-in teacher.

    Body: {"permission": "manage_grades", "resource": {"subject_id": "math"}}
    """
    data = require_fields(request.get_json(silent=True), 'permission')
    resource = data.get('resource')
    if resource is not None and not isinstance(resource, dict):
        raise ValueError("resource must be a JSON object")

    decision = get_policy_engine().evaluate(g.subject, data['permission'], resource)
    return jsonify({
        **decision.to_dict(),
        'message': get_denial_message(decision.reason),
    })
