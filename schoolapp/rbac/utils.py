"""
RBAC utility functions for checking permissions of the current teacher
"""
from flask import current_app
from typing import Dict, Optional

from schoolapp.rbac.engine import PolicyEngine
from schoolapp.rbac.messages import describe_denial
from schoolapp.rbac.models import AuthorizationDecision, DenialReason, Subject
from schoolapp.rbac.permissions import Permissions
from schoolapp.rbac.roles import Role


def get_policy_engine() -> PolicyEngine:
    """Get the policy engine configured for the app"""
    return current_app.extensions['policy_engine']


def get_current_subject() -> Optional[Subject]:
    """Get the signed-in teacher, or None"""
    return current_app.extensions['subject_provider'].current_subject()


def get_user_role() -> Optional[str]:
    """
    Get the role of the signed-in teacher.

    Returns:
        Role value as string, or None when nobody is signed in
    """
    subject = get_current_subject()
    return subject.role.value if subject else None


def is_homeroom_teacher() -> bool:
    """Check if the signed-in teacher is a homeroom teacher"""
    return get_user_role() == Role.HOMEROOM_TEACHER.value


def is_general_teacher() -> bool:
    """Check if the signed-in teacher is a general teacher"""
    return get_user_role() == Role.GENERAL_TEACHER.value


def evaluate_current(permission: Permissions | str, **resource) -> Optional[AuthorizationDecision]:
    """
    Evaluate a permission for the signed-in teacher.

    Args:
        permission: Permission to check
        **resource: class_id, subject_id and/or student_id

    Returns:
        The decision, or None when nobody is signed in
    """
    subject = get_current_subject()
    if subject is None:
        return None
    return get_policy_engine().evaluate(subject, permission, resource or None)


def check_permission(permission: Permissions | str, **resource) -> bool:
    """Check if the signed-in teacher may use a permission on a resource"""
    decision = evaluate_current(permission, **resource)
    return bool(decision and decision.allowed)


def can_access_feature(feature_id: str) -> bool:
    """Check if the signed-in teacher may open a feature"""
    subject = get_current_subject()
    if subject is None:
        return False
    return get_policy_engine().can_access_feature(subject, feature_id)


def get_ui_features() -> Dict[str, bool]:
    """
    Get UI features visibility for the signed-in teacher.
    This is used in templates to show/hide UI elements.

    Returns:
        Dictionary mapping feature ids to visibility boolean
    """
    subject = get_current_subject()
    if subject is None:
        return {}
    return get_policy_engine().accessible_features(subject)


def get_denial_message(reason: Optional[DenialReason]) -> Optional[str]:
    """Message for a denial reason in the app's configured locale"""
    return describe_denial(reason, current_app.config.get('DEFAULT_LOCALE', 'en'))
