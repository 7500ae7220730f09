"""
Template helper functions for RBAC
These functions can be used in Jinja2 templates to conditionally show/hide UI elements
"""
from schoolapp.rbac.utils import (
    get_user_role,
    is_homeroom_teacher,
    is_general_teacher,
    get_ui_features,
    check_permission,
    can_access_feature,
)


def get_current_user_role() -> str:
    """Get current teacher's role for templates"""
    return get_user_role() or ''


def user_is_homeroom_teacher() -> bool:
    """Check if current teacher is a homeroom teacher"""
    return is_homeroom_teacher()


def user_is_general_teacher() -> bool:
    """Check if current teacher is a general teacher"""
    return is_general_teacher()


def get_role_based_features() -> dict:
    """
    Get all feature visibility flags for the current teacher.
    """
    return get_ui_features()


# Dictionary of all template helpers for easy registration
TEMPLATE_HELPERS = {
    'user_role': get_current_user_role,
    'is_homeroom_teacher': user_is_homeroom_teacher,
    'is_general_teacher': user_is_general_teacher,
    'can_access_feature': can_access_feature,
    'check_permission': check_permission,
    'rbac_features': get_role_based_features,
}
