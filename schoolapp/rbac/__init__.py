"""
RBAC (Role-Based Access Control) module for the school management app

This module provides role-based access control for two teacher roles:
- Homeroom teacher: Holds every permission, scoped to their homeroom class
- General teacher: Can view students, grades and attendance of classes they
  teach, manage grades of their own subjects and counsel their own students

The Flask helpers (utils, template_helpers) and the database-backed roster
are imported from their own modules so the engine has no web or database
dependencies.
"""

from schoolapp.rbac.roles import Role
from schoolapp.rbac.permissions import (
    Permissions,
    ROLE_PERMISSIONS,
    FEATURE_PERMISSIONS,
    get_permissions_for_role,
    get_feature_permissions,
    has_permission,
)
from schoolapp.rbac.models import AuthorizationDecision, DenialReason, ResourceContext, Subject
from schoolapp.rbac.exceptions import AuthorizationError, PolicyInputError
from schoolapp.rbac.relationships import (
    NoTeachingRelationships,
    StaticTeachingRelationships,
    TeachingRelationships,
)
from schoolapp.rbac.engine import PolicyEngine
from schoolapp.rbac.guards import ensure_allowed
from schoolapp.rbac.messages import describe_denial

__all__ = [
    'Role',
    'Permissions',
    'ROLE_PERMISSIONS',
    'FEATURE_PERMISSIONS',
    'get_permissions_for_role',
    'get_feature_permissions',
    'has_permission',
    'AuthorizationDecision',
    'DenialReason',
    'ResourceContext',
    'Subject',
    'AuthorizationError',
    'PolicyInputError',
    'NoTeachingRelationships',
    'StaticTeachingRelationships',
    'TeachingRelationships',
    'PolicyEngine',
    'ensure_allowed',
    'describe_denial',
]
