"""
Policy engine for homeroom and general teachers

evaluate() runs an ordered pipeline and the first rule that decides wins:

1. inactive teachers are denied everything
2. the permission must be in the role's baseline set
3. role-specific rules narrow the permission to resources the teacher owns

The engine is pure: it keeps no state beyond the static tables and the
injected teaching-relationship lookup, so one instance can be shared by any
number of concurrent callers.
"""
from typing import Any, Dict, FrozenSet, Mapping, Optional, Union

from schoolapp.rbac.exceptions import PolicyInputError
from schoolapp.rbac.models import AuthorizationDecision, DenialReason, ResourceContext, Subject
from schoolapp.rbac.permissions import (
    FEATURE_PERMISSIONS,
    Permissions,
    get_feature_permissions,
    get_permissions_for_role,
)
from schoolapp.rbac.relationships import NoTeachingRelationships, TeachingRelationships
from schoolapp.rbac.roles import Role

ResourceLike = Union[ResourceContext, Mapping[str, Any], None]

# Permissions a general teacher may only use on classes they teach
_GENERAL_CLASS_SCOPED = frozenset({
    Permissions.VIEW_STUDENTS,
    Permissions.VIEW_GRADES,
    Permissions.VIEW_ATTENDANCE,
})

# Permissions a homeroom teacher may only use on their homeroom class
_HOMEROOM_CLASS_SCOPED = frozenset({
    Permissions.MANAGE_CLASS,
    Permissions.MANAGE_STUDENTS,
    Permissions.EDIT_STUDENT_INFO,
})


def _coerce_permission(permission: Union[Permissions, str]) -> Permissions:
    if isinstance(permission, Permissions):
        return permission
    if isinstance(permission, str):
        try:
            return Permissions(permission)
        except ValueError:
            pass
    raise PolicyInputError(f"Unknown permission: {permission!r}")


def _coerce_resource(resource: ResourceLike) -> Optional[ResourceContext]:
    if resource is None or isinstance(resource, ResourceContext):
        return resource
    if isinstance(resource, Mapping):
        return ResourceContext.from_mapping(resource)
    # Anything else carries no usable attributes
    return ResourceContext()


def _check_subject(subject: Subject) -> None:
    if subject is None:
        raise PolicyInputError("Subject is required")
    if not isinstance(subject, Subject):
        raise PolicyInputError(f"Expected a Subject, got {type(subject).__name__}")
    if not isinstance(subject.role, Role):
        raise PolicyInputError(f"Unknown role: {subject.role!r}")


class PolicyEngine:
    """Evaluates resource-scoped authorization decisions"""

    def __init__(self, relationships: Optional[TeachingRelationships] = None):
        self.relationships = relationships or NoTeachingRelationships()

    def evaluate(self,
                 subject: Subject,
                 permission: Union[Permissions, str],
                 resource: ResourceLike = None) -> AuthorizationDecision:
        """
        Decide whether a teacher may use a permission on a resource.

        Args:
            subject: The acting teacher
            permission: Permission enum or permission string
            resource: Optional ResourceContext or mapping with class_id,
                subject_id and/or student_id. Any other value is treated as a
                context with no attributes

        Returns:
            AuthorizationDecision, with a DenialReason when denied

        Raises:
            PolicyInputError: for a missing subject, an unknown role or an
                unknown permission. A malformed resource reads as empty.
        """
        _check_subject(subject)
        permission = _coerce_permission(permission)
        resource = _coerce_resource(resource)

        if not subject.is_active:
            return AuthorizationDecision.deny(DenialReason.SUBJECT_INACTIVE)

        if permission not in get_permissions_for_role(subject.role):
            return AuthorizationDecision.deny(DenialReason.PERMISSION_NOT_GRANTED_TO_ROLE)

        if subject.role == Role.GENERAL_TEACHER:
            return self._check_general_teacher(subject, permission, resource)
        if subject.role == Role.HOMEROOM_TEACHER:
            return self._check_homeroom_teacher(subject, permission, resource)
        return AuthorizationDecision.allow()

    def _check_general_teacher(self, subject: Subject, permission: Permissions,
                               resource: Optional[ResourceContext]) -> AuthorizationDecision:
        if permission == Permissions.MANAGE_GRADES:
            # No resource means no declared subject, which is never allowed
            if resource is None or resource.subject_id not in subject.taught_subject_ids:
                return AuthorizationDecision.deny(DenialReason.NOT_OWN_SUBJECT)
            return AuthorizationDecision.allow()

        if permission == Permissions.CONDUCT_COUNSELING:
            if (resource is None or resource.student_id is None
                    or not self.relationships.teaches_student(subject, resource.student_id)):
                return AuthorizationDecision.deny(DenialReason.NOT_OWN_STUDENT)
            return AuthorizationDecision.allow()

        if permission in _GENERAL_CLASS_SCOPED and resource is not None and resource.class_id is not None:
            if not self.relationships.teaches_class(subject, resource.class_id):
                return AuthorizationDecision.deny(DenialReason.NOT_OWN_CLASS)

        return AuthorizationDecision.allow()

    def _check_homeroom_teacher(self, subject: Subject, permission: Permissions,
                                resource: Optional[ResourceContext]) -> AuthorizationDecision:
        if permission in _HOMEROOM_CLASS_SCOPED and resource is not None and resource.class_id is not None:
            if resource.class_id != subject.homeroom_class_id:
                return AuthorizationDecision.deny(DenialReason.NOT_OWN_CLASS)
        return AuthorizationDecision.allow()

    def is_allowed(self, subject: Subject, permission: Union[Permissions, str],
                   resource: ResourceLike = None) -> bool:
        return self.evaluate(subject, permission, resource).allowed

    @staticmethod
    def permissions_for_role(role: Union[Role, str]) -> FrozenSet[Permissions]:
        """Baseline permissions of a role; empty for an unknown role."""
        return get_permissions_for_role(role)

    def permissions_for_subject(self, subject: Subject) -> FrozenSet[Permissions]:
        _check_subject(subject)
        return get_permissions_for_role(subject.role)

    def can_access_feature(self, subject: Subject, feature_id: str) -> bool:
        """
        Check whether a teacher may open a feature at all.

        True if at least one of the feature's permissions is allowed with no
        resource context. Unknown features are not accessible.
        """
        _check_subject(subject)
        return any(
            self.evaluate(subject, permission).allowed
            for permission in get_feature_permissions(feature_id)
        )

    def accessible_features(self, subject: Subject) -> Dict[str, bool]:
        """Feature id -> visibility for every known feature."""
        return {
            feature_id: self.can_access_feature(subject, feature_id)
            for feature_id in FEATURE_PERMISSIONS
        }
