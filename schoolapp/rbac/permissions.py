"""
Permission definitions for RBAC system

Each role holds a baseline set of permissions. Resource-scoped narrowing
happens in the policy engine, not here.
"""
from enum import Enum
from types import MappingProxyType
from typing import FrozenSet, Mapping

from schoolapp.rbac.roles import Role


class Permissions(str, Enum):
    """Available permissions in the system"""
    # Student permissions
    VIEW_STUDENTS = "view_students"
    MANAGE_STUDENTS = "manage_students"
    EDIT_STUDENT_INFO = "edit_student_info"

    # Grade permissions
    VIEW_GRADES = "view_grades"
    MANAGE_GRADES = "manage_grades"
    EXPORT_GRADES = "export_grades"

    # Attendance permissions
    VIEW_ATTENDANCE = "view_attendance"
    MANAGE_ATTENDANCE = "manage_attendance"

    # Parent permissions
    VIEW_PARENT_INFO = "view_parent_info"
    CONTACT_PARENTS = "contact_parents"

    # Class permissions
    MANAGE_CLASS = "manage_class"
    VIEW_CLASS_REPORTS = "view_class_reports"

    # Counseling permissions
    CONDUCT_COUNSELING = "conduct_counseling"
    VIEW_COUNSELING_RECORDS = "view_counseling_records"

    def __str__(self):
        return self.value


# Baseline permissions for each role
ROLE_PERMISSIONS: Mapping[Role, FrozenSet[Permissions]] = MappingProxyType({
    # Homeroom teachers hold every permission
    Role.HOMEROOM_TEACHER: frozenset(Permissions),

    Role.GENERAL_TEACHER: frozenset({
        Permissions.VIEW_STUDENTS,
        Permissions.VIEW_GRADES,
        Permissions.MANAGE_GRADES,        # own subjects only
        Permissions.VIEW_ATTENDANCE,
        Permissions.CONDUCT_COUNSELING,   # own students only
    }),
})


# Feature (screen) id -> permissions that unlock it
FEATURE_PERMISSIONS: Mapping[str, FrozenSet[Permissions]] = MappingProxyType({
    'Students': frozenset({Permissions.VIEW_STUDENTS}),
    'StudentDetail': frozenset({Permissions.VIEW_STUDENTS}),
    'AddStudent': frozenset({Permissions.MANAGE_STUDENTS}),
    'EditStudent': frozenset({Permissions.EDIT_STUDENT_INFO}),
    'Grades': frozenset({Permissions.VIEW_GRADES}),
    'AddGrade': frozenset({Permissions.MANAGE_GRADES}),
    'EditGrade': frozenset({Permissions.MANAGE_GRADES}),
    'ExportGrades': frozenset({Permissions.EXPORT_GRADES}),
    'Attendance': frozenset({Permissions.VIEW_ATTENDANCE}),
    'TakeAttendance': frozenset({Permissions.MANAGE_ATTENDANCE}),
    'ParentContacts': frozenset({Permissions.VIEW_PARENT_INFO, Permissions.CONTACT_PARENTS}),
    'ClassManagement': frozenset({Permissions.MANAGE_CLASS}),
    'ClassReports': frozenset({Permissions.VIEW_CLASS_REPORTS}),
    'Counseling': frozenset({Permissions.CONDUCT_COUNSELING}),
    'CounselingRecords': frozenset({Permissions.VIEW_COUNSELING_RECORDS}),
})


def get_permissions_for_role(role: Role | str) -> FrozenSet[Permissions]:
    """
    Get all permissions for a given role.

    Args:
        role: Role enum or role string

    Returns:
        Set of permissions for the role, empty for an unknown role
    """
    if isinstance(role, str) and not isinstance(role, Role):
        if not Role.is_valid(role):
            return frozenset()
        role = Role.from_string(role)

    return ROLE_PERMISSIONS.get(role, frozenset())


def has_permission(role: Role | str, permission: Permissions | str) -> bool:
    """
    Check if a role has a specific permission at the baseline level.

    Args:
        role: Role enum or role string
        permission: Permission enum or permission string

    Returns:
        True if role has the permission, False otherwise
    """
    if isinstance(permission, str) and not isinstance(permission, Permissions):
        try:
            permission = Permissions(permission)
        except ValueError:
            return False

    return permission in get_permissions_for_role(role)


def get_feature_permissions(feature_id: str) -> FrozenSet[Permissions]:
    """Permissions that unlock a feature; empty for unknown features."""
    return FEATURE_PERMISSIONS.get(feature_id, frozenset())
