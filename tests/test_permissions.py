"""Role, permission table and denial message tests."""

import pytest

from schoolapp.rbac import (
    FEATURE_PERMISSIONS,
    ROLE_PERMISSIONS,
    AuthorizationError,
    AuthorizationDecision,
    DenialReason,
    Permissions,
    Role,
    describe_denial,
    get_feature_permissions,
    get_permissions_for_role,
    has_permission,
)
from schoolapp.rbac.messages import DENIAL_MESSAGES


class TestRole:

    def test_from_string(self):
        assert Role.from_string("homeroom_teacher") is Role.HOMEROOM_TEACHER
        assert Role.from_string("  General_Teacher ") is Role.GENERAL_TEACHER

    def test_from_string_unknown(self):
        with pytest.raises(ValueError):
            Role.from_string("principal")

    def test_is_valid(self):
        assert Role.is_valid("general_teacher")
        assert not Role.is_valid("student")

    def test_get_all(self):
        assert Role.get_all() == ["homeroom_teacher", "general_teacher"]

    def test_display_name(self):
        assert Role.HOMEROOM_TEACHER.display_name == "Homeroom Teacher"


class TestPermissionTables:

    def test_fourteen_permissions(self):
        assert len(Permissions) == 14
        assert Permissions("view_counseling_records") is Permissions.VIEW_COUNSELING_RECORDS

    def test_homeroom_holds_every_permission(self):
        assert ROLE_PERMISSIONS[Role.HOMEROOM_TEACHER] == frozenset(Permissions)

    def test_general_teacher_baseline(self):
        assert len(ROLE_PERMISSIONS[Role.GENERAL_TEACHER]) == 5
        assert Permissions.MANAGE_STUDENTS not in ROLE_PERMISSIONS[Role.GENERAL_TEACHER]

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            ROLE_PERMISSIONS[Role.GENERAL_TEACHER] = frozenset(Permissions)
        with pytest.raises(TypeError):
            FEATURE_PERMISSIONS["Payroll"] = frozenset()

    def test_get_permissions_for_role(self):
        assert get_permissions_for_role("homeroom_teacher") == frozenset(Permissions)
        assert get_permissions_for_role("janitor") == frozenset()

    def test_has_permission(self):
        assert has_permission(Role.GENERAL_TEACHER, Permissions.VIEW_GRADES)
        assert has_permission("general_teacher", "manage_grades")
        assert not has_permission("general_teacher", "export_grades")
        assert not has_permission("general_teacher", "fly")

    def test_every_feature_maps_to_permissions(self):
        for feature_id, permissions in FEATURE_PERMISSIONS.items():
            assert permissions, feature_id

    def test_get_feature_permissions(self):
        assert get_feature_permissions("ParentContacts") == frozenset({
            Permissions.VIEW_PARENT_INFO, Permissions.CONTACT_PARENTS,
        })
        assert get_feature_permissions("Payroll") == frozenset()


class TestMessages:

    def test_every_reason_has_a_message(self):
        for locale, messages in DENIAL_MESSAGES.items():
            assert set(messages) == set(DenialReason), locale

    def test_describe_denial(self):
        assert describe_denial(DenialReason.NOT_OWN_SUBJECT) == \
            "You can only manage grades for subjects you teach."
        assert describe_denial(DenialReason.NOT_OWN_SUBJECT, "ko") == "담당 과목의 성적만 관리할 수 있습니다."

    def test_unknown_locale_falls_back_to_english(self):
        assert describe_denial(DenialReason.SUBJECT_INACTIVE, "fr") == \
            describe_denial(DenialReason.SUBJECT_INACTIVE, "en")

    def test_no_reason_no_message(self):
        assert describe_denial(None) is None


def test_authorization_error_carries_decision():
    decision = AuthorizationDecision.deny(DenialReason.NOT_OWN_CLASS)
    error = AuthorizationError(Permissions.MANAGE_CLASS, decision)
    assert error.reason == DenialReason.NOT_OWN_CLASS
    assert error.permission is Permissions.MANAGE_CLASS
    assert "manage_class" in str(error)
