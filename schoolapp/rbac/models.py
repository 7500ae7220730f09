"""
Pydantic models for authorization inputs and results
"""
from datetime import datetime
from enum import Enum
from typing import Any, FrozenSet, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from schoolapp.rbac.roles import Role


class Subject(BaseModel):
    """The acting teacher, as resolved by the authentication layer"""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Opaque teacher identifier")
    role: Role = Field(..., description="Teacher role")
    is_active: bool = Field(True, description="Inactive teachers are denied everything")
    homeroom_class_id: Optional[str] = Field(None, description="Homeroom class (homeroom teachers)")
    taught_subject_ids: FrozenSet[str] = Field(default_factory=frozenset,
                                               description="Subjects taught (general teachers)")
    name: Optional[str] = Field(None, description="Display name")
    email: Optional[str] = Field(None, description="Login email")
    created_at: Optional[datetime] = Field(None, description="When the account was created")

    @property
    def is_homeroom_teacher(self) -> bool:
        return self.role == Role.HOMEROOM_TEACHER

    @property
    def is_general_teacher(self) -> bool:
        return self.role == Role.GENERAL_TEACHER


# Camel-case keys used by the mobile client
_RESOURCE_KEY_ALIASES = {
    'classId': 'class_id',
    'subjectId': 'subject_id',
    'studentId': 'student_id',
}


class ResourceContext(BaseModel):
    """Attributes of the object a permission is checked against"""
    model_config = ConfigDict(frozen=True, extra='ignore')

    class_id: Optional[str] = None
    subject_id: Optional[str] = None
    student_id: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> 'ResourceContext':
        """Build a context from a dict using snake_case or camelCase keys."""
        values = {}
        for key, value in data.items():
            key = _RESOURCE_KEY_ALIASES.get(key, key)
            if key in cls.model_fields and value is not None:
                values[key] = str(value)
        return cls(**values)


class DenialReason(str, Enum):
    """Why an authorization request was denied"""
    SUBJECT_INACTIVE = "subject_inactive"
    PERMISSION_NOT_GRANTED_TO_ROLE = "permission_not_granted_to_role"
    NOT_OWN_SUBJECT = "not_own_subject"
    NOT_OWN_CLASS = "not_own_class"
    NOT_OWN_STUDENT = "not_own_student"

    def __str__(self):
        return self.value


class AuthorizationDecision(BaseModel):
    """Outcome of a policy evaluation"""
    model_config = ConfigDict(frozen=True)

    allowed: bool
    reason: Optional[DenialReason] = None

    @classmethod
    def allow(cls) -> 'AuthorizationDecision':
        return _ALLOWED

    @classmethod
    def deny(cls, reason: DenialReason) -> 'AuthorizationDecision':
        return cls(allowed=False, reason=reason)

    def __bool__(self):
        return self.allowed

    def to_dict(self) -> dict:
        return {
            'allowed': self.allowed,
            'reason': self.reason.value if self.reason else None,
        }


_ALLOWED = AuthorizationDecision(allowed=True)
