"""
Role definitions for RBAC system
"""
from enum import Enum


class Role(str, Enum):
    """Teacher roles in the system"""
    HOMEROOM_TEACHER = "homeroom_teacher"
    GENERAL_TEACHER = "general_teacher"

    def __str__(self):
        return self.value

    @classmethod
    def from_string(cls, role_str: str) -> 'Role':
        """
        Convert string to Role enum.

        Raises:
            ValueError: if the string does not name a role
        """
        normalized = role_str.lower().strip()
        for role in cls:
            if role.value == normalized:
                return role
        raise ValueError(f"Unknown role: {role_str!r}")

    @classmethod
    def is_valid(cls, role_str: str) -> bool:
        """Check if a string is a valid role"""
        role_str = role_str.lower().strip()
        return role_str in [role.value for role in cls]

    @classmethod
    def get_all(cls) -> list[str]:
        """Get all role values as strings"""
        return [role.value for role in cls]

    @property
    def display_name(self) -> str:
        return self.value.replace('_', ' ').title()
