"""
RBAC exceptions

A denial is a normal AuthorizationDecision. These exceptions cover the
cases that are not: malformed input to the engine, and a service refusing
to run an operation after a denial.
"""
from schoolapp.rbac.models import AuthorizationDecision
from schoolapp.rbac.permissions import Permissions


class PolicyInputError(ValueError):
    """Raised when the policy engine is called with malformed input"""


class AuthorizationError(Exception):
    """Raised by a guarded operation when the policy engine denies it"""

    def __init__(self, permission: Permissions, decision: AuthorizationDecision):
        self.permission = permission
        self.decision = decision
        super().__init__(f"Access denied for {permission}: {decision.reason}")

    @property
    def reason(self):
        return self.decision.reason
