"""
Explicit permission guards for service operations

Services call ensure_allowed() as the first statement of every operation
instead of wrapping methods in permission decorators.
"""
import logging
from typing import Union

from schoolapp.rbac.engine import PolicyEngine, ResourceLike
from schoolapp.rbac.exceptions import AuthorizationError
from schoolapp.rbac.models import AuthorizationDecision, Subject
from schoolapp.rbac.permissions import Permissions

logger = logging.getLogger(__name__)


def ensure_allowed(engine: PolicyEngine,
                   subject: Subject,
                   permission: Union[Permissions, str],
                   resource: ResourceLike = None) -> AuthorizationDecision:
    """
    Evaluate a permission and raise if it is denied.

    Raises:
        AuthorizationError: when the engine denies the request
        PolicyInputError: for malformed input
    """
    decision = engine.evaluate(subject, permission, resource)
    if not decision.allowed:
        logger.info(f"Teacher {subject.id} with role {subject.role} denied {permission}: {decision.reason}")
        raise AuthorizationError(Permissions(permission), decision)
    return decision
