"""
Base service with common functionality
"""
import logging
import uuid
from typing import Optional, Union

from schoolapp.rbac.engine import PolicyEngine, ResourceLike
from schoolapp.rbac.guards import ensure_allowed
from schoolapp.rbac.models import AuthorizationDecision, Subject
from schoolapp.rbac.permissions import Permissions

logger = logging.getLogger(__name__)


class RecordNotFoundError(LookupError):
    """Raised when a requested record does not exist"""


class BaseService:
    """
    Base class for feature services.

    Every public operation calls _guard() before reading or changing data,
    and changes nothing when the guard raises.
    """

    def __init__(self, engine: PolicyEngine):
        self.engine = engine

    def _guard(self, subject: Subject, permission: Union[Permissions, str],
               resource: ResourceLike = None) -> AuthorizationDecision:
        return ensure_allowed(self.engine, subject, permission, resource)

    def _can(self, subject: Subject, permission: Permissions, resource: ResourceLike = None) -> bool:
        """Row-level check used to filter listings."""
        return self.engine.is_allowed(subject, permission, resource)

    @staticmethod
    def _replacement_class_id(existing, class_id: Optional[str]) -> Optional[str]:
        """
        Class of a record that replaces an existing one.

        The stored class is kept when none is given. A replacement cannot
        move the record to another class.
        """
        if existing is None or existing.class_id is None:
            return class_id
        if class_id is not None and class_id != existing.class_id:
            raise ValueError(f"Record belongs to {existing.class_id}, not {class_id}")
        return existing.class_id

    @staticmethod
    def _new_id(prefix: str) -> str:
        return f"{prefix}_{uuid.uuid4().hex[:12]}"
