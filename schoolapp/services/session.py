"""
Current-teacher lookup for requests

The upstream authentication component stores the signed-in teacher's id in
session['user_id']. This module only resolves that id to a Subject.
"""
import logging
from typing import Optional

from flask import session

from schoolapp.models.directory import SubjectDirectory
from schoolapp.rbac.models import Subject

logger = logging.getLogger(__name__)


class SessionSubjectProvider:
    """Resolves the teacher of the current Flask session"""

    def __init__(self, directory: SubjectDirectory):
        self.directory = directory

    def current_subject(self) -> Optional[Subject]:
        """
        Get the signed-in teacher.

        Returns:
            The Subject, or None when nobody is signed in, the id is unknown
            or the account is inactive
        """
        user_id = session.get('user_id')
        if not user_id:
            return None

        subject = self.directory.find_subject_by_id(str(user_id))
        if subject is None:
            logger.info(f"Session refers to unknown teacher {user_id}")
            return None
        if not subject.is_active:
            logger.info(f"Inactive teacher {user_id} has a session")
            return None
        return subject
