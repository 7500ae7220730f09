"""
Teaching relationships backed by the roster database
"""
from typing import Callable

from sqlalchemy.orm import Session

from schoolapp.models.database_models import ClassEnrollment, TeachingAssignment
from schoolapp.rbac.models import Subject


class SqlTeachingRelationships:
    """
    Resolves teaching relationships from teaching assignments.

    A teacher teaches a class when they hold at least one assignment in it,
    and teaches a student when the student is enrolled in such a class.

    Args:
        session_factory: callable returning the SQLAlchemy session to query,
            e.g. get_db inside a Flask request
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def teaches_class(self, subject: Subject, class_id: str) -> bool:
        db = self._session_factory()
        assignment = db.query(TeachingAssignment.id).filter(
            TeachingAssignment.teacher_id == subject.id,
            TeachingAssignment.class_id == class_id,
        ).first()
        return assignment is not None

    def teaches_student(self, subject: Subject, student_id: str) -> bool:
        db = self._session_factory()
        enrollment = db.query(ClassEnrollment.class_id).join(
            TeachingAssignment, TeachingAssignment.class_id == ClassEnrollment.class_id
        ).filter(
            TeachingAssignment.teacher_id == subject.id,
            ClassEnrollment.student_id == student_id,
        ).first()
        return enrollment is not None
