"""
Teacher directories resolve teacher ids and emails to Subjects

InMemoryTeacherDirectory holds an explicitly supplied set of teachers and is
used by tests and the command-line demo. SqlTeacherDirectory reads the
roster database.
"""
import logging
import uuid
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional, Protocol

from sqlalchemy.orm import Session

from schoolapp.models.database_models import Teacher as DBTeacher, TeacherSubject
from schoolapp.rbac.models import Subject
from schoolapp.rbac.roles import Role

logger = logging.getLogger(__name__)


class SubjectDirectory(Protocol):
    """Looks up teachers for the policy engine"""

    def find_subject_by_id(self, subject_id: str) -> Optional[Subject]:
        ...

    def find_subject_by_email(self, email: str) -> Optional[Subject]:
        ...


class InMemoryTeacherDirectory:
    """Teacher directory over an explicit list of subjects"""

    def __init__(self, teachers: Iterable[Subject] = ()):
        self._teachers: Dict[str, Subject] = {t.id: t for t in teachers}

    def find_subject_by_id(self, subject_id: str) -> Optional[Subject]:
        return self._teachers.get(subject_id)

    def find_subject_by_email(self, email: str) -> Optional[Subject]:
        email = email.strip().lower()
        for teacher in self._teachers.values():
            if teacher.email and teacher.email.lower() == email:
                return teacher
        return None

    def create_teacher(self, name: str, email: str, role: Role, is_active: bool = True,
                       homeroom_class_id: Optional[str] = None,
                       taught_subject_ids: Iterable[str] = ()) -> Subject:
        """Register a new teacher with a generated id."""
        if self.find_subject_by_email(email) is not None:
            raise ValueError(f"Email already registered: {email}")
        teacher = Subject(
            id=f"teacher_{uuid.uuid4().hex[:12]}",
            role=role,
            is_active=is_active,
            homeroom_class_id=homeroom_class_id,
            taught_subject_ids=frozenset(taught_subject_ids),
            name=name,
            email=email,
            created_at=datetime.utcnow(),
        )
        self._teachers[teacher.id] = teacher
        logger.info(f"Created teacher {teacher.id} with role {role}")
        return teacher

    def update_teacher_role(self, teacher_id: str, new_role: Role, **changes) -> Optional[Subject]:
        """
        Change a teacher's role and any other attributes.

        Returns:
            The updated teacher, or None if the id is unknown
        """
        teacher = self._teachers.get(teacher_id)
        if teacher is None:
            return None
        if 'taught_subject_ids' in changes:
            changes['taught_subject_ids'] = frozenset(changes['taught_subject_ids'])
        updated = teacher.model_copy(update={**changes, 'role': Role(new_role)})
        self._teachers[teacher_id] = updated
        logger.info(f"Teacher {teacher_id} role changed from {teacher.role} to {updated.role}")
        return updated

    def list_teachers(self, role: Optional[Role] = None) -> List[Subject]:
        teachers = list(self._teachers.values())
        if role is not None:
            teachers = [t for t in teachers if t.role == role]
        return teachers

    def homeroom_teachers(self) -> List[Subject]:
        return self.list_teachers(Role.HOMEROOM_TEACHER)

    def general_teachers(self) -> List[Subject]:
        return self.list_teachers(Role.GENERAL_TEACHER)


class SqlTeacherDirectory:
    """Teacher directory backed by the roster database"""

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def find_subject_by_id(self, subject_id: str) -> Optional[Subject]:
        db = self._session_factory()
        teacher = db.query(DBTeacher).filter(DBTeacher.id == subject_id).first()
        return teacher.to_subject() if teacher else None

    def find_subject_by_email(self, email: str) -> Optional[Subject]:
        db = self._session_factory()
        teacher = db.query(DBTeacher).filter(DBTeacher.email == email.strip().lower()).first()
        return teacher.to_subject() if teacher else None

    def list_teachers(self, role: Optional[Role] = None) -> List[Subject]:
        db = self._session_factory()
        query = db.query(DBTeacher)
        if role is not None:
            query = query.filter(DBTeacher.role == Role(role).value)
        return [t.to_subject() for t in query.order_by(DBTeacher.id).all()]

    def create_teacher(self, teacher_id: str, name: str, email: str, role: Role,
                       is_active: bool = True, homeroom_class_id: Optional[str] = None,
                       taught_subject_ids: Iterable[str] = ()) -> Subject:
        """Insert a teacher and the subjects they teach."""
        db = self._session_factory()
        teacher = DBTeacher(
            id=teacher_id,
            name=name,
            email=email.strip().lower(),
            role=Role(role).value,
            is_active=is_active,
            homeroom_class_id=homeroom_class_id,
        )
        teacher.subjects = [TeacherSubject(subject_id=s) for s in sorted(set(taught_subject_ids))]
        db.add(teacher)
        db.flush()
        logger.info(f"Created teacher {teacher_id} with role {teacher.role}")
        return teacher.to_subject()
