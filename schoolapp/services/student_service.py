"""
Student management service
"""
import logging
from typing import Dict, Iterable, List, Optional

from schoolapp.rbac.engine import PolicyEngine
from schoolapp.rbac.models import Subject
from schoolapp.rbac.permissions import Permissions
from schoolapp.rbac.roles import Role
from schoolapp.services.base_service import BaseService, RecordNotFoundError
from schoolapp.services.models import StudentRecord

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = {'name', 'class_id', 'grade', 'student_number', 'parent_contact'}


class StudentService(BaseService):
    """Lists, adds and edits students"""

    def __init__(self, engine: PolicyEngine, students: Iterable[StudentRecord] = ()):
        super().__init__(engine)
        self._students: Dict[str, StudentRecord] = {s.id: s for s in students}

    def get_student(self, subject: Subject, student_id: str) -> StudentRecord:
        student = self._find(student_id)
        self._guard(subject, Permissions.VIEW_STUDENTS,
                    {'class_id': student.class_id, 'student_id': student.id})
        return student

    def list_students(self, subject: Subject, class_id: Optional[str] = None) -> List[StudentRecord]:
        """
        List the students a teacher may see.

        Homeroom teachers see their homeroom class. General teachers see the
        students of classes they teach.
        """
        self._guard(subject, Permissions.VIEW_STUDENTS, {'class_id': class_id})

        students = list(self._students.values())
        if subject.role == Role.HOMEROOM_TEACHER:
            students = [s for s in students if s.class_id == subject.homeroom_class_id]
        else:
            students = [s for s in students
                        if self._can(subject, Permissions.VIEW_STUDENTS, {'class_id': s.class_id})]

        if class_id:
            students = [s for s in students if s.class_id == class_id]
        return sorted(students, key=lambda s: (s.class_id, s.student_number or '', s.name))

    def add_student(self, subject: Subject, name: str, class_id: str, grade: int,
                    student_number: Optional[str] = None,
                    parent_contact: Optional[str] = None) -> StudentRecord:
        self._guard(subject, Permissions.MANAGE_STUDENTS, {'class_id': class_id})

        student = StudentRecord(
            id=self._new_id('student'),
            name=name,
            class_id=class_id,
            grade=grade,
            student_number=student_number,
            parent_contact=parent_contact,
        )
        self._students[student.id] = student
        logger.info(f"Teacher {subject.id} added student {student.id} to {class_id}")
        return student

    def update_student(self, subject: Subject, student_id: str, **changes) -> StudentRecord:
        """
        Update a student's details.

        Moving a student to another class requires permission on both the
        current and the new class.
        """
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update fields: {', '.join(sorted(unknown))}")

        student = self._find(student_id)
        self._guard(subject, Permissions.EDIT_STUDENT_INFO,
                    {'class_id': student.class_id, 'student_id': student.id})
        new_class_id = changes.get('class_id')
        if new_class_id and new_class_id != student.class_id:
            self._guard(subject, Permissions.EDIT_STUDENT_INFO,
                        {'class_id': new_class_id, 'student_id': student.id})

        updated = StudentRecord.model_validate({**student.model_dump(), **changes})
        self._students[student_id] = updated
        logger.info(f"Teacher {subject.id} updated student {student_id}")
        return updated

    def _find(self, student_id: str) -> StudentRecord:
        student = self._students.get(student_id)
        if student is None:
            raise RecordNotFoundError(f"Student {student_id} not found")
        return student
