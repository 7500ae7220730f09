"""
Grade management service
"""
import csv
import io
import logging
from datetime import date
from typing import Dict, Iterable, List, Optional

from schoolapp.rbac.engine import PolicyEngine
from schoolapp.rbac.models import Subject
from schoolapp.rbac.permissions import Permissions
from schoolapp.services.base_service import BaseService
from schoolapp.services.models import ExamType, GradeRecord

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = ['student_id', 'subject_id', 'exam_type', 'score', 'max_score', 'exam_date']


class GradeService(BaseService):
    """Reads, records and exports grades"""

    def __init__(self, engine: PolicyEngine, grades: Iterable[GradeRecord] = ()):
        super().__init__(engine)
        self._grades: Dict[str, GradeRecord] = {g.id: g for g in grades}

    def get_grades(self, subject: Subject, student_id: Optional[str] = None,
                   subject_id: Optional[str] = None,
                   class_id: Optional[str] = None) -> List[GradeRecord]:
        self._guard(subject, Permissions.VIEW_GRADES,
                    {'class_id': class_id, 'subject_id': subject_id, 'student_id': student_id})

        grades = [g for g in self._grades.values()
                  if (student_id is None or g.student_id == student_id)
                  and (subject_id is None or g.subject_id == subject_id)
                  and (class_id is None or g.class_id == class_id)]
        # Drop rows from classes the teacher may not see
        grades = [g for g in grades
                  if self._can(subject, Permissions.VIEW_GRADES, {'class_id': g.class_id})]
        return sorted(grades, key=lambda g: (g.student_id, g.subject_id, g.exam_type))

    def update_grade(self, subject: Subject, student_id: str, subject_id: str, score: float,
                     class_id: Optional[str] = None, max_score: float = 100,
                     exam_type: ExamType = 'midterm',
                     exam_date: Optional[date] = None) -> GradeRecord:
        """
        Record a grade, replacing any existing grade for the same student,
        subject and exam type. A replaced grade stays in its class.
        """
        existing = self._find_existing(student_id, subject_id, exam_type)
        stored_class_id = existing.class_id if existing else None
        self._guard(subject, Permissions.MANAGE_GRADES,
                    {'subject_id': subject_id, 'class_id': class_id or stored_class_id,
                     'student_id': student_id})

        grade = GradeRecord(
            id=existing.id if existing else self._new_id('grade'),
            student_id=student_id,
            subject_id=subject_id,
            class_id=self._replacement_class_id(existing, class_id),
            score=score,
            max_score=max_score,
            exam_type=exam_type,
            exam_date=exam_date,
        )
        if grade.score > grade.max_score:
            raise ValueError(f"Score {grade.score} exceeds maximum {grade.max_score}")
        self._grades[grade.id] = grade
        logger.info(f"Teacher {subject.id} recorded {subject_id} {exam_type} grade for {student_id}")
        return grade

    def export_grades(self, subject: Subject, class_id: str) -> str:
        """Export a class's grades as CSV text."""
        self._guard(subject, Permissions.EXPORT_GRADES, {'class_id': class_id})

        buffer = io.StringIO()
        writer = csv.DictWriter(buffer, fieldnames=EXPORT_COLUMNS)
        writer.writeheader()
        rows = sorted((g for g in self._grades.values() if g.class_id == class_id),
                      key=lambda g: (g.student_id, g.subject_id, g.exam_type))
        for grade in rows:
            writer.writerow({
                'student_id': grade.student_id,
                'subject_id': grade.subject_id,
                'exam_type': grade.exam_type,
                'score': grade.score,
                'max_score': grade.max_score,
                'exam_date': grade.exam_date.isoformat() if grade.exam_date else '',
            })
        logger.info(f"Teacher {subject.id} exported {len(rows)} grades for {class_id}")
        return buffer.getvalue()

    def _find_existing(self, student_id: str, subject_id: str, exam_type: str) -> Optional[GradeRecord]:
        for grade in self._grades.values():
            if (grade.student_id, grade.subject_id, grade.exam_type) == (student_id, subject_id, exam_type):
                return grade
        return None
