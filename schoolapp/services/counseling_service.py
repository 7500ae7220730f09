"""
Counseling service
"""
import logging
from typing import Dict, Iterable, List, Optional

from schoolapp.rbac.engine import PolicyEngine
from schoolapp.rbac.models import Subject
from schoolapp.rbac.permissions import Permissions
from schoolapp.services.base_service import BaseService
from schoolapp.services.models import CounselingRecord

logger = logging.getLogger(__name__)


class CounselingService(BaseService):
    """Records counseling sessions and lists their notes"""

    def __init__(self, engine: PolicyEngine, records: Iterable[CounselingRecord] = ()):
        super().__init__(engine)
        self._records: Dict[str, CounselingRecord] = {r.id: r for r in records}

    def record_session(self, subject: Subject, student_id: str, notes: str) -> CounselingRecord:
        self._guard(subject, Permissions.CONDUCT_COUNSELING, {'student_id': student_id})
        if not isinstance(notes, str) or not notes.strip():
            raise ValueError("Counseling notes are required")

        record = CounselingRecord(
            id=self._new_id('counseling'),
            student_id=student_id,
            teacher_id=subject.id,
            notes=notes.strip(),
        )
        self._records[record.id] = record
        logger.info(f"Teacher {subject.id} recorded counseling for {student_id}")
        return record

    def list_records(self, subject: Subject, student_id: Optional[str] = None) -> List[CounselingRecord]:
        self._guard(subject, Permissions.VIEW_COUNSELING_RECORDS, {'student_id': student_id})
        records = [r for r in self._records.values()
                   if student_id is None or r.student_id == student_id]
        return sorted(records, key=lambda r: r.created_at)
