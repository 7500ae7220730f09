"""
Attendance service
"""
import logging
from datetime import date
from typing import Dict, Iterable, List, Optional

from schoolapp.rbac.engine import PolicyEngine
from schoolapp.rbac.models import Subject
from schoolapp.rbac.permissions import Permissions
from schoolapp.services.base_service import BaseService
from schoolapp.services.models import AttendanceRecord, AttendanceStatus

logger = logging.getLogger(__name__)


class AttendanceService(BaseService):
    """Reads and records attendance"""

    def __init__(self, engine: PolicyEngine, records: Iterable[AttendanceRecord] = ()):
        super().__init__(engine)
        self._records: Dict[str, AttendanceRecord] = {r.id: r for r in records}

    def get_attendance(self, subject: Subject, student_id: Optional[str] = None,
                       class_id: Optional[str] = None,
                       on_date: Optional[date] = None) -> List[AttendanceRecord]:
        self._guard(subject, Permissions.VIEW_ATTENDANCE,
                    {'class_id': class_id, 'student_id': student_id})

        records = [r for r in self._records.values()
                   if (student_id is None or r.student_id == student_id)
                   and (class_id is None or r.class_id == class_id)
                   and (on_date is None or r.date == on_date)]
        records = [r for r in records
                   if self._can(subject, Permissions.VIEW_ATTENDANCE, {'class_id': r.class_id})]
        return sorted(records, key=lambda r: (r.date, r.student_id))

    def update_attendance(self, subject: Subject, student_id: str, on_date: date,
                          status: AttendanceStatus, class_id: Optional[str] = None,
                          reason: Optional[str] = None) -> AttendanceRecord:
        """
        Record attendance for a student on a day, replacing any earlier entry.
        A replaced entry stays in its class.
        """
        existing = next((r for r in self._records.values()
                         if r.student_id == student_id and r.date == on_date), None)
        stored_class_id = existing.class_id if existing else None
        self._guard(subject, Permissions.MANAGE_ATTENDANCE,
                    {'class_id': class_id or stored_class_id, 'student_id': student_id})
        class_id = self._replacement_class_id(existing, class_id)

        record = AttendanceRecord(
            id=existing.id if existing else self._new_id('attendance'),
            student_id=student_id,
            date=on_date,
            status=status,
            class_id=class_id,
            reason=reason,
        )
        self._records[record.id] = record
        logger.info(f"Teacher {subject.id} marked {student_id} {status} on {on_date.isoformat()}")
        return record
