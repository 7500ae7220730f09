# schoolapp/services/__init__.py
from .base_service import RecordNotFoundError
from .student_service import StudentService
from .grade_service import GradeService
from .attendance_service import AttendanceService
from .counseling_service import CounselingService
from .session import SessionSubjectProvider

__all__ = [
    'RecordNotFoundError',
    'StudentService',
    'GradeService',
    'AttendanceService',
    'CounselingService',
    'SessionSubjectProvider',
]
