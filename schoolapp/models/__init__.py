from .database_models import Base, ClassRoom, ClassEnrollment, Teacher, TeacherSubject, TeachingAssignment
from .directory import InMemoryTeacherDirectory, SqlTeacherDirectory, SubjectDirectory

__all__ = [
    'Base',
    'ClassRoom',
    'ClassEnrollment',
    'Teacher',
    'TeacherSubject',
    'TeachingAssignment',
    'InMemoryTeacherDirectory',
    'SqlTeacherDirectory',
    'SubjectDirectory',
]
