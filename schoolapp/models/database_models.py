"""SQLAlchemy models for the school roster"""
from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, ForeignKey,
    CheckConstraint, UniqueConstraint, Index, func
)
from sqlalchemy.orm import declarative_base, relationship
from datetime import datetime

from schoolapp.rbac.models import Subject
from schoolapp.rbac.roles import Role

Base = declarative_base()


class ClassRoom(Base):
    """Class (homeroom) model"""
    __tablename__ = 'classrooms'

    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False)
    grade = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, server_default=func.now())

    # Relationships
    enrollments = relationship("ClassEnrollment", back_populates="classroom", cascade="all, delete-orphan")
    assignments = relationship("TeachingAssignment", back_populates="classroom", cascade="all, delete-orphan")


class Teacher(Base):
    """Teacher account model"""
    __tablename__ = 'teachers'

    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    role = Column(String(50), nullable=False, default=Role.GENERAL_TEACHER.value,
                  server_default=Role.GENERAL_TEACHER.value)
    is_active = Column(Boolean, default=True, server_default='1', nullable=False)
    homeroom_class_id = Column(String(64), ForeignKey('classrooms.id', ondelete='SET NULL'), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, server_default=func.now())

    # Relationships
    homeroom_class = relationship("ClassRoom")
    subjects = relationship("TeacherSubject", back_populates="teacher", cascade="all, delete-orphan")
    assignments = relationship("TeachingAssignment", back_populates="teacher", cascade="all, delete-orphan")

    __table_args__ = (
        CheckConstraint("role IN ('homeroom_teacher', 'general_teacher')", name='check_teacher_role'),
    )

    def to_subject(self) -> Subject:
        """Convert to the Subject the policy engine evaluates"""
        return Subject(
            id=self.id,
            role=Role.from_string(self.role),
            is_active=bool(self.is_active),
            homeroom_class_id=self.homeroom_class_id,
            taught_subject_ids=frozenset(s.subject_id for s in self.subjects),
            name=self.name,
            email=self.email,
            created_at=self.created_at,
        )


class TeacherSubject(Base):
    """Subject taught by a teacher"""
    __tablename__ = 'teacher_subjects'

    teacher_id = Column(String(64), ForeignKey('teachers.id', ondelete='CASCADE'), primary_key=True)
    subject_id = Column(String(64), primary_key=True)

    teacher = relationship("Teacher", back_populates="subjects")


class ClassEnrollment(Base):
    """Student enrolled in a class"""
    __tablename__ = 'class_enrollments'

    class_id = Column(String(64), ForeignKey('classrooms.id', ondelete='CASCADE'), primary_key=True)
    student_id = Column(String(64), primary_key=True)

    classroom = relationship("ClassRoom", back_populates="enrollments")

    __table_args__ = (
        Index('idx_enrollments_student_id', 'student_id'),
    )


class TeachingAssignment(Base):
    """A teacher teaching a subject in a class"""
    __tablename__ = 'teaching_assignments'

    id = Column(Integer, primary_key=True, autoincrement=True)
    teacher_id = Column(String(64), ForeignKey('teachers.id', ondelete='CASCADE'), nullable=False)
    class_id = Column(String(64), ForeignKey('classrooms.id', ondelete='CASCADE'), nullable=False)
    subject_id = Column(String(64), nullable=True)

    teacher = relationship("Teacher", back_populates="assignments")
    classroom = relationship("ClassRoom", back_populates="assignments")

    __table_args__ = (
        UniqueConstraint('teacher_id', 'class_id', 'subject_id', name='uq_teaching_assignment'),
        Index('idx_assignments_teacher_id', 'teacher_id'),
    )
