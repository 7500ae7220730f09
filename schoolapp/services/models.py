"""
Pydantic models for school records handled by the feature services
"""
from datetime import date as Date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

ExamType = Literal['midterm', 'final', 'quiz', 'assignment']
AttendanceStatus = Literal['present', 'absent', 'late', 'early_leave']


class StudentRecord(BaseModel):
    """Model for a student"""
    id: str = Field(..., description="Student identifier")
    name: str = Field(..., description="Student name")
    class_id: str = Field(..., description="Class the student belongs to")
    grade: int = Field(..., ge=1, description="School year")
    student_number: Optional[str] = Field(None, description="Number within the class")
    parent_contact: Optional[str] = Field(None, description="Parent phone number")
    created_at: datetime = Field(default_factory=datetime.utcnow)


class GradeRecord(BaseModel):
    """Model for a grade"""
    id: str
    student_id: str
    subject_id: str
    class_id: Optional[str] = None
    score: float = Field(..., ge=0)
    max_score: float = Field(100.0, gt=0)
    exam_type: ExamType = 'midterm'
    exam_date: Optional[Date] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)


class AttendanceRecord(BaseModel):
    """Model for an attendance entry"""
    id: str
    student_id: str
    date: Date
    status: AttendanceStatus
    class_id: Optional[str] = None
    reason: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)


class CounselingRecord(BaseModel):
    """Model for a counseling session note"""
    id: str
    student_id: str
    teacher_id: str
    notes: str
    created_at: datetime = Field(default_factory=datetime.utcnow)
