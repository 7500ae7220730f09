"""Shared fixtures: sample teachers, teaching relationships and a test app."""

from datetime import date

import pytest

from schoolapp import create_app
from schoolapp.config import TestingConfig
from schoolapp.models.directory import InMemoryTeacherDirectory
from schoolapp.rbac import PolicyEngine, Role, StaticTeachingRelationships, Subject
from schoolapp.services.models import AttendanceRecord, GradeRecord, StudentRecord


@pytest.fixture
def homeroom():
    return Subject(id="teacher1", role=Role.HOMEROOM_TEACHER, homeroom_class_id="class-3-1",
                   name="Kim Homeroom", email="kim@school.edu")


@pytest.fixture
def general():
    return Subject(id="teacher2", role=Role.GENERAL_TEACHER,
                   taught_subject_ids=frozenset({"math", "science"}),
                   name="Lee General", email="lee@school.edu")


@pytest.fixture
def math_teacher():
    return Subject(id="teacher3", role=Role.GENERAL_TEACHER, taught_subject_ids=frozenset({"math"}),
                   name="Park Math", email="math@school.edu")


@pytest.fixture
def inactive():
    return Subject(id="teacher9", role=Role.HOMEROOM_TEACHER, homeroom_class_id="class-3-1",
                   is_active=False, name="Former Teacher", email="former@school.edu")


@pytest.fixture
def relationships():
    """teacher2 teaches class 3-1; teacher3 teaches class 3-2."""
    return StaticTeachingRelationships(
        classes={"teacher2": ["class-3-1"], "teacher3": ["class-3-2"]},
        class_students={"class-3-1": ["student1", "student2"], "class-3-2": ["student3"]},
    )


@pytest.fixture
def engine(relationships):
    return PolicyEngine(relationships)


@pytest.fixture
def students():
    return [
        StudentRecord(id="student1", name="Student One", class_id="class-3-1", grade=3, student_number="1"),
        StudentRecord(id="student2", name="Student Two", class_id="class-3-1", grade=3, student_number="2"),
        StudentRecord(id="student3", name="Student Three", class_id="class-3-2", grade=3, student_number="1"),
    ]


@pytest.fixture
def grades():
    return [
        GradeRecord(id="grade1", student_id="student1", subject_id="math", class_id="class-3-1", score=88),
        GradeRecord(id="grade2", student_id="student3", subject_id="math", class_id="class-3-2", score=71),
    ]


@pytest.fixture
def attendance():
    return [
        AttendanceRecord(id="att1", student_id="student1", date=date(2024, 3, 4), status="present",
                         class_id="class-3-1"),
        AttendanceRecord(id="att2", student_id="student3", date=date(2024, 3, 4), status="late",
                         class_id="class-3-2"),
    ]


@pytest.fixture
def app(homeroom, general, math_teacher, inactive, relationships, students, grades, attendance):
    directory = InMemoryTeacherDirectory([homeroom, general, math_teacher, inactive])
    app = create_app(
        TestingConfig,
        directory=directory,
        relationships=relationships,
        initial_data={"students": students, "grades": grades, "attendance": attendance},
    )
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def sign_in(client):
    """Put a teacher id in the session, as the login service would."""
    def _sign_in(teacher_id):
        with client.session_transaction() as sess:
            sess["user_id"] = teacher_id
    return _sign_in
