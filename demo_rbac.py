#!/usr/bin/env python3
"""
Command-line walk-through of the permission checks

Builds the sample school in memory, then acts as the homeroom teacher and
the general teacher through the feature services.
"""
import logging

from schoolapp.models.directory import InMemoryTeacherDirectory
from schoolapp.rbac import (
    AuthorizationError,
    Permissions,
    PolicyEngine,
    Role,
    StaticTeachingRelationships,
    Subject,
    describe_denial,
)
from schoolapp.services import GradeService, StudentService
from schoolapp.services.models import StudentRecord

logging.basicConfig(level=logging.WARNING, format='%(levelname)s: %(message)s')


def build_school():
    directory = InMemoryTeacherDirectory([
        Subject(id='teacher1', role=Role.HOMEROOM_TEACHER, homeroom_class_id='class-3-1',
                name='Kim Homeroom', email='kim@school.edu'),
        Subject(id='teacher2', role=Role.GENERAL_TEACHER, taught_subject_ids=frozenset({'math', 'science'}),
                name='Lee General', email='lee@school.edu'),
        Subject(id='teacher3', role=Role.GENERAL_TEACHER, taught_subject_ids=frozenset({'math'}),
                name='Park Math', email='math@school.edu'),
    ])
    relationships = StaticTeachingRelationships(
        classes={'teacher2': ['class-3-1'], 'teacher3': ['class-3-1']},
        class_students={'class-3-1': ['student1', 'student2']},
    )
    engine = PolicyEngine(relationships)
    students = StudentService(engine, [
        StudentRecord(id='student1', name='Student One', class_id='class-3-1', grade=3,
                      student_number='1', parent_contact='010-1234-5678'),
        StudentRecord(id='student2', name='Student Two', class_id='class-3-1', grade=3,
                      student_number='2', parent_contact='010-2345-6789'),
    ])
    return directory, engine, students, GradeService(engine)


def main():
    directory, engine, students, grades = build_school()

    print("\n=== Homeroom teacher ===")
    homeroom = directory.find_subject_by_email('kim@school.edu')
    print(f"Signed in: {homeroom.name} ({homeroom.role})")
    print(f"Students in class 3-1: {len(students.list_students(homeroom, class_id='class-3-1'))}")
    updated = students.update_student(homeroom, 'student1', parent_contact='010-9999-9999')
    print(f"Updated parent contact: {updated.parent_contact}")

    print("\n=== General teacher ===")
    general = directory.find_subject_by_email('lee@school.edu')
    print(f"Signed in: {general.name} ({general.role})")
    grade = grades.update_grade(general, 'student1', 'math', 95, class_id='class-3-1')
    print(f"Recorded math grade: {grade.score}")
    try:
        grades.export_grades(general, 'class-3-1')
    except AuthorizationError as e:
        print(f"Grade export refused (expected): {describe_denial(e.reason)}")

    print("\n=== Permission checks ===")
    checks = [
        ('teacher1', Permissions.MANAGE_CLASS, True),
        ('teacher2', Permissions.MANAGE_CLASS, False),
        ('teacher1', Permissions.EXPORT_GRADES, True),
        ('teacher2', Permissions.EXPORT_GRADES, False),
    ]
    for teacher_id, permission, expected in checks:
        decision = engine.evaluate(directory.find_subject_by_id(teacher_id), permission)
        print(f"{teacher_id} {permission}: {decision.allowed} (expected {expected})")
        if not decision.allowed:
            print(f"  reason: {decision.reason}")


if __name__ == '__main__':
    main()
