#!/usr/bin/env python3
"""
Load the sample roster into the configured database

Usage: python seed_roster.py [database_url]

Creates class 3-1 with two students, a homeroom teacher, a general teacher
teaching math and science, and a math-only teacher. Running it twice is safe.
"""
import logging
import sys

from schoolapp.config import Config
from schoolapp.models.database_models import ClassEnrollment, ClassRoom, TeachingAssignment
from schoolapp.models.directory import SqlTeacherDirectory
from schoolapp.rbac.roles import Role
from schoolapp.utils.db import create_session_factory

logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')
logger = logging.getLogger(__name__)

SAMPLE_TEACHERS = [
    {
        'teacher_id': 'teacher1',
        'name': 'Kim Homeroom',
        'email': 'kim@school.edu',
        'role': Role.HOMEROOM_TEACHER,
        'homeroom_class_id': 'class-3-1',
    },
    {
        'teacher_id': 'teacher2',
        'name': 'Lee General',
        'email': 'lee@school.edu',
        'role': Role.GENERAL_TEACHER,
        'taught_subject_ids': ['math', 'science'],
    },
    {
        'teacher_id': 'teacher3',
        'name': 'Park Math',
        'email': 'math@school.edu',
        'role': Role.GENERAL_TEACHER,
        'taught_subject_ids': ['math'],
    },
]

SAMPLE_ASSIGNMENTS = [
    ('teacher1', 'class-3-1', None),
    ('teacher2', 'class-3-1', 'math'),
    ('teacher2', 'class-3-1', 'science'),
    ('teacher3', 'class-3-1', 'math'),
]


def seed(database_url):
    factory = create_session_factory(database_url)
    db = factory()
    try:
        if db.query(ClassRoom).filter(ClassRoom.id == 'class-3-1').first() is None:
            db.add(ClassRoom(id='class-3-1', name='3-1', grade=3))
            db.add_all([
                ClassEnrollment(class_id='class-3-1', student_id='student1'),
                ClassEnrollment(class_id='class-3-1', student_id='student2'),
            ])
            db.flush()
            logger.info("Created class 3-1 with 2 students")

        directory = SqlTeacherDirectory(lambda: db)
        for teacher in SAMPLE_TEACHERS:
            if directory.find_subject_by_id(teacher['teacher_id']) is None:
                directory.create_teacher(**teacher)
            else:
                logger.info(f"Teacher {teacher['teacher_id']} already exists")

        for teacher_id, class_id, subject_id in SAMPLE_ASSIGNMENTS:
            exists = db.query(TeachingAssignment).filter(
                TeachingAssignment.teacher_id == teacher_id,
                TeachingAssignment.class_id == class_id,
                TeachingAssignment.subject_id == subject_id,
            ).first()
            if exists is None:
                db.add(TeachingAssignment(teacher_id=teacher_id, class_id=class_id, subject_id=subject_id))

        db.commit()
        logger.info(f"Roster seeded into {database_url}")
    except Exception as e:
        db.rollback()
        logger.error(f"Seeding failed: {str(e)}")
        raise
    finally:
        db.close()


if __name__ == '__main__':
    seed(sys.argv[1] if len(sys.argv) > 1 else Config.SQLALCHEMY_DATABASE_URI)
