"""
Student, grade, attendance and counseling routes

Each service operation checks the signed-in teacher's permission itself;
denials surface as 403 responses through the blueprint error handlers.
"""
from datetime import date
from flask import Blueprint, Response, current_app, request, jsonify, g
import logging

from schoolapp.routes import register_error_handlers, require_fields
from schoolapp.utils.auth import login_required

logger = logging.getLogger(__name__)
bp = Blueprint('school', __name__)
register_error_handlers(bp)


def _service(name):
    return current_app.extensions['school_services'][name]


def _parse_date(value):
    if value in (None, ''):
        return None
    if not isinstance(value, str):
        raise ValueError(f"Invalid date: {value!r}")
    return date.fromisoformat(value)


def _dump(records):
    return [r.model_dump(mode='json') for r in records]


# ==================== STUDENTS ====================

@bp.route('/students', methods=['GET'])
@login_required
def list_students():
    students = _service('students').list_students(g.subject, class_id=request.args.get('class_id'))
    return jsonify({'success': True, 'students': _dump(students)})


@bp.route('/students/<student_id>', methods=['GET'])
@login_required
def get_student(student_id):
    student = _service('students').get_student(g.subject, student_id)
    return jsonify({'success': True, 'student': student.model_dump(mode='json')})


@bp.route('/students', methods=['POST'])
@login_required
def add_student():
    data = require_fields(request.get_json(silent=True), 'name', 'class_id', 'grade')
    student = _service('students').add_student(
        g.subject,
        name=data['name'],
        class_id=data['class_id'],
        grade=data['grade'],
        student_number=data.get('student_number'),
        parent_contact=data.get('parent_contact'),
    )
    return jsonify({'success': True, 'student': student.model_dump(mode='json')}), 201


@bp.route('/students/<student_id>', methods=['PUT'])
@login_required
def update_student(student_id):
    data = require_fields(request.get_json(silent=True))
    student = _service('students').update_student(g.subject, student_id, **data)
    return jsonify({'success': True, 'student': student.model_dump(mode='json')})


# ==================== GRADES ====================

@bp.route('/grades', methods=['GET'])
@login_required
def get_grades():
    grades = _service('grades').get_grades(
        g.subject,
        student_id=request.args.get('student_id'),
        subject_id=request.args.get('subject_id'),
        class_id=request.args.get('class_id'),
    )
    return jsonify({'success': True, 'grades': _dump(grades)})


@bp.route('/grades', methods=['PUT'])
@login_required
def update_grade():
    data = require_fields(request.get_json(silent=True), 'student_id', 'subject_id', 'score')
    grade = _service('grades').update_grade(
        g.subject,
        student_id=data['student_id'],
        subject_id=data['subject_id'],
        score=data['score'],
        class_id=data.get('class_id'),
        max_score=data.get('max_score', 100),
        exam_type=data.get('exam_type', 'midterm'),
        exam_date=_parse_date(data.get('exam_date')),
    )
    return jsonify({'success': True, 'grade': grade.model_dump(mode='json')})


@bp.route('/grades/export', methods=['GET'])
@login_required
def export_grades():
    class_id = request.args.get('class_id')
    if not class_id:
        raise ValueError("class_id is required")
    csv_text = _service('grades').export_grades(g.subject, class_id)
    return Response(
        csv_text,
        mimetype='text/csv',
        headers={'Content-Disposition': f'attachment; filename=grades_{class_id}.csv'},
    )


# ==================== ATTENDANCE ====================

@bp.route('/attendance', methods=['GET'])
@login_required
def get_attendance():
    records = _service('attendance').get_attendance(
        g.subject,
        student_id=request.args.get('student_id'),
        class_id=request.args.get('class_id'),
        on_date=_parse_date(request.args.get('date')),
    )
    return jsonify({'success': True, 'attendance': _dump(records)})


@bp.route('/attendance', methods=['PUT'])
@login_required
def update_attendance():
    data = require_fields(request.get_json(silent=True), 'student_id', 'date', 'status')
    record = _service('attendance').update_attendance(
        g.subject,
        student_id=data['student_id'],
        on_date=_parse_date(data['date']),
        status=data['status'],
        class_id=data.get('class_id'),
        reason=data.get('reason'),
    )
    return jsonify({'success': True, 'attendance': record.model_dump(mode='json')})


# ==================== COUNSELING ====================

@bp.route('/counseling', methods=['POST'])
@login_required
def record_counseling():
    data = require_fields(request.get_json(silent=True), 'student_id', 'notes')
    record = _service('counseling').record_session(g.subject, data['student_id'], data['notes'])
    return jsonify({'success': True, 'record': record.model_dump(mode='json')}), 201


@bp.route('/counseling', methods=['GET'])
@login_required
def list_counseling():
    records = _service('counseling').list_records(g.subject, student_id=request.args.get('student_id'))
    return jsonify({'success': True, 'records': _dump(records)})
