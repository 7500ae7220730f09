"""JSON API tests through the Flask test client."""

from flask import session

from schoolapp import create_app
from schoolapp.config import TestingConfig
from schoolapp.models import ClassEnrollment, ClassRoom, TeachingAssignment
from schoolapp.models.directory import SqlTeacherDirectory
from schoolapp.rbac import Permissions, Role
from schoolapp.utils.db import get_db


class TestAuthentication:

    def test_no_session(self, client):
        response = client.get("/api/rbac/me/permissions")
        assert response.status_code == 401
        assert response.get_json() == {"error": "Not authenticated"}

    def test_unknown_teacher(self, client, sign_in):
        sign_in("teacher99")
        assert client.get("/api/students").status_code == 401

    def test_inactive_teacher(self, client, sign_in):
        sign_in("teacher9")
        assert client.get("/api/rbac/me/features").status_code == 401


class TestRbacRoutes:

    def test_my_permissions(self, client, sign_in):
        sign_in("teacher1")
        data = client.get("/api/rbac/me/permissions").get_json()
        assert data["user_id"] == "teacher1"
        assert data["role"] == "homeroom_teacher"
        assert data["permissions"] == sorted(p.value for p in Permissions)

    def test_role_permissions(self, client, sign_in):
        sign_in("teacher2")
        data = client.get("/api/rbac/roles/general_teacher/permissions").get_json()
        assert data["permissions"] == [
            "conduct_counseling", "manage_grades", "view_attendance", "view_grades", "view_students",
        ]
        data = client.get("/api/rbac/roles/principal/permissions").get_json()
        assert data["permissions"] == []

    def test_my_features(self, client, sign_in):
        sign_in("teacher2")
        features = client.get("/api/rbac/me/features").get_json()["features"]
        assert features["Students"] is True
        assert features["ExportGrades"] is False

    def test_single_feature(self, client, sign_in):
        sign_in("teacher1")
        assert client.get("/api/rbac/me/features/ClassManagement").get_json()["allowed"] is True
        assert client.get("/api/rbac/me/features/Payroll").get_json()["allowed"] is False

    def test_evaluate_allowed(self, client, sign_in):
        sign_in("teacher2")
        response = client.post("/api/rbac/evaluate",
                               json={"permission": "manage_grades", "resource": {"subjectId": "science"}})
        assert response.status_code == 200
        assert response.get_json() == {"allowed": True, "reason": None, "message": None}

    def test_evaluate_denied(self, client, sign_in):
        sign_in("teacher3")
        response = client.post("/api/rbac/evaluate",
                               json={"permission": "manage_grades", "resource": {"subject_id": "science"}})
        data = response.get_json()
        assert response.status_code == 200
        assert data["allowed"] is False
        assert data["reason"] == "not_own_subject"
        assert data["message"] == "You can only manage grades for subjects you teach."

    def test_evaluate_unknown_permission(self, client, sign_in):
        sign_in("teacher1")
        response = client.post("/api/rbac/evaluate", json={"permission": "fire_principal"})
        assert response.status_code == 400

    def test_evaluate_bad_payload(self, client, sign_in):
        sign_in("teacher1")
        assert client.post("/api/rbac/evaluate", json={}).status_code == 400
        response = client.post("/api/rbac/evaluate",
                               json={"permission": "manage_class", "resource": "class-3-1"})
        assert response.status_code == 400

    def test_localized_message(self, app, client, sign_in):
        app.config["DEFAULT_LOCALE"] = "ko"
        sign_in("teacher2")
        response = client.post("/api/rbac/evaluate", json={"permission": "export_grades"})
        assert response.get_json()["message"] == "해당 역할에 권한이 없습니다."


class TestStudentRoutes:

    def test_list_students(self, client, sign_in):
        sign_in("teacher2")
        data = client.get("/api/students").get_json()
        assert [s["id"] for s in data["students"]] == ["student1", "student2"]

    def test_other_class_forbidden(self, client, sign_in):
        sign_in("teacher2")
        response = client.get("/api/students?class_id=class-3-2")
        assert response.status_code == 403
        assert response.get_json() == {
            "error": "You can only access classes you are responsible for.",
            "reason": "not_own_class",
            "permission": "view_students",
        }

    def test_add_student(self, client, sign_in):
        sign_in("teacher1")
        response = client.post("/api/students", json={"name": "New Student", "class_id": "class-3-1", "grade": 3})
        assert response.status_code == 201
        assert response.get_json()["student"]["class_id"] == "class-3-1"

    def test_general_teacher_cannot_add_student(self, client, sign_in):
        sign_in("teacher2")
        response = client.post("/api/students", json={"name": "New Student", "class_id": "class-3-1", "grade": 3})
        assert response.status_code == 403
        assert response.get_json()["reason"] == "permission_not_granted_to_role"

    def test_add_student_missing_fields(self, client, sign_in):
        sign_in("teacher1")
        response = client.post("/api/students", json={"name": "New Student"})
        assert response.status_code == 400
        assert "class_id" in response.get_json()["error"]

    def test_add_student_non_numeric_grade(self, client, sign_in):
        sign_in("teacher1")
        response = client.post("/api/students", json={"name": "New Student", "class_id": "class-3-1", "grade": [3]})
        assert response.status_code == 400

    def test_update_student(self, client, sign_in):
        sign_in("teacher1")
        response = client.put("/api/students/student1", json={"parent_contact": "010-9999-9999"})
        assert response.status_code == 200
        assert response.get_json()["student"]["parent_contact"] == "010-9999-9999"

    def test_update_unknown_student(self, client, sign_in):
        sign_in("teacher1")
        assert client.put("/api/students/student99", json={"name": "X"}).status_code == 404

    def test_get_student(self, client, sign_in):
        sign_in("teacher3")
        assert client.get("/api/students/student3").status_code == 200
        assert client.get("/api/students/student1").status_code == 403


class TestGradeRoutes:

    def test_update_grade(self, client, sign_in):
        sign_in("teacher2")
        response = client.put("/api/grades", json={"student_id": "student1", "subject_id": "math",
                                                   "score": 92, "class_id": "class-3-1"})
        assert response.status_code == 200
        assert response.get_json()["grade"]["score"] == 92

    def test_update_grade_other_subject(self, client, sign_in):
        sign_in("teacher3")
        response = client.put("/api/grades", json={"student_id": "student3", "subject_id": "science", "score": 60})
        assert response.status_code == 403
        assert response.get_json()["reason"] == "not_own_subject"

    def test_update_grade_non_numeric_values(self, client, sign_in):
        sign_in("teacher1")
        response = client.put("/api/grades", json={"student_id": "student1", "subject_id": "math", "score": [1]})
        assert response.status_code == 400
        response = client.put("/api/grades", json={"student_id": "student1", "subject_id": "math",
                                                   "score": 50, "max_score": {"value": 60}})
        assert response.status_code == 400

    def test_update_grade_keeps_class(self, client, sign_in):
        sign_in("teacher2")
        response = client.put("/api/grades", json={"student_id": "student1", "subject_id": "math", "score": 93})
        assert response.get_json()["grade"]["class_id"] == "class-3-1"
        response = client.put("/api/grades", json={"student_id": "student1", "subject_id": "math",
                                                   "score": 93, "class_id": "class-3-2"})
        assert response.status_code == 400

    def test_get_grades(self, client, sign_in):
        sign_in("teacher2")
        grades = client.get("/api/grades").get_json()["grades"]
        assert [g["id"] for g in grades] == ["grade1"]

    def test_export(self, client, sign_in):
        sign_in("teacher1")
        response = client.get("/api/grades/export?class_id=class-3-1")
        assert response.status_code == 200
        assert response.mimetype == "text/csv"
        assert response.get_data(as_text=True).startswith("student_id,subject_id")

    def test_export_forbidden_for_general_teacher(self, client, sign_in):
        sign_in("teacher2")
        assert client.get("/api/grades/export?class_id=class-3-1").status_code == 403

    def test_export_requires_class(self, client, sign_in):
        sign_in("teacher1")
        assert client.get("/api/grades/export").status_code == 400


class TestAttendanceAndCounselingRoutes:

    def test_attendance_by_date(self, client, sign_in):
        sign_in("teacher1")
        records = client.get("/api/attendance?date=2024-03-04").get_json()["attendance"]
        assert [r["id"] for r in records] == ["att1", "att2"]

    def test_take_attendance(self, client, sign_in):
        sign_in("teacher1")
        response = client.put("/api/attendance", json={"student_id": "student2", "date": "2024-03-05",
                                                       "status": "late", "class_id": "class-3-1"})
        assert response.status_code == 200
        assert response.get_json()["attendance"]["date"] == "2024-03-05"

    def test_take_attendance_bad_input(self, client, sign_in):
        sign_in("teacher1")
        response = client.put("/api/attendance", json={"student_id": "student2", "date": "yesterday",
                                                       "status": "late"})
        assert response.status_code == 400
        response = client.put("/api/attendance", json={"student_id": "student2", "date": "2024-03-05",
                                                       "status": "asleep"})
        assert response.status_code == 400
        response = client.put("/api/attendance", json={"student_id": "student2", "date": 20240305,
                                                       "status": "late"})
        assert response.status_code == 400

    def test_counseling(self, client, sign_in):
        sign_in("teacher2")
        response = client.post("/api/counseling", json={"student_id": "student1", "notes": "Exam stress"})
        assert response.status_code == 201
        assert response.get_json()["record"]["teacher_id"] == "teacher2"
        response = client.post("/api/counseling", json={"student_id": "student3", "notes": "Exam stress"})
        assert response.status_code == 403
        assert response.get_json()["reason"] == "not_own_student"

    def test_counseling_non_text_notes(self, client, sign_in):
        sign_in("teacher1")
        response = client.post("/api/counseling", json={"student_id": "student1", "notes": {"text": "hi"}})
        assert response.status_code == 400

    def test_counseling_records(self, client, sign_in):
        sign_in("teacher2")
        assert client.get("/api/counseling").status_code == 403
        sign_in("teacher1")
        assert client.get("/api/counseling").get_json()["records"] == []


def test_template_helpers(app):
    with app.test_request_context():
        session["user_id"] = "teacher2"
        template = app.jinja_env.from_string(
            "{{ user_role() }} {{ is_general_teacher() }} {{ can_access_feature('ExportGrades') }} "
            "{{ check_permission('manage_grades', subject_id='math') }} {{ rbac_features()['Grades'] }}"
        )
        assert template.render() == "general_teacher True False True True"


def test_template_helpers_without_session(app):
    with app.test_request_context():
        template = app.jinja_env.from_string("[{{ user_role() }}] {{ rbac_features() }} {{ check_permission('view_grades') }}")
        assert template.render() == "[] {} False"


def test_roster_backed_app():
    app = create_app(TestingConfig)
    with app.app_context():
        db = get_db()
        db.add(ClassRoom(id="class-3-1", name="3-1", grade=3))
        db.add(ClassEnrollment(class_id="class-3-1", student_id="student1"))
        directory = SqlTeacherDirectory(get_db)
        directory.create_teacher("teacher2", "Lee General", "lee@school.edu", Role.GENERAL_TEACHER,
                                 taught_subject_ids=["math"])
        db.add(TeachingAssignment(teacher_id="teacher2", class_id="class-3-1", subject_id="math"))
        db.commit()

    client = app.test_client()
    with client.session_transaction() as sess:
        sess["user_id"] = "teacher2"

    response = client.post("/api/rbac/evaluate",
                           json={"permission": "conduct_counseling", "resource": {"student_id": "student1"}})
    assert response.get_json()["allowed"] is True
    response = client.post("/api/rbac/evaluate",
                           json={"permission": "view_students", "resource": {"class_id": "class-3-2"}})
    assert response.get_json()["reason"] == "not_own_class"
