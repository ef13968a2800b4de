from __future__ import annotations

from flask import Flask

from ..common.web import current_role, json_body, ok, role_required, session_id
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    profiles = container.profile_service

    # student portal

    @app.route("/student/profile", endpoint="student_profile")
    @role_required(Role.STUDENT)
    def student_profile():
        student = profiles.get_student(session_id("student_id"))
        group = profiles.get_class(student.class_id) if student.class_id else None
        return ok({"student": student.to_dict(), "class": group.to_dict() if group else None})

    @app.route("/student/classmates", endpoint="student_classmates")
    @role_required(Role.STUDENT)
    def student_classmates():
        return ok([s.to_dict() for s in profiles.classmates(session_id("student_id"))])

    # faculty portal

    @app.route("/faculty/profile", endpoint="faculty_profile")
    @role_required(Role.FACULTY)
    def faculty_profile():
        faculty = profiles.get_faculty(session_id("faculty_id"))
        group = profiles.get_class(faculty.advisor_class_id) if faculty.advisor_class_id else None
        return ok({"faculty": faculty.to_dict(), "advisor_class": group.to_dict() if group else None})

    @app.route("/faculty/classes/<int:class_id>/students", endpoint="faculty_class_students")
    @role_required(Role.FACULTY)
    def faculty_class_students(class_id: int):
        return ok([s.to_dict() for s in profiles.students_in_class(class_id)])

    # admin portal

    @app.route("/admin/classes", endpoint="admin_classes")
    @role_required(Role.ADMIN)
    def admin_classes():
        return ok([c.to_dict() for c in profiles.list_classes()])

    @app.route("/admin/classes", methods=["POST"], endpoint="admin_create_class")
    @role_required(Role.ADMIN)
    def admin_create_class():
        data = json_body()
        class_id = profiles.create_class(
            current_role=current_role(),
            class_name=data.get("class_name", ""),
            year=data.get("year"),
            section=data.get("section", ""),
            department=data.get("department", ""),
        )
        return ok({"class_id": class_id}), 201

    @app.route("/admin/classes/<int:class_id>/students", endpoint="admin_class_students")
    @role_required(Role.ADMIN)
    def admin_class_students(class_id: int):
        profiles.get_class(class_id)
        return ok([s.to_dict() for s in profiles.students_in_class(class_id)])

    @app.route("/admin/students", endpoint="admin_students")
    @role_required(Role.ADMIN)
    def admin_students():
        return ok([s.to_dict() for s in profiles.list_students()])

    @app.route("/admin/students", methods=["POST"], endpoint="admin_create_student")
    @role_required(Role.ADMIN)
    def admin_create_student():
        data = json_body()
        student_id = profiles.create_student(
            current_role=current_role(),
            roll_number=data.get("roll_number", ""),
            full_name=data.get("full_name", ""),
            email=data.get("email"),
            class_id=data.get("class_id"),
            user_id=data.get("user_id"),
        )
        return ok({"student_id": student_id}), 201

    @app.route("/admin/students/<int:student_id>", methods=["PUT", "PATCH"], endpoint="admin_update_student")
    @role_required(Role.ADMIN)
    def admin_update_student(student_id: int):
        student = profiles.update_student(current_role=current_role(), student_id=student_id, updates=json_body())
        return ok(student.to_dict())

    @app.route("/admin/students/<int:student_id>", methods=["DELETE"], endpoint="admin_delete_student")
    @role_required(Role.ADMIN)
    def admin_delete_student(student_id: int):
        profiles.delete_student(current_role=current_role(), student_id=student_id)
        return ok()

    @app.route("/admin/faculty", endpoint="admin_faculty")
    @role_required(Role.ADMIN)
    def admin_faculty():
        return ok([f.to_dict() for f in profiles.list_faculty()])

    @app.route("/admin/faculty", methods=["POST"], endpoint="admin_create_faculty")
    @role_required(Role.ADMIN)
    def admin_create_faculty():
        data = json_body()
        faculty_id = profiles.create_faculty(
            current_role=current_role(),
            full_name=data.get("full_name", ""),
            email=data.get("email"),
            department=data.get("department"),
            is_class_advisor=bool(data.get("is_class_advisor", False)),
            advisor_class_id=data.get("advisor_class_id"),
            user_id=data.get("user_id"),
        )
        return ok({"faculty_id": faculty_id}), 201

    @app.route("/admin/faculty/<int:faculty_id>", methods=["PUT", "PATCH"], endpoint="admin_update_faculty")
    @role_required(Role.ADMIN)
    def admin_update_faculty(faculty_id: int):
        faculty = profiles.update_faculty(current_role=current_role(), faculty_id=faculty_id, updates=json_body())
        return ok(faculty.to_dict())

    @app.route("/admin/faculty/<int:faculty_id>", methods=["DELETE"], endpoint="admin_delete_faculty")
    @role_required(Role.ADMIN)
    def admin_delete_faculty(faculty_id: int):
        profiles.delete_faculty(current_role=current_role(), faculty_id=faculty_id)
        return ok()
