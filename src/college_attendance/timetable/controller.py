from __future__ import annotations

from flask import Flask, request

from ..common.web import current_role, json_body, ok, role_required, session_id
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    timetable = container.timetable_service
    profiles = container.profile_service

    def _set_entry(data: dict, *, class_id=None, faculty_id=None) -> int:
        return timetable.set_entry(
            current_role=current_role(),
            class_id=class_id or data.get("class_id") or 0,
            day_of_week=data.get("day_of_week"),
            period_number=data.get("period_number"),
            subject=data.get("subject", ""),
            faculty_id=data.get("faculty_id") or faculty_id,
        )

    @app.route("/student/timetable", endpoint="student_timetable")
    @role_required(Role.STUDENT)
    def student_timetable():
        entries = timetable.for_student(session_id("student_id"), request.args.get("day"))
        return ok([e.to_dict() for e in entries])

    @app.route("/faculty/timetable", endpoint="faculty_timetable")
    @role_required(Role.FACULTY)
    def faculty_timetable():
        return ok([e.to_dict() for e in timetable.for_faculty(session_id("faculty_id"))])

    @app.route("/faculty/timetable", methods=["POST"], endpoint="faculty_set_timetable")
    @role_required(Role.FACULTY)
    def faculty_set_timetable():
        entry_id = _set_entry(json_body(), faculty_id=session_id("faculty_id"))
        return ok({"entry_id": entry_id})

    @app.route("/faculty/timetable/<int:entry_id>", methods=["DELETE"], endpoint="faculty_delete_timetable")
    @role_required(Role.FACULTY)
    def faculty_delete_timetable(entry_id: int):
        timetable.delete_entry(current_role=current_role(), entry_id=entry_id)
        return ok()

    @app.route("/faculty/classes", endpoint="faculty_classes")
    @role_required(Role.FACULTY)
    def faculty_classes():
        class_ids = timetable.assigned_classes(session_id("faculty_id"))
        return ok([profiles.get_class(class_id).to_dict() for class_id in class_ids])

    @app.route("/faculty/classes/<int:class_id>/timetable", endpoint="faculty_class_timetable")
    @role_required(Role.FACULTY)
    def faculty_class_timetable(class_id: int):
        return ok([e.to_dict() for e in timetable.for_class(class_id, request.args.get("day"))])

    @app.route("/admin/classes/<int:class_id>/timetable", endpoint="admin_class_timetable")
    @role_required(Role.ADMIN)
    def admin_class_timetable(class_id: int):
        return ok([e.to_dict() for e in timetable.for_class(class_id, request.args.get("day"))])

    @app.route("/admin/classes/<int:class_id>/timetable", methods=["POST"], endpoint="admin_set_timetable")
    @role_required(Role.ADMIN)
    def admin_set_timetable(class_id: int):
        entry_id = _set_entry(json_body(), class_id=class_id)
        return ok({"entry_id": entry_id})

    @app.route("/admin/timetable/<int:entry_id>", methods=["DELETE"], endpoint="admin_delete_timetable")
    @role_required(Role.ADMIN)
    def admin_delete_timetable(entry_id: int):
        timetable.delete_entry(current_role=current_role(), entry_id=entry_id)
        return ok()
