from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import now_local
from ..common.web import current_role, json_body, ok, role_required, session_id
from ..container import Container
from ..core.enums import Role
from .aggregator import is_above_threshold


def _range_args() -> tuple:
    return request.args.get("start"), request.args.get("end")


def register(app: Flask, container: Container) -> None:
    attendance = container.attendance_service

    # student portal

    @app.route("/student/attendance", endpoint="student_attendance")
    @role_required(Role.STUDENT)
    def student_attendance():
        student_id = session_id("student_id")
        if request.args.get("date"):
            records = attendance.records_for_student_on(student_id, request.args["date"])
        else:
            records = attendance.records_for_student(student_id, *_range_args())
        return ok([r.to_dict() for r in records])

    @app.route("/student/attendance/stats", endpoint="student_attendance_stats")
    @role_required(Role.STUDENT)
    def student_attendance_stats():
        stats = attendance.student_stats(session_id("student_id"), *_range_args())
        return ok({**stats.to_dict(), "above_threshold": is_above_threshold(stats.percentage, attendance.threshold)})

    @app.route("/student/attendance/subjects", endpoint="student_attendance_subjects")
    @role_required(Role.STUDENT)
    def student_attendance_subjects():
        return ok(attendance.student_subject_stats(session_id("student_id"), *_range_args()).to_dict())

    @app.route("/student/attendance/monthly", endpoint="student_attendance_monthly")
    @role_required(Role.STUDENT)
    def student_attendance_monthly():
        today = now_local().date()
        days = attendance.monthly_summary(
            session_id("student_id"),
            request.args.get("year", today.year),
            request.args.get("month", today.month),
        )
        return ok([d.to_dict() for d in days])

    # faculty portal

    @app.route("/faculty/attendance", methods=["POST"], endpoint="faculty_mark_attendance")
    @role_required(Role.FACULTY)
    def faculty_mark_attendance():
        data = json_body()
        saved = attendance.mark_attendance(
            current_role=current_role(),
            faculty_id=session_id("faculty_id"),
            class_id=data.get("class_id") or 0,
            attendance_date=data.get("date"),
            period_number=data.get("period_number"),
            subject=data.get("subject"),
            entries=data.get("entries") or [],
        )
        return ok({"saved": saved})

    @app.route("/faculty/attendance/<int:record_id>", methods=["PUT", "PATCH"], endpoint="faculty_correct_attendance")
    @role_required(Role.FACULTY)
    def faculty_correct_attendance(record_id: int):
        record = attendance.correct_record(
            current_role=current_role(),
            record_id=record_id,
            status=json_body().get("status"),
            faculty_id=session_id("faculty_id"),
        )
        return ok(record.to_dict())

    @app.route("/faculty/classes/<int:class_id>/attendance", endpoint="faculty_class_attendance")
    @role_required(Role.FACULTY)
    def faculty_class_attendance(class_id: int):
        day = request.args.get("date") or now_local().date()
        records = attendance.records_for_class_on(class_id, day, request.args.get("period"))
        return ok([r.to_dict() for r in records])

    @app.route("/faculty/classes/<int:class_id>/stats", endpoint="faculty_class_stats")
    @role_required(Role.FACULTY)
    def faculty_class_stats(class_id: int):
        return ok(attendance.class_stats(class_id, *_range_args()).to_dict())

    # admin portal

    @app.route("/admin/attendance/stats", endpoint="admin_attendance_stats")
    @role_required(Role.ADMIN)
    def admin_attendance_stats():
        stats = attendance.overall_stats(current_role=current_role(), start=request.args.get("start"), end=request.args.get("end"))
        return ok(stats.to_dict())

    @app.route("/admin/attendance", endpoint="admin_attendance")
    @role_required(Role.ADMIN)
    def admin_attendance():
        return ok([r.to_dict() for r in attendance.records_between(*_range_args())])
