from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import now_local
from ..common.web import ok, pdf_response, role_required, session_id
from ..container import Container
from ..core.enums import Role
from .pdf import render_class_report, render_student_report


def _filename(*parts: str) -> str:
    return "_".join(p.replace(" ", "_") for p in parts if p) + ".pdf"


def register(app: Flask, container: Container) -> None:
    reports = container.report_service

    def _args() -> dict:
        return {"start": request.args.get("start"), "end": request.args.get("end")}

    @app.route("/student/report.pdf", endpoint="student_report_pdf")
    @role_required(Role.STUDENT)
    def student_report_pdf():
        report = reports.student_report(session_id("student_id"), **_args())
        today = now_local().date()
        content = render_student_report(report, generated_on=today)
        return pdf_response(content, _filename(report.student.roll_number, "Attendance_Report", today.isoformat()))

    @app.route("/faculty/reports/class", endpoint="faculty_class_report")
    @role_required(Role.FACULTY)
    def faculty_class_report():
        report = reports.advisor_class_report(
            session_id("faculty_id"),
            class_id=request.args.get("class_id", type=int),
            **_args(),
        )
        return ok(report.to_dict())

    @app.route("/faculty/reports/class.pdf", endpoint="faculty_class_report_pdf")
    @role_required(Role.FACULTY)
    def faculty_class_report_pdf():
        report = reports.advisor_class_report(
            session_id("faculty_id"),
            class_id=request.args.get("class_id", type=int),
            **_args(),
        )
        today = now_local().date()
        content = render_class_report(report, generated_on=today)
        return pdf_response(content, _filename(report.class_group.class_name, "Attendance_Report", today.isoformat()))

    @app.route("/faculty/reports/students/<int:student_id>.pdf", endpoint="faculty_student_report_pdf")
    @role_required(Role.FACULTY)
    def faculty_student_report_pdf(student_id: int):
        report = reports.advisor_student_report(session_id("faculty_id"), student_id, **_args())
        today = now_local().date()
        content = render_student_report(report, generated_on=today)
        return pdf_response(content, _filename(report.student.full_name, "Attendance_Report", today.isoformat()))
