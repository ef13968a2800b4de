"""PDF export of attendance reports (reportlab).

Rendering only: every number printed here was computed by the aggregator.
"""
from __future__ import annotations

from datetime import date
from io import BytesIO
from typing import Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from .model import ClassReport, StudentReport

CLASS_COLUMNS = ["Roll No", "Name", "Total", "Present", "Absent", "Leave", "On Duty", "Percentage"]

_TABLE_STYLE = TableStyle(
    [
        ("BACKGROUND", (0, 0), (-1, 0), colors.black),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, 0), 10),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.lightgrey]),
        ("FONTNAME", (0, 1), (-1, -1), "Helvetica"),
        ("FONTSIZE", (0, 1), (-1, -1), 9),
        ("ALIGN", (2, 1), (-1, -1), "RIGHT"),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.black),
        ("TOPPADDING", (0, 0), (-1, -1), 5),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 5),
    ]
)


def _styles():
    styles = getSampleStyleSheet()
    title = ParagraphStyle(
        "ReportTitle",
        parent=styles["Heading1"],
        fontSize=18,
        spaceAfter=12,
        alignment=1,
    )
    return title, styles["Normal"], styles["Heading3"]


def _period_line(start: Optional[date], end: Optional[date]) -> Optional[str]:
    if not start and not end:
        return None
    return f"Period: {start.isoformat() if start else '...'} to {end.isoformat() if end else '...'}"


def _build(story) -> bytes:
    buffer = BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=A4, rightMargin=36, leftMargin=36, topMargin=48, bottomMargin=36)
    doc.build(story)
    return buffer.getvalue()


def render_class_report(report: ClassReport, *, generated_on: date) -> bytes:
    title, normal, _ = _styles()
    roster = report.roster

    story = [
        Paragraph("Class Attendance Report", title),
        Paragraph(f"Class: {escape(report.class_group.class_name)}", normal),
        Paragraph(f"Generated on: {generated_on.isoformat()}", normal),
        Paragraph(f"Total Students: {len(roster.students)}", normal),
        Paragraph(f"Class Average Attendance: {roster.class_average:.2f}%", normal),
        Paragraph(
            f"Above {roster.threshold:g}%: {roster.above_threshold_count} / "
            f"Below {roster.threshold:g}%: {roster.below_threshold_count}",
            normal,
        ),
    ]
    period = _period_line(report.start, report.end)
    if period:
        story.append(Paragraph(period, normal))
    story.append(Spacer(1, 16))

    rows = [CLASS_COLUMNS]
    for row in roster.students:
        stats = row.stats
        rows.append(
            [
                row.student.roll_number,
                row.student.full_name,
                str(stats.total),
                str(stats.present),
                str(stats.absent),
                str(stats.leave),
                str(stats.onduty),
                f"{stats.percentage:.2f}%",
            ]
        )

    table = Table(rows, colWidths=[60, 150, 40, 50, 45, 40, 50, 65], repeatRows=1)
    table.setStyle(_TABLE_STYLE)
    story.append(table)
    return _build(story)


def render_student_report(report: StudentReport, *, generated_on: date) -> bytes:
    title, normal, heading = _styles()
    student = report.student
    overall = report.overall

    story = [
        Paragraph("Student Attendance Report", title),
        Paragraph(f"Generated on: {generated_on.isoformat()}", normal),
        Spacer(1, 12),
        Paragraph("Student Information", heading),
        Paragraph(f"Name: {escape(student.full_name)}", normal),
        Paragraph(f"Roll Number: {escape(student.roll_number)}", normal),
        Paragraph(f"Class: {escape(report.class_group.class_name) if report.class_group else 'Unknown'}", normal),
        Paragraph(f"Overall Attendance: {overall.percentage:.2f}%", normal),
    ]
    period = _period_line(report.start, report.end)
    if period:
        story.append(Paragraph(period, normal))

    story += [Spacer(1, 12), Paragraph("Attendance Summary", heading)]
    summary = Table(
        [
            ["Category", "Count"],
            ["Total Classes", str(overall.total)],
            ["Present", str(overall.present)],
            ["Absent", str(overall.absent)],
            ["Leave", str(overall.leave)],
            ["On Duty", str(overall.onduty)],
        ],
        colWidths=[200, 80],
    )
    summary.setStyle(_TABLE_STYLE)
    story.append(summary)

    if report.subjects:
        story += [Spacer(1, 12), Paragraph("By Subject", heading)]
        rows = [["Subject", "Total", "Present", "Absent", "Leave", "On Duty", "Percentage"]]
        for s in report.subjects:
            counts = [str(n) for n in (s.total, s.present, s.absent, s.leave, s.onduty)]
            rows.append([s.label, *counts, f"{s.percentage:.2f}%"])
        subjects = Table(rows, colWidths=[150, 45, 50, 45, 40, 50, 65], repeatRows=1)
        subjects.setStyle(_TABLE_STYLE)
        story.append(subjects)

    return _build(story)
