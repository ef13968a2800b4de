from __future__ import annotations

from flask import Flask, request

from ..common.web import current_role, json_body, ok, role_required, session_id
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    advisors = container.advisor_service

    @app.route("/student/advisor", endpoint="student_advisor")
    @role_required(Role.STUDENT)
    def student_advisor():
        advisor = advisors.class_advisor(session_id("student_id"), request.args.get("date"))
        return ok(advisor.to_dict() if advisor else None)

    @app.route("/faculty/substitutions", methods=["POST"], endpoint="faculty_create_substitution")
    @role_required(Role.FACULTY, Role.ADMIN)
    def faculty_create_substitution():
        data = json_body()
        substitution_id = advisors.create_substitution(
            current_role=current_role(),
            class_id=data.get("class_id") or 0,
            original_advisor_id=data.get("original_advisor_id") or session_id("faculty_id"),
            substitute_advisor_id=data.get("substitute_advisor_id") or 0,
            from_date=data.get("from_date"),
            to_date=data.get("to_date"),
            reason=data.get("reason"),
        )
        return ok({"substitution_id": substitution_id}), 201

    @app.route("/faculty/classes/<int:class_id>/substitutions", endpoint="faculty_class_substitutions")
    @role_required(Role.FACULTY, Role.ADMIN)
    def faculty_class_substitutions(class_id: int):
        if request.args.get("active"):
            subs = advisors.active_for_class(class_id, request.args.get("date"))
        else:
            subs = advisors.for_class(class_id)
        return ok([s.to_dict() for s in subs])
