from __future__ import annotations

import logging

from flask import Flask, session

from ..common.web import json_body, ok
from ..container import Container
from ..core.exceptions import NotAuthenticatedError, ProfileLoadError
from ..profiles.model import FacultyProfile, Resolution, StudentProfile
from .model import Identity
from .session import resolve_portal_role

logger = logging.getLogger(__name__)


def _payload(identity: Identity, resolution: Resolution, role) -> dict:
    profile = resolution.profile
    return {
        "user_id": identity.user_id,
        "email": identity.email,
        "role": role.value if role else None,
        "profile": profile.to_dict() if profile else None,
    }


def _remember(identity: Identity, resolution: Resolution, role) -> None:
    session.clear()
    session["user_id"] = identity.user_id
    session["email"] = identity.email
    session["role"] = role.value if role else None

    profile = resolution.profile
    if isinstance(profile, StudentProfile):
        session["student_id"] = profile.student.student_id
        session["class_id"] = profile.student.class_id
    elif isinstance(profile, FacultyProfile):
        session["faculty_id"] = profile.faculty.faculty_id
        session["advisor_class_id"] = profile.faculty.advisor_class_id


def register(app: Flask, container: Container) -> None:
    @app.route("/auth/signup", methods=["POST"], endpoint="signup")
    def signup():
        data = json_body()
        identity = container.auth_client().sign_up(data.get("email", ""), data.get("password", ""))
        return ok({"user_id": identity.user_id, "email": identity.email}), 201

    @app.route("/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        ctx = container.session_context().start()
        try:
            auth_session = ctx.sign_in(data.get("email", ""), data.get("password", ""))
            if ctx.load_error:
                raise ProfileLoadError(ctx.load_error)

            identity, resolution, role = ctx.identity, ctx.resolution, ctx.portal_role
            _remember(identity, resolution, role)
            logger.info("Signed in %s as %s", identity.email, role.value if role else "no role")
            return ok(_payload(identity, resolution, role), access_token=auth_session.access_token)
        finally:
            ctx.close()

    @app.route("/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return ok()

    @app.route("/auth/me", endpoint="me")
    def me():
        if "user_id" not in session:
            raise NotAuthenticatedError("Please sign in to continue")

        identity = Identity(user_id=session["user_id"], email=session.get("email", ""))
        resolution = container.resolver.resolve(identity)
        role = resolve_portal_role(identity, resolution, container.admin_emails)
        if (role.value if role else None) != session.get("role"):
            _remember(identity, resolution, role)
        return ok(_payload(identity, resolution, role))
