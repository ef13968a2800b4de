"""Flask request helpers shared by the portal controllers."""
from __future__ import annotations

from functools import wraps
from io import BytesIO

from flask import jsonify, request, send_file, session

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotAuthenticatedError, ValidationError


def role_required(*roles: Role):
    allowed = {r.value for r in roles}

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                raise NotAuthenticatedError("Please sign in to continue")
            if session.get("role") not in allowed:
                raise AuthorizationError("You do not have access to this page")
            return view(*args, **kwargs)

        return wrapper

    return decorator


def current_role() -> Role:
    return Role(session["role"])


def session_id(key: str) -> int:
    value = session.get(key)
    if value is None:
        raise AuthorizationError("Your account is not linked to a profile")
    return int(value)


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def ok(data=None, **extra):
    return jsonify({"success": True, "data": data, **extra})


def pdf_response(content: bytes, filename: str):
    return send_file(BytesIO(content), mimetype="application/pdf", as_attachment=True, download_name=filename)
