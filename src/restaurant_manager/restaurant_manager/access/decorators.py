from __future__ import annotations

from functools import wraps
from typing import Callable

from flask import g, jsonify, session

from ..core.exceptions import AuthenticationError, PermissionDeniedError
from .service import AccessService


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"error": "Niste prijavljeni."}), 401
        return view(*args, **kwargs)

    return wrapper


def permission_required(access: AccessService, required: str) -> Callable:
    """Guard a view with a permission key.

    The resolved user is exposed as ``g.current_user``.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                g.current_user = access.require_permission(session.get("user_id"), required)
            except AuthenticationError as e:
                return jsonify({"error": str(e)}), 401
            except PermissionDeniedError as e:
                return jsonify({"error": str(e), "permission": required}), 403
            return view(*args, **kwargs)

        return wrapper

    return decorator
