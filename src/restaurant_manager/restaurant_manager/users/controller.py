from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, request, session

from ..access.decorators import login_required
from ..common.validators import require_role
from ..container import Container
from ..core.constants import DEFAULT_SESSION_DAYS
from ..core.exceptions import ValidationError
from ..permissions.catalog import ALL_PERMISSION_KEYS, PERMISSIONS
from .model import User


def _user_json(u: User) -> dict:
    return {
        "user_id": u.user_id,
        "full_name": u.full_name,
        "email": u.email,
        "role": u.role.value,
        "permissions": sorted(u.permissions),
        "is_active": u.is_active,
        "vacation_entitlement": u.vacation_entitlement,
        "vacation_carryover": u.vacation_carryover,
    }


def _optional_list(payload, name: str):
    value = payload.get(name)
    if value is None:
        return None
    if not isinstance(value, list):
        raise ValidationError(f"Polje {name} mora biti lista")
    return value


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        payload = request.get_json(silent=True) or request.form
        s_user = container.auth_service.authenticate(payload.get("email", ""), payload.get("password", ""))

        session.clear()
        session.permanent = bool(payload.get("remember_me"))
        app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)
        session["user_id"] = s_user.user_id
        session["name"] = s_user.full_name

        return jsonify({"user_id": s_user.user_id, "full_name": s_user.full_name, "role": s_user.role.value})

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"ok": True})

    @app.route("/me/permissions", methods=["GET"], endpoint="my_permissions")
    @login_required
    def my_permissions():
        access = container.access_service
        check = request.args.get("check")
        if check:
            result = access.try_require_permission(session.get("user_id"), check)
            return jsonify({"permission": check, "allowed": result.ok})

        user = access.get_user_for_access(session.get("user_id"))
        keys = [k for k in ALL_PERMISSION_KEYS if access.can(user, k)]
        return jsonify(
            {
                "role": user.role.value,
                "god_mode": access.policy.is_god_mode(user.role),
                "permissions": keys,
            }
        )

    @app.route("/permissions", methods=["GET"], endpoint="permission_catalog")
    @login_required
    def permission_catalog():
        return jsonify(
            [
                {
                    "id": g.id,
                    "title": g.title,
                    "subtitle": g.subtitle,
                    "items": [{"key": i.key, "label": i.label} for i in g.items],
                }
                for g in PERMISSIONS
            ]
        )

    # -------- User administration --------
    @app.route("/admin/users", methods=["GET"], endpoint="list_users")
    @login_required
    def list_users():
        users = container.user_service.list_users(current_user_id=session.get("user_id"))
        return jsonify([_user_json(u) for u in users])

    @app.route("/admin/users", methods=["POST"], endpoint="create_user")
    @login_required
    def create_user():
        payload = request.get_json(silent=True) or {}
        user_id = container.user_service.create_user(
            current_user_id=session.get("user_id"),
            full_name=payload.get("full_name"),
            email=payload.get("email"),
            password=payload.get("password"),
            role=require_role(payload.get("role", "CREW")),
            permissions=_optional_list(payload, "permissions"),
            vacation_entitlement=payload.get("vacation_entitlement"),
            vacation_carryover=payload.get("vacation_carryover"),
            allowances=_optional_list(payload, "allowances"),
        )
        return jsonify({"user_id": user_id}), 201

    @app.route("/admin/users/<int:user_id>", methods=["PUT"], endpoint="update_user")
    @login_required
    def update_user(user_id: int):
        payload = request.get_json(silent=True) or {}
        user = container.user_service.update_user(
            current_user_id=session.get("user_id"),
            user_id=user_id,
            full_name=payload.get("full_name"),
            email=payload.get("email"),
            role=require_role(payload.get("role")),
            permissions=_optional_list(payload, "permissions"),
            password=payload.get("password"),
            vacation_entitlement=payload.get("vacation_entitlement"),
            vacation_carryover=payload.get("vacation_carryover"),
            allowances=_optional_list(payload, "allowances"),
        )
        return jsonify(_user_json(user))

    @app.route("/admin/users/<int:user_id>/deactivate", methods=["POST"], endpoint="deactivate_user")
    @login_required
    def deactivate_user(user_id: int):
        container.user_service.deactivate_user(current_user_id=session.get("user_id"), user_id=user_id)
        return jsonify({"ok": True})
