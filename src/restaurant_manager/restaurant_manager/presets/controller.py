from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.validators import require_role
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/admin/role-presets/<role>", methods=["GET"], endpoint="get_role_preset")
    def get_role_preset(role: str):
        preset = container.preset_service.get_preset(current_user_id=session.get("user_id"), role=require_role(role))
        return jsonify({"role": preset.role.value, "keys": preset.keys})

    @app.route("/admin/role-presets/<role>", methods=["PUT"], endpoint="save_role_preset")
    def save_role_preset(role: str):
        payload = request.get_json(silent=True) or {}
        keys = payload.get("keys")
        if not isinstance(keys, list):
            raise ValidationError("Lista permisija nije ispravna")

        preset = container.preset_service.save_preset(
            current_user_id=session.get("user_id"),
            role=require_role(role),
            keys=keys,
        )
        return jsonify({"role": preset.role.value, "keys": preset.keys})
