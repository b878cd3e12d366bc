from __future__ import annotations

from dataclasses import asdict
from datetime import date

from flask import Flask, jsonify, request, session

from ..access.decorators import login_required, permission_required
from ..common.datetime_utils import parse_iso_date, today_local
from ..common.validators import require_year
from ..container import Container
from ..core.enums import VacationStatus
from ..core.exceptions import ValidationError
from .model import VacationBalance, VacationRequest


def _parse_date(v: str) -> date:
    if not isinstance(v, str):
        raise ValidationError("Datum nije ispravan (YYYY-MM-DD)")
    try:
        return parse_iso_date(v)
    except ValueError:
        raise ValidationError("Datum nije ispravan (YYYY-MM-DD)")


def _request_json(r: VacationRequest) -> dict:
    return {
        "request_id": r.request_id,
        "user_id": r.user_id,
        "start": r.start_date.isoformat(),
        "end": r.end_date.isoformat(),
        "days": r.days,
        "status": r.status.value,
    }


def _balance_json(b: VacationBalance) -> dict:
    return asdict(b)


def register(app: Flask, container: Container) -> None:
    service = container.vacation_service

    def _current_user_id():
        return session.get("user_id")

    def _year_arg() -> int:
        return require_year(request.args.get("year") or today_local().year)

    @app.route("/vacations", methods=["GET"], endpoint="my_vacations")
    @login_required
    def my_vacations():
        items = service.list_my_requests(current_user_id=_current_user_id())
        return jsonify([_request_json(r) for r in items])

    @app.route("/vacations", methods=["POST"], endpoint="create_vacation")
    @login_required
    def create_vacation():
        payload = request.get_json(silent=True) or request.form
        request_id = service.create_request(
            current_user_id=_current_user_id(),
            start=_parse_date(payload.get("start")),
            end=_parse_date(payload.get("end")),
        )
        return jsonify({"request_id": request_id}), 201

    @app.route("/vacations/<int:request_id>", methods=["PUT"], endpoint="update_vacation")
    @login_required
    def update_vacation(request_id: int):
        payload = request.get_json(silent=True) or request.form
        service.update_request(
            current_user_id=_current_user_id(),
            request_id=request_id,
            start=_parse_date(payload.get("start")),
            end=_parse_date(payload.get("end")),
        )
        return jsonify({"ok": True})

    @app.route("/vacations/<int:request_id>/status", methods=["POST"], endpoint="set_vacation_status")
    @login_required
    def set_vacation_status(request_id: int):
        payload = request.get_json(silent=True) or request.form
        try:
            status = VacationStatus(str(payload.get("status", "")).upper())
        except ValueError:
            raise ValidationError("Status nije dozvoljen")

        service.set_status(current_user_id=_current_user_id(), request_id=request_id, status=status)
        return jsonify({"ok": True})

    @app.route("/vacations/<int:request_id>/cancel", methods=["POST"], endpoint="cancel_vacation")
    @login_required
    def cancel_vacation(request_id: int):
        service.cancel_request(current_user_id=_current_user_id(), request_id=request_id)
        return jsonify({"ok": True})

    @app.route("/vacations/<int:request_id>", methods=["DELETE"], endpoint="delete_vacation")
    @login_required
    def delete_vacation(request_id: int):
        service.delete_request(current_user_id=_current_user_id(), request_id=request_id)
        return jsonify({"ok": True})

    @app.route("/vacations/pending", methods=["GET"], endpoint="pending_vacations")
    @login_required
    def pending_vacations():
        items = service.list_pending(current_user_id=_current_user_id())
        return jsonify([_request_json(r) for r in items])

    @app.route("/vacations/balance", methods=["GET"], endpoint="vacation_balance")
    @login_required
    def vacation_balance():
        user_id = request.args.get("user_id", type=int)
        balance = service.get_balance(current_user_id=_current_user_id(), year=_year_arg(), user_id=user_id)
        return jsonify(_balance_json(balance))

    @app.route("/vacations/team", methods=["GET"], endpoint="team_vacation_balances")
    @login_required
    def team_vacation_balances():
        balances = service.get_team_balances(current_user_id=_current_user_id(), year=_year_arg())
        return jsonify([_balance_json(b) for b in balances])

    @app.route("/vacations/blocked-days", methods=["GET"], endpoint="blocked_days")
    @permission_required(container.access_service, "vacation:access")
    def blocked_days():
        return jsonify(
            [
                {"blocked_day_id": b.blocked_day_id, "day": b.day.isoformat(), "reason": b.reason}
                for b in service.list_blocked_days()
            ]
        )

    @app.route("/vacations/blocked-days", methods=["POST"], endpoint="add_blocked_day")
    @login_required
    def add_blocked_day():
        payload = request.get_json(silent=True) or request.form
        blocked_day_id = service.add_blocked_day(
            current_user_id=_current_user_id(),
            day=_parse_date(payload.get("day")),
            reason=payload.get("reason", ""),
        )
        return jsonify({"blocked_day_id": blocked_day_id}), 201

    @app.route("/vacations/blocked-days/<int:blocked_day_id>", methods=["DELETE"], endpoint="remove_blocked_day")
    @login_required
    def remove_blocked_day(blocked_day_id: int):
        service.remove_blocked_day(current_user_id=_current_user_id(), blocked_day_id=blocked_day_id)
        return jsonify({"ok": True})
