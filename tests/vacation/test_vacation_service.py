from __future__ import annotations

from datetime import date

import pytest

from src.restaurant_manager.restaurant_manager.core.enums import VacationStatus
from src.restaurant_manager.restaurant_manager.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    PermissionDeniedError,
    ValidationError,
)
from src.restaurant_manager.restaurant_manager.vacation.service import VacationService, VacationSettings

from conftest import ADMIN_ID, ARCHITECT_ID, CREW_ID, INACTIVE_ID, MANAGER_ID

TODAY = date(2026, 3, 10)


@pytest.fixture
def service(vacations, users, access) -> VacationService:
    return VacationService(vacations, users, access, settings=VacationSettings(first_year=2025), today=lambda: TODAY)


def test_create_counts_working_days_minus_blocked(service, vacations):
    vacations.add_blocked_day(day=date(2026, 3, 18), reason="Inventura")

    rid = service.create_request(current_user_id=CREW_ID, start=date(2026, 3, 16), end=date(2026, 3, 22))

    req = vacations.get_request(request_id=rid)
    assert req.days == 4
    assert req.status == VacationStatus.PENDING
    assert req.user_id == CREW_ID


def test_create_rejects_period_without_working_days(service):
    with pytest.raises(ValidationError) as exc:
        service.create_request(current_user_id=CREW_ID, start=date(2026, 3, 14), end=date(2026, 3, 15))
    assert "nema radnih dana" in str(exc.value)


def test_create_rejects_reversed_period(service):
    with pytest.raises(ValidationError):
        service.create_request(current_user_id=CREW_ID, start=date(2026, 3, 20), end=date(2026, 3, 16))


def test_create_respects_earliest_start(vacations, users, access):
    svc = VacationService(vacations, users, access, settings=VacationSettings(rollout_phase=False), today=lambda: TODAY)

    with pytest.raises(ValidationError):
        svc.create_request(current_user_id=CREW_ID, start=date(2026, 1, 5), end=date(2026, 1, 6))
    assert svc.create_request(current_user_id=CREW_ID, start=date(2026, 2, 10), end=date(2026, 2, 10)) > 0


def test_create_needs_permission_and_session(service):
    with pytest.raises(PermissionDeniedError):
        service.create_request(current_user_id=ADMIN_ID, start=date(2026, 3, 16), end=date(2026, 3, 17))
    with pytest.raises(AuthenticationError):
        service.create_request(current_user_id=None, start=date(2026, 3, 16), end=date(2026, 3, 17))


def test_update_returned_request_goes_back_to_pending(service, vacations):
    rid = vacations.add_request(
        user_id=CREW_ID,
        start_date=date(2026, 3, 16),
        end_date=date(2026, 3, 17),
        days=2,
        status=VacationStatus.RETURNED,
    )

    service.update_request(current_user_id=CREW_ID, request_id=rid, start=date(2026, 3, 16), end=date(2026, 3, 20))

    req = vacations.get_request(request_id=rid)
    assert req.days == 5
    assert req.status == VacationStatus.PENDING


def test_update_only_by_owner_and_only_while_editable(service, vacations):
    rid = vacations.add_request(
        user_id=CREW_ID,
        start_date=date(2026, 3, 16),
        end_date=date(2026, 3, 17),
        days=2,
        status=VacationStatus.APPROVED,
    )

    with pytest.raises(AuthorizationError):
        service.update_request(current_user_id=MANAGER_ID, request_id=rid, start=date(2026, 3, 16), end=date(2026, 3, 17))
    with pytest.raises(ValidationError):
        service.update_request(current_user_id=CREW_ID, request_id=rid, start=date(2026, 3, 16), end=date(2026, 3, 17))


def test_set_status_requires_approve_permission(service, vacations):
    rid = vacations.add_request(user_id=CREW_ID, start_date=date(2026, 3, 16), end_date=date(2026, 3, 17), days=2)

    with pytest.raises(PermissionDeniedError):
        service.set_status(current_user_id=MANAGER_ID, request_id=rid, status=VacationStatus.APPROVED)

    service.set_status(current_user_id=ADMIN_ID, request_id=rid, status=VacationStatus.APPROVED)
    req = vacations.get_request(request_id=rid)
    assert req.status == VacationStatus.APPROVED
    assert req.decided_by == ADMIN_ID


def test_set_status_rejects_non_decision_status(service, vacations):
    rid = vacations.add_request(user_id=CREW_ID, start_date=date(2026, 3, 16), end_date=date(2026, 3, 17), days=2)

    with pytest.raises(ValidationError):
        service.set_status(current_user_id=ARCHITECT_ID, request_id=rid, status=VacationStatus.CANCELLED)


def test_set_status_unknown_request(service):
    with pytest.raises(ValidationError):
        service.set_status(current_user_id=ADMIN_ID, request_id=404, status=VacationStatus.REJECTED)


def test_cancel_only_pending_or_approved(service, vacations):
    approved = vacations.add_request(
        user_id=CREW_ID, start_date=date(2026, 4, 1), end_date=date(2026, 4, 2), days=2, status=VacationStatus.APPROVED
    )
    rejected = vacations.add_request(
        user_id=CREW_ID, start_date=date(2026, 4, 6), end_date=date(2026, 4, 7), days=2, status=VacationStatus.REJECTED
    )

    service.cancel_request(current_user_id=CREW_ID, request_id=approved)
    assert vacations.get_request(request_id=approved).status == VacationStatus.CANCELLED

    with pytest.raises(ValidationError):
        service.cancel_request(current_user_id=CREW_ID, request_id=rejected)
    with pytest.raises(AuthorizationError):
        service.cancel_request(current_user_id=MANAGER_ID, request_id=rejected)


def test_delete_by_owner_or_approver(service, vacations):
    own = vacations.add_request(user_id=CREW_ID, start_date=date(2026, 4, 1), end_date=date(2026, 4, 1), days=1)
    other = vacations.add_request(user_id=CREW_ID, start_date=date(2026, 4, 2), end_date=date(2026, 4, 2), days=1)
    third = vacations.add_request(user_id=CREW_ID, start_date=date(2026, 4, 3), end_date=date(2026, 4, 3), days=1)

    service.delete_request(current_user_id=CREW_ID, request_id=own)
    service.delete_request(current_user_id=ADMIN_ID, request_id=other)
    with pytest.raises(AuthorizationError):
        service.delete_request(current_user_id=MANAGER_ID, request_id=third)

    assert list(vacations.requests) == [third]


def test_blocked_days_management(service, vacations):
    bid = service.add_blocked_day(current_user_id=ADMIN_ID, day=date(2026, 12, 24), reason="Badnjak")

    with pytest.raises(ValidationError):
        service.add_blocked_day(current_user_id=ADMIN_ID, day=date(2026, 12, 24), reason="Opet")
    with pytest.raises(PermissionDeniedError):
        service.add_blocked_day(current_user_id=CREW_ID, day=date(2026, 12, 25), reason="Božić")

    service.remove_blocked_day(current_user_id=ADMIN_ID, blocked_day_id=bid)
    assert vacations.list_blocked_days() == []
    with pytest.raises(ValidationError):
        service.remove_blocked_day(current_user_id=ADMIN_ID, blocked_day_id=bid)


def test_balance_uses_approved_history_and_banked_days(service, vacations):
    # 2025: 20 + 5 banked, 10 approved -> 15 carried into 2026
    vacations.add_request(
        user_id=CREW_ID, start_date=date(2025, 7, 1), end_date=date(2025, 7, 14), days=10, status=VacationStatus.APPROVED
    )
    vacations.add_request(
        user_id=CREW_ID, start_date=date(2025, 8, 1), end_date=date(2025, 8, 5), days=5, status=VacationStatus.REJECTED
    )
    vacations.add_request(
        user_id=CREW_ID, start_date=date(2026, 2, 2), end_date=date(2026, 2, 4), days=3, status=VacationStatus.APPROVED
    )

    balance = service.get_balance(current_user_id=CREW_ID, year=2026)

    assert balance.allowance == 20
    assert balance.carried_over == 15
    assert balance.total == 35
    assert balance.used == 3
    assert balance.remaining == 32


def test_balance_prefers_yearly_override_and_user_entitlement(service, vacations, users):
    vacations.set_allowance(CREW_ID, 2026, 24)

    assert service.get_balance(current_user_id=CREW_ID, year=2026).allowance == 24
    assert service.get_balance(current_user_id=CREW_ID, year=2025).total == 25


def test_balance_is_recomputed_after_history_changes(service, vacations):
    before = service.get_balance(current_user_id=CREW_ID, year=2026)
    vacations.add_request(
        user_id=CREW_ID, start_date=date(2025, 3, 3), end_date=date(2025, 3, 7), days=5, status=VacationStatus.APPROVED
    )
    after = service.get_balance(current_user_id=CREW_ID, year=2026)

    assert before.carried_over == 25
    assert after.carried_over == 20


def test_other_users_balance_needs_vacation_access(service):
    assert service.get_balance(current_user_id=MANAGER_ID, year=2026, user_id=CREW_ID).user_id == CREW_ID
    with pytest.raises(PermissionDeniedError):
        service.get_balance(current_user_id=CREW_ID, year=2026, user_id=MANAGER_ID)
    with pytest.raises(ValidationError):
        service.get_balance(current_user_id=MANAGER_ID, year=2026, user_id=999)


def test_team_balances_cover_active_users(service):
    balances = service.get_team_balances(current_user_id=ADMIN_ID, year=2025)

    assert sorted(b.user_id for b in balances) == [ARCHITECT_ID, ADMIN_ID, MANAGER_ID, CREW_ID]
    crew = next(b for b in balances if b.user_id == CREW_ID)
    assert crew.total == 25


def test_list_pending_for_approvers_only(service, vacations):
    vacations.add_request(user_id=CREW_ID, start_date=date(2026, 4, 1), end_date=date(2026, 4, 1), days=1)
    vacations.add_request(
        user_id=CREW_ID, start_date=date(2026, 4, 2), end_date=date(2026, 4, 2), days=1, status=VacationStatus.APPROVED
    )

    assert len(service.list_pending(current_user_id=ADMIN_ID)) == 1
    assert len(service.list_my_requests(current_user_id=CREW_ID)) == 2
    with pytest.raises(PermissionDeniedError):
        service.list_pending(current_user_id=CREW_ID)
