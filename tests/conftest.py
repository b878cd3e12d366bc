from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.restaurant_manager.restaurant_manager.access.service import AccessService
from src.restaurant_manager.restaurant_manager.core.enums import Role, VacationStatus
from src.restaurant_manager.restaurant_manager.users.model import User
from src.restaurant_manager.restaurant_manager.vacation.model import BlockedDay, VacationRequest, YearlyAllowance

PASSWORD_HASH = generate_password_hash("secret123")


def make_user(user_id: int, role: Role, permissions=(), **kwargs) -> User:
    return User(
        user_id=user_id,
        full_name=kwargs.pop("full_name", f"User {user_id}"),
        email=kwargs.pop("email", f"user{user_id}@test.local"),
        password_hash=kwargs.pop("password_hash", PASSWORD_HASH),
        role=role,
        permissions=frozenset(permissions),
        **kwargs,
    )


class InMemoryUsers:
    def __init__(self, *users: User):
        self._by_id = {u.user_id: u for u in users}

    def add(self, user: User) -> None:
        self._by_id[user.user_id] = user

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._by_id.get(int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._by_id.values() if u.email == email), None)

    def list_active(self):
        return [u for u in self._by_id.values() if u.is_active]

    def list_all(self):
        return list(self._by_id.values())

    def create_user(self, *, full_name, email, password_hash, role, permissions, vacation_entitlement, vacation_carryover):
        user_id = max(self._by_id, default=0) + 1
        self.add(
            make_user(
                user_id,
                role,
                permissions,
                full_name=full_name,
                email=email,
                password_hash=password_hash,
                vacation_entitlement=vacation_entitlement,
                vacation_carryover=vacation_carryover,
            )
        )
        return user_id

    def update_user(self, user: User) -> bool:
        if user.user_id not in self._by_id:
            return False
        self._by_id[user.user_id] = user
        return True

    def set_active(self, *, user_id, is_active) -> bool:
        user = self._by_id.get(int(user_id))
        if not user:
            return False
        self._by_id[user.user_id] = replace(user, is_active=is_active)
        return True


class InMemoryPresets:
    def __init__(self):
        self.saved: dict[Role, list[str]] = {}

    def get_keys(self, role: Role):
        return self.saved.get(role)

    def save_keys(self, role: Role, keys) -> None:
        self.saved[role] = list(keys)


class InMemoryVacations:
    def __init__(self):
        self._next_id = 1
        self.requests: dict[int, VacationRequest] = {}
        self.allowances: dict[int, dict[int, YearlyAllowance]] = {}
        self.blocked: dict[int, BlockedDay] = {}

    def _id(self) -> int:
        rid = self._next_id
        self._next_id += 1
        return rid

    def add_request(self, *, user_id, start_date, end_date, days, status=VacationStatus.PENDING) -> int:
        rid = self._id()
        self.requests[rid] = VacationRequest(
            request_id=rid,
            user_id=user_id,
            start_date=start_date,
            end_date=end_date,
            days=days,
            status=status,
            created_at=datetime(2026, 1, 5, 9, 0, 0),
        )
        return rid

    def create_request(self, *, user_id, start_date, end_date, days):
        return self.add_request(user_id=user_id, start_date=start_date, end_date=end_date, days=days)

    def get_request(self, *, request_id):
        return self.requests.get(int(request_id))

    def update_request_period(self, *, request_id, start_date, end_date, days):
        req = self.requests.get(int(request_id))
        if not req:
            return False
        self.requests[req.request_id] = VacationRequest(
            request_id=req.request_id,
            user_id=req.user_id,
            start_date=start_date,
            end_date=end_date,
            days=days,
            status=VacationStatus.PENDING,
            created_at=req.created_at,
        )
        return True

    def set_status(self, *, request_id, status, decided_by=None):
        req = self.requests.get(int(request_id))
        if not req:
            return False
        self.requests[req.request_id] = VacationRequest(
            request_id=req.request_id,
            user_id=req.user_id,
            start_date=req.start_date,
            end_date=req.end_date,
            days=req.days,
            status=status,
            created_at=req.created_at,
            decided_by=decided_by if decided_by is not None else req.decided_by,
            decided_at=datetime(2026, 1, 6, 9, 0, 0) if decided_by is not None else req.decided_at,
        )
        return True

    def delete_request(self, *, request_id):
        return self.requests.pop(int(request_id), None) is not None

    def list_requests(self, *, user_id=None, status=None, limit=200):
        items = [
            r
            for r in self.requests.values()
            if (user_id is None or r.user_id == user_id) and (status is None or r.status == status)
        ]
        return items[:limit]

    def set_allowance(self, user_id: int, year: int, days: float) -> None:
        self.allowances.setdefault(user_id, {})[year] = YearlyAllowance(year=year, days=days)

    def upsert_allowances(self, *, user_id, allowances):
        for a in allowances:
            self.set_allowance(user_id, a.year, a.days)

    def get_allowances(self, *, user_id):
        return dict(self.allowances.get(user_id, {}))

    def get_used_days_by_year(self, *, user_id):
        used: dict[int, float] = {}
        for r in self.requests.values():
            if r.user_id == user_id and r.status == VacationStatus.APPROVED:
                used[r.start_date.year] = used.get(r.start_date.year, 0) + r.days
        return used

    def list_blocked_days(self):
        return sorted(self.blocked.values(), key=lambda b: b.day)

    def add_blocked_day(self, *, day: date, reason: str):
        bid = self._id()
        self.blocked[bid] = BlockedDay(blocked_day_id=bid, day=day, reason=reason)
        return bid

    def remove_blocked_day(self, *, blocked_day_id):
        return self.blocked.pop(int(blocked_day_id), None) is not None


ARCHITECT_ID = 1
ADMIN_ID = 2
MANAGER_ID = 3
CREW_ID = 4
INACTIVE_ID = 5


@pytest.fixture
def users() -> InMemoryUsers:
    return InMemoryUsers(
        make_user(ARCHITECT_ID, Role.SYSTEM_ARCHITECT),
        make_user(
            ADMIN_ID,
            Role.ADMIN,
            permissions={
                "users:access",
                "users:manage",
                "users:permissions",
                "vacation:access",
                "vacation:approve",
                "vacation:blocked_days",
            },
        ),
        make_user(MANAGER_ID, Role.MANAGER, permissions={"vacation:access", "vacation:create"}),
        make_user(CREW_ID, Role.CREW, permissions={"vacation:create"}, vacation_carryover=5),
        make_user(INACTIVE_ID, Role.CREW, permissions={"vacation:create"}, is_active=False),
    )


@pytest.fixture
def access(users) -> AccessService:
    return AccessService(users)


@pytest.fixture
def vacations() -> InMemoryVacations:
    return InMemoryVacations()


@pytest.fixture
def presets() -> InMemoryPresets:
    return InMemoryPresets()
