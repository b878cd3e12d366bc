from __future__ import annotations

from datetime import date
from typing import Mapping, Optional, Sequence

from ..core.enums import VacationStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_number
from .model import BlockedDay, VacationRequest, YearlyAllowance
from .repository import VacationRepository

_REQUEST_COLUMNS = """
    request_id, user_id, start_date, end_date, days, status, created_at, decided_by, decided_at
"""


def _row_to_request(r: dict) -> VacationRequest:
    return VacationRequest(
        request_id=int(r["request_id"]),
        user_id=int(r["user_id"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        days=normalize_mysql_number(r["days"]),
        status=VacationStatus(r["status"]),
        created_at=r["created_at"],
        decided_by=r.get("decided_by"),
        decided_at=r.get("decided_at"),
    )


class MySQLVacationRepository(VacationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    # -------- Requests --------
    def create_request(self, *, user_id: int, start_date: date, end_date: date, days: float) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO vacation_requests(user_id, start_date, end_date, days, status)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(user_id), start_date, end_date, days, VacationStatus.PENDING.value),
            )
            return int(cur.lastrowid)

    def get_request(self, *, request_id: int) -> Optional[VacationRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_REQUEST_COLUMNS} FROM vacation_requests WHERE request_id=%s",
                (int(request_id),),
            )
            r = fetchone(cur)
            return _row_to_request(r) if r else None

    def update_request_period(self, *, request_id: int, start_date: date, end_date: date, days: float) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE vacation_requests
                SET start_date=%s, end_date=%s, days=%s, status=%s, decided_by=NULL, decided_at=NULL
                WHERE request_id=%s
                """,
                (start_date, end_date, days, VacationStatus.PENDING.value, int(request_id)),
            )
            return cur.rowcount > 0

    def set_status(self, *, request_id: int, status: VacationStatus, decided_by: Optional[int] = None) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE vacation_requests
                SET status=%s, decided_by=COALESCE(%s, decided_by), decided_at=IF(%s IS NULL, decided_at, NOW())
                WHERE request_id=%s
                """,
                (status.value, decided_by, decided_by, int(request_id)),
            )
            return cur.rowcount > 0

    def delete_request(self, *, request_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM vacation_requests WHERE request_id=%s", (int(request_id),))
            return cur.rowcount > 0

    def list_requests(
        self,
        *,
        user_id: Optional[int] = None,
        status: Optional[VacationStatus] = None,
        limit: int = 200,
    ) -> Sequence[VacationRequest]:
        where = []
        params: list = []
        if user_id is not None:
            where.append("user_id=%s")
            params.append(int(user_id))
        if status is not None:
            where.append("status=%s")
            params.append(status.value)

        sql = f"SELECT {_REQUEST_COLUMNS} FROM vacation_requests"
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY start_date DESC, request_id DESC LIMIT %s"
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_row_to_request(r) for r in fetchall(cur)]

    # -------- Allowances and usage --------
    def get_allowances(self, *, user_id: int) -> Mapping[int, YearlyAllowance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT year, days FROM vacation_allowances WHERE user_id=%s", (int(user_id),))
            return {
                int(r["year"]): YearlyAllowance(year=int(r["year"]), days=normalize_mysql_number(r["days"]))
                for r in fetchall(cur)
            }

    def upsert_allowances(self, *, user_id: int, allowances: Sequence[YearlyAllowance]) -> None:
        if not allowances:
            return
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO vacation_allowances(user_id, year, days) VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE days=VALUES(days)
                """,
                [(int(user_id), a.year, a.days) for a in allowances],
            )

    def get_used_days_by_year(self, *, user_id: int) -> Mapping[int, float]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT YEAR(start_date) AS year, SUM(days) AS used
                FROM vacation_requests
                WHERE user_id=%s AND status=%s
                GROUP BY YEAR(start_date)
                """,
                (int(user_id), VacationStatus.APPROVED.value),
            )
            return {int(r["year"]): normalize_mysql_number(r["used"]) for r in fetchall(cur)}

    # -------- Blocked days --------
    def list_blocked_days(self) -> Sequence[BlockedDay]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT blocked_day_id, day, reason FROM blocked_days ORDER BY day")
            return [
                BlockedDay(blocked_day_id=int(r["blocked_day_id"]), day=r["day"], reason=r.get("reason") or "")
                for r in fetchall(cur)
            ]

    def add_blocked_day(self, *, day: date, reason: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO blocked_days(day, reason) VALUES(%s,%s)", (day, reason))
            return int(cur.lastrowid)

    def remove_blocked_day(self, *, blocked_day_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM blocked_days WHERE blocked_day_id=%s", (int(blocked_day_id),))
            return cur.rowcount > 0
