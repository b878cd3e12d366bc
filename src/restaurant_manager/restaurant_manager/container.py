from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .access.service import AccessService
from .database.connection import DBConfig, DatabaseConnection
from .permissions.evaluator import PermissionPolicy
from .presets.mysql_preset_repository import MySQLRolePresetRepository
from .presets.service import RolePresetService
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService, UserService
from .vacation.mysql_vacation_repository import MySQLVacationRepository
from .vacation.service import VacationService, VacationSettings


@dataclass(frozen=True)
class Container:
    users_repo: object
    presets_repo: object
    vacations_repo: object

    access_service: AccessService
    auth_service: AuthService
    user_service: UserService
    preset_service: RolePresetService
    vacation_service: VacationService


def build_services(
    *,
    users_repo,
    presets_repo,
    vacations_repo,
    policy: Optional[PermissionPolicy] = None,
    vacation_settings: Optional[VacationSettings] = None,
    **vacation_kwargs,
) -> Container:
    """Wire services on top of any repositories (MySQL or in-memory)."""

    access_service = AccessService(users_repo, policy=policy)
    return Container(
        users_repo=users_repo,
        presets_repo=presets_repo,
        vacations_repo=vacations_repo,
        access_service=access_service,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo, presets_repo, vacations_repo, access_service),
        preset_service=RolePresetService(presets_repo, access_service),
        vacation_service=VacationService(
            vacations_repo,
            users_repo,
            access_service,
            settings=vacation_settings,
            **vacation_kwargs,
        ),
    )


def build_container(
    *,
    db_config: dict,
    policy: Optional[PermissionPolicy] = None,
    vacation_settings: Optional[VacationSettings] = None,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    return build_services(
        users_repo=MySQLUserRepository(conn),
        presets_repo=MySQLRolePresetRepository(conn),
        vacations_repo=MySQLVacationRepository(conn),
        policy=policy,
        vacation_settings=vacation_settings,
    )


def build_container_from_settings(settings) -> Container:
    """Build the MySQL container from a loaded settings module (config/*.py)."""

    return build_container(
        db_config=getattr(settings, "DB_CONFIG"),
        policy=PermissionPolicy.from_role_names(getattr(settings, "GOD_MODE_ROLES")),
        vacation_settings=VacationSettings(
            first_year=int(getattr(settings, "VACATION_YEAR_MIN")),
            default_allowance=float(getattr(settings, "DEFAULT_VACATION_ALLOWANCE")),
            rollout_phase=bool(getattr(settings, "VACATION_ROLLOUT_PHASE", True)),
        ),
    )
