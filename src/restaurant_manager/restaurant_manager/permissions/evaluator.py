"""Permission evaluation.

A role in the god-mode set holds every permission implicitly. Any other role
holds exactly the keys granted to it: no wildcards, no hierarchy between keys,
no inheritance between modules.
"""

from __future__ import annotations

from collections.abc import Set
from dataclasses import dataclass, field
from typing import AbstractSet, Iterable, Union

from ..core.enums import GOD_MODE_ROLES, Role

RoleLike = Union[Role, str]


def _role_name(role: RoleLike) -> str:
    return role.value if isinstance(role, Role) else str(role)


def is_god_mode_role(role: RoleLike, *, god_mode_roles: AbstractSet[str] = GOD_MODE_ROLES) -> bool:
    return _role_name(role) in god_mode_roles


def has_permission(
    role: RoleLike,
    granted: Iterable[str],
    required: str,
    *,
    god_mode_roles: AbstractSet[str] = GOD_MODE_ROLES,
) -> bool:
    if is_god_mode_role(role, god_mode_roles=god_mode_roles):
        return True
    return required in (granted if isinstance(granted, Set) else set(granted or ()))


@dataclass(frozen=True)
class PermissionPolicy:
    """Evaluator configuration passed into services instead of module globals."""

    god_mode_roles: frozenset = field(default=GOD_MODE_ROLES)

    @classmethod
    def from_role_names(cls, names: Iterable[str]) -> "PermissionPolicy":
        return cls(god_mode_roles=frozenset(_role_name(Role(n.strip())) for n in names if n and n.strip()))

    def is_god_mode(self, role: RoleLike) -> bool:
        return is_god_mode_role(role, god_mode_roles=self.god_mode_roles)

    def allows(self, role: RoleLike, granted: Iterable[str], required: str) -> bool:
        return has_permission(role, granted, required, god_mode_roles=self.god_mode_roles)
