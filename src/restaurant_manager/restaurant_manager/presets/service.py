from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from ..access.service import AccessService
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..permissions.catalog import ALL_PERMISSION_KEYS, sanitize_permission_keys
from .repository import RolePresetRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RolePreset:
    role: Role
    keys: list[str]


class RolePresetService:
    """Use case: default permission keys per role, applied when creating users."""

    def __init__(self, presets: RolePresetRepository, access: AccessService):
        self._presets = presets
        self._access = access

    def get_preset(self, *, current_user_id: Optional[int], role: Role) -> RolePreset:
        self._access.require_permission(current_user_id, "users:access")

        if self._access.policy.is_god_mode(role):
            # God-mode roles hold everything anyway.
            return RolePreset(role=role, keys=list(ALL_PERMISSION_KEYS))

        stored = self._presets.get_keys(role) or []
        return RolePreset(role=role, keys=sanitize_permission_keys(stored))

    def save_preset(self, *, current_user_id: Optional[int], role: Role, keys: Iterable[str]) -> RolePreset:
        user = self._access.require_permission(current_user_id, "users:permissions")

        if self._access.policy.is_god_mode(role):
            raise ValidationError(f"Rola {role.value} ima sve permisije automatski. Preset se ne podešava.")

        sanitized = sanitize_permission_keys(keys)
        self._presets.save_keys(role, sanitized)
        logger.info("Role preset %s saved by user_id=%s (%d keys)", role.value, user.user_id, len(sanitized))
        return RolePreset(role=role, keys=sanitized)
