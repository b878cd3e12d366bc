import pytest

from src.restaurant_manager.restaurant_manager.core.enums import Role
from src.restaurant_manager.restaurant_manager.core.exceptions import PermissionDeniedError, ValidationError
from src.restaurant_manager.restaurant_manager.permissions.catalog import ALL_PERMISSION_KEYS
from src.restaurant_manager.restaurant_manager.presets.service import RolePresetService

from conftest import ADMIN_ID, ARCHITECT_ID, CREW_ID, MANAGER_ID


def test_god_mode_preset_is_every_key(presets, access):
    svc = RolePresetService(presets, access)

    preset = svc.get_preset(current_user_id=ADMIN_ID, role=Role.SUPER_ADMIN)

    assert preset.keys == list(ALL_PERMISSION_KEYS)


def test_missing_preset_is_empty(presets, access):
    assert RolePresetService(presets, access).get_preset(current_user_id=ADMIN_ID, role=Role.CREW).keys == []


def test_stored_preset_is_sanitized_on_read(presets, access):
    presets.saved[Role.CREW] = ["vacation:create", "legacy:key", "vacation:create"]

    preset = RolePresetService(presets, access).get_preset(current_user_id=ADMIN_ID, role=Role.CREW)

    assert preset.keys == ["vacation:create"]


def test_save_stores_sanitized_keys(presets, access):
    svc = RolePresetService(presets, access)

    preset = svc.save_preset(
        current_user_id=ADMIN_ID,
        role=Role.MANAGER,
        keys=["vacation:approve", " vacation:access", "unknown:key"],
    )

    assert preset.keys == ["vacation:approve", "vacation:access"]
    assert presets.saved[Role.MANAGER] == ["vacation:approve", "vacation:access"]


def test_save_refuses_god_mode_roles(presets, access):
    with pytest.raises(ValidationError):
        RolePresetService(presets, access).save_preset(
            current_user_id=ARCHITECT_ID, role=Role.SYSTEM_ARCHITECT, keys=["users:access"]
        )
    assert presets.saved == {}


def test_reading_and_saving_need_their_own_permissions(presets, access):
    svc = RolePresetService(presets, access)

    with pytest.raises(PermissionDeniedError):
        svc.get_preset(current_user_id=CREW_ID, role=Role.CREW)
    with pytest.raises(PermissionDeniedError):
        svc.save_preset(current_user_id=MANAGER_ID, role=Role.CREW, keys=[])
