from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role


class RolePresetRepository(Protocol):
    def get_keys(self, role: Role) -> Optional[Sequence[str]]:
        raise NotImplementedError

    def save_keys(self, role: Role, keys: Sequence[str]) -> None:
        raise NotImplementedError
