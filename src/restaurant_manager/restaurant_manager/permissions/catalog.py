"""Catalog of grantable permission keys.

Keys are namespaced as ``"<module>:<action>"``. Groups exist only to lay the
keys out in the admin UI; they carry no access-control meaning.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional


@dataclass(frozen=True)
class PermissionItem:
    key: str
    label: str


@dataclass(frozen=True)
class PermissionGroup:
    id: str
    title: str
    items: tuple[PermissionItem, ...]
    subtitle: Optional[str] = None


PERMISSIONS: tuple[PermissionGroup, ...] = (
    PermissionGroup(
        id="rules",
        title="Pravila",
        subtitle="Upravljanje pravilima, kategorijama i sadržajem",
        items=(
            PermissionItem("rules:access", "Pristup pravilima"),
            PermissionItem("rules:create", "Kreiranje pravila"),
            PermissionItem("rules:edit", "Uređivanje pravila"),
            PermissionItem("rules:delete", "Brisanje pravila"),
            PermissionItem("rules:publish", "Objava pravila"),
            PermissionItem("rules:categories", "Upravljanje kategorijama"),
            PermissionItem("rules:uploads", "Upload fajlova"),
        ),
    ),
    PermissionGroup(
        id="pds",
        title="PDS sistem",
        subtitle="Evaluacije učinka i razvoja",
        items=(PermissionItem("pds:access", "Pristup PDS modulu"),),
    ),
    PermissionGroup(
        id="vacation",
        title="Godišnji odmor",
        subtitle="Zahtjevi, odobrenja, blokirani dani i export",
        items=(
            PermissionItem("vacation:access", "Pristup modulu godišnjih"),
            PermissionItem("vacation:create", "Kreiranje zahtjeva"),
            PermissionItem("vacation:edit", "Uređivanje zahtjeva"),
            PermissionItem("vacation:cancel", "Otkazivanje zahtjeva"),
            PermissionItem("vacation:approve", "Odobravanje/odbijanje zahtjeva"),
            PermissionItem("vacation:blocked_days", "Upravljanje blokiranim danima"),
            PermissionItem("vacation:export", "Export (PDF/CSV)"),
        ),
    ),
    PermissionGroup(
        id="labor",
        title="Labor planner",
        subtitle="Budžet i planiranje rada",
        items=(
            PermissionItem("labor:access", "Pristup Labor modulu"),
            PermissionItem("labor:edit", "Uređivanje plana"),
        ),
    ),
    PermissionGroup(
        id="productivity",
        title="Produktivnost",
        subtitle="CL izvještaji i produktivnost",
        items=(
            PermissionItem("productivity:access", "Pristup modulu produktivnosti"),
            PermissionItem("productivity:edit", "Uređivanje izvještaja"),
        ),
    ),
    PermissionGroup(
        id="bonus",
        title="Bonusi",
        subtitle="Godišnji bonus obračun i podešavanja",
        items=(
            PermissionItem("bonus:access", "Pristup bonus modulu"),
            PermissionItem("bonus:manage", "Upravljanje postavkama bonusa"),
        ),
    ),
    PermissionGroup(
        id="admin",
        title="Admin",
        subtitle="Korisnici, restorani, permisije i sistem",
        items=(
            PermissionItem("users:access", "Pristup listi korisnika"),
            PermissionItem("users:manage", "Upravljanje korisnicima"),
            PermissionItem("restaurants:access", "Pristup listi restorana"),
            PermissionItem("restaurants:manage", "Upravljanje restoranima"),
            PermissionItem("users:permissions", "Preset permisije po roli"),
        ),
    ),
    PermissionGroup(
        id="inventory",
        title="Inventar",
        subtitle="Zalihe i inventar",
        items=(
            PermissionItem("inventory:access", "Pristup inventaru"),
            PermissionItem("inventory:edit", "Uređivanje zaliha"),
        ),
    ),
)

ALL_PERMISSION_KEYS: tuple[str, ...] = tuple(item.key for group in PERMISSIONS for item in group.items)


def sanitize_permission_keys(keys: Iterable[str]) -> list[str]:
    """Keep only known keys, stripped and de-duplicated, in first-seen order."""

    allowed = set(ALL_PERMISSION_KEYS)
    out: list[str] = []
    seen: set[str] = set()
    for raw in keys or ():
        key = str(raw or "").strip()
        if not key or key not in allowed or key in seen:
            continue
        seen.add(key)
        out.append(key)
    return out
