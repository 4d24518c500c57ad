"""Administrative levels, hierarchy dimensions and their Arabic labels.

Provides:
- ``AdminLevel``: rank a user or organisational node occupies.
- ``ActiveHierarchy``: the three parallel organisational dimensions.
- ``LEVEL_NAMES`` / ``HIERARCHY_LABELS``: total display-name catalogs.
- ``level_name()`` / ``hierarchy_label()``: fail-closed lookups.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping


class AdminLevel(str, Enum):
    """Administrative rank, matching the backend ``AdminLevel`` enum."""

    GENERAL_SECRETARIAT = "GENERAL_SECRETARIAT"
    REGION = "REGION"
    LOCALITY = "LOCALITY"
    ADMIN_UNIT = "ADMIN_UNIT"
    DISTRICT = "DISTRICT"
    USER = "USER"
    ADMIN = "ADMIN"
    NATIONAL_LEVEL = "NATIONAL_LEVEL"
    EXPATRIATE_GENERAL = "EXPATRIATE_GENERAL"
    EXPATRIATE_REGION = "EXPATRIATE_REGION"


class ActiveHierarchy(str, Enum):
    """Organisational dimension a user's visibility is evaluated against.

    - ``ORIGINAL``: national level → region → locality → admin unit → district
    - ``EXPATRIATE``: expatriate region only
    - ``SECTOR``: separate tree with the same depth as ``ORIGINAL``
    """

    ORIGINAL = "ORIGINAL"
    EXPATRIATE = "EXPATRIATE"
    SECTOR = "SECTOR"


# ── Sentinels ───────────────────────────────────────────

UNSPECIFIED = "غير محدد"
NOT_REGISTERED = "غير مسجل"
ALL_LEVELS_ACCESS = "الوصول لجميع المستويات"

DEFAULT_PATH_SEPARATOR = " - "
DEFAULT_MEMBERSHIP_SEPARATOR = " / "

# Levels that bypass targeting entirely.
SUPERUSER_LEVELS = frozenset({AdminLevel.GENERAL_SECRETARIAT, AdminLevel.ADMIN})


# ── Catalogs ────────────────────────────────────────────

LEVEL_NAMES: Mapping[AdminLevel, str] = MappingProxyType(
    {
        AdminLevel.GENERAL_SECRETARIAT: "الأمانة العامة",
        AdminLevel.REGION: "الولاية",
        AdminLevel.LOCALITY: "المحلية",
        AdminLevel.ADMIN_UNIT: "الوحدة الإدارية",
        AdminLevel.DISTRICT: "الحي",
        AdminLevel.USER: "مستخدم",
        AdminLevel.ADMIN: "مدير النظام",
        AdminLevel.NATIONAL_LEVEL: "المستوى القومي",
        AdminLevel.EXPATRIATE_GENERAL: "الأمانة العامة للمغتربين",
        AdminLevel.EXPATRIATE_REGION: "إقليم المغتربين",
    }
)

HIERARCHY_LABELS: Mapping[ActiveHierarchy, str] = MappingProxyType(
    {
        ActiveHierarchy.ORIGINAL: "التسلسل الأصلي",
        ActiveHierarchy.EXPATRIATE: "تسلسل المغتربين",
        ActiveHierarchy.SECTOR: "تسلسل القطاع",
    }
)

# Generic words shown in the ORIGINAL path when the user's own level
# has no resolved name object.
LEVEL_PLACEHOLDERS: Mapping[AdminLevel, str] = MappingProxyType(
    {
        AdminLevel.NATIONAL_LEVEL: "مستوى قومي",
        AdminLevel.REGION: "ولاية",
        AdminLevel.LOCALITY: "محلية",
        AdminLevel.ADMIN_UNIT: "وحدة إدارية",
        AdminLevel.DISTRICT: "حي",
    }
)

if set(LEVEL_NAMES) != set(AdminLevel):  # pragma: no cover
    raise RuntimeError(f"LEVEL_NAMES is missing {set(AdminLevel) - set(LEVEL_NAMES)}")
if set(HIERARCHY_LABELS) != set(ActiveHierarchy):  # pragma: no cover
    raise RuntimeError(f"HIERARCHY_LABELS is missing {set(ActiveHierarchy) - set(HIERARCHY_LABELS)}")


# ── Coercion ────────────────────────────────────────────


def coerce_admin_level(value: object) -> AdminLevel | None:
    """Return the matching ``AdminLevel`` or ``None`` for unknown input."""
    if isinstance(value, AdminLevel):
        return value
    if isinstance(value, str):
        try:
            return AdminLevel(value)
        except ValueError:
            return None
    return None


def coerce_hierarchy(value: object) -> ActiveHierarchy | None:
    """Return the matching ``ActiveHierarchy`` or ``None`` for unknown input."""
    if isinstance(value, ActiveHierarchy):
        return value
    if isinstance(value, str):
        try:
            return ActiveHierarchy(value)
        except ValueError:
            return None
    return None


# ── Lookups ─────────────────────────────────────────────


def level_name(admin_level: AdminLevel | str | None) -> str:
    """Arabic display name for an administrative level.

    Never raises. Anything that is not a known ``AdminLevel`` (including
    ``None`` and unknown strings) yields :data:`UNSPECIFIED`.

    Example::

        level_name(AdminLevel.REGION)  # "الولاية"
        level_name("REGION")           # "الولاية"
        level_name("MAYOR")            # "غير محدد"
    """
    level = coerce_admin_level(admin_level)
    if level is None:
        return UNSPECIFIED
    return LEVEL_NAMES[level]


def hierarchy_label(dimension: ActiveHierarchy | str | None) -> str:
    """Arabic display label for a hierarchy dimension, :data:`UNSPECIFIED` if unknown."""
    resolved = coerce_hierarchy(dimension)
    if resolved is None:
        return UNSPECIFIED
    return HIERARCHY_LABELS[resolved]


def is_superuser_level(admin_level: AdminLevel | str | None) -> bool:
    """Check if a level grants unconditional content access."""
    return coerce_admin_level(admin_level) in SUPERUSER_LEVELS


__all__ = [
    "ALL_LEVELS_ACCESS",
    "DEFAULT_MEMBERSHIP_SEPARATOR",
    "DEFAULT_PATH_SEPARATOR",
    "HIERARCHY_LABELS",
    "LEVEL_NAMES",
    "LEVEL_PLACEHOLDERS",
    "NOT_REGISTERED",
    "SUPERUSER_LEVELS",
    "UNSPECIFIED",
    "ActiveHierarchy",
    "AdminLevel",
    "coerce_admin_level",
    "coerce_hierarchy",
    "hierarchy_label",
    "is_superuser_level",
    "level_name",
]
