"""Human-readable hierarchy paths and scope descriptions.

Provides:
- ``hierarchy_path()``: ordered path through the user's active hierarchy.
- ``scope_description()``: level name + dimension label + path.
- ``membership_path()``: per-dimension path shown by the hierarchy selector.

All functions are pure presentation and never affect access decisions.
"""

from __future__ import annotations

from typing import Iterable, Optional

from .constants import (
    ALL_LEVELS_ACCESS,
    DEFAULT_MEMBERSHIP_SEPARATOR,
    DEFAULT_PATH_SEPARATOR,
    LEVEL_PLACEHOLDERS,
    NOT_REGISTERED,
    UNSPECIFIED,
    ActiveHierarchy,
    AdminLevel,
    coerce_hierarchy,
    hierarchy_label,
    is_superuser_level,
    level_name,
)
from .models import (
    ExpatriatePosition,
    HierarchyPosition,
    NamedUnit,
    OriginalPosition,
    User,
    position_for,
)

# Admin level owning each tree position, national level → district.
_TREE_ADMIN_LEVELS: tuple[AdminLevel, ...] = (
    AdminLevel.NATIONAL_LEVEL,
    AdminLevel.REGION,
    AdminLevel.LOCALITY,
    AdminLevel.ADMIN_UNIT,
    AdminLevel.DISTRICT,
)


def _unit_names(units: Iterable[Optional[NamedUnit]]) -> list[str]:
    return [unit.name for unit in units if unit is not None and unit.name]


def _original_segments(position: OriginalPosition) -> list[str]:
    segments: list[str] = []
    for own_level, unit in zip(_TREE_ADMIN_LEVELS, position.units()):
        if unit is not None and unit.name:
            segments.append(unit.name)
        elif position.admin_level is own_level:
            # Denormalised record: the user's own level arrived without a name object.
            segments.append(LEVEL_PLACEHOLDERS[own_level])
    return segments


def _path_segments(position: HierarchyPosition) -> list[str]:
    if isinstance(position, ExpatriatePosition):
        return _unit_names((position.expatriate_region,))
    if isinstance(position, OriginalPosition):
        return _original_segments(position)
    # Sector has no placeholder fallback.
    return _unit_names(position.units())


def hierarchy_path(user: User, separator: str = DEFAULT_PATH_SEPARATOR) -> str:
    """Ordered, human-readable path through the user's active hierarchy.

    - ``EXPATRIATE``: dimension label followed by the expatriate region name,
      or the bare label when no region is resolved.
    - ``SECTOR``: resolved sector names (national → district), skipping gaps;
      bare label when none is resolved.
    - ``ORIGINAL``: resolved names (national → district); the user's own level
      falls back to a generic word when its name is missing. With nothing
      collected, the user's level name.

    Example::

        user = User(
            active_hierarchy=ActiveHierarchy.SECTOR,
            sector_region=NamedUnit(name="Khartoum"),
            sector_district=NamedUnit(name="Al-Amarat"),
        )
        hierarchy_path(user)  # "Khartoum - Al-Amarat"
    """
    position = position_for(user)
    segments = _path_segments(position)

    if position.dimension is ActiveHierarchy.ORIGINAL:
        if not segments:
            return level_name(user.admin_level)
        return separator.join(segments)

    label = hierarchy_label(position.dimension)
    if position.dimension is ActiveHierarchy.EXPATRIATE:
        return separator.join([label, *segments])
    return separator.join(segments) if segments else label


def scope_description(user: User, separator: str = DEFAULT_PATH_SEPARATOR) -> str:
    """One-line summary of the user's level and scope.

    Superusers get a fixed "all levels" suffix. Everyone else gets the level
    name, the active dimension label and the path segments, each shown once.

    Example::

        scope_description(secretariat_user)
        # "الأمانة العامة - الوصول لجميع المستويات"
        scope_description(locality_user)
        # "المحلية - التسلسل الأصلي - الخرطوم - بحري"
    """
    name = level_name(user.admin_level)
    if is_superuser_level(user.admin_level):
        return separator.join([name, ALL_LEVELS_ACCESS])

    position = position_for(user)
    return separator.join([name, hierarchy_label(position.dimension), *_path_segments(position)])


def membership_path(
    user: User,
    dimension: ActiveHierarchy | str,
    separator: str = DEFAULT_MEMBERSHIP_SEPARATOR,
) -> str:
    """Path for one dimension as listed in the hierarchy selector.

    Returns ``"غير مسجل"`` when the user holds no membership in ``dimension``
    and ``"غير محدد"`` when they do but no names are resolved (or the
    dimension is unknown). No placeholders are injected here.
    """
    resolved = coerce_hierarchy(dimension)
    if resolved is None:
        return UNSPECIFIED

    position = position_for(user, resolved)
    if not position.is_member:
        return NOT_REGISTERED
    if isinstance(position, ExpatriatePosition):
        names = _unit_names((position.expatriate_region,))
    else:
        names = _unit_names(position.units())
    return separator.join(names) or UNSPECIFIED


__all__ = [
    "hierarchy_path",
    "membership_path",
    "scope_description",
]
