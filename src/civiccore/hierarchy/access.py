"""Content visibility and hierarchy-switch eligibility.

Provides runtime checks used by content lists (bulletins, surveys, voting,
archive, reports) before rendering, and by the hierarchy selector before
asking the profile service to switch dimensions.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional, TypeVar

from .constants import ActiveHierarchy, coerce_hierarchy, is_superuser_level
from .models import ContentTargeting, HierarchyMemberships, User, position_for

logger = logging.getLogger(__name__)

T = TypeVar("T")

# (user field, target field), most specific first.
ORIGINAL_MATCH_CHAIN: tuple[tuple[str, str], ...] = (
    ("district_id", "target_district_id"),
    ("admin_unit_id", "target_admin_unit_id"),
    ("locality_id", "target_locality_id"),
    ("region_id", "target_region_id"),
    ("national_level_id", "target_national_level_id"),
)

SECTOR_MATCH_CHAIN: tuple[tuple[str, str], ...] = (
    ("sector_district_id", "target_sector_district_id"),
    ("sector_admin_unit_id", "target_sector_admin_unit_id"),
    ("sector_locality_id", "target_sector_locality_id"),
    ("sector_region_id", "target_sector_region_id"),
    ("sector_national_level_id", "target_sector_national_level_id"),
)


def _most_specific_match(
    user: User,
    targeting: ContentTargeting,
    chain: tuple[tuple[str, str], ...],
) -> bool:
    for user_field, target_field in chain:
        target_id = getattr(targeting, target_field)
        if target_id is None:
            continue
        user_id = getattr(user, user_field)
        allowed = user_id is not None and user_id == target_id
        logger.debug(
            "Deciding level %s for user %s: %s",
            target_field,
            user.id,
            "match" if allowed else "no match",
        )
        return allowed
    return False


def has_access(user: User, targeting: ContentTargeting) -> bool:
    """Check if a user may see content with the given targeting.

    Checks in order:
    1. Superuser (``GENERAL_SECRETARIAT`` / ``ADMIN``) → always allowed
    2. Global content (no identifier in any dimension) → allowed
    3. Active dimension (``ORIGINAL`` when unset):
       - ``EXPATRIATE``: target expatriate region must equal the user's
       - ``SECTOR`` / ``ORIGINAL``: most-specific-match over the chain

    Most-specific-match walks district → national level. The first level
    the content targets decides, by exact equality with the user's
    identifier at that level. Looser levels are not consulted and ancestors
    need not match. No target in the dimension → denied.

    Never raises; absent identifiers never match.

    Example::

        user = User(region_id="R1", locality_id="L1")
        has_access(user, ContentTargeting(target_region_id="R1"))  # True
        has_access(user, ContentTargeting(
            target_region_id="R1", target_locality_id="L2",
        ))  # False, locality decides
    """
    if is_superuser_level(user.admin_level):
        return True

    if targeting.is_global:
        return True

    dimension = user.effective_hierarchy

    if dimension is ActiveHierarchy.EXPATRIATE:
        target_id = targeting.target_expatriate_region_id
        return target_id is not None and user.expatriate_region_id == target_id

    if dimension is ActiveHierarchy.SECTOR:
        return _most_specific_match(user, targeting, SECTOR_MATCH_CHAIN)

    return _most_specific_match(user, targeting, ORIGINAL_MATCH_CHAIN)


def filter_accessible(
    user: User,
    items: Iterable[T],
    targeting: Optional[Callable[[T], ContentTargeting]] = None,
) -> list[T]:
    """Keep only the items the user may see, preserving order.

    Args:
        user: Viewer.
        items: Content items. Without ``targeting`` they must themselves be
               :class:`ContentTargeting` instances.
        targeting: Extracts the targeting descriptor from an item.

    Example::

        bulletins = [{"id": "b1", "targetRegionId": "R1"}, {"id": "b2"}]
        filter_accessible(user, bulletins, ContentTargeting.from_payload)
    """
    extract = targeting or (lambda item: item)
    items = list(items)
    visible = [item for item in items if has_access(user, extract(item))]
    if len(visible) != len(items):
        logger.debug("Hid %d of %d items for user %s", len(items) - len(visible), len(items), user.id)
    return visible


def can_switch(user: User, dimension: ActiveHierarchy | str) -> bool:
    """Check if the user holds any membership in ``dimension``.

    Any identifier counts for ``ORIGINAL`` and ``SECTOR``; ``EXPATRIATE``
    needs the expatriate region. Unknown dimensions are never eligible.
    Performing the switch is the profile service's job.
    """
    resolved = coerce_hierarchy(dimension)
    if resolved is None:
        return False
    return position_for(user, resolved).is_member


def hierarchy_memberships(user: User) -> HierarchyMemberships:
    """Summarise which dimensions the user is registered in."""
    return HierarchyMemberships(
        has_original=can_switch(user, ActiveHierarchy.ORIGINAL),
        has_expatriate=can_switch(user, ActiveHierarchy.EXPATRIATE),
        has_sector=can_switch(user, ActiveHierarchy.SECTOR),
    )


def available_hierarchies(user: User) -> tuple[ActiveHierarchy, ...]:
    """Dimensions the user may switch to, in ORIGINAL, EXPATRIATE, SECTOR order."""
    return tuple(dimension for dimension in ActiveHierarchy if can_switch(user, dimension))


__all__ = [
    "ORIGINAL_MATCH_CHAIN",
    "SECTOR_MATCH_CHAIN",
    "available_hierarchies",
    "can_switch",
    "filter_accessible",
    "has_access",
    "hierarchy_memberships",
]
