"""Pydantic models for users, content targeting and hierarchy positions.

The profile and content services deliver users and targeting descriptors as
flat camelCase payloads (``regionId``, ``sectorRegionId``, ``targetRegionId``
...). These models accept that shape as-is and also snake_case names.

Internally a user's membership in one dimension is read through a tagged
position (:class:`OriginalPosition`, :class:`ExpatriatePosition`,
:class:`SectorPosition`) built by :func:`position_for`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from ..exceptions import PayloadError
from .constants import ActiveHierarchy, AdminLevel, coerce_admin_level, coerce_hierarchy

logger = logging.getLogger(__name__)

# Shallow → deep. Shared by the ORIGINAL and SECTOR trees.
TREE_LEVELS: tuple[str, ...] = ("national_level", "region", "locality", "admin_unit", "district")

ORIGINAL_ID_FIELDS: tuple[str, ...] = tuple(f"{level}_id" for level in TREE_LEVELS)
SECTOR_ID_FIELDS: tuple[str, ...] = tuple(f"sector_{level}_id" for level in TREE_LEVELS)
EXPATRIATE_ID_FIELDS: tuple[str, ...] = ("expatriate_region_id",)

TARGET_ID_FIELDS: tuple[str, ...] = (
    *(f"target_{field}" for field in ORIGINAL_ID_FIELDS),
    "target_expatriate_region_id",
    *(f"target_{field}" for field in SECTOR_ID_FIELDS),
)

_WIRE_CONFIG = {
    "alias_generator": to_camel,
    "populate_by_name": True,
    "frozen": True,
    "extra": "ignore",
}


def _normalize_identifier(value: Any) -> Any:
    """Blank identifiers are absent; numeric identifiers are compared as strings."""
    if value is None:
        return None
    if isinstance(value, str):
        return value or None
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


def _validate_payload(model: type[BaseModel], payload: Any, kind: str) -> Any:
    if not isinstance(payload, Mapping):
        raise PayloadError(
            f"{kind} payload must be a mapping, got {type(payload).__name__}",
            kind=kind,
        )
    try:
        return model.model_validate(dict(payload))
    except ValidationError as e:
        raise PayloadError(f"Invalid {kind} payload", kind=kind, errors=e.errors()) from e


class NamedUnit(BaseModel):
    """Resolved organisational node (region, locality, sector district...)."""

    model_config = _WIRE_CONFIG

    id: Optional[str] = None
    name: Optional[str] = None
    code: Optional[str] = None

    @field_validator("id", "code", mode="before")
    @classmethod
    def normalize_identifiers(cls, v: Any) -> Any:
        return _normalize_identifier(v)


class User(BaseModel):
    """User record as delivered by the profile service.

    Holds membership in all three dimensions at once; ``active_hierarchy``
    selects which one governs visibility and display.

    Example::

        user = User.from_payload({
            "id": "u1",
            "adminLevel": "LOCALITY",
            "regionId": "R1",
            "localityId": "L1",
            "region": {"id": "R1", "name": "الخرطوم"},
        })
        user.effective_hierarchy  # ActiveHierarchy.ORIGINAL
    """

    model_config = _WIRE_CONFIG

    id: Optional[str] = None
    admin_level: Optional[AdminLevel] = None
    active_hierarchy: Optional[ActiveHierarchy] = None

    # Original (geographic) hierarchy
    national_level_id: Optional[str] = None
    region_id: Optional[str] = None
    locality_id: Optional[str] = None
    admin_unit_id: Optional[str] = None
    district_id: Optional[str] = None
    national_level: Optional[NamedUnit] = None
    region: Optional[NamedUnit] = None
    locality: Optional[NamedUnit] = None
    admin_unit: Optional[NamedUnit] = None
    district: Optional[NamedUnit] = None

    # Expatriate hierarchy
    expatriate_region_id: Optional[str] = None
    expatriate_region: Optional[NamedUnit] = None

    # Sector hierarchy
    sector_national_level_id: Optional[str] = None
    sector_region_id: Optional[str] = None
    sector_locality_id: Optional[str] = None
    sector_admin_unit_id: Optional[str] = None
    sector_district_id: Optional[str] = None
    sector_national_level: Optional[NamedUnit] = None
    sector_region: Optional[NamedUnit] = None
    sector_locality: Optional[NamedUnit] = None
    sector_admin_unit: Optional[NamedUnit] = None
    sector_district: Optional[NamedUnit] = None

    @field_validator("id", *ORIGINAL_ID_FIELDS, *EXPATRIATE_ID_FIELDS, *SECTOR_ID_FIELDS, mode="before")
    @classmethod
    def normalize_identifiers(cls, v: Any) -> Any:
        return _normalize_identifier(v)

    @field_validator("admin_level", mode="before")
    @classmethod
    def fold_admin_level(cls, v: Any) -> AdminLevel | None:
        if v is None or v == "":
            return None
        level = coerce_admin_level(v)
        if level is None:
            logger.warning("Unknown admin level %r treated as unspecified", v)
        return level

    @field_validator("active_hierarchy", mode="before")
    @classmethod
    def fold_active_hierarchy(cls, v: Any) -> ActiveHierarchy | None:
        if v is None or v == "":
            return None
        dimension = coerce_hierarchy(v)
        if dimension is None:
            logger.warning("Unknown active hierarchy %r treated as ORIGINAL", v)
        return dimension

    @property
    def effective_hierarchy(self) -> ActiveHierarchy:
        """Active dimension, ``ORIGINAL`` when unset."""
        return self.active_hierarchy or ActiveHierarchy.ORIGINAL

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> User:
        """Parse a profile-service payload, raising :class:`PayloadError` on bad shape."""
        return _validate_payload(cls, payload, "user")

    def to_payload(self) -> dict[str, Any]:
        """Serialize back to the camelCase wire shape, omitting absent fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ContentTargeting(BaseModel):
    """Where a piece of content (bulletin, survey, vote, report...) applies.

    Within ORIGINAL and SECTOR only the deepest set identifier is consulted.
    With every identifier absent the content is global.
    """

    model_config = _WIRE_CONFIG

    target_national_level_id: Optional[str] = None
    target_region_id: Optional[str] = None
    target_locality_id: Optional[str] = None
    target_admin_unit_id: Optional[str] = None
    target_district_id: Optional[str] = None
    target_expatriate_region_id: Optional[str] = None
    target_sector_national_level_id: Optional[str] = None
    target_sector_region_id: Optional[str] = None
    target_sector_locality_id: Optional[str] = None
    target_sector_admin_unit_id: Optional[str] = None
    target_sector_district_id: Optional[str] = None

    @field_validator(*TARGET_ID_FIELDS, mode="before")
    @classmethod
    def normalize_identifiers(cls, v: Any) -> Any:
        return _normalize_identifier(v)

    @property
    def is_global(self) -> bool:
        """True when no target identifier is set in any dimension."""
        return all(getattr(self, field) is None for field in TARGET_ID_FIELDS)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> ContentTargeting:
        """Read the targeting fields of a content payload; other keys are ignored."""
        return _validate_payload(cls, payload, "targeting")


# ── Tagged positions ────────────────────────────────────


class _TreePosition(BaseModel):
    model_config = {"frozen": True}

    national_level_id: Optional[str] = None
    region_id: Optional[str] = None
    locality_id: Optional[str] = None
    admin_unit_id: Optional[str] = None
    district_id: Optional[str] = None
    national_level: Optional[NamedUnit] = None
    region: Optional[NamedUnit] = None
    locality: Optional[NamedUnit] = None
    admin_unit: Optional[NamedUnit] = None
    district: Optional[NamedUnit] = None

    def identifiers(self) -> tuple[Optional[str], ...]:
        """Identifiers ordered national level → district."""
        return tuple(getattr(self, f"{level}_id") for level in TREE_LEVELS)

    def units(self) -> tuple[Optional[NamedUnit], ...]:
        """Resolved name objects ordered national level → district."""
        return tuple(getattr(self, level) for level in TREE_LEVELS)

    @property
    def is_member(self) -> bool:
        return any(self.identifiers())


class OriginalPosition(_TreePosition):
    """Position in the geographic tree; keeps the user's own level for placeholders."""

    dimension: Literal[ActiveHierarchy.ORIGINAL] = ActiveHierarchy.ORIGINAL
    admin_level: Optional[AdminLevel] = None


class SectorPosition(_TreePosition):
    """Position in the sector tree."""

    dimension: Literal[ActiveHierarchy.SECTOR] = ActiveHierarchy.SECTOR


class ExpatriatePosition(BaseModel):
    """Position in the flat expatriate hierarchy."""

    model_config = {"frozen": True}

    dimension: Literal[ActiveHierarchy.EXPATRIATE] = ActiveHierarchy.EXPATRIATE
    expatriate_region_id: Optional[str] = None
    expatriate_region: Optional[NamedUnit] = None

    @property
    def is_member(self) -> bool:
        return bool(self.expatriate_region_id)


HierarchyPosition = Annotated[
    Union[OriginalPosition, ExpatriatePosition, SectorPosition],
    Field(discriminator="dimension"),
]


def position_for(user: User, dimension: ActiveHierarchy | str | None = None) -> HierarchyPosition:
    """Convert the flat user record into its tagged position in ``dimension``.

    ``dimension`` may be an :class:`ActiveHierarchy` or its string value.
    Defaults to the user's effective (active) hierarchy, which is also used
    when the value is unknown.
    """
    resolved = coerce_hierarchy(dimension) if dimension is not None else None
    if dimension is not None and resolved is None:
        logger.warning("Unknown hierarchy %r, using active hierarchy", dimension)
    dimension = resolved or user.effective_hierarchy

    if dimension is ActiveHierarchy.EXPATRIATE:
        return ExpatriatePosition(
            expatriate_region_id=user.expatriate_region_id,
            expatriate_region=user.expatriate_region,
        )

    if dimension is ActiveHierarchy.SECTOR:
        fields = {}
        for level in TREE_LEVELS:
            fields[f"{level}_id"] = getattr(user, f"sector_{level}_id")
            fields[level] = getattr(user, f"sector_{level}")
        return SectorPosition(**fields)

    fields = {}
    for level in TREE_LEVELS:
        fields[f"{level}_id"] = getattr(user, f"{level}_id")
        fields[level] = getattr(user, level)
    return OriginalPosition(admin_level=user.admin_level, **fields)


# ── Membership & switch protocol ────────────────────────


class HierarchyMemberships(BaseModel):
    """Which dimensions a user is registered in."""

    model_config = _WIRE_CONFIG

    has_original: bool = False
    has_expatriate: bool = False
    has_sector: bool = False


class HierarchySwitchRequest(BaseModel):
    """Body of the profile service's active-hierarchy update."""

    model_config = _WIRE_CONFIG

    active_hierarchy: ActiveHierarchy

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class HierarchySwitchResponse(BaseModel):
    """Profile service reply to a switch request."""

    model_config = _WIRE_CONFIG

    success: bool = True
    user: Optional[User] = None
    message: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> HierarchySwitchResponse:
        return _validate_payload(cls, payload, "switch response")


__all__ = [
    "EXPATRIATE_ID_FIELDS",
    "ORIGINAL_ID_FIELDS",
    "SECTOR_ID_FIELDS",
    "TARGET_ID_FIELDS",
    "TREE_LEVELS",
    "ContentTargeting",
    "ExpatriatePosition",
    "HierarchyMemberships",
    "HierarchyPosition",
    "HierarchySwitchRequest",
    "HierarchySwitchResponse",
    "NamedUnit",
    "OriginalPosition",
    "SectorPosition",
    "User",
    "position_for",
]
