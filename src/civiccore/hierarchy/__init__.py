"""Hierarchical access control for the civic-engagement client.

Defines:
- AdminLevel / ActiveHierarchy: levels and the three parallel dimensions
- User / ContentTargeting: read-only inputs from the profile and content services
- has_access(): cascading, most-specific-match content visibility
- hierarchy_path() / scope_description(): display strings
- can_switch() / build_switch_request(): hierarchy-switch gating
"""

from .access import (
    available_hierarchies,
    can_switch,
    filter_accessible,
    has_access,
    hierarchy_memberships,
)
from .constants import (
    ActiveHierarchy,
    AdminLevel,
    hierarchy_label,
    level_name,
)
from .models import (
    ContentTargeting,
    ExpatriatePosition,
    HierarchyMemberships,
    HierarchySwitchRequest,
    HierarchySwitchResponse,
    NamedUnit,
    OriginalPosition,
    SectorPosition,
    User,
    position_for,
)
from .paths import hierarchy_path, membership_path, scope_description
from .switching import apply_switch_response, build_switch_request

__all__ = [
    "ActiveHierarchy",
    "AdminLevel",
    "ContentTargeting",
    "ExpatriatePosition",
    "HierarchyMemberships",
    "HierarchySwitchRequest",
    "HierarchySwitchResponse",
    "NamedUnit",
    "OriginalPosition",
    "SectorPosition",
    "User",
    "apply_switch_response",
    "available_hierarchies",
    "build_switch_request",
    "can_switch",
    "filter_accessible",
    "has_access",
    "hierarchy_label",
    "hierarchy_memberships",
    "hierarchy_path",
    "level_name",
    "membership_path",
    "position_for",
    "scope_description",
]
