from .exceptions import (
    CivicCoreError,
    ConfigurationError,
    HierarchySwitchError,
    PayloadError,
)
from .config import CivicConfig, LogLevel, load_config_from_env
from .hierarchy import (
    ActiveHierarchy,
    AdminLevel,
    ContentTargeting,
    ExpatriatePosition,
    HierarchyMemberships,
    HierarchySwitchRequest,
    HierarchySwitchResponse,
    NamedUnit,
    OriginalPosition,
    SectorPosition,
    User,
    apply_switch_response,
    available_hierarchies,
    build_switch_request,
    can_switch,
    filter_accessible,
    has_access,
    hierarchy_label,
    hierarchy_memberships,
    hierarchy_path,
    level_name,
    membership_path,
    position_for,
    scope_description,
)
from .logging import (
    CivicFormatter,
    CivicLoggerAdapter,
    get_civic_logger,
    redact_secrets,
    safe_log_value,
    safe_preview,
    setup_logging,
)

__all__ = [
    # Errors
    "CivicCoreError",
    "ConfigurationError",
    "HierarchySwitchError",
    "PayloadError",
    # Config
    "CivicConfig",
    "LogLevel",
    "load_config_from_env",
    # Hierarchy
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
    # Logging
    "CivicFormatter",
    "CivicLoggerAdapter",
    "get_civic_logger",
    "redact_secrets",
    "safe_log_value",
    "safe_preview",
    "setup_logging",
]
