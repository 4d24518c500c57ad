"""Tests for the hierarchy switch request/response handling."""

from __future__ import annotations

import pytest

from civiccore import (
    ActiveHierarchy,
    AdminLevel,
    HierarchySwitchError,
    HierarchySwitchRequest,
    HierarchySwitchResponse,
    PayloadError,
    User,
    apply_switch_response,
    build_switch_request,
)


def dual_member() -> User:
    return User(
        id="u1",
        admin_level=AdminLevel.USER,
        region_id="R1",
        sector_region_id="SR1",
    )


class TestBuildSwitchRequest:
    """Tests for build_switch_request."""

    def test_eligible(self) -> None:
        """Eligible switch yields the wire body."""
        request = build_switch_request(dual_member(), ActiveHierarchy.SECTOR)
        assert request.active_hierarchy is ActiveHierarchy.SECTOR
        assert request.to_payload() == {"activeHierarchy": "SECTOR"}

    def test_string_dimension(self) -> None:
        """Dimension names are accepted as strings."""
        assert build_switch_request(dual_member(), "SECTOR").active_hierarchy is ActiveHierarchy.SECTOR

    def test_not_registered(self) -> None:
        """No membership in the dimension → error."""
        with pytest.raises(HierarchySwitchError, match="not registered") as exc_info:
            build_switch_request(dual_member(), ActiveHierarchy.EXPATRIATE)
        assert exc_info.value.code == "HIERARCHY_SWITCH_ERROR"
        assert exc_info.value.details["requested"] == "EXPATRIATE"

    def test_already_active(self) -> None:
        """Switching to the implicit ORIGINAL default is rejected."""
        with pytest.raises(HierarchySwitchError, match="already active"):
            build_switch_request(dual_member(), ActiveHierarchy.ORIGINAL)

    def test_unknown_dimension(self) -> None:
        """Unknown dimension names are rejected."""
        with pytest.raises(HierarchySwitchError, match="Unknown hierarchy"):
            build_switch_request(dual_member(), "DIASPORA")


class TestApplySwitchResponse:
    """Tests for apply_switch_response."""

    def test_uses_returned_user(self) -> None:
        """The service's user replaces the local one."""
        user = dual_member()
        request = HierarchySwitchRequest(active_hierarchy=ActiveHierarchy.SECTOR)
        updated = User(id="u1", active_hierarchy=ActiveHierarchy.SECTOR, sector_region_id="SR1")
        result = apply_switch_response(user, request, HierarchySwitchResponse(user=updated))
        assert result is updated

    def test_without_user_copies_local(self) -> None:
        """Confirmation without a body updates only the active hierarchy."""
        user = dual_member()
        request = build_switch_request(user, ActiveHierarchy.SECTOR)
        result = apply_switch_response(user, request, HierarchySwitchResponse())
        assert result.active_hierarchy is ActiveHierarchy.SECTOR
        assert result.region_id == "R1"
        assert user.active_hierarchy is None

    def test_mapping_response(self) -> None:
        """Raw camelCase replies are parsed."""
        user = dual_member()
        request = build_switch_request(user, "SECTOR")
        result = apply_switch_response(
            user,
            request,
            {"success": True, "user": {"id": "u1", "activeHierarchy": "SECTOR", "sectorRegionId": "SR1"}},
        )
        assert result.effective_hierarchy is ActiveHierarchy.SECTOR
        assert result.sector_region_id == "SR1"

    def test_failure(self) -> None:
        """A failed reply raises with the service message."""
        user = dual_member()
        request = build_switch_request(user, ActiveHierarchy.SECTOR)
        response = HierarchySwitchResponse(success=False, message="غير مسموح")
        with pytest.raises(HierarchySwitchError, match="غير مسموح"):
            apply_switch_response(user, request, response)

    def test_malformed_mapping(self) -> None:
        """Malformed replies raise PayloadError."""
        user = dual_member()
        request = build_switch_request(user, ActiveHierarchy.SECTOR)
        with pytest.raises(PayloadError):
            apply_switch_response(user, request, {"success": "maybe"})
