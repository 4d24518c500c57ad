"""Client side of the active-hierarchy switch.

The profile service performs the switch; this module validates the request
before it is sent and folds the reply back into a :class:`User`.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Union

from ..exceptions import HierarchySwitchError
from .access import can_switch
from .constants import ActiveHierarchy, coerce_hierarchy
from .models import HierarchySwitchRequest, HierarchySwitchResponse, User

logger = logging.getLogger(__name__)


def build_switch_request(user: User, dimension: ActiveHierarchy | str) -> HierarchySwitchRequest:
    """Validate and build a request to make ``dimension`` the user's active hierarchy.

    Raises:
        HierarchySwitchError: Unknown dimension, dimension already active,
            or user not registered in it.

    Example::

        request = build_switch_request(user, ActiveHierarchy.SECTOR)
        request.to_payload()  # {"activeHierarchy": "SECTOR"}
    """
    resolved = coerce_hierarchy(dimension)
    if resolved is None:
        raise HierarchySwitchError(f"Unknown hierarchy: {dimension!r}", requested=dimension)

    if resolved is user.effective_hierarchy:
        raise HierarchySwitchError(
            f"Hierarchy {resolved.value} is already active",
            user_id=user.id,
            requested=resolved.value,
        )

    if not can_switch(user, resolved):
        raise HierarchySwitchError(
            f"User is not registered in hierarchy {resolved.value}",
            user_id=user.id,
            requested=resolved.value,
        )

    logger.info(
        "Requesting hierarchy switch %s → %s for user %s",
        user.effective_hierarchy.value,
        resolved.value,
        user.id,
    )
    return HierarchySwitchRequest(active_hierarchy=resolved)


def apply_switch_response(
    user: User,
    request: HierarchySwitchRequest,
    response: Union[HierarchySwitchResponse, Mapping[str, Any]],
) -> User:
    """Return the user as it stands after a switch reply.

    Prefers the updated user sent back by the service. When the service
    confirms without a body, the current user is copied with the requested
    active hierarchy.

    Raises:
        HierarchySwitchError: The service reported failure.
        PayloadError: ``response`` is a mapping of the wrong shape.
    """
    if not isinstance(response, HierarchySwitchResponse):
        response = HierarchySwitchResponse.from_payload(response)

    if not response.success:
        raise HierarchySwitchError(
            response.message or "Hierarchy switch rejected by profile service",
            user_id=user.id,
            requested=request.active_hierarchy.value,
        )

    if response.user is not None:
        if response.user.effective_hierarchy is not request.active_hierarchy:
            logger.warning(
                "Profile service returned hierarchy %s, requested %s",
                response.user.effective_hierarchy.value,
                request.active_hierarchy.value,
            )
        return response.user

    return user.model_copy(update={"active_hierarchy": request.active_hierarchy})


__all__ = [
    "apply_switch_response",
    "build_switch_request",
]
