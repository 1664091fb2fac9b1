"""
Role based access to admin and staff routes.

Each role maps to a set of capabilities; routes declare the capability they
need with ``Depends(require_capability(...))`` instead of checking roles inline.
"""

import logging

from fastapi import Depends, HTTPException

from .auth import get_current_user
from .models import ROLE_ADMIN, ROLE_CUSTOMER, ROLE_STAFF, User

logger = logging.getLogger(__name__)

CAP_VIEW_SCHEDULE = "view_schedule"
CAP_MANAGE_BOOKINGS = "manage_bookings"
CAP_MANAGE_SETTINGS = "manage_settings"

ROLE_CAPABILITIES = {
    ROLE_ADMIN: frozenset({CAP_VIEW_SCHEDULE, CAP_MANAGE_BOOKINGS, CAP_MANAGE_SETTINGS}),
    ROLE_STAFF: frozenset({CAP_VIEW_SCHEDULE, CAP_MANAGE_BOOKINGS}),
    ROLE_CUSTOMER: frozenset(),
}


def capabilities_for(user: User) -> frozenset:
    return ROLE_CAPABILITIES.get(user.role, frozenset())


def has_capability(user: User, capability: str) -> bool:
    return capability in capabilities_for(user)


def require_capability(capability: str):
    """
    Create a dependency that returns the current user if they hold `capability`.

    Example usage:
        @router.get("/api/admin/settings")
        async def get_settings(user: User = Depends(require_capability(CAP_MANAGE_SETTINGS))):
            ...
    """

    async def checker(user: User = Depends(get_current_user)) -> User:
        if not has_capability(user, capability):
            logger.warning(f"User {user.id} ({user.role}) denied capability {capability}")
            raise HTTPException(status_code=403, detail="Not authorized")
        return user

    return checker
