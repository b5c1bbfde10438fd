"""
Role based access policy.

Maps each role to the actions it may perform per resource. Every booking,
assignment and service record route is gated through ``require_permission``.
"""

import logging

from fastapi import Depends

from .auth import get_current_user
from .models import User
from .shared.errors import Forbidden

logger = logging.getLogger(__name__)

CRUD = ["create", "read", "update", "delete"]

PERMISSIONS: dict[str, dict[str, list[str]]] = {
    "Admin": {
        "customers": CRUD,
        "airconUnits": CRUD,
        "serviceRecords": CRUD,
        "reminders": CRUD,
        "technicians": CRUD,
        "users": CRUD,
        "bookings": CRUD,
        "bookingAssignments": CRUD,
    },
    "Technician": {
        "customers": ["read"],
        "airconUnits": ["read", "update"],
        "serviceRecords": ["create", "read", "update"],
        "reminders": ["read", "update"],
        "technicians": ["read"],
        "users": [],
        "bookings": ["read", "update"],
        "bookingAssignments": ["read", "update"],
    },
    "Customer": {
        "customers": ["read", "update"],
        "airconUnits": ["read"],
        "serviceRecords": ["read"],
        "reminders": ["read"],
        "technicians": ["read"],
        "users": [],
        "bookings": ["create", "read", "update"],
        "bookingAssignments": ["read"],
    },
}


def get_permissions(role: str) -> dict[str, list[str]]:
    return PERMISSIONS.get(role, {})


def has_permission(role: str, resource: str, action: str) -> bool:
    return action in get_permissions(role).get(resource, [])


def require_permission(resource: str, action: str):
    """Dependency factory gating a route on (resource, action)"""

    async def dependency(current_user: User = Depends(get_current_user)) -> User:
        if not has_permission(current_user.role, resource, action):
            logger.warning(
                f"🚫 {current_user.username} ({current_user.role}) denied {action} on {resource}"
            )
            raise Forbidden(f"Access denied: You do not have {action} permission for this {resource}.")
        return current_user

    return dependency
