"""Ownership and role checks for events."""

from __future__ import annotations

from typing import Any, Mapping

from ecovolunteer.core.constants import ROLE_ADMIN
from ecovolunteer.errors import AuthorizationDenied


def _user_id(user: Mapping[str, Any]) -> str | None:
    return user.get("id") or user.get("uid")


def is_admin(user: Mapping[str, Any] | None) -> bool:
    """Return True if the user has the admin role."""
    return bool(user) and user.get("role") == ROLE_ADMIN


def is_organizer_or_admin(
    event: Mapping[str, Any], user: Mapping[str, Any] | None
) -> bool:
    """Return True if the user organizes the event or is an admin."""
    if not user:
        return False
    if is_admin(user):
        return True
    user_id = _user_id(user)
    return user_id is not None and event.get("organizer") == user_id


def require_organizer_or_admin(
    event: Mapping[str, Any], user: Mapping[str, Any] | None, action: str = "manage"
) -> None:
    """Raise AuthorizationDenied unless the user may manage the event."""
    if not is_organizer_or_admin(event, user):
        raise AuthorizationDenied(f"Not authorized to {action} this event")
