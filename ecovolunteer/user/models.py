"""Data models for the user blueprint."""

from __future__ import annotations

from collections import UserDict

from flask_login import UserMixin

from ecovolunteer.core.constants import ROLE_ADMIN, ROLE_USER
from ecovolunteer.core.types import FirestoreDocument


class User(FirestoreDocument, total=False):
    """A user document in Firestore."""

    name: str
    email: str
    password: str
    role: str
    joinedEvents: list[str]
    createdEvents: list[str]


class UserSession(UserDict, UserMixin):
    """A wrapper class for user data that provides properties for Flask-Login."""

    def get_id(self) -> str:
        """Return the user ID."""
        return str(self.get("uid", ""))

    @property
    def role(self) -> str:
        """Return the user's role, defaulting to a plain user."""
        return str(self.get("role") or ROLE_USER)

    @property
    def is_admin(self) -> bool:
        """Return True if the user is an administrator."""
        return self.role == ROLE_ADMIN
