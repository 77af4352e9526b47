"""Service layer for user accounts and profiles."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from firebase_admin import firestore
from flask import current_app
from werkzeug.security import check_password_hash, generate_password_hash

from ecovolunteer.core.constants import ROLE_USER, USERS_COLLECTION
from ecovolunteer.errors import DuplicateResourceError, NotFoundError
from ecovolunteer.utils import to_iso, utcnow

from .models import User

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client


def public_user(user: dict[str, Any], include_event_ids: bool = False) -> dict[str, Any]:
    """Shape a user document for the client. The password hash never leaves."""
    data = {
        "id": user.get("id") or user.get("uid"),
        "name": user.get("name", ""),
        "email": user.get("email", ""),
        "role": user.get("role") or ROLE_USER,
    }
    if include_event_ids:
        data["joinedEvents"] = list(user.get("joinedEvents") or [])
        data["createdEvents"] = list(user.get("createdEvents") or [])
    return data


class UserService:
    """Service class for user-related operations."""

    @staticmethod
    def get_user_by_id(db: Client, user_id: str) -> dict[str, Any] | None:
        """Fetch a user by their ID."""
        user_doc = cast(
            "DocumentSnapshot", db.collection(USERS_COLLECTION).document(user_id).get()
        )
        if not user_doc.exists:
            return None
        data = user_doc.to_dict()
        if data is None:
            return None
        data["id"] = user_id
        return data

    @staticmethod
    def get_user_by_email(db: Client, email: str) -> dict[str, Any] | None:
        """Fetch a user by email, ignoring case."""
        docs = list(
            db.collection(USERS_COLLECTION)
            .where(filter=firestore.FieldFilter("email", "==", email.strip().lower()))
            .limit(1)
            .stream()
        )
        if not docs:
            return None
        data = docs[0].to_dict() or {}
        data["id"] = docs[0].id
        return data

    @staticmethod
    def create_user(
        db: Client, name: str, email: str, password: str, role: str | None = None
    ) -> dict[str, Any]:
        """Create a user account with a hashed password."""
        if UserService.get_user_by_email(db, email):
            raise DuplicateResourceError("User already exists")

        now = utcnow()
        user_data: User = {
            "name": name.strip(),
            "email": email.strip().lower(),
            "password": generate_password_hash(password, method="pbkdf2:sha256"),
            "role": role or ROLE_USER,
            "joinedEvents": [],
            "createdEvents": [],
            "createdAt": now,
            "updatedAt": now,
        }
        user_ref = db.collection(USERS_COLLECTION).document()
        user_ref.set(user_data)
        current_app.logger.info(f"Created {user_data['role']} account {user_ref.id}")

        user_data["id"] = user_ref.id
        return user_data

    @staticmethod
    def authenticate(db: Client, email: str, password: str) -> dict[str, Any] | None:
        """Return the user if the email and password match, else None."""
        user = UserService.get_user_by_email(db, email)
        if user and user.get("password") and check_password_hash(
            user["password"], password
        ):
            return user
        return None

    @staticmethod
    def get_profile(db: Client, user_id: str) -> dict[str, Any]:
        """Build a public profile with the user's joined and created events."""
        from ecovolunteer.events.services import EventService  # noqa: PLC0415

        user = UserService.get_user_by_id(db, user_id)
        if user is None:
            raise NotFoundError("User not found")

        profile = public_user(user)
        profile["createdAt"] = to_iso(user.get("createdAt"))
        profile["joinedEvents"] = EventService.get_events_by_ids(
            db, list(reversed(user.get("joinedEvents") or []))
        )
        profile["createdEvents"] = EventService.get_events_by_ids(
            db, list(user.get("createdEvents") or [])
        )
        return profile
