"""
Create the administrator account if it does not exist yet.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING, Any

from firebase_admin import firestore

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ecovolunteer import create_app  # noqa: E402
from ecovolunteer.core.constants import ROLE_ADMIN  # noqa: E402
from ecovolunteer.user.services import UserService  # noqa: E402

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client

ADMIN_NAME = "Admin"
DEFAULT_ADMIN_EMAIL = "admin@ecovolunteer.org"
DEFAULT_ADMIN_PASSWORD = "Admin@123"


def ensure_admin(
    db: Client, email: str, password: str
) -> tuple[dict[str, Any], bool]:
    """Return the admin account and whether it was created just now."""
    existing = UserService.get_user_by_email(db, email)
    if existing:
        return existing, False
    admin = UserService.create_user(
        db, name=ADMIN_NAME, email=email, password=password, role=ROLE_ADMIN
    )
    return admin, True


def seed_admin() -> int:
    """Create the admin user. Returns a process exit code."""
    email = os.environ.get("ADMIN_EMAIL") or DEFAULT_ADMIN_EMAIL
    password = os.environ.get("ADMIN_PASSWORD") or DEFAULT_ADMIN_PASSWORD

    app = create_app()
    with app.app_context():
        admin, created = ensure_admin(firestore.client(), email, password)

    if not created:
        print(f"Admin user already exists: {email}")
        return 0

    print(f"Admin user created ({admin['id']})")
    print(f"  Email: {email}")
    if password == DEFAULT_ADMIN_PASSWORD:
        print(f"  Password: {password}")
        print("Change this password after the first login.")
    return 0


if __name__ == "__main__":
    sys.exit(seed_admin())
