"""
Remove every event and every non-admin user, keeping admin accounts usable.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING, Any

from firebase_admin import firestore

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ecovolunteer import create_app  # noqa: E402
from ecovolunteer.core.constants import (  # noqa: E402
    EVENTS_COLLECTION,
    FIRESTORE_BATCH_LIMIT,
    ROLE_ADMIN,
    USERS_COLLECTION,
)
from ecovolunteer.utils import utcnow  # noqa: E402

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client


class BatchProcessor:
    """Groups writes into batches below the Firestore limit."""

    def __init__(self, db: Client):
        self.db = db
        self.batch = db.batch()
        self.count = 0
        self.total = 0

    def _added(self) -> None:
        self.count += 1
        self.total += 1
        if self.count >= FIRESTORE_BATCH_LIMIT:
            self.commit()

    def update(self, ref: Any, data: dict[str, Any]) -> None:
        """Adds an update operation to the batch."""
        self.batch.update(ref, data)
        self._added()

    def delete(self, ref: Any) -> None:
        """Adds a delete operation to the batch."""
        self.batch.delete(ref)
        self._added()

    def commit(self) -> None:
        """Commits the current batch."""
        if self.count > 0:
            self.batch.commit()
            self.batch = self.db.batch()
            self.count = 0


def clear_database(db: Client) -> tuple[int, int, int]:
    """Delete events and non-admin users, and reset the admins' event lists."""
    events = BatchProcessor(db)
    for doc in db.collection(EVENTS_COLLECTION).stream():
        events.delete(doc.reference)
    events.commit()

    users = BatchProcessor(db)
    admins = BatchProcessor(db)
    now = utcnow()
    for doc in db.collection(USERS_COLLECTION).stream():
        if (doc.to_dict() or {}).get("role") == ROLE_ADMIN:
            admins.update(
                doc.reference,
                {"joinedEvents": [], "createdEvents": [], "updatedAt": now},
            )
        else:
            users.delete(doc.reference)
    users.commit()
    admins.commit()

    return events.total, users.total, admins.total


def main() -> int:
    """Run the cleanup against the configured project."""
    app = create_app()
    with app.app_context():
        db = firestore.client()
        events, users, admins = clear_database(db)

    print(f"Deleted {events} events")
    print(f"Deleted {users} users")
    print(f"Reset event lists of {admins} admin(s)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
