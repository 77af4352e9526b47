"""Shared fixtures for tests backed by a mocked Firestore."""

from __future__ import annotations

import datetime
import unittest
from typing import Any

from werkzeug.security import generate_password_hash

from ecovolunteer import create_app
from tests.mock_utils import EnhancedMockFirestore, patch_firestore, patch_mockfirestore

TEST_PASSWORD = "Password123!"  # nosec
BASE_DATE = datetime.datetime(2030, 6, 1, 9, 0, tzinfo=datetime.timezone.utc)

patch_mockfirestore()


class BaseTestCase(unittest.TestCase):
    """Runs each test against a fresh in-memory Firestore and app."""

    def setUp(self) -> None:
        self.db = EnhancedMockFirestore()
        self.mock_firestore = patch_firestore(self, self.db)

        self.app = create_app({"TESTING": True, "WTF_CSRF_ENABLED": False})
        self.client = self.app.test_client()
        self.app_context = self.app.app_context()
        self.app_context.push()
        self.addCleanup(self.app_context.pop)

    def create_user(
        self,
        user_id: str,
        name: str = "Test User",
        email: str | None = None,
        role: str = "user",
        password: str = TEST_PASSWORD,
    ) -> dict[str, Any]:
        """Store a user document and return it with its id."""
        data = {
            "name": name,
            "email": email or f"{user_id}@example.com",
            "password": generate_password_hash(password, method="pbkdf2:sha256"),
            "role": role,
            "joinedEvents": [],
            "createdEvents": [],
            "createdAt": BASE_DATE,
            "updatedAt": BASE_DATE,
        }
        self.db.collection("users").document(user_id).set(data)
        return {"id": user_id, **data}

    def create_event(
        self, event_id: str, organizer: str, **overrides: Any
    ) -> dict[str, Any]:
        """Store an event document and link it to its organizer."""
        data = {
            "title": f"Event {event_id}",
            "description": "Pick up litter along the river bank.",
            "date": BASE_DATE,
            "type": "in-person",
            "location": "Riverside Park",
            "tags": ["cleanup"],
            "imageUrl": "",
            "whatToBring": "Gloves",
            "maxVolunteers": 0,
            "organizer": organizer,
            "attendees": [],
            "status": "approved",
            "adminReason": "",
            "adminActionDate": None,
            "createdAt": BASE_DATE,
            "updatedAt": BASE_DATE,
        }
        data.update(overrides)
        self.db.collection("events").document(event_id).set(data)

        organizer_ref = self.db.collection("users").document(organizer)
        organizer_doc = organizer_ref.get()
        if organizer_doc.exists:
            created = organizer_doc.to_dict().get("createdEvents", [])
            organizer_ref.update({"createdEvents": created + [event_id]})
        for user_id in data["attendees"]:
            user_ref = self.db.collection("users").document(user_id)
            user_doc = user_ref.get()
            if user_doc.exists:
                joined = user_doc.to_dict().get("joinedEvents", [])
                user_ref.update({"joinedEvents": joined + [event_id]})
        return {"id": event_id, **data}

    def get_doc(self, collection: str, doc_id: str) -> dict[str, Any]:
        """Read a document straight from the mock store."""
        return self.db.collection(collection).document(doc_id).get().to_dict()

    def login(self, user_id: str, is_admin: bool = False) -> None:
        """Put a user in the test client's session."""
        with self.client.session_transaction() as sess:
            sess["user_id"] = user_id
            sess["is_admin"] = is_admin
