"""Tests for the events blueprint."""

from __future__ import annotations

import unittest

from tests.helpers import BASE_DATE, BaseTestCase

NEW_EVENT = {
    "title": "Tree Planting",
    "description": "Plant native saplings in the park.",
    "date": "2030-07-01T10:00:00Z",
    "type": "in-person",
    "location": "Central Park",
    "tags": ["trees", " planting "],
    "maxVolunteers": 2,
    "whatToBring": "Gloves",
}


class EventsRoutesTestCase(BaseTestCase):
    """Test case for the events endpoints."""

    def setUp(self) -> None:
        super().setUp()
        self.create_user("org", name="Olive Organizer")
        self.create_user("admin", name="Ada Admin", role="admin")
        self.create_user("alice", name="Alice")
        self.create_user("bob", name="Bob")

    def test_list_events_is_public_and_uncached(self) -> None:
        self.create_event("e1", "org")
        self.create_event("p1", "org", status="pending")

        response = self.client.get("/events")

        self.assertEqual(response.status_code, 200)
        self.assertEqual([e["id"] for e in response.json], ["e1"])
        self.assertEqual(
            response.headers["Cache-Control"], "no-cache, no-store, must-revalidate"
        )

    def test_collection_routes_accept_trailing_slash(self) -> None:
        self.create_event("e1", "org")

        response = self.client.get("/events/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual([e["id"] for e in response.json], ["e1"])

        self.login("org")
        response = self.client.post("/events/", json=NEW_EVENT)
        self.assertEqual(response.status_code, 201)

    def test_create_requires_login(self) -> None:
        response = self.client.post("/events", json=NEW_EVENT)

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json["message"], "Not authorized, please login")

    def test_create_event(self) -> None:
        self.login("org")

        response = self.client.post("/events", json=NEW_EVENT)

        self.assertEqual(response.status_code, 201)
        event = response.json
        self.assertEqual(event["status"], "pending")
        self.assertEqual(event["organizer"], "org")
        self.assertEqual(event["tags"], ["trees", "planting"])
        self.assertEqual(event["date"], "2030-07-01T10:00:00+00:00")
        self.assertEqual(event["maxVolunteers"], 2)
        self.assertIn(event["id"], self.get_doc("users", "org")["createdEvents"])

    def test_create_event_with_comma_separated_tags(self) -> None:
        self.login("org")
        payload = dict(NEW_EVENT, tags="river, cleanup")

        response = self.client.post("/events", json=payload)

        self.assertEqual(response.json["tags"], ["river", "cleanup"])

    def test_create_in_person_event_needs_location(self) -> None:
        self.login("org")
        payload = dict(NEW_EVENT, location="")

        response = self.client.post("/events", json=payload)

        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json["message"], "Location is required for in-person events"
        )
        self.assertEqual(response.json["errors"][0]["field"], "location")

    def test_create_virtual_event_without_location(self) -> None:
        self.login("org")
        payload = dict(NEW_EVENT, type="virtual", location=None)

        response = self.client.post("/events", json=payload)

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json["location"], "")

    def test_create_event_validation(self) -> None:
        self.login("org")
        cases = [
            ({"title": ""}, "title"),
            ({"date": "next tuesday"}, "date"),
            ({"type": "hybrid"}, "type"),
            ({"maxVolunteers": -1}, "maxVolunteers"),
        ]
        for override, field in cases:
            with self.subTest(field=field):
                response = self.client.post("/events", json=dict(NEW_EVENT, **override))
                self.assertEqual(response.status_code, 400)
                fields = [e["field"] for e in response.json["errors"]]
                self.assertIn(field, fields)

    def test_view_event(self) -> None:
        self.create_event("e1", "org")

        response = self.client.get("/events/e1")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json["organizerName"], "Olive Organizer")

    def test_view_unknown_event(self) -> None:
        response = self.client.get("/events/missing")

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json["message"], "Event not found")

    def test_pending_requires_admin(self) -> None:
        self.login("alice")

        response = self.client.get("/events/pending")

        self.assertEqual(response.status_code, 403)

    def test_admin_review_flow(self) -> None:
        self.create_event("p1", "org", status="pending")
        self.login("admin", is_admin=True)

        pending = self.client.get("/events/pending")
        self.assertEqual([e["id"] for e in pending.json], ["p1"])

        response = self.client.put("/events/p1/approve")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json,
            {
                "id": "p1",
                "title": "Event p1",
                "status": "approved",
                "organizerName": "Olive Organizer",
            },
        )
        self.assertEqual([e["id"] for e in self.client.get("/events").json], ["p1"])

        response = self.client.put("/events/p1/reject")
        self.assertEqual(response.json["status"], "rejected")
        self.assertEqual(self.client.get("/events").json, [])

    def test_restrict_and_unrestrict(self) -> None:
        self.create_event("e1", "org")
        self.login("admin", is_admin=True)

        response = self.client.put(
            "/events/e1/restrict", json={"isRestricted": True, "reason": "Flooding"}
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json["status"], "restricted")
        self.assertEqual(response.json["adminReason"], "Flooding")
        self.assertEqual(response.json["message"], "Event restricted successfully")
        self.assertEqual(
            [e["id"] for e in self.client.get("/events/restricted").json], ["e1"]
        )

        response = self.client.put("/events/e1/restrict", json={"isRestricted": False})
        self.assertEqual(response.json["status"], "approved")
        self.assertEqual(response.json["adminReason"], "")
        self.assertEqual(response.json["message"], "Event unrestricted successfully")

    def test_restrict_requires_admin(self) -> None:
        self.create_event("e1", "org")
        self.login("org")

        response = self.client.put("/events/e1/restrict", json={"isRestricted": True})

        self.assertEqual(response.status_code, 403)
        self.assertEqual(self.get_doc("events", "e1")["status"], "approved")

    def test_join_and_leave(self) -> None:
        self.create_event("e1", "org", maxVolunteers=1)
        self.login("alice")

        response = self.client.post("/events/e1/join")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json["message"], "Successfully joined event")
        self.assertEqual(self.get_doc("events", "e1")["attendees"], ["alice"])
        self.assertEqual(self.get_doc("users", "alice")["joinedEvents"], ["e1"])

        response = self.client.post("/events/e1/join")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json["message"], "Already joined this event")

        response = self.client.delete("/events/e1/leave")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json["message"], "Successfully left event")
        self.assertEqual(self.get_doc("events", "e1")["attendees"], [])
        self.assertEqual(self.get_doc("users", "alice")["joinedEvents"], [])

    def test_join_full_event(self) -> None:
        self.create_event("e1", "org", maxVolunteers=1, attendees=["bob"])
        self.login("alice")

        response = self.client.post("/events/e1/join")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json["message"], "Event is at full capacity")
        self.assertEqual(self.get_doc("events", "e1")["attendees"], ["bob"])

    def test_delete_event(self) -> None:
        self.create_event("e1", "org", attendees=["alice"])

        self.login("bob")
        response = self.client.delete("/events/e1")
        self.assertEqual(response.status_code, 403)

        self.login("org")
        response = self.client.delete("/events/e1")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.client.get("/events/e1").status_code, 404)
        self.assertEqual(self.get_doc("users", "alice")["joinedEvents"], [])

    def test_volunteers(self) -> None:
        self.create_event("e1", "org", attendees=["alice", "bob"])

        self.login("alice")
        self.assertEqual(self.client.get("/events/e1/volunteers").status_code, 403)

        self.login("org")
        response = self.client.get("/events/e1/volunteers")
        self.assertEqual(response.status_code, 200)
        self.assertEqual([v["name"] for v in response.json], ["Alice", "Bob"])
        self.assertNotIn("password", response.json[0])

        response = self.client.delete("/events/e1/volunteers/alice")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.get_doc("events", "e1")["attendees"], ["bob"])
        self.assertEqual(self.get_doc("users", "alice")["joinedEvents"], [])

    def test_joined_and_created_lists(self) -> None:
        self.create_event("e1", "org", attendees=["alice"])
        self.create_event(
            "e2",
            "org",
            status="pending",
            createdAt=BASE_DATE.replace(hour=12),
        )

        joined = self.client.get("/events/user/alice/joined")
        self.assertEqual([e["id"] for e in joined.json], ["e1"])

        created = self.client.get("/events/created/org")
        self.assertEqual([e["id"] for e in created.json], ["e2", "e1"])

        self.assertEqual(self.client.get("/events/user/ghost/joined").status_code, 404)


if __name__ == "__main__":
    unittest.main()
