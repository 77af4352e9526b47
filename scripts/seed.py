"""
Populate Firestore with sample volunteers and events for local development.

Existing events and non-admin users are removed first.
"""

from __future__ import annotations

import datetime
import os
import random
import sys

from faker import Faker
from firebase_admin import firestore

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ecovolunteer import create_app  # noqa: E402
from ecovolunteer.core.constants import (  # noqa: E402
    EVENT_TYPE_IN_PERSON,
    EVENT_TYPE_VIRTUAL,
    ROLE_ADMIN,
    ROLE_ORGANIZER,
    ROLE_USER,
    STATUS_APPROVED,
    STATUS_REJECTED,
)
from ecovolunteer.errors import CapacityExceeded  # noqa: E402
from ecovolunteer.events import EventService, MembershipService  # noqa: E402
from ecovolunteer.user.services import UserService  # noqa: E402
from ecovolunteer.utils import utcnow  # noqa: E402
from scripts.clear_db import clear_database  # noqa: E402

SAMPLE_PASSWORD = "password123"
USERS_TO_CREATE = 8
EVENTS_TO_CREATE = 12
EVENT_THEMES = [
    ("River Cleanup", ["cleanup", "river"]),
    ("Tree Planting Drive", ["trees", "planting"]),
    ("Beach Cleanup", ["cleanup", "beach"]),
    ("Composting Workshop", ["workshop", "compost"]),
    ("Urban Garden Day", ["garden", "community"]),
    ("Recycling Awareness Webinar", ["recycling", "education"]),
]


def seed(db, fake: Faker) -> None:
    """Create users, events in every review state, and memberships."""
    users = [
        UserService.create_user(
            db,
            name=fake.name(),
            email=fake.unique.email(),
            password=SAMPLE_PASSWORD,
            role=random.choice([ROLE_USER, ROLE_USER, ROLE_ORGANIZER]),  # nosec
        )
        for _ in range(USERS_TO_CREATE)
    ]
    admin = UserService.create_user(
        db,
        name=fake.name(),
        email=fake.unique.email(),
        password=SAMPLE_PASSWORD,
        role=ROLE_ADMIN,
    )
    print(f"Created {len(users)} users and 1 admin ({admin['email']})")

    approved = 0
    for i in range(EVENTS_TO_CREATE):
        theme, tags = random.choice(EVENT_THEMES)  # nosec
        event_type = EVENT_TYPE_VIRTUAL if "Webinar" in theme else EVENT_TYPE_IN_PERSON
        organizer = random.choice(users)  # nosec
        event = EventService.create_event(
            db,
            organizer["id"],
            {
                "title": f"{theme} in {fake.city()}",
                "description": fake.paragraph(nb_sentences=3),
                "date": utcnow() + datetime.timedelta(days=random.randint(3, 60)),  # nosec
                "type": event_type,
                "location": (
                    "" if event_type == EVENT_TYPE_VIRTUAL else fake.street_address()
                ),
                "tags": tags + [event_type],
                "whatToBring": "Water bottle, gloves",
                "maxVolunteers": random.choice([0, 3, 5, 10]),  # nosec
            },
        )

        # Leave a few pending, reject one, restrict one, approve the rest.
        if i % 4 == 0:
            continue
        if i % 6 == 1:
            EventService.set_status(db, event["id"], STATUS_REJECTED)
            continue
        EventService.set_status(db, event["id"], STATUS_APPROVED)
        approved += 1

        volunteers = [u for u in users if u["id"] != organizer["id"]]
        for user in random.sample(volunteers, k=random.randint(0, 4)):  # nosec
            try:
                MembershipService.join(db, event["id"], user["id"])
            except CapacityExceeded:
                break

        if i % 7 == 2:
            EventService.toggle_restriction(
                db, event["id"], True, "Awaiting updated safety plan"
            )

    print(f"Created {EVENTS_TO_CREATE} events ({approved} approved)")
    print(f"Every sample account uses the password '{SAMPLE_PASSWORD}'")


def main() -> int:
    """Clear the sample data and seed it again."""
    app = create_app()
    with app.app_context():
        db = firestore.client()
        clear_database(db)
        seed(db, Faker())
    return 0


if __name__ == "__main__":
    sys.exit(main())
