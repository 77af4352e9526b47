"""Joining and leaving events.

An event's ``attendees`` and each user's ``joinedEvents`` mirror each other:
an event id is in a user's list exactly when that user's id is in the event's
list. Every operation here writes both sides together.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping, cast

from firebase_admin import firestore
from flask import current_app

from ecovolunteer.core.constants import EVENTS_COLLECTION, USERS_COLLECTION
from ecovolunteer.errors import AlreadyJoined, CapacityExceeded, NotFoundError
from ecovolunteer.utils import to_iso, utcnow

from .permissions import require_organizer_or_admin
from .services import EventService

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client
    from google.cloud.firestore_v1.document import DocumentReference
    from google.cloud.firestore_v1.transaction import Transaction


class MembershipService:
    """Handles event membership and capacity."""

    @staticmethod
    def _join_transaction(
        transaction: Transaction,
        event_ref: DocumentReference,
        user_ref: DocumentReference,
    ) -> dict[str, Any]:
        """Check membership and capacity, then link both documents."""
        event_doc = event_ref.get(transaction=transaction)
        if not event_doc.exists:
            raise NotFoundError("Event not found")
        user_doc = user_ref.get(transaction=transaction)
        if not user_doc.exists:
            raise NotFoundError("User not found")

        event_data = event_doc.to_dict() or {}
        attendees = list(event_data.get("attendees") or [])
        if user_ref.id in attendees:
            raise AlreadyJoined()

        max_volunteers = int(event_data.get("maxVolunteers") or 0)
        if max_volunteers > 0 and len(attendees) >= max_volunteers:
            raise CapacityExceeded()

        now = utcnow()
        attendees.append(user_ref.id)
        transaction.update(event_ref, {"attendees": attendees, "updatedAt": now})

        joined = list((user_doc.to_dict() or {}).get("joinedEvents") or [])
        if event_ref.id not in joined:
            joined.append(event_ref.id)
        transaction.update(user_ref, {"joinedEvents": joined, "updatedAt": now})

        event_data["attendees"] = attendees
        return event_data

    @staticmethod
    def join(db: Client, event_id: str, user_id: str) -> dict[str, Any]:
        """Add a user to an event's attendees, respecting capacity."""
        event_ref = db.collection(EVENTS_COLLECTION).document(event_id)
        user_ref = db.collection(USERS_COLLECTION).document(user_id)

        @firestore.transactional
        def join_in_transaction(transaction):
            return MembershipService._join_transaction(transaction, event_ref, user_ref)

        event_data = join_in_transaction(db.transaction())
        current_app.logger.info(f"User {user_id} joined event {event_id}")
        return EventService._enrich(db, [(event_id, event_data)])[0]

    @staticmethod
    def _unlink(db: Client, event_id: str, user_id: str) -> None:
        """Remove the user from the event and the event from the user."""
        event_ref = db.collection(EVENTS_COLLECTION).document(event_id)
        user_ref = db.collection(USERS_COLLECTION).document(user_id)
        user_doc = cast("DocumentSnapshot", user_ref.get())

        now = utcnow()
        batch = db.batch()
        batch.update(
            event_ref,
            {"attendees": firestore.ArrayRemove([user_id]), "updatedAt": now},
        )
        if user_doc.exists:
            batch.update(
                user_ref,
                {"joinedEvents": firestore.ArrayRemove([event_id]), "updatedAt": now},
            )
        batch.commit()

    @staticmethod
    def leave(db: Client, event_id: str, user_id: str) -> None:
        """Remove a user from an event. Leaving twice is harmless."""
        EventService._get_event_data(db, event_id)
        MembershipService._unlink(db, event_id, user_id)
        current_app.logger.info(f"User {user_id} left event {event_id}")

    @staticmethod
    def remove_volunteer(
        db: Client, event_id: str, target_user_id: str, requester: Mapping[str, Any]
    ) -> None:
        """Remove a volunteer on behalf of the organizer or an admin."""
        event_data = EventService._get_event_data(db, event_id)
        require_organizer_or_admin(event_data, requester, "remove volunteers from")

        MembershipService._unlink(db, event_id, target_user_id)
        current_app.logger.info(
            f"User {target_user_id} removed from event {event_id} "
            f"by {requester.get('id') or requester.get('uid')}"
        )

    @staticmethod
    def list_volunteers(
        db: Client, event_id: str, requester: Mapping[str, Any]
    ) -> list[dict[str, Any]]:
        """List the public details of everyone attending an event."""
        event_data = EventService._get_event_data(db, event_id)
        require_organizer_or_admin(event_data, requester, "view volunteers of")

        attendees = list(dict.fromkeys(event_data.get("attendees") or []))
        if not attendees:
            return []

        refs = [db.collection(USERS_COLLECTION).document(uid) for uid in attendees]
        users = {}
        for doc in cast(list["DocumentSnapshot"], db.get_all(refs)):
            if doc.exists:
                users[doc.id] = doc.to_dict() or {}

        return [
            {
                "id": uid,
                "name": users[uid].get("name", ""),
                "email": users[uid].get("email", ""),
                "createdAt": to_iso(users[uid].get("createdAt")),
            }
            for uid in attendees
            if uid in users
        ]
