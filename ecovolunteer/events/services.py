"""Service layer for the event lifecycle."""

from __future__ import annotations

import datetime
from typing import TYPE_CHECKING, Any, Iterable, Mapping, cast

from firebase_admin import firestore
from flask import current_app

from ecovolunteer.core.constants import (
    EVENTS_COLLECTION,
    FIRESTORE_BATCH_LIMIT,
    PLACEHOLDER_IMAGE_URL,
    REVIEW_STATUSES,
    STATUS_APPROVED,
    STATUS_PENDING,
    STATUS_RESTRICTED,
    UNKNOWN_ORGANIZER_NAME,
    USERS_COLLECTION,
)
from ecovolunteer.errors import NotFoundError, ValidationError
from ecovolunteer.utils import to_iso, utcnow

from .models import Event
from .permissions import require_organizer_or_admin

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client

_EPOCH = datetime.datetime.min.replace(tzinfo=datetime.timezone.utc)


def normalize_tags(tags: Any) -> list[str]:
    """Turn a comma-delimited string or a list into clean, non-empty tags."""
    if tags is None:
        return []
    if isinstance(tags, str):
        tags = tags.split(",")
    return [str(tag).strip() for tag in tags if str(tag).strip()]


def placeholder_image_url(title: str) -> str:
    """Build the placeholder image URL shown for events without an image."""
    return PLACEHOLDER_IMAGE_URL.format(text=(title or "").replace(" ", "+"))


def serialize_event(
    event_id: str, data: Mapping[str, Any], organizer_name: str | None = None
) -> dict[str, Any]:
    """Shape an event document for the client."""
    attendees = list(data.get("attendees") or [])
    title = data.get("title", "")
    return {
        "id": event_id,
        "title": title,
        "description": data.get("description", ""),
        "date": to_iso(data.get("date")),
        "type": data.get("type"),
        "location": data.get("location", ""),
        "tags": list(data.get("tags") or []),
        "imageUrl": data.get("imageUrl") or placeholder_image_url(title),
        "attendees": attendees,
        "organizer": data.get("organizer"),
        "organizerName": organizer_name or UNKNOWN_ORGANIZER_NAME,
        "status": data.get("status", STATUS_PENDING),
        "whatToBring": data.get("whatToBring", ""),
        "maxVolunteers": int(data.get("maxVolunteers") or 0),
        "volunteerCount": len(attendees),
        "adminReason": data.get("adminReason", ""),
        "adminActionDate": to_iso(data.get("adminActionDate")),
        "createdAt": to_iso(data.get("createdAt")),
    }


def _sort_key(field: str):
    def key(event: tuple[str, dict[str, Any]]) -> datetime.datetime:
        value = event[1].get(field)
        if isinstance(value, datetime.datetime):
            if value.tzinfo is None:
                return value.replace(tzinfo=datetime.timezone.utc)
            return value
        return _EPOCH

    return key


class EventService:
    """Handles business logic and data access for events."""

    @staticmethod
    def _organizer_names(
        db: Client, events: Iterable[tuple[str, dict[str, Any]]]
    ) -> dict[str, str]:
        """Look up the display names of every organizer in one round trip."""
        organizer_ids = {
            data["organizer"] for _, data in events if data.get("organizer")
        }
        if not organizer_ids:
            return {}
        refs = [
            db.collection(USERS_COLLECTION).document(uid) for uid in organizer_ids
        ]
        names = {}
        for doc in cast(list["DocumentSnapshot"], db.get_all(refs)):
            if doc.exists:
                names[doc.id] = (doc.to_dict() or {}).get("name")
        return names

    @staticmethod
    def _enrich(
        db: Client, events: list[tuple[str, dict[str, Any]]]
    ) -> list[dict[str, Any]]:
        names = EventService._organizer_names(db, events)
        return [
            serialize_event(event_id, data, names.get(data.get("organizer")))
            for event_id, data in events
        ]

    @staticmethod
    def _query(db: Client, field: str, value: Any) -> list[tuple[str, dict[str, Any]]]:
        docs = (
            db.collection(EVENTS_COLLECTION)
            .where(filter=firestore.FieldFilter(field, "==", value))
            .stream()
        )
        return [(doc.id, doc.to_dict() or {}) for doc in docs]

    @staticmethod
    def _get_event_data(db: Client, event_id: str) -> dict[str, Any]:
        """Fetch the raw event document or raise NotFoundError."""
        doc = cast(
            "DocumentSnapshot",
            db.collection(EVENTS_COLLECTION).document(event_id).get(),
        )
        if not doc.exists:
            raise NotFoundError("Event not found")
        return doc.to_dict() or {}

    @staticmethod
    def create_event(
        db: Client, organizer_id: str, fields: Mapping[str, Any]
    ) -> dict[str, Any]:
        """Create a pending event and record it on the organizer."""
        now = utcnow()
        event_data: Event = {
            "title": str(fields["title"]).strip(),
            "description": str(fields["description"]).strip(),
            "date": fields["date"],
            "type": fields["type"],
            "location": str(fields.get("location") or "").strip(),
            "tags": normalize_tags(fields.get("tags")),
            "imageUrl": str(fields.get("imageUrl") or "").strip(),
            "whatToBring": str(fields.get("whatToBring") or "").strip(),
            "maxVolunteers": int(fields.get("maxVolunteers") or 0),
            "organizer": organizer_id,
            "attendees": [],
            "status": STATUS_PENDING,
            "adminReason": "",
            "adminActionDate": None,
            "createdAt": now,
            "updatedAt": now,
        }

        event_ref = db.collection(EVENTS_COLLECTION).document()
        organizer_ref = db.collection(USERS_COLLECTION).document(organizer_id)

        batch = db.batch()
        batch.set(event_ref, event_data)
        batch.update(
            organizer_ref,
            {
                "createdEvents": firestore.ArrayUnion([event_ref.id]),
                "updatedAt": now,
            },
        )
        batch.commit()
        current_app.logger.info(
            f"Event {event_ref.id} created by {organizer_id}, awaiting review"
        )

        return EventService._enrich(db, [(event_ref.id, event_data)])[0]

    @staticmethod
    def set_status(db: Client, event_id: str, status: str) -> dict[str, Any]:
        """Approve or reject an event."""
        if status not in REVIEW_STATUSES:
            raise ValidationError(f"Invalid status: {status}")

        event_data = EventService._get_event_data(db, event_id)
        updates = {"status": status, "updatedAt": utcnow()}
        db.collection(EVENTS_COLLECTION).document(event_id).update(updates)
        event_data.update(updates)
        current_app.logger.info(f"Event {event_id} marked {status}")

        return EventService._enrich(db, [(event_id, event_data)])[0]

    @staticmethod
    def toggle_restriction(
        db: Client, event_id: str, is_restricted: bool, reason: str = ""
    ) -> dict[str, Any]:
        """Restrict an event, or lift a restriction back to approved."""
        event_data = EventService._get_event_data(db, event_id)
        now = utcnow()
        if is_restricted:
            updates = {
                "status": STATUS_RESTRICTED,
                "adminReason": reason or "",
                "adminActionDate": now,
                "updatedAt": now,
            }
        else:
            updates = {
                "status": STATUS_APPROVED,
                "adminReason": "",
                "adminActionDate": None,
                "updatedAt": now,
            }
        db.collection(EVENTS_COLLECTION).document(event_id).update(updates)
        event_data.update(updates)
        current_app.logger.info(f"Event {event_id} is now {updates['status']}")

        return EventService._enrich(db, [(event_id, event_data)])[0]

    @staticmethod
    def delete_event(db: Client, event_id: str, requester: Mapping[str, Any]) -> None:
        """Delete an event and unlink it from its organizer and attendees."""
        event_data = EventService._get_event_data(db, event_id)
        require_organizer_or_admin(event_data, requester, "delete")

        user_ids = list(dict.fromkeys(event_data.get("attendees") or []))
        organizer_id = event_data.get("organizer")
        if organizer_id and organizer_id not in user_ids:
            user_ids.append(organizer_id)

        user_refs = [db.collection(USERS_COLLECTION).document(uid) for uid in user_ids]
        existing = set()
        if user_refs:
            for doc in cast(list["DocumentSnapshot"], db.get_all(user_refs)):
                if doc.exists:
                    existing.add(doc.id)

        now = utcnow()
        writes: list[tuple[Any, dict[str, Any] | None]] = [
            (db.collection(EVENTS_COLLECTION).document(event_id), None)
        ]
        for ref in user_refs:
            if ref.id not in existing:
                continue
            updates: dict[str, Any] = {"updatedAt": now}
            if ref.id in (event_data.get("attendees") or []):
                updates["joinedEvents"] = firestore.ArrayRemove([event_id])
            if ref.id == organizer_id:
                updates["createdEvents"] = firestore.ArrayRemove([event_id])
            writes.append((ref, updates))

        for i in range(0, len(writes), FIRESTORE_BATCH_LIMIT):
            batch = db.batch()
            for ref, updates in writes[i : i + FIRESTORE_BATCH_LIMIT]:
                if updates is None:
                    batch.delete(ref)
                else:
                    batch.update(ref, updates)
            batch.commit()

        current_app.logger.info(
            f"Event {event_id} deleted, unlinked from {len(writes) - 1} users"
        )

    @staticmethod
    def list_approved(db: Client) -> list[dict[str, Any]]:
        """List approved events, soonest first."""
        events = EventService._query(db, "status", STATUS_APPROVED)
        events.sort(key=_sort_key("date"))
        return EventService._enrich(db, events)

    @staticmethod
    def list_pending(db: Client) -> list[dict[str, Any]]:
        """List events awaiting review, newest first."""
        events = EventService._query(db, "status", STATUS_PENDING)
        events.sort(key=_sort_key("createdAt"), reverse=True)
        return EventService._enrich(db, events)

    @staticmethod
    def list_restricted(db: Client) -> list[dict[str, Any]]:
        """List restricted events, most recently restricted first."""
        events = EventService._query(db, "status", STATUS_RESTRICTED)
        events.sort(key=_sort_key("adminActionDate"), reverse=True)
        return EventService._enrich(db, events)

    @staticmethod
    def list_by_organizer(db: Client, user_id: str) -> list[dict[str, Any]]:
        """List every event a user organizes, newest first."""
        events = EventService._query(db, "organizer", user_id)
        events.sort(key=_sort_key("createdAt"), reverse=True)
        return EventService._enrich(db, events)

    @staticmethod
    def get_event(db: Client, event_id: str) -> dict[str, Any]:
        """Fetch a single enriched event."""
        event_data = EventService._get_event_data(db, event_id)
        return EventService._enrich(db, [(event_id, event_data)])[0]

    @staticmethod
    def get_events_by_ids(db: Client, event_ids: list[str]) -> list[dict[str, Any]]:
        """Fetch events in the given order, skipping ids that no longer exist."""
        if not event_ids:
            return []
        refs = [
            db.collection(EVENTS_COLLECTION).document(eid)
            for eid in dict.fromkeys(event_ids)
        ]
        found = {}
        for doc in cast(list["DocumentSnapshot"], db.get_all(refs)):
            if doc.exists:
                found[doc.id] = doc.to_dict() or {}
        events = [(eid, found[eid]) for eid in dict.fromkeys(event_ids) if eid in found]
        return EventService._enrich(db, events)

    @staticmethod
    def list_joined(db: Client, user_id: str) -> list[dict[str, Any]]:
        """List the events a user joined, most recently joined first."""
        user_doc = cast(
            "DocumentSnapshot",
            db.collection(USERS_COLLECTION).document(user_id).get(),
        )
        if not user_doc.exists:
            raise NotFoundError("User not found")
        joined = (user_doc.to_dict() or {}).get("joinedEvents") or []
        return EventService.get_events_by_ids(db, list(reversed(joined)))
