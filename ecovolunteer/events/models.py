"""Data models for the events blueprint."""

from __future__ import annotations

import datetime

from ecovolunteer.core.types import FirestoreDocument


class Event(FirestoreDocument, total=False):
    """An event document in Firestore."""

    title: str
    description: str
    date: datetime.datetime
    type: str
    location: str
    tags: list[str]
    imageUrl: str
    whatToBring: str
    maxVolunteers: int
    organizer: str
    attendees: list[str]
    status: str
    adminReason: str
    adminActionDate: datetime.datetime | None
