"""Core data types for the ecovolunteer application."""

from typing import Any, TypedDict


class FirestoreDocument(TypedDict, total=False):
    """Generic Firestore document structure."""

    id: str
    createdAt: Any
    updatedAt: Any
