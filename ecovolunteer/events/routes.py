"""Routes for the events blueprint."""

from __future__ import annotations

from typing import Any

from firebase_admin import firestore
from flask import g, jsonify, request

from ecovolunteer.auth.decorators import login_required
from ecovolunteer.core.constants import STATUS_APPROVED, STATUS_REJECTED
from ecovolunteer.utils import no_cache

from . import bp
from .forms import EventForm, RestrictForm
from .membership import MembershipService
from .services import EventService


def _status_response(event: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": event["id"],
        "title": event["title"],
        "status": event["status"],
        "organizerName": event["organizerName"],
    }


@bp.route("", methods=["GET"], strict_slashes=False)
@no_cache
def list_events() -> Any:
    """List approved events."""
    db = firestore.client()
    return jsonify(EventService.list_approved(db))


@bp.route("", methods=["POST"], strict_slashes=False)
@login_required
def create_event() -> Any:
    """Submit a new event for review."""
    form = EventForm().validate_or_raise()
    payload = request.get_json(silent=True) or {}
    db = firestore.client()
    event = EventService.create_event(
        db, g.user.get_id(), form.to_fields(tags=payload.get("tags"))
    )
    return jsonify(event), 201


@bp.route("/pending", methods=["GET"])
@login_required(admin_required=True)
@no_cache
def list_pending() -> Any:
    """List events awaiting review."""
    db = firestore.client()
    return jsonify(EventService.list_pending(db))


@bp.route("/restricted", methods=["GET"])
@login_required(admin_required=True)
@no_cache
def list_restricted() -> Any:
    """List restricted events."""
    db = firestore.client()
    return jsonify(EventService.list_restricted(db))


@bp.route("/user/<string:user_id>/joined", methods=["GET"])
@no_cache
def list_joined(user_id: str) -> Any:
    """List the events a user has joined."""
    db = firestore.client()
    return jsonify(EventService.list_joined(db, user_id))


@bp.route("/created/<string:user_id>", methods=["GET"])
@no_cache
def list_created(user_id: str) -> Any:
    """List the events a user organizes."""
    db = firestore.client()
    return jsonify(EventService.list_by_organizer(db, user_id))


@bp.route("/<string:event_id>", methods=["GET"])
def view_event(event_id: str) -> Any:
    """Return a single event."""
    db = firestore.client()
    return jsonify(EventService.get_event(db, event_id))


@bp.route("/<string:event_id>", methods=["DELETE"])
@login_required
def delete_event(event_id: str) -> Any:
    """Delete an event. Only its organizer or an admin may do this."""
    db = firestore.client()
    EventService.delete_event(db, event_id, g.user)
    return jsonify({"message": "Event removed"})


@bp.route("/<string:event_id>/approve", methods=["PUT"])
@login_required(admin_required=True)
def approve_event(event_id: str) -> Any:
    """Approve a pending event."""
    db = firestore.client()
    event = EventService.set_status(db, event_id, STATUS_APPROVED)
    return jsonify(_status_response(event))


@bp.route("/<string:event_id>/reject", methods=["PUT"])
@login_required(admin_required=True)
def reject_event(event_id: str) -> Any:
    """Reject a pending event."""
    db = firestore.client()
    event = EventService.set_status(db, event_id, STATUS_REJECTED)
    return jsonify(_status_response(event))


@bp.route("/<string:event_id>/restrict", methods=["PUT"])
@login_required(admin_required=True)
def restrict_event(event_id: str) -> Any:
    """Restrict an approved event, or lift the restriction."""
    form = RestrictForm().validate_or_raise()
    db = firestore.client()
    event = EventService.toggle_restriction(
        db, event_id, form.isRestricted.data, form.reason.data or ""
    )
    response = _status_response(event)
    response["adminReason"] = event["adminReason"]
    response["message"] = (
        "Event restricted successfully"
        if form.isRestricted.data
        else "Event unrestricted successfully"
    )
    return jsonify(response)


@bp.route("/<string:event_id>/join", methods=["POST"])
@login_required
def join_event(event_id: str) -> Any:
    """Join an event as a volunteer."""
    db = firestore.client()
    MembershipService.join(db, event_id, g.user.get_id())
    return jsonify({"message": "Successfully joined event"})


@bp.route("/<string:event_id>/leave", methods=["DELETE"])
@login_required
def leave_event(event_id: str) -> Any:
    """Leave an event."""
    db = firestore.client()
    MembershipService.leave(db, event_id, g.user.get_id())
    return jsonify({"message": "Successfully left event"})


@bp.route("/<string:event_id>/volunteers", methods=["GET"])
@login_required
@no_cache
def list_volunteers(event_id: str) -> Any:
    """List the volunteers of an event."""
    db = firestore.client()
    return jsonify(MembershipService.list_volunteers(db, event_id, g.user))


@bp.route("/<string:event_id>/volunteers/<string:user_id>", methods=["DELETE"])
@login_required
def remove_volunteer(event_id: str, user_id: str) -> Any:
    """Remove a volunteer from an event."""
    db = firestore.client()
    MembershipService.remove_volunteer(db, event_id, user_id, g.user)
    return jsonify({"message": "Volunteer removed successfully"})
