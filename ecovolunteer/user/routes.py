"""Routes for the user blueprint."""

from firebase_admin import firestore
from flask import jsonify

from . import bp
from .services import UserService


@bp.route("/<string:user_id>", methods=["GET"])
def view_user(user_id):
    """Return a user's public profile with their joined and created events."""
    db = firestore.client()
    return jsonify(UserService.get_profile(db, user_id))
