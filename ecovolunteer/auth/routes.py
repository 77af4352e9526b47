"""Routes for the auth blueprint."""

from firebase_admin import firestore
from flask import current_app, g, jsonify, session
from flask_wtf.csrf import generate_csrf  # type: ignore

from ecovolunteer.core.constants import ROLE_ADMIN
from ecovolunteer.errors import AuthenticationRequired
from ecovolunteer.user.services import UserService, public_user

from . import bp
from .decorators import login_required
from .forms import LoginForm, RegisterForm


def _start_session(user):
    session.clear()
    session["user_id"] = user["id"]
    session["is_admin"] = user.get("role") == ROLE_ADMIN
    session.permanent = True


@bp.route("/register", methods=["POST"])
def register():
    """Create an account and log the new user in."""
    form = RegisterForm().validate_or_raise()
    db = firestore.client()
    user = UserService.create_user(
        db,
        name=form.name.data,
        email=form.email.data,
        password=form.password.data,
        role=form.role.data,
    )
    _start_session(user)
    return jsonify(public_user(user)), 201


@bp.route("/login", methods=["POST"])
def login():
    """Log a user in by email and password."""
    form = LoginForm().validate_or_raise()
    db = firestore.client()
    user = UserService.authenticate(db, form.email.data, form.password.data)
    if user is None:
        current_app.logger.warning(f"Failed login attempt for {form.email.data}")
        raise AuthenticationRequired("Invalid email or password")

    _start_session(user)
    return jsonify(public_user(user, include_event_ids=True))


@bp.route("/logout", methods=["POST"])
@login_required
def logout():
    """Log the current user out."""
    session.clear()
    return jsonify({"message": "Logged out successfully"})


@bp.route("/me", methods=["GET"])
@login_required
def me():
    """Return the logged-in user."""
    user = dict(g.user)
    user["id"] = g.user.get_id()
    return jsonify(public_user(user, include_event_ids=True))


@bp.route("/csrf-token", methods=["GET"])
def csrf_token():
    """Hand the single-page app a token for the X-CSRFToken header."""
    return jsonify({"csrfToken": generate_csrf()})
