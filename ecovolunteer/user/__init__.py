"""The user blueprint."""

from flask import Blueprint

from .services import UserService

bp = Blueprint("user", __name__, url_prefix="/users")

from . import routes  # noqa: E402

__all__ = ["UserService", "routes"]
