"""The events blueprint."""

from flask import Blueprint

from .membership import MembershipService
from .services import EventService

bp = Blueprint("events", __name__, url_prefix="/events")

from . import routes  # noqa: E402

__all__ = ["EventService", "MembershipService", "routes"]
