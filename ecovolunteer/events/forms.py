"""Forms for the events blueprint."""

from wtforms import BooleanField, IntegerField, SelectField, StringField, ValidationError
from wtforms.validators import DataRequired, NumberRange, Optional

from ecovolunteer.core.constants import EVENT_TYPE_IN_PERSON, VALID_EVENT_TYPES
from ecovolunteer.forms import JSONForm
from ecovolunteer.utils import parse_datetime


class EventForm(JSONForm):
    """Form for creating an event."""

    title = StringField("Title", validators=[DataRequired(message="Title is required")])
    description = StringField(
        "Description", validators=[DataRequired(message="Description is required")]
    )
    date = StringField("Date", validators=[DataRequired(message="Date is required")])
    type = SelectField(
        "Type",
        choices=VALID_EVENT_TYPES,
        validators=[DataRequired(message="Event type is required")],
        validate_choice=False,
    )
    location = StringField("Location")
    imageUrl = StringField("Image URL")
    whatToBring = StringField("What to bring")
    maxVolunteers = IntegerField(
        "Max volunteers",
        validators=[
            Optional(),
            NumberRange(min=0, message="Max volunteers cannot be negative"),
        ],
    )

    def validate_date(self, field):
        """Require an ISO-8601 date and keep the parsed value."""
        parsed = parse_datetime(field.data)
        if parsed is None:
            raise ValidationError("Date must be a valid ISO-8601 date")
        field.parsed = parsed

    def validate_type(self, field):
        """Reject unknown event types."""
        if field.data not in VALID_EVENT_TYPES:
            raise ValidationError("Type must be virtual or in-person")

    def validate_location(self, field):
        """Require a location for in-person events."""
        if self.type.data == EVENT_TYPE_IN_PERSON and not (field.data or "").strip():
            raise ValidationError("Location is required for in-person events")

    def to_fields(self, tags=None):
        """Return the validated values ready for the event service."""
        return {
            "title": self.title.data,
            "description": self.description.data,
            "date": self.date.parsed,
            "type": self.type.data,
            "location": self.location.data,
            "imageUrl": self.imageUrl.data,
            "whatToBring": self.whatToBring.data,
            "maxVolunteers": self.maxVolunteers.data or 0,
            "tags": tags,
        }


class RestrictForm(JSONForm):
    """Form for restricting or unrestricting an event."""

    isRestricted = BooleanField("Restricted")
    reason = StringField("Reason")
