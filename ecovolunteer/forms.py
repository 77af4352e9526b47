"""Base form for validating JSON request bodies."""

from flask_wtf import FlaskForm  # type: ignore

from .errors import ValidationError
from .utils import json_formdata


class JSONForm(FlaskForm):
    """A form bound to the JSON body of the current request.

    CSRF is checked globally by ``CSRFProtect`` on the X-CSRFToken header, so
    the per-form hidden token is disabled.
    """

    class Meta:
        csrf = False

    def __init__(self, *args, **kwargs):
        """Bind the form to the request's JSON body."""
        kwargs.setdefault("formdata", json_formdata())
        super().__init__(*args, **kwargs)

    def validate_or_raise(self):
        """Validate the form, raising ValidationError with field messages."""
        if self.validate():
            return self
        errors = [
            {"field": field.name, "message": message}
            for field in self
            for message in field.errors
        ]
        message = errors[0]["message"] if errors else "Validation failed."
        raise ValidationError(message, errors=errors)
