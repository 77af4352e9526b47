"""Forms for the auth blueprint."""

from wtforms import PasswordField, SelectField, StringField, ValidationError
from wtforms.validators import DataRequired, Email, Length, Optional

from ecovolunteer.core.constants import PASSWORD_MIN_LENGTH, ROLE_USER, VALID_ROLES
from ecovolunteer.forms import JSONForm


class LoginForm(JSONForm):
    """Login form."""

    email = StringField(
        "Email",
        validators=[DataRequired(), Email(message="Please enter a valid email")],
    )
    password = PasswordField(
        "Password", validators=[DataRequired(message="Password is required")]
    )


class RegisterForm(JSONForm):
    """Registration form."""

    name = StringField("Name", validators=[DataRequired(message="Name is required")])
    email = StringField(
        "Email",
        validators=[
            DataRequired(message="Please enter a valid email"),
            Email(message="Please enter a valid email"),
        ],
    )
    password = PasswordField(
        "Password",
        validators=[
            DataRequired(message="Password is required"),
            Length(
                min=PASSWORD_MIN_LENGTH,
                message=f"Password must be at least {PASSWORD_MIN_LENGTH} characters",
            ),
        ],
    )
    role = SelectField(
        "Role",
        choices=VALID_ROLES,
        default=ROLE_USER,
        validators=[Optional()],
        validate_choice=False,
    )

    def validate_role(self, field):
        """Reject roles outside the known set."""
        if field.data and field.data not in VALID_ROLES:
            raise ValidationError("Invalid role")
