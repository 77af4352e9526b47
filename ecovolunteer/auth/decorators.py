"""Decorators for the auth blueprint."""

from functools import wraps

from flask import g

from ecovolunteer.errors import AuthenticationRequired, AuthorizationDenied


def login_required(f=None, admin_required=False):
    """Reject the request unless a user is logged in.

    Usage:
    @login_required
    def protected_view():
        ...

    @login_required(admin_required=True)
    def admin_view():
        ...
    """

    def decorator(func):
        @wraps(func)
        def decorated_function(*args, **kwargs):
            if g.get("user") is None:
                raise AuthenticationRequired()
            if admin_required and not g.user.is_admin:
                raise AuthorizationDenied()
            return func(*args, **kwargs)

        return decorated_function

    if f:
        return decorator(f)
    return decorator
