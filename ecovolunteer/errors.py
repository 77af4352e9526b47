"""Custom exception classes for the application."""


class AppError(Exception):
    """Base application error class."""

    def __init__(self, message, status_code=400):
        """Initialize the error."""
        super().__init__(message)
        self.status_code = status_code
        self.message = message

    def to_dict(self):
        """Return the JSON body sent to the client."""
        return {"message": self.message}


class ValidationError(AppError):
    """Raised when user input fails validation."""

    def __init__(self, message="Validation failed.", errors=None):
        """Initialize the error with optional field-level messages."""
        super().__init__(message, 400)
        self.errors = errors or []

    def to_dict(self):
        """Include the field-level messages."""
        body = super().to_dict()
        body["errors"] = self.errors
        return body


class AuthenticationRequired(AppError):
    """Raised when a request needs a session and has none."""

    def __init__(self, message="Not authorized, please login"):
        """Initialize the error."""
        super().__init__(message, 401)


class AuthorizationDenied(AppError):
    """Raised when the user lacks the role or ownership for an action."""

    def __init__(self, message="Not authorized to access this route"):
        """Initialize the error."""
        super().__init__(message, 403)


class DuplicateResourceError(AppError):
    """Raised when trying to create a resource that already exists."""

    def __init__(self, message="Resource already exists."):
        """Initialize the error."""
        super().__init__(message, 400)


class NotFoundError(AppError):
    """Raised when a resource is not found."""

    def __init__(self, message="Resource not found."):
        """Initialize the error."""
        super().__init__(message, 404)


class AlreadyJoined(AppError):
    """Raised when a user joins an event they already attend."""

    def __init__(self, message="Already joined this event"):
        """Initialize the error."""
        super().__init__(message, 400)


class CapacityExceeded(AppError):
    """Raised when an event has no volunteer slots left."""

    def __init__(self, message="Event is at full capacity"):
        """Initialize the error."""
        super().__init__(message, 400)


class TransientStoreError(AppError):
    """Raised when the document store is unreachable or fails."""

    def __init__(self, message="A database error occurred. Please try again later."):
        """Initialize the error."""
        super().__init__(message, 503)
