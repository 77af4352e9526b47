"""Blueprint that turns errors into JSON responses."""

from flask import Blueprint, current_app, jsonify
from flask_wtf.csrf import CSRFError
from google.api_core.exceptions import GoogleAPICallError, RetryError
from werkzeug.exceptions import HTTPException

from .errors import AppError, TransientStoreError, ValidationError

error_handlers_bp = Blueprint("error_handlers", __name__)

SERVER_ERROR_STATUS = 500


def _error_response(error):
    return jsonify(error.to_dict()), error.status_code


@error_handlers_bp.app_errorhandler(ValidationError)
def handle_validation_error(error):
    """Return field-level validation messages."""
    current_app.logger.warning(f"Validation Error: {error.errors or error.message}")
    return _error_response(error)


@error_handlers_bp.app_errorhandler(AppError)
def handle_app_error(error):
    """Handles application errors raised by routes and services."""
    if error.status_code >= SERVER_ERROR_STATUS:
        current_app.logger.error(f"Application Error: {error.message}")
    else:
        current_app.logger.warning(f"{type(error).__name__}: {error.message}")
    return _error_response(error)


@error_handlers_bp.app_errorhandler(GoogleAPICallError)
@error_handlers_bp.app_errorhandler(RetryError)
def handle_store_error(e):
    """Handles Firestore failures."""
    current_app.logger.error(f"Database Error: {e}")
    # Avoid exposing raw database error details to the user
    return _error_response(TransientStoreError())


@error_handlers_bp.app_errorhandler(CSRFError)
def handle_csrf_error(e):
    """Handles CSRF errors, which usually indicate an expired session."""
    current_app.logger.warning(f"CSRF Error: {e.description}")
    return jsonify({"message": e.description}), 400


@error_handlers_bp.app_errorhandler(HTTPException)
def handle_http_error(e):
    """Render framework errors (unknown route, bad method) as JSON."""
    return jsonify({"message": e.description}), e.code


@error_handlers_bp.app_errorhandler(Exception)
def handle_unexpected_error(e):
    """Handles unexpected server errors."""
    current_app.logger.exception(f"Internal Server Error: {e}")
    return jsonify({"message": "Server error"}), SERVER_ERROR_STATUS
