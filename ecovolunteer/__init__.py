"""Initialize the Flask app and its extensions."""

import json
import os

import firebase_admin
from firebase_admin import credentials, firestore
from flask import Flask, current_app, g, session
from werkzeug.middleware.proxy_fix import ProxyFix

from .core.constants import USERS_COLLECTION
from .extensions import cors, csrf


def _env_flag(name, default):
    """Read a boolean flag from the environment."""
    return (os.environ.get(name) or default).lower() in ["true", "1", "t"]


def _load_credentials(app):
    """Find Firebase credentials.

    Looks at ``FIREBASE_CREDENTIALS_JSON`` first, then a
    ``firebase_credentials.json`` file at the project root, then the
    application default credentials.

    Returns:
        A ``(credential, project_id)`` pair. The credential is None when
        nothing usable was found.
    """
    raw = os.environ.get("FIREBASE_CREDENTIALS_JSON")
    if raw:
        try:
            info = json.loads(raw)
            return credentials.Certificate(info), info.get("project_id")
        except ValueError as e:
            app.logger.error(f"FIREBASE_CREDENTIALS_JSON is not usable: {e}")

    key_file = os.path.join(
        os.path.dirname(os.path.dirname(__file__)), "firebase_credentials.json"
    )
    if os.path.exists(key_file):
        try:
            with open(key_file) as f:
                project_id = json.load(f).get("project_id")
            return credentials.Certificate(key_file), project_id
        except ValueError as e:
            app.logger.error(f"{key_file} is not usable: {e}")

    try:
        return (
            credentials.ApplicationDefault(),
            os.environ.get("FIREBASE_PROJECT_ID"),
        )
    except Exception as e:
        app.logger.error(f"No Firebase credentials found: {e}")
        return None, None


def _init_firebase(app):
    """Initialize the Firebase Admin SDK once per process."""
    if firebase_admin._apps:
        return
    cred, project_id = _load_credentials(app)
    if cred is None:
        return
    options = {"projectId": project_id} if project_id else None
    try:
        firebase_admin.initialize_app(cred, options)
    except ValueError:
        app.logger.info("Firebase app already initialized.")


def create_app(test_config=None):
    """Create and configure an instance of the Flask application."""
    app = Flask(__name__, instance_relative_config=True)

    # Load configuration
    app.config.from_mapping(
        SECRET_KEY=os.environ.get("SECRET_KEY") or "dev",
        FRONTEND_URL=os.environ.get("FRONTEND_URL"),
        CORS_ORIGINS=["http://localhost:5173", "http://localhost:3000"],
        SESSION_COOKIE_HTTPONLY=True,
        SESSION_COOKIE_SECURE=_env_flag("SESSION_COOKIE_SECURE", "false"),
        SESSION_COOKIE_SAMESITE=os.environ.get("SESSION_COOKIE_SAMESITE") or "Lax",
        PERMANENT_SESSION_LIFETIME=60 * 60 * 24,
        WTF_CSRF_ENABLED=_env_flag("WTF_CSRF_ENABLED", "true"),
        # The SPA is served from another origin, so over HTTPS its Referer
        # never matches this host.
        WTF_CSRF_SSL_STRICT=_env_flag("WTF_CSRF_SSL_STRICT", "false"),
    )

    if test_config:
        app.config.update(test_config)

    app.json.sort_keys = False

    # Initialize Firebase Admin SDK only if not in testing mode
    if not app.config.get("TESTING"):
        _init_firebase(app)

    origins = list(app.config["CORS_ORIGINS"])
    if app.config.get("FRONTEND_URL"):
        origins.append(app.config["FRONTEND_URL"])

    # Initialize extensions
    csrf.init_app(app)
    cors.init_app(app, origins=origins, supports_credentials=True)

    # Register blueprints
    from . import auth as auth_bp

    app.register_blueprint(auth_bp.bp)

    from . import events as events_bp

    app.register_blueprint(events_bp.bp)

    from . import user as user_bp

    app.register_blueprint(user_bp.bp)

    from . import error_handlers

    app.register_blueprint(error_handlers.error_handlers_bp)

    @app.before_request
    def load_logged_in_user():
        """If a user_id is in the session, load the user from Firestore into g."""
        from .user.models import UserSession

        user_id = session.get("user_id")
        g.user = None
        if user_id is None:
            return

        db = firestore.client()
        user_doc = db.collection(USERS_COLLECTION).document(user_id).get()
        if user_doc.exists:
            g.user = UserSession(user_doc.to_dict() or {}, uid=user_id)
        else:
            # User ID in session but no user in DB. Clear the session.
            session.clear()
            current_app.logger.warning(
                f"User {user_id} in session but not found in Firestore."
            )

    @app.route("/health")
    def health_check():
        """Perform a simple health check."""
        return {"status": "ok"}, 200

    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    return app
