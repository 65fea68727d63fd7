"""Initialize the Flask app and its extensions."""

import json
import os

import firebase_admin
from firebase_admin import credentials
from flask import Flask, current_app, g, session
from werkzeug.middleware.proxy_fix import ProxyFix

from .core.constants import GROUP_ORDER_REFRESH_SECONDS
from .errors import AppError
from .extensions import csrf


def _load_firebase_credentials(app):
    """Find Firebase credentials: env JSON, then a local file, then ADC."""
    cred_json = os.environ.get("FIREBASE_CREDENTIALS_JSON")
    if cred_json:
        try:
            cred_info = json.loads(cred_json)
            return credentials.Certificate(cred_info), cred_info.get("project_id")
        except (json.JSONDecodeError, ValueError) as e:
            app.logger.error(f"Error parsing FIREBASE_CREDENTIALS_JSON: {e}")

    cred_path = os.path.join(
        os.path.dirname(os.path.dirname(__file__)), "firebase_credentials.json"
    )
    if os.path.exists(cred_path):
        try:
            with open(cred_path, "r") as f:
                cred_info = json.load(f)
            return credentials.Certificate(cred_path), cred_info.get("project_id")
        except (json.JSONDecodeError, ValueError) as e:
            app.logger.error(f"Error loading credentials from file: {e}")

    try:
        return credentials.ApplicationDefault(), os.environ.get("FIREBASE_PROJECT_ID")
    except ValueError as e:
        app.logger.error(
            f"Could not find any valid credentials (env, file, or default): {e}"
        )
    return None, None


def create_app(test_config=None):
    """Create and configure an instance of the Flask application."""
    app = Flask(__name__, instance_relative_config=True)

    # Load configuration
    app.config.from_mapping(
        SECRET_KEY=os.environ.get("SECRET_KEY") or "dev",
        GROUP_ORDER_REFRESH_SECONDS=int(
            os.environ.get("GROUP_ORDER_REFRESH_SECONDS")
            or GROUP_ORDER_REFRESH_SECONDS
        ),
        WTF_CSRF_HEADERS=["X-CSRFToken", "X-CSRF-Token"],
    )

    if test_config:
        app.config.update(test_config)

    # Initialize Firebase Admin SDK only if not in testing mode
    if not app.config.get("TESTING"):
        cred, project_id = _load_firebase_credentials(app)
        if cred and not firebase_admin._apps:
            try:
                firebase_options = {}
                if project_id:
                    firebase_options["projectId"] = project_id
                firebase_admin.initialize_app(cred, firebase_options)
            except ValueError:
                # This can happen if the app is already initialized, which is fine.
                app.logger.info("Firebase app already initialized.")

    # Initialize extensions
    csrf.init_app(app)

    # Register blueprints
    from . import auth as auth_bp

    app.register_blueprint(auth_bp.bp)

    from . import user as user_bp

    app.register_blueprint(user_bp.bp)

    from . import group_order as group_order_bp

    app.register_blueprint(group_order_bp.bp)

    from . import inventory as inventory_bp

    app.register_blueprint(inventory_bp.bp)

    from . import order as order_bp

    app.register_blueprint(order_bp.bp)

    from . import error_handlers

    app.register_blueprint(error_handlers.error_handlers_bp)

    from .cli import group_orders_cli

    app.register_blueprint(group_orders_cli)

    @app.before_request
    def load_logged_in_user():
        """If a user_id is in the session, load the user's profile into g."""
        from .core.store import get_store
        from .user.services import UserService

        user_id = session.get("user_id")
        g.user = None
        if user_id is None:
            return

        try:
            profile = UserService.get_user_profile(get_store(), user_id)
        except AppError as e:
            current_app.logger.error(f"Error loading user from session: {e}")
            session.clear()  # Clear session on error to be safe
            return
        # A user who has signed in but not yet chosen a role has no profile.
        g.user = profile or {"uid": user_id}
        g.user["uid"] = user_id

    @app.route("/health")
    def health_check():
        """Perform a simple health check."""
        return "OK", 200

    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    return app
