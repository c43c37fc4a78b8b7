# backend/medibill/__init__.py
import atexit

from flask import Flask

from .config import Config
from .extensions import db, migrate


def create_app(test_config=None, authenticator=None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)

    # Service loggers live under "medibill" and share the app logger's handler
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)

    # Import models so Alembic can discover metadata reliably
    from . import models  # noqa: F401

    from .navigation import NAVIGATION, load_navigation
    from .services.auth_service import HttpAuthenticator
    from .services.session_service import SessionStore
    from .services.session_storage import build_storage

    if authenticator is None:
        authenticator = HttpAuthenticator(
            app.config["AUTH_API_BASE_URL"],
            timeout=app.config["AUTH_API_TIMEOUT"],
        )
        atexit.register(authenticator.close)

    nav_config = app.config.get("NAVIGATION_CONFIG")
    navigation = NAVIGATION if nav_config is None else load_navigation(nav_config)

    session_store = SessionStore(
        build_storage(app.config),
        authenticator=authenticator,
        storage_key=app.config["SESSION_STORAGE_KEY"],
    )
    app.extensions["medibill"] = {
        "session_store": session_store,
        "navigation": navigation,
    }

    # Restore the principal persisted by the previous run
    with app.app_context():
        db.create_all()
        session_store.hydrate()

    # Register blueprints
    from .routes.auth import auth_bp
    from .routes.shell import shell_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(shell_bp)

    from .context import register_template_helpers
    register_template_helpers(app)

    # Register CLI commands
    from .cli import register_commands
    register_commands(app)

    return app
