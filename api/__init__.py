from flask import Flask
from flasgger import Swagger
from flask_cors import CORS
import logging

from .config import DEV_JWT_SECRET, get_config
from .errors import register_error_handlers
from .fileserver import FileserverMetrics
from models import storage
from models.repositories import SQLRefreshTokenRepository, SQLUserRepository
from services.refresh_tokens import RefreshTokenStore
from services.sessions import AuthSettings, SessionCoordinator

# Minimal Swagger config: exposes /swagger.json and UI at /apidocs
SWAGGER_TEMPLATE = {
    "swagger": "2.0",
    "info": {
        "title": "Chirpy API",
        "version": "1.0.0",
        "description": "Users, chirps, sessions and the Polka upgrade webhook.",
    },
    "basePath": "/",
    "schemes": ["http"],
    "securityDefinitions": {
        "Bearer": {
            "type": "apiKey",
            "name": "Authorization",
            "in": "header",
            "description": "Enter the token with the `Bearer ` prefix, e.g. \"Bearer abcde12345\"."
        },
        "ApiKey": {
            "type": "apiKey",
            "name": "Authorization",
            "in": "header",
            "description": "Polka webhook key with the `ApiKey ` prefix."
        }
    }
}

SWAGGER_CONFIG = {
    "headers": [],
    "specs": [
        {
            "endpoint": "apispec_1",
            "route": "/swagger.json",
            "rule_filter": lambda rule: True,   # include all endpoints
            "model_filter": lambda tag: True,   # include all models
        }
    ],
    "static_url_path": "/flasgger_static",
    "swagger_ui": True,
    "specs_route": "/apidocs/",
}


def create_app(config_name: str | None = None) -> Flask:
    """
    Application factory: creates and configures the Flask app.
    Auth settings, the session coordinator and the hit counter are built
    here once and hung on app.extensions; handlers read them from there.
    """
    app = Flask(__name__)

    # Load configuration (reads .env via get_config)
    app.config.from_object(get_config(config_name))

    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not app.debug and not app.testing and app.config["JWT_SECRET"] == DEV_JWT_SECRET:
        raise RuntimeError("JWT_SECRET must be set outside development")

    # Cross-Origin Resource Sharing: enable for dev, configurable for prod
    CORS(app, resources={r"/*": {"origins": app.config.get("CORS_ORIGINS", "*")}})

    # Swagger UI and JSON
    Swagger(app, template=SWAGGER_TEMPLATE, config=SWAGGER_CONFIG)

    # Register global error handlers that return the uniform error envelope
    register_error_handlers(app)

    storage.reload(app.config["DATABASE_URL"], echo=app.config.get("SQL_ECHO", False))

    settings = AuthSettings.from_config(app.config)
    refresh_tokens = RefreshTokenStore(SQLRefreshTokenRepository(storage), ttl=settings.refresh_token_ttl)
    app.extensions["sessions"] = SessionCoordinator(settings, SQLUserRepository(storage), refresh_tokens)
    app.extensions["fileserver_metrics"] = FileserverMetrics()

    from .health import bp as health_bp
    from .users import bp as users_bp
    from .auth import bp as auth_bp
    from .chirps import bp as chirps_bp
    from .polka import bp as polka_bp
    from .admin import bp as admin_bp
    from .fileserver import bp as fileserver_bp

    app.register_blueprint(health_bp, url_prefix="/api")
    app.register_blueprint(users_bp, url_prefix="/api")
    app.register_blueprint(auth_bp, url_prefix="/api")
    app.register_blueprint(chirps_bp, url_prefix="/api")
    app.register_blueprint(polka_bp, url_prefix="/api")
    app.register_blueprint(admin_bp, url_prefix="/admin")
    app.register_blueprint(fileserver_bp, url_prefix="/app")

    # Ensure the DB session is removed at the end of each request/app context
    @app.teardown_appcontext
    def remove_session(exception=None):
        # calls scoped_session.remove(), preventing connection leaks
        storage.close()

    @app.route("/")
    def root():
        return {
            "message": "Welcome to Chirpy",
            "docs": "/apidocs/",
            "health": "/api/healthz",
        }, 200

    return app
