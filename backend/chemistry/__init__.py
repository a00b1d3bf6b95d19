import os
from flask import Flask, abort, send_file, current_app
from flask_swagger_ui import get_swaggerui_blueprint
from .config import config_by_name
from . import models  # noqa: F401
from .extensions import db, migrate, jwt
from .api.v1 import v1_bp
from .middleware.viewer_middleware import viewer_middleware
from .errors import register_error_handlers
from .commands import register_commands

OPENAPI_URL = "/openapi/cms.yaml"
SWAGGER_URL = "/swagger"


def create_app(config_name: str = "development", **overrides) -> Flask:
    """Build the CMS API; ``overrides`` win over the named config class."""
    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.config.update(overrides)

    # -------------------------------------------------
    # Extensions
    # -------------------------------------------------
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    # -------------------------------------------------
    # Viewer, routes, errors, CLI
    # -------------------------------------------------
    viewer_middleware(app)
    app.register_blueprint(v1_bp, url_prefix="/api/v1")
    register_error_handlers(app)
    register_commands(app)

    register_docs(app)

    app.logger.info("Chemistry CMS started with %s config", config_name)
    return app


def register_docs(app):
    """OpenAPI document plus a Swagger UI pointed at it."""

    @app.route(OPENAPI_URL, methods=["GET"], endpoint="openapi_cms")
    def serve_openapi():
        document = os.path.join(current_app.root_path, "api", "v1", "cms_openapi.yaml")
        if not os.path.exists(document):
            abort(404, description="cms_openapi.yaml not found")

        return send_file(document, mimetype="application/yaml")

    app.register_blueprint(
        get_swaggerui_blueprint(
            SWAGGER_URL,
            OPENAPI_URL,
            config={
                "app_name": "Chemistry CMS API",
                "deepLinking": True,
                "persistAuthorization": True,
            },
        ),
        url_prefix=SWAGGER_URL,
    )
