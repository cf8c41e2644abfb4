import logging
import os

from flask import Flask, abort, current_app, send_file, send_from_directory
from flask_swagger_ui import get_swaggerui_blueprint

from .config import config_by_name
from .extensions import db, migrate, jwt
from .data import ObjectStorage
from .application.sections import ReorderGate
from .api.v1 import v1_bp
from .errors import register_error_handlers
from .cli import register_commands


def create_app(config_name: str = "development", config_overrides: dict | None = None) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    if config_overrides:
        app.config.update(config_overrides)

    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app.logger.setLevel(app.config["LOG_LEVEL"])

    # -------------------------------------------------
    # Extensions
    # -------------------------------------------------
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    app.extensions["object_storage"] = ObjectStorage.from_config(app.config)
    # One in-flight section reorder per process
    app.extensions["reorder_gate"] = ReorderGate()

    # -------------------------------------------------
    # API Blueprints
    # -------------------------------------------------
    app.register_blueprint(v1_bp, url_prefix="/api/v1")
    register_error_handlers(app)
    register_commands(app)

    # -------------------------------------------------
    # Public object storage
    # -------------------------------------------------
    @app.route("/storage/<bucket>/<path:filename>", methods=["GET"], endpoint="storage_object")
    def serve_storage_object(bucket, filename):
        storage = current_app.extensions["object_storage"]
        if bucket not in storage.buckets:
            abort(404)

        return send_from_directory(
            os.path.abspath(storage.bucket_path(bucket)),
            filename,
        )

    # -------------------------------------------------
    # Serve OpenAPI YAML
    # -------------------------------------------------
    @app.route("/openapi/portfolio.yaml", methods=["GET"], endpoint="openapi_portfolio")
    def serve_openapi():
        spec_path = os.path.join(
            current_app.root_path,
            "api",
            "v1",
            "portfolio_openapi.yaml",
        )

        if not os.path.exists(spec_path):
            abort(404)

        return send_file(
            spec_path,
            mimetype="application/yaml",
            as_attachment=False,
        )

    # -------------------------------------------------
    # Swagger UI
    # -------------------------------------------------
    SWAGGER_URL = "/swagger"
    API_URL = "/openapi/portfolio.yaml"

    swaggerui_blueprint = get_swaggerui_blueprint(
        SWAGGER_URL,
        API_URL,
        config={
            "app_name": "Portfolio API",
            "deepLinking": True,
            "persistAuthorization": True,
        },
    )

    app.register_blueprint(swaggerui_blueprint, url_prefix=SWAGGER_URL)

    return app
