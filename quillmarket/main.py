import logging
import os

from flask import Flask
from flask_cors import CORS
from marshmallow import ValidationError

from .config import CONFIGS
from .extensions import db, migrate, jwt, ma, bcrypt


def create_app(config_name=None):
    app = Flask(__name__, instance_relative_config=False)
    env = config_name or os.getenv("FLASK_ENV", "development")
    app.config.from_object(CONFIGS.get(env, CONFIGS["development"]))
    missing = [k for k in app.config.get("REQUIRED_SETTINGS", ()) if not app.config.get(k)]
    if missing:
        raise RuntimeError(f"Missing required settings for {env}: {', '.join(missing)}")

    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    app.logger.setLevel(app.config["LOG_LEVEL"])

    # initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    ma.init_app(app)
    origins = [o.strip() for o in app.config["CORS_ORIGINS"].split(",")]
    CORS(
        app,
        resources={r"/api/*": {"origins": origins}},
        supports_credentials=True,
        allow_headers=["Content-Type", "Authorization", "X-CSRF-TOKEN"],
        methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    )
    bcrypt.init_app(app)

    # register blueprints
    from quillmarket.routes.auth_routes import bp as auth_bp
    from quillmarket.routes.job_routes import bp as job_bp
    from quillmarket.routes.bid_routes import bp as bid_bp
    from quillmarket.routes.order_routes import bp as order_bp
    from quillmarket.routes.payment_routes import bp as payment_bp
    from quillmarket.routes.admin_routes import bp as admin_bp
    from quillmarket.routes.stats_routes import bp as stats_bp
    from quillmarket.routes.client_routes import bp as client_bp
    from quillmarket.routes.writer_routes import bp as writer_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(job_bp)
    app.register_blueprint(bid_bp)
    app.register_blueprint(order_bp)
    app.register_blueprint(payment_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(stats_bp)
    app.register_blueprint(client_bp)
    app.register_blueprint(writer_bp)

    register_session_loaders()
    register_error_handlers(app)

    if app.config.get("CREATE_TABLES_ON_STARTUP"):
        import quillmarket.models  # noqa: F401
        with app.app_context():
            db.create_all()

    return app


def register_session_loaders():
    from quillmarket.models.user import User
    from quillmarket.utils.response_formatter import error_response

    @jwt.user_lookup_loader
    def load_user(_jwt_header, jwt_data):
        return db.session.get(User, jwt_data["sub"])

    @jwt.user_lookup_error_loader
    def unknown_user(_jwt_header, _jwt_data):
        return error_response("UNAUTHORIZED", "User no longer exists", status=401)

    @jwt.unauthorized_loader
    def missing_token(reason):
        return error_response("UNAUTHORIZED", reason, status=401)

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return error_response("UNAUTHORIZED", reason, status=401)

    @jwt.expired_token_loader
    def expired_token(_jwt_header, _jwt_data):
        return error_response("UNAUTHORIZED", "Session expired", status=401)


def register_error_handlers(app):
    # error handlers to match required error format
    from quillmarket.utils.exceptions import ServiceError
    from quillmarket.utils.response_formatter import error_response, validation_issues

    @app.errorhandler(ServiceError)
    def service_error(e):
        return error_response(e.code, e.message, e.details, status=e.status)

    @app.errorhandler(ValidationError)
    def validation_error(e):
        return error_response(
            "VALIDATION_ERROR",
            "Validation error",
            {"issues": validation_issues(e.messages)},
            status=422,
        )

    @app.errorhandler(400)
    def bad_request(e):
        return error_response("BAD_REQUEST", str(e), status=400)

    @app.errorhandler(401)
    def unauthorized(e):
        return error_response("UNAUTHORIZED", str(e), status=401)

    @app.errorhandler(404)
    def not_found(e):
        return error_response("NOT_FOUND", "Resource not found", status=404)

    @app.errorhandler(405)
    def method_not_allowed(e):
        return error_response("METHOD_NOT_ALLOWED", str(e), status=405)

    @app.errorhandler(500)
    def server_error(e):
        original = getattr(e, "original_exception", None) or e
        app.logger.error("Unhandled error: %s", original, exc_info=original)
        return error_response("SERVER_ERROR", "Internal server error", status=500)
