import logging

from flask import Flask, jsonify
from pymysql import connect
from sqlalchemy.engine import make_url

from config import Config
from .extensions import cors, db, migrate, jwt, bcrypt
from .models import *  # noqa: F401,F403 registers the tables with SQLAlchemy
from .routes.auth_routes import auth_bp
from .routes.recruiter_routes import recruiter_bp
from .routes.applicant_routes import applicant_bp
from .routes.analysis_routes import analysis_bp
from .services.errors import CVisionError
from cvision.database.seed.seed_all import seed_all

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    # Allow CORS from the web front-end
    cors.init_app(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}})

    if not app.config.get("TESTING"):
        create_database_if_not_exists(app.config["SQLALCHEMY_DATABASE_URI"])

    # extensions initialization
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    bcrypt.init_app(app)

    app.register_blueprint(auth_bp)
    app.register_blueprint(recruiter_bp)
    app.register_blueprint(applicant_bp)
    app.register_blueprint(analysis_bp)

    register_error_handlers(app)

    app.cli.add_command(seed_all)

    return app


def configure_logging(level_name):
    level = getattr(logging, str(level_name).upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(level)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        root.addHandler(handler)


def register_error_handlers(app):
    @app.errorhandler(CVisionError)
    def handle_cvision_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(500)
    def handle_internal_error(error):
        db.session.rollback()
        logger.error("Unhandled error: %s", getattr(error, "original_exception", error))
        return jsonify({"error": "Internal server error"}), 500


def create_database_if_not_exists(database_uri):
    url = make_url(database_uri)
    if not url.drivername.startswith("mysql"):
        return

    logger.info("Ensuring database '%s' exists on %s:%s", url.database, url.host, url.port or 3306)

    conn = connect(
        host=url.host,
        port=url.port or 3306,
        user=url.username,
        password=url.password or ""
    )
    try:
        with conn.cursor() as cursor:
            cursor.execute(f"CREATE DATABASE IF NOT EXISTS `{url.database}`")
        conn.commit()
    finally:
        conn.close()
