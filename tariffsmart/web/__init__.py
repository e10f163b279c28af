import logging

from flask import Flask
from pydantic import ValidationError

from tariffsmart.logging_utils import configure_logging
from tariffsmart.web.config import Config
from tariffsmart.web.db import db, init_db_command, seed_db_command
from tariffsmart.web.db import models  # noqa: F401  (register tables)
from tariffsmart.web.hooks import (
    add_headers,
    handle_error,
    handle_validation_error,
    load_logged_in_user,
)
from tariffsmart.web.views import (
    auth_views,
    catalog_views,
    country_views,
    feature_flag_views,
    learning_views,
    subscriber_views,
    tariff_views,
    user_views,
)

logger = logging.getLogger(__name__)


def create_app(config_overrides=None):
    app = Flask(__name__)
    app.url_map.strict_slashes = False
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    configure_logging(app)
    register_extensions(app)
    register_hooks(app)
    register_blueprints(app)

    if app.config.get("AUTO_SEED"):
        seed_on_startup(app)

    return app


def register_extensions(app):
    db.init_app(app)
    app.cli.add_command(init_db_command)
    app.cli.add_command(seed_db_command)


def register_blueprints(app):
    app.register_blueprint(auth_views.bp)
    app.register_blueprint(country_views.bp)
    app.register_blueprint(catalog_views.bp)
    app.register_blueprint(feature_flag_views.bp)
    app.register_blueprint(tariff_views.bp)
    app.register_blueprint(user_views.bp)
    app.register_blueprint(subscriber_views.bp)
    app.register_blueprint(learning_views.bp)


def register_hooks(app):
    app.before_request(load_logged_in_user)
    app.after_request(add_headers)
    app.register_error_handler(ValidationError, handle_validation_error)
    app.register_error_handler(Exception, handle_error)


def seed_on_startup(app):
    from tariffsmart.web.db.seed import seed_reference_data

    with app.app_context():
        db.create_all()
        counts = seed_reference_data(if_empty=True)
        logger.info("Startup seed: %s", counts)
