import logging

from flask import Flask
from flask_talisman import Talisman

from .config import Config
from .extensions import db, migrate, csrf
from .models.vote import Vote


def create_app(config_class=Config):
    app = Flask(__name__, static_folder='static')
    app.config.from_object(config_class)
    app.logger.setLevel(getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO))

    db.init_app(app)
    migrate.init_app(app, db)
    csrf.init_app(app)

    # Only our own scripts: vote.js talks to /api on the same origin
    csp = {
        'default-src': "'self'",
        'script-src': "'self'",
        'style-src': ["'self'", "'unsafe-inline'"],
        'img-src': ["'self'", 'data:'],
        'connect-src': "'self'",
        'font-src': "'self'",
        'object-src': "'none'",
        'base-uri': "'self'",
        'form-action': "'self'",
    }

    Talisman(
        app,
        content_security_policy=csp,
        force_https=app.config['FORCE_HTTPS'],
    )

    from .views.main import main_bp
    from .views.api import api_bp
    app.register_blueprint(main_bp)
    app.register_blueprint(api_bp)

    from .cli_commands import register_commands
    register_commands(app)

    with app.app_context():
        db.create_all()
    return app
