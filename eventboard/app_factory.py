# eventboard/app_factory.py
import click
from flask import Flask, session
from flask_login import LoginManager
from sqlalchemy.exc import OperationalError
from eventboard.init_db import db
from eventboard.errors import NotAuthenticated, register_error_handlers
from eventboard.logging_config import setup_logging
from eventboard.mailer import BrevoMailer, UnconfiguredMailer
from eventboard.authentication.models import User  # noqa: F401  (registers the table)
from eventboard.authentication.sessions import SessionStore, SESSION_KEY
from eventboard.authentication.views import Authenticator, create_admin_users
from eventboard.events.models import Event  # noqa: F401  (registers the table)


def create_app(config_class='eventboard.config.Config', mailer=None, session_store=None, authenticator=None):
    app = Flask(__name__)
    app.config.from_object(config_class)

    logger = setup_logging(app.config.get('LOG_TIMEZONE'))

    db.init_app(app)

    if mailer is None:
        mailer = BrevoMailer.from_config_file(app.config['EMAIL_CONFIG_PATH'])
        if mailer is None:
            logger.warning("Email configuration missing; password reset emails will fail.")
            mailer = UnconfiguredMailer()

    app.extensions['mailer'] = mailer
    app.extensions['session_store'] = session_store or SessionStore(max_age=app.config['PERMANENT_SESSION_LIFETIME'])
    app.extensions['authenticator'] = authenticator or Authenticator()

    login_manager = LoginManager()
    login_manager.init_app(app)

    @login_manager.user_loader
    def load_user(user_id):
        # The signed cookie alone is not enough; the server-side session must still exist
        user = app.extensions['session_store'].lookup(session.get(SESSION_KEY))
        if user is None or str(user.id) != str(user_id):
            return None
        return user

    @login_manager.unauthorized_handler
    def unauthorized():
        raise NotAuthenticated()

    register_error_handlers(app)

    # Import and register blueprints
    from eventboard.authentication.routes import auth_bp as auth_blueprint
    app.register_blueprint(auth_blueprint, url_prefix='/api/auth')

    from eventboard.events.routes import events_bp as events_blueprint
    app.register_blueprint(events_blueprint, url_prefix='/api/events')

    @app.route('/')
    def index():
        return 'Hello World!'

    @app.cli.command('init-db')
    def init_db_command():
        """Create all database tables."""
        db.create_all()
        click.echo('Initialized the database.')

    @app.cli.command('seed-admins')
    def seed_admins_command():
        """Create admin accounts listed in the admin users JSON file."""
        create_admin_users(app.config['ADMIN_USERS_PATH'])
        click.echo('Admin users seeded.')

    with app.app_context():
        try:
            db.create_all()
            create_admin_users(app.config['ADMIN_USERS_PATH'])
        except OperationalError as e:
            app.logger.error(f"OperationalError during database initialization: {e}")

    return app
