from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_cors import CORS
from flask_migrate import Migrate
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException
import click
from config import Config

db = SQLAlchemy()
login_manager = LoginManager()
migrate = Migrate()


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    db.init_app(flask_app)
    login_manager.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=flask_app.config.get('CORS_ORIGINS', '*'))

    from poolhall.services.tables.locking import TableLocks
    flask_app.extensions['table_locks'] = TableLocks()

    from poolhall.main import main
    flask_app.register_blueprint(main)

    from poolhall.api.tables import tables
    # Same paths the scoreboard clients already call
    flask_app.register_blueprint(tables, url_prefix='/api')

    _register_error_handlers(flask_app)

    from poolhall.models import User

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and provisions the table inventory."""
        from poolhall.services.tables import provision_tables
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            added = provision_tables(flask_app.config['TABLE_COUNT'])
            print(f'Database has been reset with {added} tables!')

    @click.command('provision-tables')
    @click.option('--count', type=int, default=None, help='Number of tables (defaults to TABLE_COUNT).')
    def provision_tables_command(count):
        """Adds any missing tables up to the configured inventory."""
        from poolhall.services.tables import provision_tables
        with flask_app.app_context():
            added = provision_tables(count or flask_app.config['TABLE_COUNT'])
            print(f'Provisioned {added} new tables.')

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(provision_tables_command)

    if flask_app.config.get('CHECK_DB_ON_STARTUP'):
        _check_database(flask_app)

    return flask_app


def _check_database(flask_app):
    with flask_app.app_context():
        try:
            db.session.execute(text('SELECT 1'))
            flask_app.logger.info('[startup] database connection ok')
        except SQLAlchemyError as exc:
            flask_app.logger.error(f'[startup] database connection failed: {exc}')
        finally:
            db.session.remove()


def _register_error_handlers(flask_app):
    from poolhall.errors import ScoreboardError

    @flask_app.errorhandler(ScoreboardError)
    def handle_scoreboard_error(exc):
        return jsonify(exc.to_dict()), exc.status_code

    @flask_app.errorhandler(HTTPException)
    def handle_http_error(exc):
        message = 'Requested API not found.' if exc.code == 404 else exc.description
        return jsonify({'success': False, 'error': exc.name.lower().replace(' ', '_'), 'message': message}), exc.code

    @flask_app.errorhandler(Exception)
    def handle_unexpected(exc):
        flask_app.logger.exception(f'[server] unhandled error: {exc}')
        return jsonify({'success': False, 'error': 'server_error', 'message': 'Internal server error.'}), 500
