import os
import sys
import pytest

# Ensure the backend root (containing the `poolhall` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from poolhall import create_app, db
from config import Config


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    TABLE_COUNT = 6
    TABLE_LOCKING = 'mutex'
    STRICT_TRANSITIONS = False
    ENDGAME_WINNER_POLICY = 'legacy'
    CHECK_DB_ON_STARTUP = False


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import poolhall.models  # noqa: F401
        from poolhall.services.tables import provision_tables
        db.create_all()
        provision_tables(application.config['TABLE_COUNT'])
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def strict(flask_app):
    flask_app.config['STRICT_TRANSITIONS'] = True
    return flask_app
