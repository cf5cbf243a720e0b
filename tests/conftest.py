"""
Pytest configuration and fixtures for the Roots project
"""

import os

import pytest

from app import create_app
from roots_app.database import db as _db
from roots_app.services.genealogy_service import GenealogyService


class BaseTestConfig:
    """Test configuration; TEST_DATABASE_URL selects a PostgreSQL database, otherwise in-memory SQLite"""
    def __init__(self):
        # App configuration
        self.secret_key = 'test-secret-key'

        # Database configuration
        self.sqlalchemy_database_uri = os.getenv('TEST_DATABASE_URL') or 'sqlite:///:memory:'
        self.sqlalchemy_track_modifications = False

        # Account policy, small limits keep the throttle tests short
        self.login_max_attempts = 3
        self.login_cooldown_seconds = 900
        self.password_reset_ttl_seconds = 3600
        self.return_account_tokens = True


class FakeClock:
    """Callable epoch clock that only moves when told to"""

    def __init__(self, now: int = 1_700_000_000):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += seconds


@pytest.fixture(scope="session")
def app():
    """Create Flask app for testing - session scoped, tables are managed per test"""
    app = create_app(BaseTestConfig())
    app.config['TESTING'] = True
    return app


@pytest.fixture
def test_config():
    return BaseTestConfig()


@pytest.fixture
def db(app):
    """Fresh tables for every test, dropped afterwards"""
    with app.app_context():
        _db.create_all()
        try:
            yield _db
        finally:
            _db.session.remove()
            _db.drop_all()


@pytest.fixture
def client(app, db):
    """Create test client on top of fresh tables"""
    return app.test_client()


@pytest.fixture
def runner(app, db):
    """Create CLI test runner on top of fresh tables"""
    return app.test_cli_runner()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_individual(db):
    """Factory creating an Individual with a current name"""
    def _make_individual(first_name='Anna', last_name='Jansen', **fields):
        return GenealogyService().create_individual(
            fields, name={'first_name': first_name, 'last_name': last_name}
        )

    return _make_individual
