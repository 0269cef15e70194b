"""Test configuration and fixtures."""

import pytest
from datetime import datetime, timedelta

from app import create_app
from extensions import db as _db
from models import Profile
import utils.security as security
import utils.visitor_stats as visitor_stats

VALID_TOKEN = 'valid-access-token'


class FrozenClock:
    """Stand-in for visitor_stats.utcnow that only moves when told to."""

    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def app():
    """Create application for testing (in-memory SQLite)."""
    app = create_app('testing')

    yield app

    with app.app_context():
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def client(app):
    """Test client for making requests."""
    return app.test_client()


@pytest.fixture
def ctx(app):
    """Application context for calling services and queries directly."""
    with app.app_context():
        yield app


@pytest.fixture
def profile(app):
    """The configured CV owner (PROFILE_ID 1), created directly in the database."""
    with app.app_context():
        owner = Profile(id=app.config['PROFILE_ID'], full_name='Jane Doe', title='Software Engineer')
        _db.session.add(owner)
        _db.session.commit()
        return owner.id


@pytest.fixture
def clock(monkeypatch):
    """Pin the visitor counter's notion of 'now' to 2024-05-01 09:30 UTC."""
    frozen = FrozenClock(datetime(2024, 5, 1, 9, 30))
    monkeypatch.setattr(visitor_stats, 'utcnow', frozen)
    return frozen


@pytest.fixture
def auth_headers(monkeypatch):
    """Accept VALID_TOKEN without calling the identity provider."""

    def fake_verify(token):
        if token == VALID_TOKEN:
            return {'id': 'owner-uuid', 'email': 'owner@example.com'}
        return None

    monkeypatch.setattr(security, 'verify_access_token', fake_verify)
    return {'Authorization': f'Bearer {VALID_TOKEN}'}
