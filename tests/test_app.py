"""Application factory: startup checks, error handlers and response headers."""

import pytest

from app import create_app
from extensions import db
from models import Profile


def test_health(client):
    resp = client.get('/health')
    assert resp.status_code == 200
    assert resp.get_json()['status'] == 'ok'


def test_security_headers(client):
    resp = client.get('/health')
    assert resp.headers['X-Content-Type-Options'] == 'nosniff'
    assert resp.headers['X-Frame-Options'] == 'DENY'
    assert 'max-age' in resp.headers['Strict-Transport-Security']


def test_unknown_route_is_json_404(client):
    resp = client.get('/api/nothing-here')
    assert resp.status_code == 404
    assert 'error' in resp.get_json()


def test_wrong_method_is_json_405(client):
    resp = client.delete('/api/visitor-stats')
    assert resp.status_code == 405
    assert 'error' in resp.get_json()


def test_missing_profile_is_fatal_when_required(tmp_path):
    db_url = f"sqlite:///{tmp_path / 'cv.db'}"
    with pytest.raises(RuntimeError, match='CV profile 1 not found'):
        create_app('testing', {'SQLALCHEMY_DATABASE_URI': db_url, 'PROFILE_REQUIRED': True})


def test_existing_profile_passes_check(tmp_path):
    db_url = f"sqlite:///{tmp_path / 'cv.db'}"
    app = create_app('testing', {'SQLALCHEMY_DATABASE_URI': db_url})
    with app.app_context():
        db.session.add(Profile(full_name='Jane Doe'))
        db.session.commit()

    app = create_app('testing', {'SQLALCHEMY_DATABASE_URI': db_url, 'PROFILE_REQUIRED': True})
    with app.app_context():
        assert db.session.get(Profile, app.config['PROFILE_ID']).full_name == 'Jane Doe'
        db.session.remove()
        db.engine.dispose()

