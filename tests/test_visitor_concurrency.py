"""Concurrent visits against a file-backed SQLite database."""

import threading

import pytest

from app import create_app
from extensions import db
from models import VisitSession
from utils.visitor_stats import get_stats, record_visit

THREADS = 8
VISITS_PER_THREAD = 10
SESSIONS_PER_THREAD = 5


@pytest.fixture
def file_app(tmp_path):
    """App on a real database file so every thread gets its own connection."""
    app = create_app('testing', {
        'SQLALCHEMY_DATABASE_URI': f"sqlite:///{tmp_path / 'visits.db'}",
        'SQLALCHEMY_ENGINE_OPTIONS': {'connect_args': {'timeout': 30}},
    })

    yield app

    with app.app_context():
        db.session.remove()
        db.engine.dispose()


def test_concurrent_visits_compound(file_app, clock):
    errors = []
    new_visitors = []
    start = threading.Barrier(THREADS)

    def visitor(worker):
        start.wait()
        for i in range(VISITS_PER_THREAD):
            session_id = f'worker{worker}-session{i % SESSIONS_PER_THREAD}'
            with file_app.app_context():
                try:
                    result = record_visit(session_id)
                except Exception as e:
                    errors.append(e)
                    continue
            if result['isNewVisitor']:
                new_visitors.append(session_id)

    threads = [threading.Thread(target=visitor, args=(n,)) for n in range(THREADS)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=120)

    assert errors == []
    assert sorted(new_visitors) == sorted(set(new_visitors))
    assert len(new_visitors) == THREADS * SESSIONS_PER_THREAD

    with file_app.app_context():
        stats = get_stats()
        assert VisitSession.query.count() == THREADS * SESSIONS_PER_THREAD

    assert stats['totalVisits'] == THREADS * VISITS_PER_THREAD
    assert stats['uniqueVisitors'] == THREADS * SESSIONS_PER_THREAD
    assert stats['todayVisits'] == THREADS * VISITS_PER_THREAD
    assert stats['dailyStats'] == {
        '2024-05-01': {
            'visits': THREADS * VISITS_PER_THREAD,
            'unique': THREADS * SESSIONS_PER_THREAD,
        }
    }


def test_concurrent_repeat_of_one_session_counts_once(file_app, clock):
    errors = []
    new_flags = []
    start = threading.Barrier(THREADS)

    def visitor():
        start.wait()
        with file_app.app_context():
            try:
                new_flags.append(record_visit('shared-session')['isNewVisitor'])
            except Exception as e:
                errors.append(e)

    threads = [threading.Thread(target=visitor) for _ in range(THREADS)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=120)

    assert errors == []
    assert new_flags.count(True) == 1

    with file_app.app_context():
        stats = get_stats()
    assert stats['totalVisits'] == THREADS
    assert stats['uniqueVisitors'] == 1
