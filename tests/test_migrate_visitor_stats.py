"""Import of the legacy file-backed visitor stats."""

import json
from datetime import date, datetime

from extensions import db
from migrations import migrate_visitor_stats
from migrations.migrate_visitor_stats import clean_session_ids, import_legacy_stats
from models import DailyVisitStats, VisitSession
from utils.visitor_stats import get_stats

LEGACY = {
    'totalVisits': 6,
    'uniqueVisitors': 4,
    'dailyStats': {
        '2024-04-29': {'visits': 4, 'unique': 2, 'visitors': ['a', 'b', 'a']},
        '2024-04-30': {'visits': 2, 'unique': 2, 'visitors': ['c', 'd']},
    },
    'lastUpdated': '2024-04-30T18:12:45.120Z',
}


def test_clean_session_ids():
    assert clean_session_ids(['a', 'b', 'a', '', '  ', 7, None, 'x' * 200, 'c']) == ['a', 'b', 'c']
    assert clean_session_ids(None) == []


def test_import_creates_rows(ctx, clock):
    summary = import_legacy_stats(LEGACY)

    assert summary == {'imported': 2, 'skipped': 0, 'adjusted': 0}
    first = db.session.get(DailyVisitStats, date(2024, 4, 29))
    assert (first.total_visits, first.unique_visitors) == (4, 2)
    assert VisitSession.query.filter_by(date=date(2024, 4, 30)).count() == 2

    stats = get_stats()
    assert stats['totalVisits'] == 6
    assert stats['uniqueVisitors'] == 4
    assert stats['dailyStats']['2024-04-29'] == {'visits': 4, 'unique': 2}
    assert stats['lastUpdated'] == '2024-04-30T18:12:45.120000Z'


def test_imported_sessions_dedupe_later_visits(ctx, clock):
    import_legacy_stats(LEGACY)
    clock.now = datetime(2024, 4, 30, 20, 0)

    from utils.visitor_stats import record_visit
    result = record_visit('c')

    assert result['isNewVisitor'] is False
    assert result['dailyStats']['2024-04-30'] == {'visits': 3, 'unique': 2}


def test_existing_days_are_skipped(ctx):
    import_legacy_stats(LEGACY)
    summary = import_legacy_stats(LEGACY)

    assert summary == {'imported': 0, 'skipped': 2, 'adjusted': 0}
    assert DailyVisitStats.query.count() == 2


def test_inconsistent_days_are_adjusted(ctx):
    data = {
        'dailyStats': {
            '2024-04-01': {'visits': 1, 'unique': 5, 'visitors': ['a', 'b', 'c']},
            'yesterday': {'visits': 3, 'unique': 1, 'visitors': ['z']},
        }
    }

    summary = import_legacy_stats(data)

    assert summary == {'imported': 1, 'skipped': 1, 'adjusted': 1}
    record = db.session.get(DailyVisitStats, date(2024, 4, 1))
    assert (record.total_visits, record.unique_visitors) == (3, 3)


def test_main_reads_file(app, tmp_path, monkeypatch):
    stats_file = tmp_path / 'stats.json'
    stats_file.write_text(json.dumps(LEGACY), encoding='utf-8')

    monkeypatch.setattr(migrate_visitor_stats.sys, 'argv', ['migrate', str(stats_file)])
    monkeypatch.setattr('app.create_app', lambda *args, **kwargs: app)

    assert migrate_visitor_stats.main() == 0
    with app.app_context():
        assert DailyVisitStats.query.count() == 2


def test_main_missing_file(tmp_path, monkeypatch):
    monkeypatch.setattr(migrate_visitor_stats.sys, 'argv', ['migrate', str(tmp_path / 'nope.json')])
    assert migrate_visitor_stats.main() == 1
