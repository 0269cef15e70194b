"""
Migration Script: legacy visitor stats JSON to database
Imports the file-backed counter (data/visitors/stats.json) into the
daily_visit_stats and visit_sessions tables

Usage:
    python -m migrations.migrate_visitor_stats [path/to/stats.json]
"""

import os
import sys
import json
from datetime import datetime, time

from extensions import db
from models import DailyVisitStats, VisitSession, SESSION_ID_MAX_LENGTH

DEFAULT_STATS_FILE = os.path.join('data', 'visitors', 'stats.json')


def parse_date(date_str):
    """Parse date string to datetime object"""
    if not date_str or not isinstance(date_str, str):
        return None
    date_str = date_str.rstrip('Z')
    formats = [
        '%Y-%m-%dT%H:%M:%S.%f',
        '%Y-%m-%dT%H:%M:%S',
        '%Y-%m-%d %H:%M:%S',
        '%Y-%m-%d'
    ]
    for fmt in formats:
        try:
            return datetime.strptime(date_str, fmt)
        except ValueError:
            continue
    return None


def clean_session_ids(visitors):
    """Distinct, non-empty session ids in first-seen order"""
    seen = []
    for session_id in visitors or []:
        if not isinstance(session_id, str) or not session_id.strip():
            continue
        if len(session_id) > SESSION_ID_MAX_LENGTH or session_id in seen:
            continue
        seen.append(session_id)
    return seen


def import_legacy_stats(data):
    """Create one DailyVisitStats row (plus its sessions) per day in the file.

    Days already present in the database are left untouched. The session
    list in the file is authoritative for the unique count, and the visit
    count is raised to at least that number.

    Returns:
        dict: counts of imported, skipped and adjusted days
    """
    daily_stats = data.get('dailyStats') or {}
    last_updated = parse_date(data.get('lastUpdated'))
    latest_day = max(daily_stats) if daily_stats else None
    summary = {'imported': 0, 'skipped': 0, 'adjusted': 0}

    for day_key in sorted(daily_stats):
        day_data = daily_stats[day_key] or {}
        day_dt = parse_date(day_key)
        if day_dt is None:
            print(f"  [SKIP] {day_key}: not a date")
            summary['skipped'] += 1
            continue
        day = day_dt.date()

        if db.session.get(DailyVisitStats, day):
            print(f"  [SKIP] {day_key}: already in database")
            summary['skipped'] += 1
            continue

        session_ids = clean_session_ids(day_data.get('visitors'))
        unique = len(session_ids)
        visits = max(int(day_data.get('visits') or 0), unique)
        if unique != int(day_data.get('unique') or 0) or visits != int(day_data.get('visits') or 0):
            print(f"  [FIX] {day_key}: unique {day_data.get('unique')} -> {unique}, "
                  f"visits {day_data.get('visits')} -> {visits}")
            summary['adjusted'] += 1

        written_at = datetime.combine(day, time.max)
        if day_key == latest_day and last_updated:
            written_at = last_updated

        record = DailyVisitStats(
            date=day,
            total_visits=visits,
            unique_visitors=unique,
            created_at=datetime.combine(day, time.min),
            updated_at=written_at
        )
        db.session.add(record)
        for session_id in session_ids:
            db.session.add(VisitSession(
                date=day,
                session_id=session_id,
                created_at=datetime.combine(day, time.min)
            ))
        summary['imported'] += 1

    db.session.commit()

    file_total = data.get('totalVisits')
    day_total = sum(int((d or {}).get('visits') or 0) for d in daily_stats.values())
    if file_total is not None and file_total != day_total:
        print(f"  [WARN] file totalVisits {file_total} differs from the daily sum {day_total}; "
              f"totals are now derived from daily rows")

    return summary


def main():
    """Main migration function"""
    from app import create_app

    stats_file = sys.argv[1] if len(sys.argv) > 1 else DEFAULT_STATS_FILE

    print("=" * 60)
    print("Visitor Stats JSON to Database Migration")
    print("=" * 60)

    if not os.path.exists(stats_file):
        print(f"Error: {stats_file} not found!")
        return 1

    print(f"\nLoading data from {stats_file}...")
    with open(stats_file, 'r', encoding='utf-8') as f:
        data = json.load(f)

    app = create_app()
    with app.app_context():
        summary = import_legacy_stats(data)

    print("\n" + "=" * 60)
    print(f"Imported {summary['imported']} days, skipped {summary['skipped']}, "
          f"adjusted {summary['adjusted']}")
    print("=" * 60)
    return 0


if __name__ == '__main__':
    sys.exit(main())
