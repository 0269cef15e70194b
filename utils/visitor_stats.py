"""
Visitor Stats Module - Daily visit counters for the public CV page

A visit is recorded as one transaction of atomic statements: the day row
and the session claim are conditional inserts, and the counters are bumped
with server-side arithmetic. Concurrent visits on the same day therefore
compound rather than overwrite each other.
"""

from datetime import datetime
from flask import current_app
from sqlalchemy import update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from extensions import db
from models import DailyVisitStats, VisitSession, SESSION_ID_MAX_LENGTH
from .errors import ValidationError, StorageError


def utcnow():
    """Current time as naive UTC, the way timestamps are stored"""
    return datetime.utcnow()


def to_iso(value):
    if value is None:
        return None
    return value.isoformat() + 'Z'


def validate_session_id(session_id):
    """Return the session id unchanged or raise ValidationError"""
    if session_id is None:
        raise ValidationError('sessionId is required')
    if not isinstance(session_id, str):
        raise ValidationError('sessionId must be a string')
    if not session_id.strip():
        raise ValidationError('sessionId is required')
    if len(session_id) > SESSION_ID_MAX_LENGTH:
        raise ValidationError(f'sessionId must be at most {SESSION_ID_MAX_LENGTH} characters')
    return session_id


# Dialects with INSERT ... ON CONFLICT DO NOTHING
DIALECT_INSERTS = {
    'postgresql': pg_insert,
    'sqlite': sqlite_insert,
}


def _dialect_name():
    return db.session.get_bind().dialect.name


def _insert_if_absent(model, **values):
    """Insert a row unless it collides with a unique key.

    Returns True when the row was inserted.
    """
    dialect = _dialect_name()
    if dialect not in DIALECT_INSERTS:
        raise RuntimeError(f"Visitor counter does not support the '{dialect}' database")

    stmt = DIALECT_INSERTS[dialect](model).values(**values).on_conflict_do_nothing()
    return db.session.execute(stmt).rowcount == 1


def record_visit(session_id):
    """Record one page view for a browser session.

    Always adds one to today's total; adds one to today's unique count
    only the first time the session id is seen today.

    Returns:
        dict: the get_stats() payload plus 'success' and 'isNewVisitor'

    Raises:
        ValidationError: session_id missing, empty or too long
        StorageError: the database read or write failed (nothing persisted)
    """
    session_id = validate_session_id(session_id)
    now = utcnow()
    today = now.date()

    try:
        created = _insert_if_absent(
            DailyVisitStats,
            date=today,
            total_visits=0,
            unique_visitors=0,
            created_at=now,
            updated_at=now
        )
        if created:
            current_app.logger.info(f"Started visitor stats for {today.isoformat()}")

        is_new_visitor = _insert_if_absent(
            VisitSession,
            date=today,
            session_id=session_id,
            created_at=now
        )

        db.session.execute(
            update(DailyVisitStats)
            .where(DailyVisitStats.date == today)
            .values(
                total_visits=DailyVisitStats.total_visits + 1,
                unique_visitors=DailyVisitStats.unique_visitors + (1 if is_new_visitor else 0),
                updated_at=now
            )
            .execution_options(synchronize_session=False)
        )

        # Read back inside the transaction so a failed read undoes the visit
        stats = _collect_stats(today)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Error recording visit: {str(e)}")
        raise StorageError('Failed to record visit') from e

    current_app.logger.debug(
        f"Visit recorded for session {session_id[:8]}... (new={is_new_visitor})")

    stats['success'] = True
    stats['isNewVisitor'] = is_new_visitor
    return stats


def get_stats(today=None):
    """Aggregate all daily records.

    Returns totals over every day, today's counters (zero when no visit
    happened yet today), the per-day breakdown and the time of the most
    recent write.
    """
    if today is None:
        today = utcnow().date()

    try:
        return _collect_stats(today)
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Error reading visitor stats: {str(e)}")
        raise StorageError('Failed to get visitor stats') from e


def _collect_stats(today):
    # Counters are bumped with bulk UPDATEs, so refresh rows already in the session
    records = DailyVisitStats.query.populate_existing().order_by(DailyVisitStats.date).all()

    total_visits = 0
    unique_visitors = 0
    last_updated = None
    daily_stats = {}

    for record in records:
        daily_stats[record.date.isoformat()] = {
            'visits': record.total_visits,
            'unique': record.unique_visitors
        }
        total_visits += record.total_visits
        unique_visitors += record.unique_visitors
        if record.updated_at and (last_updated is None or record.updated_at > last_updated):
            last_updated = record.updated_at

    today_stats = daily_stats.get(today.isoformat(), {'visits': 0, 'unique': 0})

    return {
        'totalVisits': total_visits,
        'uniqueVisitors': unique_visitors,
        'todayVisits': today_stats['visits'],
        'todayUnique': today_stats['unique'],
        'dailyStats': daily_stats,
        'lastUpdated': to_iso(last_updated)
    }


__all__ = [
    'record_visit',
    'get_stats',
    'validate_session_id',
    'utcnow'
]
