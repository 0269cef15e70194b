"""
Visitor Routes - Page view counter used by the CV page widget
"""

from flask import request, jsonify
from utils.visitor_stats import record_visit, get_stats
from . import visitors_bp


@visitors_bp.route('', methods=['GET'])
def visitor_stats():
    """Current totals, today's counters and the per-day breakdown"""
    return jsonify(get_stats())


@visitors_bp.route('', methods=['POST'])
def register_visit():
    """Record a visit for the browser session in the body ({"sessionId": ...})"""
    body = request.get_json(silent=True)
    session_id = body.get('sessionId') if isinstance(body, dict) else None
    return jsonify(record_visit(session_id))
