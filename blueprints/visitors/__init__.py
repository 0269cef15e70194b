"""
Visitors Blueprint - Public visitor counter API
Handles: Recording page visits, reading daily/total visit statistics
"""

from flask import Blueprint

visitors_bp = Blueprint('visitors', __name__, url_prefix='/api/visitor-stats')

from . import routes
