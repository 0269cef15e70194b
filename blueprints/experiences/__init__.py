"""
Experiences Blueprint - Work experience records
Handles: Experiences with their achievements and technology lists
"""

from flask import Blueprint

experiences_bp = Blueprint('experiences', __name__, url_prefix='/api/experiences')

from . import routes
