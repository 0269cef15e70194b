"""
Skills Blueprint - Technical skill categories
"""

from flask import Blueprint

skills_bp = Blueprint('skills', __name__, url_prefix='/api/skills')

from . import routes
