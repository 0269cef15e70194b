"""
Portfolio Blueprint - Public résumé views
Handles: Singleton profile lookup, aggregated CV document
"""

from flask import Blueprint

portfolio_bp = Blueprint('portfolio', __name__, url_prefix='/api')

from . import routes
