"""
Profiles Blueprint - CV owner profile records
Handles: Public profile reads, authenticated create/update/delete
"""

from flask import Blueprint

profiles_bp = Blueprint('profiles', __name__, url_prefix='/api/profiles')

from . import routes
