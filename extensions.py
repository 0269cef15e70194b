"""
Extensions Module - Centralized initialization of Flask extensions
Decouples extensions from the app factory to avoid circular imports
and enable better testing.
"""

from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager

# Initialize extensions without binding to app
db = SQLAlchemy()
login_manager = LoginManager()
# Bearer tokens only, nothing is kept in the cookie session
login_manager.session_protection = None

__all__ = ['db', 'login_manager']
