"""
Decorators Module - Authentication decorators for the admin API
"""

from functools import wraps
from flask import request, current_app
from flask_login import current_user
from .errors import AuthError
from .security import get_client_ip


def token_required(f):
    """Decorator to require a valid identity-provider bearer token"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            current_app.logger.warning(
                f"Unauthorized {request.method} {request.path} from {get_client_ip()}")
            raise AuthError()
        return f(*args, **kwargs)
    return decorated_function
