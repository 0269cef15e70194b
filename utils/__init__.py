"""
Utils Package - Centralized utility modules initialization
"""

from .errors import PortfolioError, ValidationError, AuthError, NotFoundError, StorageError
from .decorators import token_required
from .security import get_client_ip, get_bearer_token, verify_access_token, ProviderUser
from .data import (
    clean_payload,
    get_or_404,
    save_changes,
    get_profile_id,
    get_profile
)
from .visitor_stats import record_visit, get_stats
from .cv import build_cv, group_achievements

__all__ = [
    # Errors
    'PortfolioError',
    'ValidationError',
    'AuthError',
    'NotFoundError',
    'StorageError',

    # Decorators
    'token_required',

    # Security
    'get_client_ip',
    'get_bearer_token',
    'verify_access_token',
    'ProviderUser',

    # Data
    'clean_payload',
    'get_or_404',
    'save_changes',
    'get_profile_id',
    'get_profile',

    # Visitor stats
    'record_visit',
    'get_stats',

    # CV
    'build_cv',
    'group_achievements'
]
