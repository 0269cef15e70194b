"""
Portfolio Routes - Public résumé views
Handles: The configured owner's profile and the aggregated CV document
"""

from flask import jsonify
from utils.cv import build_cv
from utils.data import get_profile_id, get_profile, profile_to_dict
from utils.errors import NotFoundError
from . import portfolio_bp


@portfolio_bp.route('/profile')
def owner_profile():
    """The CV owner's profile (PROFILE_ID)"""
    profile = get_profile()
    if profile is None:
        raise NotFoundError(f'Profile {get_profile_id()} has not been created yet')
    return jsonify(profile_to_dict(profile))


@portfolio_bp.route('/cv')
def cv():
    """Everything the public CV page renders, in one document"""
    return jsonify(build_cv())
