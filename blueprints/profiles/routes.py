"""
Profile Routes - CRUD for the CV owner's profile
"""

from flask import request, jsonify, current_app
from extensions import db
from models import Profile
from utils.decorators import token_required
from utils.data import (
    PROFILE_FIELDS, clean_payload, get_or_404, save_changes, fetch_all, profile_to_dict
)
from . import profiles_bp


@profiles_bp.route('', methods=['GET'])
def list_profiles():
    """All profiles, newest first"""
    profiles = fetch_all(Profile.query.order_by(Profile.created_at.desc(), Profile.id.desc()), 'profiles')
    return jsonify([profile_to_dict(p) for p in profiles])


@profiles_bp.route('', methods=['POST'])
@token_required
def create_profile():
    data = clean_payload(request.get_json(silent=True), PROFILE_FIELDS, required=('full_name',))
    profile = Profile(**data)
    db.session.add(profile)
    save_changes('create profile')
    current_app.logger.info(f"Profile {profile.id} created")
    return jsonify(profile_to_dict(profile)), 201


@profiles_bp.route('/<record_id>', methods=['GET'])
def get_profile(record_id):
    profile = get_or_404(Profile, record_id, 'Profile')
    return jsonify(profile_to_dict(profile))


@profiles_bp.route('/<record_id>', methods=['PUT'])
@token_required
def update_profile(record_id):
    profile = get_or_404(Profile, record_id, 'Profile')
    data = clean_payload(request.get_json(silent=True), PROFILE_FIELDS,
                         required=('full_name',), partial=True)
    for key, value in data.items():
        setattr(profile, key, value)
    save_changes('update profile')
    current_app.logger.info(f"Profile {profile.id} updated: {', '.join(data) or 'no changes'}")
    return jsonify(profile_to_dict(profile))


@profiles_bp.route('/<record_id>', methods=['DELETE'])
@token_required
def delete_profile(record_id):
    profile = get_or_404(Profile, record_id, 'Profile')
    if profile.id == current_app.config.get('PROFILE_ID'):
        current_app.logger.warning(f"Deleting the configured CV profile {profile.id}")
    db.session.delete(profile)
    save_changes('delete profile')
    return jsonify({'message': 'Deleted successfully'})
