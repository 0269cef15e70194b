"""
Experience Routes - CRUD for work experiences and their achievements
"""

from flask import request, jsonify, current_app
from extensions import db
from models import WorkExperience, WorkAchievement
from utils.decorators import token_required
from utils.errors import ValidationError
from utils.cv import list_experiences
from utils.data import (
    EXPERIENCE_FIELDS, ACHIEVEMENT_FIELDS, clean_payload, get_or_404,
    save_changes, resolve_profile_id, experience_to_dict
)
from . import experiences_bp

REQUIRED_FIELDS = ('company_name', 'position', 'start_date')


def build_achievements(items):
    """Turn the request's achievements list into WorkAchievement rows"""
    if items is None:
        return []
    if not isinstance(items, list):
        raise ValidationError("'achievements' must be a list")

    achievements = []
    for index, item in enumerate(items):
        data = clean_payload(item, ACHIEVEMENT_FIELDS, required=('achievement',),
                             ignore=('work_experience_id',))
        if data.get('order_position') is None:
            data['order_position'] = index
        if not data.get('category'):
            data['category'] = None
        achievements.append(WorkAchievement(**data))
    return achievements


def split_payload(body):
    """Separate the achievements list from the experience columns"""
    if not isinstance(body, dict):
        raise ValidationError('Request body must be a JSON object')
    body = dict(body)
    has_achievements = 'achievements' in body
    achievements = body.pop('achievements', None)
    return body, has_achievements, achievements


@experiences_bp.route('', methods=['GET'])
def list_all():
    """All experiences, most recent start first"""
    return jsonify([experience_to_dict(e) for e in list_experiences()])


@experiences_bp.route('', methods=['POST'])
@token_required
def create_experience():
    body, _, achievements = split_payload(request.get_json(silent=True))
    data = clean_payload(body, EXPERIENCE_FIELDS, required=REQUIRED_FIELDS)
    resolve_profile_id(data)
    if data.get('technologies') is None:
        data['technologies'] = []

    experience = WorkExperience(**data)
    experience.achievements = build_achievements(achievements)
    db.session.add(experience)
    save_changes('create experience')
    current_app.logger.info(
        f"Experience {experience.id} created with {len(experience.achievements)} achievements")
    return jsonify(experience_to_dict(experience)), 201


@experiences_bp.route('/<record_id>', methods=['GET'])
def get_experience(record_id):
    experience = get_or_404(WorkExperience, record_id, 'Experience')
    return jsonify(experience_to_dict(experience))


@experiences_bp.route('/<record_id>', methods=['PUT'])
@token_required
def update_experience(record_id):
    experience = get_or_404(WorkExperience, record_id, 'Experience')
    body, has_achievements, achievements = split_payload(request.get_json(silent=True))
    data = clean_payload(body, EXPERIENCE_FIELDS, required=REQUIRED_FIELDS,
                         partial=True, ignore=('profile_id',))

    for key, value in data.items():
        if key == 'technologies' and value is None:
            value = []
        setattr(experience, key, value)

    # A supplied list replaces the whole set
    if has_achievements:
        experience.achievements = build_achievements(achievements)

    save_changes('update experience')
    return jsonify(experience_to_dict(experience))


@experiences_bp.route('/<record_id>', methods=['DELETE'])
@token_required
def delete_experience(record_id):
    experience = get_or_404(WorkExperience, record_id, 'Experience')
    db.session.delete(experience)
    save_changes('delete experience')
    return jsonify({'message': 'Deleted successfully'})
