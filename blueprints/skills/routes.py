"""
Skill Routes - CRUD for technical skill categories
"""

from flask import request, jsonify
from extensions import db
from models import TechnicalSkill
from utils.decorators import token_required
from utils.cv import list_skills
from utils.data import (
    SKILL_FIELDS, clean_payload, get_or_404, save_changes, resolve_profile_id, skill_to_dict
)
from . import skills_bp


@skills_bp.route('', methods=['GET'])
def list_all():
    return jsonify([skill_to_dict(s) for s in list_skills()])


@skills_bp.route('', methods=['POST'])
@token_required
def create_skill():
    data = clean_payload(request.get_json(silent=True), SKILL_FIELDS, required=('category',))
    resolve_profile_id(data)
    if data.get('skills') is None:
        data['skills'] = []
    if data.get('order_position') is None:
        data['order_position'] = 0
    skill = TechnicalSkill(**data)
    db.session.add(skill)
    save_changes('create skill category')
    return jsonify(skill_to_dict(skill)), 201


@skills_bp.route('/<record_id>', methods=['GET'])
def get_skill(record_id):
    skill = get_or_404(TechnicalSkill, record_id, 'Skill category')
    return jsonify(skill_to_dict(skill))


@skills_bp.route('/<record_id>', methods=['PUT'])
@token_required
def update_skill(record_id):
    skill = get_or_404(TechnicalSkill, record_id, 'Skill category')
    data = clean_payload(request.get_json(silent=True), SKILL_FIELDS,
                         required=('category',), partial=True, ignore=('profile_id',))
    for key, value in data.items():
        if key == 'skills' and value is None:
            value = []
        setattr(skill, key, value)
    save_changes('update skill category')
    return jsonify(skill_to_dict(skill))


@skills_bp.route('/<record_id>', methods=['DELETE'])
@token_required
def delete_skill(record_id):
    skill = get_or_404(TechnicalSkill, record_id, 'Skill category')
    db.session.delete(skill)
    save_changes('delete skill category')
    return jsonify({'message': 'Deleted successfully'})
