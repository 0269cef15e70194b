"""
Education Routes - CRUD for education history
"""

from flask import request, jsonify
from extensions import db
from models import Education
from utils.decorators import token_required
from utils.cv import list_education
from utils.data import (
    EDUCATION_FIELDS, clean_payload, get_or_404, save_changes, resolve_profile_id, education_to_dict
)
from . import education_bp

REQUIRED_FIELDS = ('institution', 'degree')


@education_bp.route('', methods=['GET'])
def list_all():
    return jsonify([education_to_dict(e) for e in list_education()])


@education_bp.route('', methods=['POST'])
@token_required
def create_education():
    data = clean_payload(request.get_json(silent=True), EDUCATION_FIELDS, required=REQUIRED_FIELDS)
    resolve_profile_id(data)
    education = Education(**data)
    db.session.add(education)
    save_changes('create education')
    return jsonify(education_to_dict(education)), 201


@education_bp.route('/<record_id>', methods=['GET'])
def get_education(record_id):
    education = get_or_404(Education, record_id, 'Education')
    return jsonify(education_to_dict(education))


@education_bp.route('/<record_id>', methods=['PUT'])
@token_required
def update_education(record_id):
    education = get_or_404(Education, record_id, 'Education')
    data = clean_payload(request.get_json(silent=True), EDUCATION_FIELDS,
                         required=REQUIRED_FIELDS, partial=True, ignore=('profile_id',))
    for key, value in data.items():
        setattr(education, key, value)
    save_changes('update education')
    return jsonify(education_to_dict(education))


@education_bp.route('/<record_id>', methods=['DELETE'])
@token_required
def delete_education(record_id):
    education = get_or_404(Education, record_id, 'Education')
    db.session.delete(education)
    save_changes('delete education')
    return jsonify({'message': 'Deleted successfully'})
