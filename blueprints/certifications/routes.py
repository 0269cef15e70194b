"""
Certification Routes - CRUD for certifications
"""

from flask import request, jsonify
from extensions import db
from models import Certification
from utils.decorators import token_required
from utils.errors import ValidationError
from utils.cv import list_certifications
from utils.data import (
    CERTIFICATION_FIELDS, clean_payload, get_or_404, save_changes, resolve_profile_id,
    certification_to_dict
)
from . import certifications_bp

REQUIRED_FIELDS = ('name', 'issuer')


def check_dates(certification):
    if (certification.issue_date and certification.expiry_date
            and certification.expiry_date < certification.issue_date):
        raise ValidationError("'expiry_date' cannot be before 'issue_date'")


@certifications_bp.route('', methods=['GET'])
def list_all():
    return jsonify([certification_to_dict(c) for c in list_certifications()])


@certifications_bp.route('', methods=['POST'])
@token_required
def create_certification():
    data = clean_payload(request.get_json(silent=True), CERTIFICATION_FIELDS, required=REQUIRED_FIELDS)
    resolve_profile_id(data)
    certification = Certification(**data)
    check_dates(certification)
    db.session.add(certification)
    save_changes('create certification')
    return jsonify(certification_to_dict(certification)), 201


@certifications_bp.route('/<record_id>', methods=['GET'])
def get_certification(record_id):
    certification = get_or_404(Certification, record_id, 'Certification')
    return jsonify(certification_to_dict(certification))


@certifications_bp.route('/<record_id>', methods=['PUT'])
@token_required
def update_certification(record_id):
    certification = get_or_404(Certification, record_id, 'Certification')
    data = clean_payload(request.get_json(silent=True), CERTIFICATION_FIELDS,
                         required=REQUIRED_FIELDS, partial=True, ignore=('profile_id',))
    for key, value in data.items():
        setattr(certification, key, value)
    try:
        check_dates(certification)
    except ValidationError:
        db.session.rollback()
        raise
    save_changes('update certification')
    return jsonify(certification_to_dict(certification))


@certifications_bp.route('/<record_id>', methods=['DELETE'])
@token_required
def delete_certification(record_id):
    certification = get_or_404(Certification, record_id, 'Certification')
    db.session.delete(certification)
    save_changes('delete certification')
    return jsonify({'message': 'Deleted successfully'})
