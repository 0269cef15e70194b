"""
Data Management Module - Payload cleaning, record lookup and serialization
for the CV content tables
"""

from datetime import datetime
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from extensions import db
from models import Profile
from .errors import ValidationError, NotFoundError, StorageError


# Keys clients may echo back from a GET; never written
READ_ONLY_FIELDS = {'id', 'created_at', 'updated_at'}

PROFILE_FIELDS = {
    'full_name': 'str',
    'title': 'str',
    'email': 'str',
    'phone': 'str',
    'location': 'str',
    'professional_summary': 'str',
    'photo_url': 'str',
    'linkedin_url': 'str',
    'github_url': 'str',
    'website_url': 'str',
}

EXPERIENCE_FIELDS = {
    'profile_id': 'int',
    'company_name': 'str',
    'position': 'str',
    'employment_type': 'str',
    'location': 'str',
    'start_date': 'date',
    'end_date': 'date',
    'is_current': 'bool',
    'description': 'str',
    'technologies': 'list',
}

ACHIEVEMENT_FIELDS = {
    'achievement': 'str',
    'category': 'str',
    'order_position': 'int',
}

EDUCATION_FIELDS = {
    'profile_id': 'int',
    'institution': 'str',
    'degree': 'str',
    'field_of_study': 'str',
    'specialization': 'str',
    'location': 'str',
    'start_year': 'int',
    'end_year': 'int',
    'gpa': 'str',
    'thesis_title': 'str',
    'achievements': 'str',
}

SKILL_FIELDS = {
    'profile_id': 'int',
    'category': 'str',
    'skills': 'list',
    'order_position': 'int',
}

CERTIFICATION_FIELDS = {
    'profile_id': 'int',
    'name': 'str',
    'issuer': 'str',
    'issue_date': 'date',
    'expiry_date': 'date',
    'credential_id': 'str',
    'credential_url': 'str',
}


def parse_date(value, field):
    """Parse a YYYY-MM-DD string; empty values become None"""
    if value is None or value == '':
        return None
    if not isinstance(value, str):
        raise ValidationError(f"'{field}' must be a date string (YYYY-MM-DD)")
    try:
        return datetime.strptime(value[:10], '%Y-%m-%d').date()
    except ValueError:
        raise ValidationError(f"'{field}' must be a date string (YYYY-MM-DD)")


def _convert(value, kind, field):
    if kind == 'date':
        return parse_date(value, field)

    if value is None:
        return None

    if kind == 'str':
        if not isinstance(value, str):
            raise ValidationError(f"'{field}' must be a string")
        return value

    if kind == 'int':
        if value == '':
            return None
        if isinstance(value, bool):
            raise ValidationError(f"'{field}' must be an integer")
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ValidationError(f"'{field}' must be an integer")

    if kind == 'bool':
        if not isinstance(value, bool):
            raise ValidationError(f"'{field}' must be true or false")
        return value

    if kind == 'list':
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise ValidationError(f"'{field}' must be a list of strings")
        return [item.strip() for item in value if item.strip()]

    raise ValueError(f"Unknown field kind: {kind}")


def clean_payload(payload, fields, required=(), partial=False, ignore=()):
    """Validate a JSON body against a field map.

    Args:
        payload: decoded request body
        fields (dict): field name -> kind ('str', 'int', 'bool', 'date', 'list')
        required (tuple): fields that must be present and non-empty
        partial (bool): PUT semantics, only supplied fields are checked
        ignore (tuple): extra keys to drop silently

    Returns:
        dict: converted values, only for supplied fields
    """
    if not isinstance(payload, dict):
        raise ValidationError('Request body must be a JSON object')

    skipped = READ_ONLY_FIELDS | set(ignore)
    unknown = sorted(k for k in payload if k not in fields and k not in skipped)
    if unknown:
        raise ValidationError(f"Unknown field(s): {', '.join(unknown)}")

    cleaned = {}
    for key, value in payload.items():
        if key in skipped:
            continue
        cleaned[key] = _convert(value, fields[key], key)

    for key in required:
        if key not in cleaned and partial:
            continue
        value = cleaned.get(key)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(f"'{key}' is required")

    return cleaned


def parse_record_id(record_id):
    try:
        return int(record_id)
    except (TypeError, ValueError):
        raise ValidationError('Invalid ID')


def get_or_404(model, record_id, label='Record'):
    """Load a row by primary key or raise NotFoundError"""
    record_id = parse_record_id(record_id)
    try:
        record = db.session.get(model, record_id)
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Error loading {label} {record_id}: {str(e)}")
        raise StorageError(f'Failed to load {label.lower()}') from e
    if record is None:
        raise NotFoundError(f'{label} not found')
    return record


def save_changes(action):
    """Commit the session; roll back and raise StorageError on failure"""
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Error while trying to {action}: {str(e)}")
        raise StorageError(f'Failed to {action}') from e


def fetch_all(query, label):
    """Run a list query, wrapping database failures in StorageError"""
    try:
        return query.all()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Error listing {label}: {str(e)}")
        raise StorageError(f'Failed to load {label}') from e


def get_profile_id():
    """The configured id of the single CV owner"""
    return current_app.config['PROFILE_ID']


def get_profile():
    """Load the singleton profile, or None if it has not been created yet"""
    try:
        return db.session.get(Profile, get_profile_id())
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Error loading profile: {str(e)}")
        raise StorageError('Failed to load profile') from e


def resolve_profile_id(data):
    """Fill in the configured owner and make sure the profile exists.

    Raises ValidationError for an unknown profile, so content is never
    stored against a missing owner.
    """
    if data.get('profile_id') is None:
        data['profile_id'] = get_profile_id()
    try:
        profile = db.session.get(Profile, data['profile_id'])
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Error loading profile {data['profile_id']}: {str(e)}")
        raise StorageError('Failed to load profile') from e
    if profile is None:
        raise ValidationError(f"Profile {data['profile_id']} does not exist")
    return data['profile_id']


def _date(value):
    return value.isoformat() if value else None


def _timestamp(value):
    return value.isoformat() + 'Z' if value else None


def profile_to_dict(profile):
    """Convert profile model to dictionary"""
    return {
        'id': profile.id,
        'full_name': profile.full_name,
        'title': profile.title,
        'email': profile.email,
        'phone': profile.phone,
        'location': profile.location,
        'professional_summary': profile.professional_summary,
        'photo_url': profile.photo_url,
        'linkedin_url': profile.linkedin_url,
        'github_url': profile.github_url,
        'website_url': profile.website_url,
        'created_at': _timestamp(profile.created_at),
        'updated_at': _timestamp(profile.updated_at)
    }


def achievement_to_dict(achievement):
    return {
        'id': achievement.id,
        'achievement': achievement.achievement,
        'category': achievement.category,
        'order_position': achievement.order_position or 0
    }


def experience_to_dict(experience):
    """Convert work experience to dictionary, children included"""
    return {
        'id': experience.id,
        'profile_id': experience.profile_id,
        'company_name': experience.company_name,
        'position': experience.position,
        'employment_type': experience.employment_type,
        'location': experience.location,
        'start_date': _date(experience.start_date),
        'end_date': _date(experience.end_date),
        'is_current': bool(experience.is_current),
        'description': experience.description,
        'technologies': experience.technologies or [],
        'achievements': [achievement_to_dict(a) for a in experience.achievements],
        'created_at': _timestamp(experience.created_at),
        'updated_at': _timestamp(experience.updated_at)
    }


def education_to_dict(education):
    """Convert education model to dictionary"""
    return {
        'id': education.id,
        'profile_id': education.profile_id,
        'institution': education.institution,
        'degree': education.degree,
        'field_of_study': education.field_of_study,
        'specialization': education.specialization,
        'location': education.location,
        'start_year': education.start_year,
        'end_year': education.end_year,
        'gpa': education.gpa,
        'thesis_title': education.thesis_title,
        'achievements': education.achievements,
        'created_at': _timestamp(education.created_at),
        'updated_at': _timestamp(education.updated_at)
    }


def skill_to_dict(skill):
    """Convert skill category model to dictionary"""
    return {
        'id': skill.id,
        'profile_id': skill.profile_id,
        'category': skill.category,
        'skills': skill.skills or [],
        'order_position': skill.order_position or 0,
        'created_at': _timestamp(skill.created_at),
        'updated_at': _timestamp(skill.updated_at)
    }


def certification_to_dict(certification):
    """Convert certification model to dictionary"""
    return {
        'id': certification.id,
        'profile_id': certification.profile_id,
        'name': certification.name,
        'issuer': certification.issuer,
        'issue_date': _date(certification.issue_date),
        'expiry_date': _date(certification.expiry_date),
        'credential_id': certification.credential_id,
        'credential_url': certification.credential_url,
        'created_at': _timestamp(certification.created_at),
        'updated_at': _timestamp(certification.updated_at)
    }


__all__ = [
    'PROFILE_FIELDS',
    'EXPERIENCE_FIELDS',
    'ACHIEVEMENT_FIELDS',
    'EDUCATION_FIELDS',
    'SKILL_FIELDS',
    'CERTIFICATION_FIELDS',
    'parse_date',
    'clean_payload',
    'parse_record_id',
    'get_or_404',
    'save_changes',
    'fetch_all',
    'get_profile_id',
    'get_profile',
    'resolve_profile_id',
    'profile_to_dict',
    'achievement_to_dict',
    'experience_to_dict',
    'education_to_dict',
    'skill_to_dict',
    'certification_to_dict'
]
