"""
CV Module - Assembles the public résumé document from the content tables
"""

from sqlalchemy.orm import selectinload
from models import WorkExperience, Education, TechnicalSkill, Certification
from .data import (
    fetch_all, get_profile, get_profile_id,
    profile_to_dict, experience_to_dict, education_to_dict,
    skill_to_dict, certification_to_dict
)


def group_achievements(achievements):
    """Group achievement dicts by category.

    Groups keep the order in which categories first appear; achievements
    without a category are collected in a trailing group with category None.
    """
    groups = {}
    uncategorized = []
    for item in achievements:
        category = (item.get('category') or '').strip()
        if not category:
            uncategorized.append(item)
            continue
        groups.setdefault(category, []).append(item)

    result = [{'category': name, 'items': items} for name, items in groups.items()]
    if uncategorized:
        result.append({'category': None, 'items': uncategorized})
    return result


def list_experiences():
    query = WorkExperience.query.options(
        selectinload(WorkExperience.achievements)
    ).order_by(WorkExperience.start_date.desc(), WorkExperience.id.desc())
    return fetch_all(query, 'experiences')


def list_education():
    query = Education.query.order_by(Education.start_year.desc(), Education.id.desc())
    return fetch_all(query, 'education')


def list_skills():
    query = TechnicalSkill.query.order_by(TechnicalSkill.order_position.asc(), TechnicalSkill.id.asc())
    return fetch_all(query, 'skills')


def list_certifications():
    query = Certification.query.order_by(Certification.issue_date.desc(), Certification.id.desc())
    return fetch_all(query, 'certifications')


def _owned(records, profile_id):
    return [r for r in records if r.profile_id == profile_id]


def build_cv():
    """Public résumé: profile plus every section, experiences with grouped achievements"""
    profile = get_profile()
    profile_id = get_profile_id()

    experiences = []
    for experience in _owned(list_experiences(), profile_id):
        entry = experience_to_dict(experience)
        entry['achievementsByCategory'] = group_achievements(entry['achievements'])
        experiences.append(entry)

    return {
        'profile': profile_to_dict(profile) if profile else None,
        'experiences': experiences,
        'education': [education_to_dict(e) for e in _owned(list_education(), profile_id)],
        'skills': [skill_to_dict(s) for s in _owned(list_skills(), profile_id)],
        'certifications': [certification_to_dict(c) for c in _owned(list_certifications(), profile_id)]
    }


__all__ = [
    'group_achievements',
    'list_experiences',
    'list_education',
    'list_skills',
    'list_certifications',
    'build_cv'
]
