from extensions import db
from datetime import datetime
from sqlalchemy import JSON

# Longest browser session id the visitor counter stores
SESSION_ID_MAX_LENGTH = 128


# Custom JSON type that uses JSONB on PostgreSQL and JSON/Text on SQLite
class SafeJSON(db.TypeDecorator):
    impl = JSON
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            from sqlalchemy.dialects.postgresql import JSONB
            return dialect.type_descriptor(JSONB())
        else:
            return dialect.type_descriptor(JSON())


class Profile(db.Model):
    __tablename__ = 'profiles'
    id = db.Column(db.Integer, primary_key=True)
    full_name = db.Column(db.String(255), nullable=False)
    title = db.Column(db.String(255))
    email = db.Column(db.String(255))
    phone = db.Column(db.String(50))
    location = db.Column(db.String(255))
    professional_summary = db.Column(db.Text)
    photo_url = db.Column(db.String(500))
    linkedin_url = db.Column(db.String(500))
    github_url = db.Column(db.String(500))
    website_url = db.Column(db.String(500))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    experiences = db.relationship('WorkExperience', backref='profile', lazy=True, cascade='all, delete-orphan')
    education = db.relationship('Education', backref='profile', lazy=True, cascade='all, delete-orphan')
    skills = db.relationship('TechnicalSkill', backref='profile', lazy=True, cascade='all, delete-orphan')
    certifications = db.relationship('Certification', backref='profile', lazy=True, cascade='all, delete-orphan')


class WorkExperience(db.Model):
    __tablename__ = 'work_experiences'
    id = db.Column(db.Integer, primary_key=True)
    profile_id = db.Column(db.Integer, db.ForeignKey('profiles.id'))
    company_name = db.Column(db.String(255), nullable=False)
    position = db.Column(db.String(255), nullable=False)
    employment_type = db.Column(db.String(50))  # full-time, part-time, contract, internship
    location = db.Column(db.String(255))
    start_date = db.Column(db.Date, nullable=False)
    end_date = db.Column(db.Date)
    is_current = db.Column(db.Boolean, default=False)
    description = db.Column(db.Text)
    technologies = db.Column(SafeJSON, default=list)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    achievements = db.relationship(
        'WorkAchievement', backref='experience', lazy=True,
        cascade='all, delete-orphan',
        order_by='WorkAchievement.order_position'
    )


class WorkAchievement(db.Model):
    __tablename__ = 'work_achievements'
    id = db.Column(db.Integer, primary_key=True)
    work_experience_id = db.Column(db.Integer, db.ForeignKey('work_experiences.id'), nullable=False)
    achievement = db.Column(db.Text, nullable=False)
    category = db.Column(db.String(100))
    order_position = db.Column(db.Integer, default=0)


class Education(db.Model):
    __tablename__ = 'education'
    id = db.Column(db.Integer, primary_key=True)
    profile_id = db.Column(db.Integer, db.ForeignKey('profiles.id'))
    institution = db.Column(db.String(255), nullable=False)
    degree = db.Column(db.String(255), nullable=False)
    field_of_study = db.Column(db.String(255))
    specialization = db.Column(db.String(255))
    location = db.Column(db.String(255))
    start_year = db.Column(db.Integer)
    end_year = db.Column(db.Integer)
    gpa = db.Column(db.String(20))
    thesis_title = db.Column(db.Text)
    achievements = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class TechnicalSkill(db.Model):
    __tablename__ = 'technical_skills'
    id = db.Column(db.Integer, primary_key=True)
    profile_id = db.Column(db.Integer, db.ForeignKey('profiles.id'))
    category = db.Column(db.String(255), nullable=False)
    skills = db.Column(SafeJSON, default=list)
    order_position = db.Column(db.Integer, default=0)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class Certification(db.Model):
    __tablename__ = 'certifications'
    id = db.Column(db.Integer, primary_key=True)
    profile_id = db.Column(db.Integer, db.ForeignKey('profiles.id'))
    name = db.Column(db.String(255), nullable=False)
    issuer = db.Column(db.String(255), nullable=False)
    issue_date = db.Column(db.Date)
    expiry_date = db.Column(db.Date)
    credential_id = db.Column(db.String(255))
    credential_url = db.Column(db.String(500))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class DailyVisitStats(db.Model):
    """One row per calendar day (UTC). Counters only ever go up."""
    __tablename__ = 'daily_visit_stats'
    date = db.Column(db.Date, primary_key=True)
    total_visits = db.Column(db.Integer, nullable=False, default=0)
    unique_visitors = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow)

    sessions = db.relationship('VisitSession', backref='day', lazy='dynamic', cascade='all, delete-orphan')


class VisitSession(db.Model):
    """Session ids seen on a given day; row count equals unique_visitors."""
    __tablename__ = 'visit_sessions'
    id = db.Column(db.Integer, primary_key=True)
    date = db.Column(db.Date, db.ForeignKey('daily_visit_stats.date'), nullable=False)
    session_id = db.Column(db.String(SESSION_ID_MAX_LENGTH), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    __table_args__ = (
        db.UniqueConstraint('date', 'session_id', name='uq_visit_sessions_date_session'),
        db.Index('idx_visit_sessions_date', 'date'),
    )
