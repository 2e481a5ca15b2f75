"""
Job Fit Models
Employer fit criteria, applicant profiles and cached fit scores
"""
from datetime import datetime
import json
from app import db


def _load_list(value):
    """Decode a JSON array column, tolerating empty or malformed values"""
    if not value:
        return []
    try:
        loaded = json.loads(value)
    except (json.JSONDecodeError, TypeError):
        return []
    return loaded if isinstance(loaded, list) else []


class _SkillListsMixin:
    """JSON array columns shared by criteria and profiles"""
    essential_skills = db.Column(db.Text)  # JSON array
    technical_skills = db.Column(db.Text)  # JSON array
    personal_attributes = db.Column(db.Text)  # JSON array
    cultural_values = db.Column(db.Text)  # JSON array

    @property
    def essential_skills_list(self):
        return _load_list(self.essential_skills)

    @property
    def technical_skills_list(self):
        return _load_list(self.technical_skills)

    @property
    def personal_attributes_list(self):
        return _load_list(self.personal_attributes)

    @property
    def cultural_values_list(self):
        return _load_list(self.cultural_values)

    def set_lists(self, **lists):
        """Set any of the JSON list columns from Python lists"""
        for name, values in lists.items():
            setattr(self, name, json.dumps(list(values or [])))


class JobFitCriteria(_SkillListsMixin, db.Model):
    """What the employer is looking for in a candidate for one job"""
    __tablename__ = 'job_fit_criteria'

    id = db.Column(db.Integer, primary_key=True)
    job_id = db.Column(db.Integer, db.ForeignKey('jobs.id', ondelete='CASCADE'), nullable=False, unique=True)

    required_education = db.Column(db.String(50))
    preferred_education = db.Column(db.String(50))
    min_years_experience = db.Column(db.Integer, default=0)
    preferred_years_experience = db.Column(db.Integer)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    job = db.relationship('Job', backref=db.backref('fit_criteria', uselist=False))

    def __repr__(self):
        return f'<JobFitCriteria job={self.job_id}>'


class ApplicantProfile(_SkillListsMixin, db.Model):
    """Applicant qualifications used for fit scoring"""
    __tablename__ = 'applicant_profiles'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True)

    education = db.Column(db.String(50))
    years_experience = db.Column(db.Integer)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    user = db.relationship('User', backref=db.backref('applicant_profile', uselist=False))

    def __repr__(self):
        return f'<ApplicantProfile user={self.user_id}>'


class JobFitScore(db.Model):
    """Cached fit score of one applicant against one job"""
    __tablename__ = 'job_fit_scores'
    __table_args__ = (
        db.UniqueConstraint('job_id', 'applicant_id', name='uq_job_fit_scores_job_applicant'),
    )

    id = db.Column(db.Integer, primary_key=True)
    job_id = db.Column(db.Integer, db.ForeignKey('jobs.id', ondelete='CASCADE'), nullable=False, index=True)
    applicant_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)

    education_score = db.Column(db.Integer, nullable=False)
    experience_score = db.Column(db.Integer, nullable=False)
    essential_skills_score = db.Column(db.Integer, nullable=False)
    technical_skills_score = db.Column(db.Integer, nullable=False)
    attributes_score = db.Column(db.Integer, nullable=False)
    cultural_fit_score = db.Column(db.Integer, nullable=False)
    overall_score = db.Column(db.Integer, nullable=False)

    education_status = db.Column(db.String(20))  # passed, partially, failed
    experience_status = db.Column(db.String(20))
    essential_skills_status = db.Column(db.String(20))
    technical_skills_status = db.Column(db.String(20))
    attributes_status = db.Column(db.String(20))
    cultural_fit_status = db.Column(db.String(20))

    calculated_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f'<JobFitScore job={self.job_id} applicant={self.applicant_id} {self.overall_score}>'

    def to_dict(self):
        return {
            'jobId': self.job_id,
            'applicantId': self.applicant_id,
            'educationScore': self.education_score,
            'experienceScore': self.experience_score,
            'essentialSkillsScore': self.essential_skills_score,
            'technicalSkillsScore': self.technical_skills_score,
            'attributesScore': self.attributes_score,
            'culturalFitScore': self.cultural_fit_score,
            'overallScore': self.overall_score,
            'educationStatus': self.education_status,
            'experienceStatus': self.experience_status,
            'essentialSkillsStatus': self.essential_skills_status,
            'technicalSkillsStatus': self.technical_skills_status,
            'attributesStatus': self.attributes_status,
            'culturalFitStatus': self.cultural_fit_status,
            'calculatedAt': self.calculated_at.isoformat() if self.calculated_at else None
        }
