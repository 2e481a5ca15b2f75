"""
Job Model
Job postings with moderation status, engagement counters and sponsorship state
"""
from datetime import datetime
from decimal import Decimal
from app import db


STATUS_PENDING = 'pending'
STATUS_APPROVED = 'approved'
STATUS_REJECTED = 'rejected'


class Job(db.Model):
    """Job posting owned by an employer"""
    __tablename__ = 'jobs'

    id = db.Column(db.Integer, primary_key=True)
    employer_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)

    # Job details
    title = db.Column(db.String(200), nullable=False)
    company = db.Column(db.String(200), nullable=False)
    location = db.Column(db.String(200))
    job_type = db.Column(db.String(50))  # full_time, part_time, contract, internship
    category = db.Column(db.String(100))
    description = db.Column(db.Text)
    apply_url = db.Column(db.String(500))

    # Compensation
    salary_min = db.Column(db.Integer)
    salary_max = db.Column(db.Integer)

    # Moderation
    status = db.Column(db.String(20), nullable=False, default=STATUS_PENDING, index=True)  # pending, approved, rejected
    rejection_reason = db.Column(db.Text)

    # Metrics (denormalized for performance)
    likes_count = db.Column(db.Integer, default=0, nullable=False)
    comments_count = db.Column(db.Integer, default=0, nullable=False)
    views_count = db.Column(db.Integer, default=0, nullable=False)
    engagement_score = db.Column(db.Integer, default=0, nullable=False)  # likes * 2 + comments

    # Sponsorship
    is_sponsored = db.Column(db.Boolean, default=False, nullable=False, index=True)
    sponsored_until = db.Column(db.DateTime)
    impression_limit = db.Column(db.Integer)
    impressions_used = db.Column(db.Integer, default=0, nullable=False)
    cost_per_impression = db.Column(db.Numeric(10, 4), default=Decimal('0.001'), nullable=False)
    target_location = db.Column(db.String(200))
    target_experience = db.Column(db.String(50))
    target_education = db.Column(db.String(50))

    # Timestamps
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    employer = db.relationship('User', back_populates='jobs')
    impressions = db.relationship('JobImpression', back_populates='job', lazy='dynamic',
                                  cascade='all, delete-orphan')

    def __repr__(self):
        return f'<Job {self.title} - {self.status}>'

    def approve(self):
        """Approve the job for public listing"""
        if self.status != STATUS_APPROVED:
            self.status = STATUS_APPROVED
            self.rejection_reason = None

    def reject(self, reason=None):
        """Reject the job posting"""
        self.status = STATUS_REJECTED
        self.rejection_reason = reason

    @property
    def is_approved(self):
        return self.status == STATUS_APPROVED

    @property
    def impressions_remaining(self):
        """Unused purchased impressions, or None when there is no quota"""
        if self.impression_limit is None:
            return None
        return max(0, self.impression_limit - (self.impressions_used or 0))

    @property
    def has_targeting(self):
        return bool(self.target_location or self.target_experience or self.target_education)

    def clear_sponsorship(self):
        """Return the job to a free listing; impressions_used is kept as history"""
        self.is_sponsored = False
        self.sponsored_until = None
        self.impression_limit = None
        self.target_location = None
        self.target_experience = None
        self.target_education = None

    def recalculate_engagement(self):
        """Recompute the cached engagement score from the counters"""
        self.engagement_score = (self.likes_count or 0) * 2 + (self.comments_count or 0)
        return self.engagement_score

    def to_dict(self):
        return {
            'id': self.id,
            'employerId': self.employer_id,
            'title': self.title,
            'company': self.company,
            'location': self.location,
            'type': self.job_type,
            'category': self.category,
            'salaryMin': self.salary_min,
            'salaryMax': self.salary_max,
            'status': self.status,
            'likesCount': self.likes_count,
            'commentsCount': self.comments_count,
            'viewsCount': self.views_count,
            'engagementScore': self.engagement_score,
            'isSponsored': self.is_sponsored,
            'sponsoredUntil': self.sponsored_until.isoformat() if self.sponsored_until else None,
            'impressionLimit': self.impression_limit,
            'impressionsUsed': self.impressions_used,
            'costPerImpression': float(self.cost_per_impression) if self.cost_per_impression is not None else None,
            'targetLocation': self.target_location,
            'targetExperience': self.target_experience,
            'targetEducation': self.target_education,
            'createdAt': self.created_at.isoformat() if self.created_at else None
        }
