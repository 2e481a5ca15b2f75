"""
Job Impression Model
One row per counted (billed) view of a sponsored job
"""
from datetime import datetime, timedelta
from sqlalchemy import or_, and_
from app import db


class JobImpression(db.Model):
    """Append-only impression log, also the source of deduplication keys"""
    __tablename__ = 'job_impressions'
    __table_args__ = (
        db.Index('ix_job_impressions_job_created', 'job_id', 'created_at'),
    )

    id = db.Column(db.Integer, primary_key=True)
    job_id = db.Column(db.Integer, db.ForeignKey('jobs.id', ondelete='CASCADE'), nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='SET NULL'), nullable=True, index=True)  # None for guests

    # Request context
    ip_address = db.Column(db.String(45))  # IPv4 or IPv6
    user_agent = db.Column(db.String(500))

    is_targeted = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    job = db.relationship('Job', back_populates='impressions')
    user = db.relationship('User')

    def __repr__(self):
        return f'<JobImpression job={self.job_id} user={self.user_id}>'

    @classmethod
    def find_recent(cls, job_id, user_id=None, ip_address=None, user_agent=None, window=timedelta(hours=1), now=None):
        """
        Find an impression of this job inside the dedup window

        Matches the same signed-in user, or the same IP address and user agent
        pair (the only key available for guests).
        """
        now = now or datetime.utcnow()
        threshold = now - window

        matchers = [and_(cls.ip_address == ip_address, cls.user_agent == user_agent)]
        if user_id is not None:
            matchers.append(cls.user_id == user_id)

        return cls.query.filter(
            cls.job_id == job_id,
            cls.created_at >= threshold,
            or_(*matchers)
        ).first()
