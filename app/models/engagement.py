"""
Engagement Models
Likes and public comments that feed the cached job engagement score
"""
from datetime import datetime
from app import db


class JobLike(db.Model):
    """A user's like on a job (one per user per job)"""
    __tablename__ = 'job_likes'
    __table_args__ = (
        db.UniqueConstraint('job_id', 'user_id', name='uq_job_likes_job_user'),
    )

    id = db.Column(db.Integer, primary_key=True)
    job_id = db.Column(db.Integer, db.ForeignKey('jobs.id', ondelete='CASCADE'), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f'<JobLike job={self.job_id} user={self.user_id}>'


class JobComment(db.Model):
    """Public comment left by an applicant on a job"""
    __tablename__ = 'job_comments'

    id = db.Column(db.Integer, primary_key=True)
    job_id = db.Column(db.Integer, db.ForeignKey('jobs.id', ondelete='CASCADE'), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='SET NULL'), nullable=True)
    body = db.Column(db.Text, nullable=False)
    is_anonymous = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    user = db.relationship('User')

    def __repr__(self):
        return f'<JobComment job={self.job_id}>'

    def to_dict(self):
        return {
            'id': self.id,
            'jobId': self.job_id,
            'body': self.body,
            'author': None if self.is_anonymous or not self.user else self.user.full_name,
            'isAnonymous': self.is_anonymous,
            'createdAt': self.created_at.isoformat() if self.created_at else None
        }
