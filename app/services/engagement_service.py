"""
Engagement Service
Likes and comments, keeping the job's cached engagement score in step
"""
from app import db
from app.models.job import Job
from app.models.engagement import JobLike, JobComment
from app.services.errors import NotFoundError, ForbiddenError, InvalidStateError, ValidationError
from app.utils.input_validators import validate_comment_body


LIKE_WEIGHT = 2
COMMENT_WEIGHT = 1


def _get_job(job_id):
    job = db.session.get(Job, job_id)
    if not job:
        raise NotFoundError("Job not found")
    return job


def like_job(job_id, user_id):
    """
    Like a job once per user

    The like row and the counter updates commit together.

    Returns:
        Job: The liked job
    """
    job = _get_job(job_id)

    existing_like = JobLike.query.filter_by(job_id=job_id, user_id=user_id).first()
    if existing_like:
        raise InvalidStateError("You already liked this job")

    db.session.add(JobLike(job_id=job_id, user_id=user_id))
    job.likes_count = Job.likes_count + 1
    job.engagement_score = Job.engagement_score + LIKE_WEIGHT

    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    return job


def unlike_job(job_id, user_id):
    """Remove a like and reverse its counter updates"""
    job = _get_job(job_id)

    existing_like = JobLike.query.filter_by(job_id=job_id, user_id=user_id).first()
    if not existing_like:
        raise InvalidStateError("You haven't liked this job")

    db.session.delete(existing_like)
    job.likes_count = Job.likes_count - 1
    job.engagement_score = Job.engagement_score - LIKE_WEIGHT

    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    return job


def add_comment(job_id, user, body, is_anonymous=False):
    """
    Post a public comment on an approved job (applicants only)

    Returns:
        JobComment: The created comment
    """
    if not user.is_applicant:
        raise ForbiddenError("Only applicants can post comments")

    is_valid, value = validate_comment_body(body)
    if not is_valid:
        raise ValidationError(value)

    job = _get_job(job_id)
    if not job.is_approved:
        raise InvalidStateError("Comments are only allowed on approved jobs")

    comment = JobComment(job_id=job_id, user_id=user.id, body=value, is_anonymous=bool(is_anonymous))
    db.session.add(comment)
    job.comments_count = Job.comments_count + 1
    job.engagement_score = Job.engagement_score + COMMENT_WEIGHT

    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    return comment


def get_comments(job_id, limit=50):
    """Most recent comments for a job"""
    return JobComment.query.filter_by(job_id=job_id).order_by(
        JobComment.created_at.desc(), JobComment.id.desc()
    ).limit(limit).all()


def recalculate_engagement(job):
    """Rebuild the cached counters and score from the child rows"""
    job.likes_count = JobLike.query.filter_by(job_id=job.id).count()
    job.comments_count = JobComment.query.filter_by(job_id=job.id).count()
    job.recalculate_engagement()
    db.session.commit()
    return job.engagement_score
