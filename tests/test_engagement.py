"""
Tests for likes, comments and the cached engagement score
"""
import pytest
from app import db
from app.models.job import Job
from app.models.engagement import JobLike, JobComment
from app.services import engagement_service
from app.services.errors import NotFoundError, ForbiddenError, InvalidStateError, ValidationError


class TestLikes:

    def test_like_increments_counters(self, approved_job, applicant):
        job = engagement_service.like_job(approved_job.id, applicant.id)

        assert job.likes_count == 1
        assert job.engagement_score == 2
        assert JobLike.query.filter_by(job_id=approved_job.id).count() == 1

    def test_cannot_like_twice(self, approved_job, applicant):
        engagement_service.like_job(approved_job.id, applicant.id)

        with pytest.raises(InvalidStateError):
            engagement_service.like_job(approved_job.id, applicant.id)

        assert db.session.get(Job, approved_job.id).likes_count == 1

    def test_likes_from_different_users_add_up(self, approved_job, applicant, employer):
        engagement_service.like_job(approved_job.id, applicant.id)
        engagement_service.like_job(approved_job.id, employer.id)

        job = db.session.get(Job, approved_job.id)
        assert job.likes_count == 2
        assert job.engagement_score == 4

    def test_unlike_reverses_counters(self, approved_job, applicant):
        engagement_service.like_job(approved_job.id, applicant.id)

        job = engagement_service.unlike_job(approved_job.id, applicant.id)

        assert job.likes_count == 0
        assert job.engagement_score == 0
        assert JobLike.query.count() == 0

    def test_unlike_without_like(self, approved_job, applicant):
        with pytest.raises(InvalidStateError):
            engagement_service.unlike_job(approved_job.id, applicant.id)

    def test_like_missing_job(self, applicant):
        with pytest.raises(NotFoundError):
            engagement_service.like_job(424242, applicant.id)


class TestComments:

    def test_applicant_comment_counts_once(self, approved_job, applicant):
        comment = engagement_service.add_comment(approved_job.id, applicant, '  Is this role remote?  ')

        assert comment.body == 'Is this role remote?'
        job = db.session.get(Job, approved_job.id)
        assert job.comments_count == 1
        assert job.engagement_score == 1

    def test_comment_author_shown_unless_anonymous(self, approved_job, applicant):
        named = engagement_service.add_comment(approved_job.id, applicant, 'Great team')
        anonymous = engagement_service.add_comment(approved_job.id, applicant, 'Salary?', is_anonymous=True)

        assert named.to_dict()['author'] == 'Test Applicant'
        assert anonymous.to_dict()['author'] is None
        assert anonymous.to_dict()['isAnonymous'] is True

    def test_employers_cannot_comment(self, approved_job, employer):
        with pytest.raises(ForbiddenError):
            engagement_service.add_comment(approved_job.id, employer, 'Apply now!')

        assert JobComment.query.count() == 0

    def test_only_approved_jobs_accept_comments(self, pending_job, applicant):
        with pytest.raises(InvalidStateError):
            engagement_service.add_comment(pending_job.id, applicant, 'Hello')

    @pytest.mark.parametrize('body', [None, '', '   ', 'x' * 2001])
    def test_invalid_body(self, approved_job, applicant, body):
        with pytest.raises(ValidationError):
            engagement_service.add_comment(approved_job.id, applicant, body)

    def test_comments_newest_first(self, approved_job, applicant):
        engagement_service.add_comment(approved_job.id, applicant, 'first')
        engagement_service.add_comment(approved_job.id, applicant, 'second')

        bodies = [c.body for c in engagement_service.get_comments(approved_job.id)]

        assert bodies == ['second', 'first']


def test_recalculate_engagement_repairs_counters(approved_job, applicant, employer):
    engagement_service.like_job(approved_job.id, applicant.id)
    engagement_service.add_comment(approved_job.id, applicant, 'Nice')

    job = db.session.get(Job, approved_job.id)
    job.likes_count = 40
    job.comments_count = 0
    job.engagement_score = 999
    db.session.commit()

    assert engagement_service.recalculate_engagement(job) == 3
    job = db.session.get(Job, approved_job.id)
    assert (job.likes_count, job.comments_count) == (1, 1)
