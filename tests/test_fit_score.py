"""
Tests for candidate fit scoring
"""
import pytest
from datetime import timedelta
from app import db
from app.models.job_fit import JobFitCriteria, ApplicantProfile, JobFitScore
from app.services.errors import NotFoundError
from app.services.fit_score_service import (
    calculate_education_score,
    calculate_experience_score,
    calculate_skills_score,
    calculate_exact_match_score,
    calculate_fit_scores,
    get_status,
    round_half_up,
    get_fit_score,
)


@pytest.fixture
def criteria(db_session, approved_job):
    criteria = JobFitCriteria(
        job_id=approved_job.id,
        required_education='bachelor',
        preferred_education='master',
        min_years_experience=3,
        preferred_years_experience=5
    )
    criteria.set_lists(
        essential_skills=['communication', 'teamwork'],
        technical_skills=['python', 'sql', 'docker'],
        personal_attributes=['curious', 'reliable'],
        cultural_values=['remote-first']
    )
    db_session.add(criteria)
    db_session.commit()
    return criteria


@pytest.fixture
def profile(db_session, applicant):
    profile = ApplicantProfile(user_id=applicant.id, education='bachelor', years_experience=4)
    profile.set_lists(
        essential_skills=['Communication skills'],
        technical_skills=['Python', 'SQL'],
        personal_attributes=['Reliable'],
        cultural_values=[]
    )
    db_session.add(profile)
    db_session.commit()
    return profile


class TestCategoryScores:

    @pytest.mark.parametrize('actual,expected', [
        ('phd', 100),
        ('master', 100),
        ('bachelor', 70),
        ('associate', 40),
        ('high_school', 20),
    ])
    def test_education_ladder(self, actual, expected):
        assert calculate_education_score('bachelor', 'master', actual) == expected

    def test_education_defaults(self):
        assert calculate_education_score(None, None, None) == 70
        assert calculate_education_score('bachelor', None, 'BACHELOR') == 100

    @pytest.mark.parametrize('actual,expected', [
        (None, 0),
        (0, 0),
        (6, 100),
        (5, 100),
        (3, 70),
        (2, 30),
    ])
    def test_experience(self, actual, expected):
        assert calculate_experience_score(3, 5, actual) == expected

    def test_experience_near_minimum(self):
        assert calculate_experience_score(10, 12, 7) == 50
        assert calculate_experience_score(10, 12, 6) == 30

    def test_experience_preferred_defaults_to_minimum(self):
        assert calculate_experience_score(3, None, 3) == 100

    def test_skills_substring_match(self):
        assert calculate_skills_score(['python', 'sql', 'docker'], ['Python 3', 'PostgreSQL']) == 67
        assert calculate_skills_score([], ['anything']) == 100
        assert calculate_skills_score(['python'], []) == 0

    def test_exact_match(self):
        assert calculate_exact_match_score(['Curious', 'reliable'], ['curious']) == 50
        assert calculate_exact_match_score(['curious'], ['curiosity']) == 0
        assert calculate_exact_match_score([], []) == 100
        assert calculate_exact_match_score(['remote-first'], [], empty_score=50) == 50

    def test_halves_round_up(self):
        skills = ['python', 'sql', 'docker', 'kubernetes', 'terraform', 'go', 'rust', 'kafka']

        assert calculate_skills_score(skills, ['Python']) == 13
        assert calculate_exact_match_score(skills, ['python']) == 13
        assert round_half_up(2.5) == 3
        assert round_half_up(0.5) == 1
        assert round_half_up(66.4) == 66

    @pytest.mark.parametrize('score,status', [(100, 'passed'), (80, 'passed'), (79, 'partially'),
                                              (50, 'partially'), (49, 'failed'), (0, 'failed')])
    def test_status_thresholds(self, score, status):
        assert get_status(score) == status


def test_weighted_overall_score(criteria, profile):
    scores = calculate_fit_scores(criteria, profile)

    assert scores['education_score'] == 70
    assert scores['experience_score'] == 70
    assert scores['essential_skills_score'] == 50
    assert scores['technical_skills_score'] == 67
    assert scores['attributes_score'] == 50
    assert scores['cultural_fit_score'] == 50  # neutral, applicant listed no values
    # 70*.2 + 70*.2 + 50*.15 + 67*.2 + 50*.15 + 50*.1
    assert scores['overall_score'] == 61
    assert scores['technical_skills_status'] == 'partially'


class TestGetFitScore:

    def test_calculates_and_stores(self, criteria, profile, approved_job, applicant, now):
        score = get_fit_score(approved_job.id, applicant.id, now=now)

        assert score.overall_score == 61
        assert score.calculated_at == now
        assert JobFitScore.query.count() == 1
        assert score.to_dict()['overallScore'] == 61

    def test_cached_within_an_hour(self, criteria, profile, approved_job, applicant, now):
        get_fit_score(approved_job.id, applicant.id, now=now)

        profile = db.session.get(ApplicantProfile, profile.id)
        profile.education = 'phd'
        db.session.commit()

        cached = get_fit_score(approved_job.id, applicant.id, now=now + timedelta(minutes=30))
        assert cached.education_score == 70

        fresh = get_fit_score(approved_job.id, applicant.id, now=now + timedelta(minutes=61))
        assert fresh.education_score == 100
        assert JobFitScore.query.count() == 1

    def test_missing_criteria(self, profile, approved_job, applicant):
        with pytest.raises(NotFoundError, match='Job fit criteria not set'):
            get_fit_score(approved_job.id, applicant.id)

    def test_missing_profile(self, criteria, approved_job, applicant):
        with pytest.raises(NotFoundError, match='Applicant profile not found'):
            get_fit_score(approved_job.id, applicant.id)
