"""
Tests for job ranking: scoring functions, sponsored placement and ordering
"""
import pytest
from datetime import datetime, timedelta
from types import SimpleNamespace
from app.services.ranking_service import (
    EmployerReputation,
    SPONSORED_SCORE,
    SPONSORED_DISPLAY_SCORE,
    calculate_engagement_score,
    calculate_reputation_score,
    calculate_recency_bonus,
    is_sponsorship_active,
    rank_jobs,
    search_jobs,
    get_ranked_listing,
)


NOW = datetime(2025, 6, 1, 12, 0, 0)


def fake_job(id, days_old=30, likes=0, comments=0, reputation=None, **sponsorship):
    """Plain record standing in for a Job row"""
    fields = {
        'is_sponsored': False,
        'sponsored_until': None,
        'impression_limit': None,
        'impressions_used': 0,
    }
    fields.update(sponsorship)
    return SimpleNamespace(
        id=id,
        created_at=NOW - timedelta(days=days_old),
        likes_count=likes,
        comments_count=comments,
        employer=SimpleNamespace(reputation=lambda: reputation),
        **fields
    )


class TestScoringFunctions:
    """Pure score components"""

    def test_engagement_weights_likes_double(self):
        assert calculate_engagement_score(3, 4) == 10
        assert calculate_engagement_score(None, None) == 0

    def test_reputation_full_formula(self):
        rep = EmployerReputation(average_rating=4.5, response_rate=80, completed_hires=30, is_verified=True)
        # 4.5*20*0.4 + 80*0.3 + min(150, 100)*0.2 + 10
        assert calculate_reputation_score(rep) == pytest.approx(36 + 24 + 20 + 10)

    def test_reputation_hires_below_cap(self):
        rep = EmployerReputation(completed_hires=4)
        assert calculate_reputation_score(rep) == pytest.approx(20 * 0.2)

    def test_missing_reputation_contributes_zero(self):
        assert calculate_reputation_score(None) == 0
        assert calculate_reputation_score(EmployerReputation()) == 0

    def test_recency_bonus_decays_over_a_week(self):
        assert calculate_recency_bonus(NOW, NOW) == pytest.approx(35)
        assert calculate_recency_bonus(NOW - timedelta(days=2), NOW) == pytest.approx(25)
        assert calculate_recency_bonus(NOW - timedelta(days=7), NOW) == 0
        assert calculate_recency_bonus(NOW - timedelta(days=8), NOW) == 0

    def test_recency_bonus_uses_fractional_days(self):
        assert calculate_recency_bonus(NOW - timedelta(hours=36), NOW) == pytest.approx(27.5)


class TestSponsorshipEligibility:

    def test_plain_sponsored_job_is_active(self):
        assert is_sponsorship_active(fake_job(1, is_sponsored=True), NOW)

    def test_not_sponsored(self):
        assert not is_sponsorship_active(fake_job(1), NOW)

    def test_lapsed_end_date(self):
        job = fake_job(1, is_sponsored=True, sponsored_until=NOW - timedelta(minutes=1))
        assert not is_sponsorship_active(job, NOW)

    def test_future_end_date(self):
        job = fake_job(1, is_sponsored=True, sponsored_until=NOW + timedelta(days=1))
        assert is_sponsorship_active(job, NOW)

    def test_quota_exhausted(self):
        job = fake_job(1, is_sponsored=True, impression_limit=1000, impressions_used=1000)
        assert not is_sponsorship_active(job, NOW)

    def test_quota_remaining(self):
        job = fake_job(1, is_sponsored=True, impression_limit=1000, impressions_used=999)
        assert is_sponsorship_active(job, NOW)


class TestRankJobs:
    """Final display order"""

    def test_empty_pool(self):
        assert rank_jobs([], now=NOW) == []

    def test_sponsored_jobs_come_first_newest_first(self):
        popular = fake_job(1, days_old=0, likes=500)
        old_sponsor = fake_job(2, days_old=20, is_sponsored=True)
        new_sponsor = fake_job(3, days_old=10, is_sponsored=True)

        ranked = rank_jobs([popular, old_sponsor, new_sponsor], now=NOW)

        assert [r.job.id for r in ranked] == [3, 2, 1]
        assert ranked[0].ranking_score == SPONSORED_SCORE
        assert ranked[1].ranking_score == SPONSORED_SCORE
        assert ranked[2].ranking_score < SPONSORED_SCORE

    def test_lapsed_sponsorship_ranks_organically(self):
        lapsed = fake_job(1, days_old=30, is_sponsored=True, impression_limit=1000, impressions_used=1000)
        fresh = fake_job(2, days_old=1)

        ranked = rank_jobs([lapsed, fresh], now=NOW)

        assert [r.job.id for r in ranked] == [2, 1]
        assert ranked[1].ranking_score == 0

    def test_free_jobs_sorted_by_total_score(self):
        rep = EmployerReputation(average_rating=5, response_rate=100, completed_hires=20, is_verified=True)
        quiet = fake_job(1, days_old=30)
        engaged = fake_job(2, days_old=30, likes=10, comments=5)  # engagement 25 -> 10
        reputable = fake_job(3, days_old=30, reputation=rep)  # reputation 40+30+20+10 -> 40

        ranked = rank_jobs([quiet, engaged, reputable], now=NOW)

        assert [r.job.id for r in ranked] == [3, 2, 1]
        assert ranked[0].ranking_score == pytest.approx(40)
        assert ranked[1].ranking_score == pytest.approx(10)

    def test_total_score_combines_components(self):
        rep = EmployerReputation(average_rating=4.5, response_rate=80, completed_hires=30, is_verified=True)
        job = fake_job(1, days_old=2, likes=3, comments=4, reputation=rep)

        ranked = rank_jobs([job], now=NOW)

        assert ranked[0].ranking_score == pytest.approx(10 * 0.4 + 90 * 0.4 + 25)

    def test_ties_keep_fetch_order(self):
        jobs = [fake_job(i, days_old=30) for i in (5, 3, 9, 1)]

        ranked = rank_jobs(jobs, now=NOW)

        assert [r.job.id for r in ranked] == [5, 3, 9, 1]

    def test_ranking_is_deterministic(self):
        jobs = [fake_job(i, days_old=i % 9, likes=i % 4, comments=i % 3) for i in range(30)]
        jobs.append(fake_job(99, is_sponsored=True))

        first = [(r.job.id, r.ranking_score) for r in rank_jobs(jobs, now=NOW)]
        second = [(r.job.id, r.ranking_score) for r in rank_jobs(jobs, now=NOW)]

        assert first == second

    def test_capped_at_fifty_after_merge(self):
        jobs = [fake_job(i, days_old=30) for i in range(60)]
        jobs += [fake_job(100 + i, is_sponsored=True) for i in range(5)]

        ranked = rank_jobs(jobs, now=NOW)

        assert len(ranked) == 50
        assert all(r.ranking_score == SPONSORED_SCORE for r in ranked[:5])

    def test_custom_reputation_lookup(self):
        jobs = [fake_job(1, days_old=30), fake_job(2, days_old=30)]
        reps = {2: EmployerReputation(is_verified=True)}

        ranked = rank_jobs(jobs, now=NOW, reputation_for=lambda job: reps.get(job.id))

        assert [r.job.id for r in ranked] == [2, 1]
        assert ranked[0].ranking_score == pytest.approx(4)


class TestListingQuery:
    """Candidate pool fetched from the database"""

    def test_only_approved_jobs_are_listed(self, job_factory):
        job_factory(title='Visible')
        job_factory(title='Waiting', status='pending')
        job_factory(title='Refused', status='rejected')

        titles = [job.title for job in search_jobs()]

        assert titles == ['Visible']

    def test_title_filter_matches_company_and_description(self, job_factory):
        job_factory(title='Python Developer')
        job_factory(title='Designer', description='Figma work with a python-curious team')
        job_factory(title='Accountant', description='Spreadsheets all day long, nothing else.')

        titles = sorted(job.title for job in search_jobs(title='PYTHON'))

        assert titles == ['Designer', 'Python Developer']

    def test_location_type_and_salary_filters(self, job_factory):
        job_factory(title='A', location='Berlin, DE', job_type='full_time', salary_min=60000)
        job_factory(title='B', location='Munich, DE', job_type='full_time', salary_min=80000)
        job_factory(title='C', location='Berlin, DE', job_type='contract', salary_min=90000)

        assert [j.title for j in search_jobs(location='berlin', job_type='full_time')] == ['A']
        assert sorted(j.title for j in search_jobs(min_salary=75000)) == ['B', 'C']
        assert len(search_jobs(job_type='all')) == 3

    def test_like_wildcards_are_literal(self, job_factory):
        job_factory(title='100% Remote')
        job_factory(title='Onsite')

        assert [j.title for j in search_jobs(title='%')] == ['100% Remote']

    def test_ranked_listing_puts_sponsored_first(self, job_factory, employer):
        employer.average_rating = 5
        organic = job_factory(title='Organic', likes_count=50, comments_count=10)
        sponsored = job_factory(title='Sponsored', is_sponsored=True, impression_limit=1000)

        ranked = get_ranked_listing()

        assert [r.job.id for r in ranked] == [sponsored.id, organic.id]
        assert ranked[0].to_dict()['isSponsoredPlacement'] is True
        assert ranked[0].to_dict()['rankingScore'] == SPONSORED_DISPLAY_SCORE
        assert ranked[1].to_dict()['rankingScore'] > 0
