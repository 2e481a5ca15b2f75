"""
Ranking Service
Orders approved job listings: active sponsored jobs first, then organic
listings by engagement, employer reputation and recency
"""
from datetime import datetime
from typing import Callable, Iterable, List, NamedTuple, Optional
from flask import current_app
from app.models.job import Job, STATUS_APPROVED
from app.utils.input_validators import sanitize_sql_like_pattern


# Sponsored listings bypass scoring and always sort above organic ones
SPONSORED_SCORE = float('inf')
# JSON has no infinity; sponsored placements report this score instead
SPONSORED_DISPLAY_SCORE = 1_000_000_000
DEFAULT_PAGE_SIZE = 50
RECENCY_WINDOW_DAYS = 7


class EmployerReputation(NamedTuple):
    """Employer fields that feed the reputation score (any may be None)"""
    average_rating: Optional[float] = None  # 0-5
    response_rate: Optional[float] = None  # 0-100
    completed_hires: Optional[int] = None
    is_verified: Optional[bool] = None


class RankedJob(NamedTuple):
    job: Job
    ranking_score: float

    def to_dict(self):
        data = self.job.to_dict()
        data['rankingScore'] = SPONSORED_DISPLAY_SCORE if self.ranking_score == SPONSORED_SCORE else round(self.ranking_score, 4)
        data['isSponsoredPlacement'] = self.ranking_score == SPONSORED_SCORE
        return data


def calculate_engagement_score(likes_count: Optional[int], comments_count: Optional[int]) -> int:
    """likes x 2 + comments x 1"""
    return (likes_count or 0) * 2 + (comments_count or 0)


def calculate_reputation_score(reputation: Optional[EmployerReputation]) -> float:
    """
    Employer reputation on a roughly 0-100 scale

    Rating (0-5, normalized x20) weighs 40%, response rate 30%, completed hires
    (5 points each, capped at 100) 20%, plus a flat 10 for verified employers.
    Missing fields contribute nothing.
    """
    if reputation is None:
        return 0.0

    rating = reputation.average_rating or 0
    response_rate = reputation.response_rate or 0
    hires = reputation.completed_hires or 0

    score = rating * 20 * 0.4
    score += response_rate * 0.3
    score += min(hires * 5, 100) * 0.2
    if reputation.is_verified:
        score += 10
    return score


def calculate_recency_bonus(created_at: Optional[datetime], now: Optional[datetime] = None) -> float:
    """Up to 35 points, decaying linearly to zero over the first week"""
    if created_at is None:
        return 0.0
    now = now or datetime.utcnow()
    days_since_posted = (now - created_at).total_seconds() / 86400
    if days_since_posted > RECENCY_WINDOW_DAYS:
        return 0.0
    return max(0.0, (RECENCY_WINDOW_DAYS - days_since_posted) * 5)


def is_sponsorship_active(job, now: Optional[datetime] = None) -> bool:
    """Sponsored, not past sponsored_until, and under its impression quota"""
    if not job.is_sponsored:
        return False
    now = now or datetime.utcnow()
    if job.sponsored_until is not None and job.sponsored_until <= now:
        return False
    if job.impression_limit is not None and (job.impressions_used or 0) >= job.impression_limit:
        return False
    return True


def calculate_organic_score(job, reputation: Optional[EmployerReputation], now: Optional[datetime] = None) -> float:
    engagement = calculate_engagement_score(job.likes_count, job.comments_count)
    return (engagement * 0.4
            + calculate_reputation_score(reputation) * 0.4
            + calculate_recency_bonus(job.created_at, now))


def _employer_reputation(job) -> Optional[EmployerReputation]:
    employer = getattr(job, 'employer', None)
    return employer.reputation() if employer is not None else None


def rank_jobs(
    jobs: Iterable,
    now: Optional[datetime] = None,
    limit: int = DEFAULT_PAGE_SIZE,
    reputation_for: Optional[Callable] = None
) -> List[RankedJob]:
    """
    Produce the display order for a pool of approved jobs

    Args:
        jobs: Candidate jobs in fetch order (newest first)
        now: Reference time for recency and sponsorship expiry
        limit: Maximum number of results after merging
        reputation_for: Callable returning the EmployerReputation for a job;
            defaults to the job's employer

    Returns:
        RankedJob list: active sponsored jobs (newest first), then organic
        jobs by score. Equal scores keep their input order.
    """
    now = now or datetime.utcnow()
    reputation_for = reputation_for or _employer_reputation

    sponsored = []
    free = []
    for job in jobs:
        if is_sponsorship_active(job, now):
            sponsored.append(RankedJob(job, SPONSORED_SCORE))
        else:
            free.append(RankedJob(job, calculate_organic_score(job, reputation_for(job), now)))

    sponsored.sort(key=lambda ranked: ranked.job.created_at or datetime.min, reverse=True)
    # sorted() is stable: ties keep fetch order
    free = sorted(free, key=lambda ranked: ranked.ranking_score, reverse=True)

    return (sponsored + free)[:limit]


def search_jobs(
    title: Optional[str] = None,
    location: Optional[str] = None,
    job_type: Optional[str] = None,
    category: Optional[str] = None,
    min_salary: Optional[int] = None,
    fetch_limit: Optional[int] = None
) -> List[Job]:
    """
    Fetch the approved candidate pool for a listing request, newest first

    Args:
        title: Case-insensitive match against title, company or description
        location: Case-insensitive substring of the job location
        job_type: Exact job type ('all' means no filter)
        category: Exact category
        min_salary: Minimum salary_min
        fetch_limit: Maximum rows fetched before ranking

    Returns:
        List of Job objects
    """
    if fetch_limit is None:
        fetch_limit = current_app.config.get('RANKING_FETCH_LIMIT', 100)

    query = Job.query.filter(Job.status == STATUS_APPROVED)

    if title:
        pattern = f'%{sanitize_sql_like_pattern(title)}%'
        query = query.filter(
            Job.title.ilike(pattern, escape='\\')
            | Job.company.ilike(pattern, escape='\\')
            | Job.description.ilike(pattern, escape='\\')
        )

    if location:
        query = query.filter(Job.location.ilike(f'%{sanitize_sql_like_pattern(location)}%', escape='\\'))

    if job_type and job_type != 'all':
        query = query.filter(Job.job_type == job_type)

    if category:
        query = query.filter(Job.category == category)

    if min_salary is not None:
        query = query.filter(Job.salary_min >= min_salary)

    return query.order_by(Job.created_at.desc(), Job.id.desc()).limit(fetch_limit).all()


def get_ranked_listing(now: Optional[datetime] = None, **filters) -> List[RankedJob]:
    """Search, then rank and cap at the configured page size"""
    jobs = search_jobs(**filters)
    page_size = current_app.config.get('RANKING_PAGE_SIZE', DEFAULT_PAGE_SIZE)
    ranked = rank_jobs(jobs, now=now, limit=page_size)
    current_app.logger.debug(f"Ranked {len(ranked)} of {len(jobs)} jobs ({sum(1 for r in ranked if r.ranking_score == SPONSORED_SCORE)} sponsored)")
    return ranked
