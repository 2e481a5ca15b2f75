"""
Fit Score Service
Scores how well an applicant's profile fits a job's criteria
"""
from datetime import datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional
from flask import current_app
from app import db
from app.models.job_fit import JobFitCriteria, ApplicantProfile, JobFitScore
from app.services.errors import NotFoundError


EDUCATION_LEVELS = ['high_school', 'associate', 'bachelor', 'master', 'phd']

CATEGORY_WEIGHTS = {
    'education': 0.20,
    'experience': 0.20,
    'essential_skills': 0.15,
    'technical_skills': 0.20,
    'attributes': 0.15,
    'cultural_fit': 0.10,
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (12.5 -> 13)"""
    return int(Decimal(str(value)).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def _education_index(level: Optional[str], default: str) -> int:
    value = (level or default).lower()
    return EDUCATION_LEVELS.index(value) if value in EDUCATION_LEVELS else -1


def calculate_education_score(required: Optional[str], preferred: Optional[str], actual: Optional[str]) -> int:
    required_index = _education_index(required, 'high_school')
    preferred_index = _education_index(preferred or required, 'bachelor')
    actual_index = _education_index(actual, 'high_school')

    if actual_index >= preferred_index:
        return 100
    if actual_index >= required_index:
        return 70
    if actual_index == required_index - 1:
        return 40
    return 20


def calculate_experience_score(min_years: Optional[int], preferred_years: Optional[int], actual_years: Optional[int]) -> int:
    if not actual_years:
        return 0
    min_years = min_years or 0
    if actual_years >= (preferred_years or min_years):
        return 100
    if actual_years >= min_years:
        return 70
    if actual_years >= min_years * 0.7:
        return 50
    return 30


def _normalize(values: List[str]) -> List[str]:
    return [str(v).lower().strip() for v in values]


def calculate_skills_score(required_skills: List[str], applicant_skills: List[str]) -> int:
    """Share of required skills the applicant lists (substring match either way)"""
    if not required_skills:
        return 100
    if not applicant_skills:
        return 0

    applicant = _normalize(applicant_skills)
    matched = [
        skill for skill in _normalize(required_skills)
        if any(have in skill or skill in have for have in applicant)
    ]
    return round_half_up(len(matched) / len(required_skills) * 100)


def calculate_exact_match_score(required: List[str], actual: List[str], empty_score: int = 0) -> int:
    """Share of required values present verbatim (case-insensitive)"""
    if not required:
        return 100
    if not actual:
        return empty_score

    actual_set = set(_normalize(actual))
    matched = [value for value in _normalize(required) if value in actual_set]
    return round_half_up(len(matched) / len(required) * 100)


def get_status(score: int) -> str:
    if score >= 80:
        return 'passed'
    if score >= 50:
        return 'partially'
    return 'failed'


def calculate_fit_scores(criteria: JobFitCriteria, profile: ApplicantProfile) -> Dict:
    """
    Score every category and the weighted overall fit

    Returns:
        Dict keyed like JobFitScore columns
    """
    scores = {
        'education': calculate_education_score(
            criteria.required_education, criteria.preferred_education, profile.education),
        'experience': calculate_experience_score(
            criteria.min_years_experience, criteria.preferred_years_experience, profile.years_experience),
        'essential_skills': calculate_skills_score(
            criteria.essential_skills_list, profile.essential_skills_list),
        'technical_skills': calculate_skills_score(
            criteria.technical_skills_list, profile.technical_skills_list),
        'attributes': calculate_exact_match_score(
            criteria.personal_attributes_list, profile.personal_attributes_list),
        # Neutral when the applicant lists no values
        'cultural_fit': calculate_exact_match_score(
            criteria.cultural_values_list, profile.cultural_values_list, empty_score=50),
    }

    result = {'overall_score': round_half_up(sum(scores[name] * weight for name, weight in CATEGORY_WEIGHTS.items()))}
    for name, score in scores.items():
        result[f'{name}_score'] = score
        result[f'{name}_status'] = get_status(score)
    return result


def get_fit_score(job_id: int, applicant_id: int, now: Optional[datetime] = None) -> JobFitScore:
    """
    Cached fit score for an applicant, recalculated when older than the cache window

    Raises:
        NotFoundError: job criteria or applicant profile missing
    """
    now = now or datetime.utcnow()
    cache_window = timedelta(minutes=current_app.config.get('FIT_SCORE_CACHE_MINUTES', 60))

    existing = JobFitScore.query.filter_by(job_id=job_id, applicant_id=applicant_id).first()
    if existing and existing.calculated_at > now - cache_window:
        return existing

    criteria = JobFitCriteria.query.filter_by(job_id=job_id).first()
    if not criteria:
        raise NotFoundError("Job fit criteria not set")

    profile = ApplicantProfile.query.filter_by(user_id=applicant_id).first()
    if not profile:
        raise NotFoundError("Applicant profile not found")

    scores = calculate_fit_scores(criteria, profile)

    fit_score = existing or JobFitScore(job_id=job_id, applicant_id=applicant_id)
    for column, value in scores.items():
        setattr(fit_score, column, value)
    fit_score.calculated_at = now

    if not existing:
        db.session.add(fit_score)
    db.session.commit()

    current_app.logger.debug(f"Fit score for applicant {applicant_id} on job {job_id}: {fit_score.overall_score}")
    return fit_score
