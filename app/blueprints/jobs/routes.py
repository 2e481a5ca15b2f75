"""
Jobs Routes
Ranked listing and per-job engagement endpoints
"""
from flask import request, jsonify, current_app
from flask_login import login_required, current_user
from app import limiter
from app.blueprints.jobs import jobs_bp
from app.services import engagement_service, fit_score_service
from app.services.ranking_service import get_ranked_listing
from app.services.sponsorship_service import sponsorship_service
from app.utils.security_decorators import require_role


def _impression_rate_limit():
    return current_app.config.get('IMPRESSION_RATE_LIMIT', '60 per minute')


@jobs_bp.route('/')
def index():
    """Ranked listing of approved jobs"""
    min_salary = request.args.get('minSalary')
    try:
        min_salary = int(min_salary) if min_salary else None
    except ValueError:
        min_salary = None

    ranked = get_ranked_listing(
        title=request.args.get('title') or None,
        location=request.args.get('location') or None,
        job_type=request.args.get('type') or None,
        category=request.args.get('category') or None,
        min_salary=min_salary
    )

    return jsonify({
        'jobs': [r.to_dict() for r in ranked],
        'count': len(ranked)
    })


@jobs_bp.route('/<int:job_id>/impression', methods=['POST'])
@limiter.limit(_impression_rate_limit)
def impression(job_id):
    """Track a job detail view (guests allowed)"""
    user_id = current_user.id if current_user.is_authenticated else None

    result = sponsorship_service.record_impression(
        job_id,
        user_id=user_id,
        ip_address=request.remote_addr,
        user_agent=request.headers.get('User-Agent', '')
    )

    if result is None:
        return jsonify({'error': 'Job not found'}), 404

    return jsonify(result)


@jobs_bp.route('/<int:job_id>/like', methods=['POST'])
@login_required
@require_role('applicant', 'employer', 'admin')
def like(job_id):
    """Like a job"""
    job = engagement_service.like_job(job_id, current_user.id)
    return jsonify({
        'message': 'Job liked successfully',
        'likesCount': job.likes_count,
        'engagementScore': job.engagement_score
    })


@jobs_bp.route('/<int:job_id>/like', methods=['DELETE'])
@login_required
@require_role('applicant', 'employer', 'admin')
def unlike(job_id):
    """Unlike a job"""
    job = engagement_service.unlike_job(job_id, current_user.id)
    return jsonify({
        'message': 'Job unliked successfully',
        'likesCount': job.likes_count,
        'engagementScore': job.engagement_score
    })


@jobs_bp.route('/<int:job_id>/comments')
def comments(job_id):
    """Public comments for a job"""
    return jsonify([c.to_dict() for c in engagement_service.get_comments(job_id)])


@jobs_bp.route('/<int:job_id>/comments', methods=['POST'])
@login_required
@require_role('applicant')
def create_comment(job_id):
    """Post a public comment"""
    data = request.get_json(silent=True) or {}
    comment = engagement_service.add_comment(
        job_id,
        current_user,
        data.get('body'),
        is_anonymous=data.get('isAnonymous', False)
    )
    return jsonify(comment.to_dict()), 201


@jobs_bp.route('/<int:job_id>/fit-score')
@login_required
@require_role('applicant')
def fit_score(job_id):
    """Applicant's fit score for a job (cached for an hour)"""
    score = fit_score_service.get_fit_score(job_id, current_user.id)
    return jsonify(score.to_dict())
