"""
Admin routes for job moderation
"""
from flask import request, jsonify, current_app
from flask_login import login_required
from . import admin_bp
from app import db
from app.models.job import Job, STATUS_PENDING
from app.utils.security_decorators import require_admin


@admin_bp.route('/jobs')
@login_required
@require_admin
def jobs():
    """Jobs awaiting moderation (or any status via ?status=)"""
    status = request.args.get('status', STATUS_PENDING)
    query = Job.query
    if status != 'all':
        query = query.filter_by(status=status)
    jobs = query.order_by(Job.created_at.desc()).limit(200).all()
    return jsonify([job.to_dict() for job in jobs])


@admin_bp.route('/jobs/<int:job_id>/approve', methods=['POST'])
@login_required
@require_admin
def approve_job(job_id):
    """Approve a job so it enters the public listing"""
    job = db.get_or_404(Job, job_id)
    job.approve()
    db.session.commit()
    current_app.logger.info(f"Job {job_id} approved")
    return jsonify(job.to_dict())


@admin_bp.route('/jobs/<int:job_id>/reject', methods=['POST'])
@login_required
@require_admin
def reject_job(job_id):
    """Reject a job with an optional reason"""
    job = db.get_or_404(Job, job_id)
    data = request.get_json(silent=True) or {}
    job.reject(data.get('reason'))
    db.session.commit()
    current_app.logger.info(f"Job {job_id} rejected")
    return jsonify(job.to_dict())
