"""
Employer Routes
Sponsor jobs, stop sponsorship, and manage the ad balance
"""
from flask import request, jsonify
from flask_login import login_required, current_user
from app.blueprints.employer import employer_bp
from app.services import notification_service
from app.services.sponsorship_service import sponsorship_service
from app.utils.security_decorators import require_role


def to_int_or_none(value):
    """Convert request values to int, treating blanks and junk as missing"""
    if value == '' or value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (ValueError, TypeError):
        return None


@employer_bp.route('/sponsor', methods=['POST'])
@login_required
@require_role('employer')
def sponsor():
    """Sponsor a job post"""
    data = request.get_json(silent=True) or {}

    job_id = to_int_or_none(data.get('jobId'))
    if not job_id or not data.get('impressionLimit'):
        return jsonify({'error': 'jobId and impressionLimit (minimum 1000) required'}), 400

    result = sponsorship_service.sponsor_job(
        current_user.id,
        job_id,
        data.get('impressionLimit'),
        target_location=data.get('targetLocation'),
        target_experience=data.get('targetExperience'),
        target_education=data.get('targetEducation')
    )

    return jsonify({
        'success': True,
        'job': result['job'].to_dict(),
        'cost': float(result['cost']),
        'remainingBalance': float(result['remainingBalance'])
    })


@employer_bp.route('/sponsor', methods=['DELETE'])
@login_required
@require_role('employer')
def stop_sponsor():
    """Stop sponsoring a job and refund unused impressions"""
    job_id = to_int_or_none(request.args.get('jobId'))
    if not job_id:
        return jsonify({'error': 'jobId required'}), 400

    result = sponsorship_service.stop_sponsorship(current_user.id, job_id)

    return jsonify({
        'success': True,
        'job': result['job'].to_dict(),
        'refundAmount': float(result['refundAmount'])
    })


@employer_bp.route('/balance')
@login_required
@require_role('employer')
def balance():
    """Current balance and recent transaction history"""
    result = sponsorship_service.get_balance(current_user.id)

    return jsonify({
        'adBalance': float(result['adBalance']),
        'balanceTransactions': [t.to_dict() for t in result['balanceTransactions']]
    })


@employer_bp.route('/balance/topup', methods=['POST'])
@login_required
@require_role('employer', 'admin')
def topup():
    """Add balance (admins may top up another account via targetUserId)"""
    data = request.get_json(silent=True) or {}

    result = sponsorship_service.top_up_balance(
        current_user,
        data.get('amount'),
        target_user_id=to_int_or_none(data.get('targetUserId'))
    )

    return jsonify({
        'success': True,
        'transaction': result['transaction'].to_dict(),
        'newBalance': float(result['newBalance'])
    })


@employer_bp.route('/balance/audit')
@login_required
@require_role('employer', 'admin')
def audit():
    """Check the balance ledger for consistency"""
    user_id = current_user.id
    if current_user.is_admin:
        user_id = to_int_or_none(request.args.get('userId')) or user_id

    result = sponsorship_service.verify_ledger(user_id)
    result['adBalance'] = float(result['adBalance'])
    return jsonify(result)


@employer_bp.route('/notifications')
@login_required
@require_role('employer')
def notifications():
    """Recent notifications (sponsorship, low impressions, top-ups)"""
    unread_only = request.args.get('unread') == 'true'
    items = notification_service.get_notifications(current_user.id, unread_only=unread_only)
    return jsonify([n.to_dict() for n in items])
