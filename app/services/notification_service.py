"""
Notification Service
Creates in-app notifications for employers
"""
from flask import current_app
from app import db
from app.models.notification import Notification


def notify(user_id, type, title, message, link='/employer/dashboard'):
    """
    Queue a notification in the current session

    The caller commits, so the notification lands in the same transaction
    as the change it describes.

    Returns:
        Notification: The pending notification
    """
    notification = Notification(
        user_id=user_id,
        type=type,
        title=title,
        message=message,
        link=link
    )
    db.session.add(notification)
    current_app.logger.info(f"Notification '{type}' queued for user {user_id}")
    return notification


def notify_job_sponsored(job, impression_limit):
    return notify(
        job.employer_id,
        'job_sponsored',
        'Job Post Sponsored',
        f'Your job "{job.title}" is now sponsored with {impression_limit} impressions.'
    )


def notify_sponsorship_expired(job, quota_used_up=True):
    reason = 'used all of its sponsored impressions' if quota_used_up else 'reached its sponsorship end date'
    return notify(
        job.employer_id,
        'sponsorship_expired',
        'Sponsorship Ended',
        f'Your job "{job.title}" {reason} and is now a free listing.'
    )


def notify_low_impressions(job, remaining):
    return notify(
        job.employer_id,
        'low_impressions',
        'Sponsored Impressions Running Low',
        f'Your job "{job.title}" has {remaining} sponsored impressions left.'
    )


def notify_sponsorship_stopped(job, refund_amount):
    return notify(
        job.employer_id,
        'sponsorship_stopped',
        'Sponsorship Stopped',
        f'Sponsorship for "{job.title}" was stopped. ${refund_amount:.2f} was refunded to your balance.'
    )


def notify_balance_topup(user_id, amount, new_balance):
    return notify(
        user_id,
        'balance_topup',
        'Balance Added',
        f'${amount:.2f} has been added to your account. New balance: ${new_balance:.2f}'
    )


def get_notifications(user_id, unread_only=False, limit=50):
    """Most recent notifications for a user, newest first"""
    query = Notification.query.filter_by(user_id=user_id)
    if unread_only:
        query = query.filter_by(is_read=False)
    return query.order_by(Notification.created_at.desc(), Notification.id.desc()).limit(limit).all()
