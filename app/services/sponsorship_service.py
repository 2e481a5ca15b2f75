"""
Sponsorship Service
Pay-per-impression ledger for sponsored job listings: purchase, refunds,
top-ups and impression billing
"""
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Dict, Optional
from flask import current_app
from app import db
from app.models.user import User
from app.models.job import Job
from app.models.balance_transaction import (BalanceTransaction, TYPE_DEDUCTION,
                                            TYPE_REFUND, TYPE_TOPUP)
from app.models.job_impression import JobImpression
from app.services import notification_service
from app.services.errors import (NotFoundError, ForbiddenError, InvalidStateError,
                                 ValidationError, InsufficientFundsError)
from app.services.ranking_service import is_sponsorship_active
from app.utils.input_validators import validate_impression_limit, validate_amount, clean_target


def _target_matches(target: Optional[str], actual: Optional[str]) -> bool:
    """An unset target matches everyone; a set one needs an equal viewer value"""
    if not target:
        return True
    if not actual:
        return False
    return target.strip().lower() == actual.strip().lower()


class SponsorshipService:
    """Service for sponsored job billing"""

    # ===== CONFIGURATION =====

    @property
    def cost_per_impression(self) -> Decimal:
        return Decimal(str(current_app.config.get('SPONSOR_COST_PER_IMPRESSION', '0.001')))

    @property
    def min_impressions(self) -> int:
        return current_app.config.get('SPONSOR_MIN_IMPRESSIONS', 1000)

    @property
    def dedup_window(self) -> timedelta:
        return timedelta(minutes=current_app.config.get('IMPRESSION_DEDUP_WINDOW_MINUTES', 60))

    @property
    def low_impressions_threshold(self) -> int:
        return current_app.config.get('LOW_IMPRESSIONS_THRESHOLD', 100)

    # ===== ROW LOCKING =====

    @staticmethod
    def _lock_job(job_id) -> Optional[Job]:
        """Load a job with a row lock for the rest of the transaction"""
        return Job.query.filter_by(id=job_id).with_for_update().populate_existing().first()

    @staticmethod
    def _lock_user(user_id) -> Optional[User]:
        """Load a user with a row lock for the rest of the transaction"""
        return User.query.filter_by(id=user_id).with_for_update().populate_existing().first()

    # ===== IMPRESSIONS =====

    def is_targeted(self, job: Job, viewer: Optional[User]) -> bool:
        """
        Check whether a viewer belongs to the job's sponsored audience

        Every targeting field set on the job must match the viewer. Guests only
        count when the job has no targeting at all.
        """
        if viewer is None:
            return not job.has_targeting

        profile = viewer.targeting_profile()
        return (_target_matches(job.target_location, profile['location'])
                and _target_matches(job.target_experience, profile['experience'])
                and _target_matches(job.target_education, profile['education']))

    def record_impression(
        self,
        job_id: int,
        user_id: Optional[int] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        now: Optional[datetime] = None
    ) -> Optional[Dict]:
        """
        Count one view of a job and bill it when it is a sponsored impression

        Args:
            job_id: Viewed job
            user_id: Signed-in viewer, None for guests
            ip_address: Viewer IP address
            user_agent: Viewer user agent string
            now: Reference time (defaults to utcnow)

        Returns:
            Result dict ({success, sponsored, duplicate?, isTargeted?,
            impressionsRemaining?}) or None when the job is missing or not
            approved (nothing is recorded).

        Raises:
            InsufficientFundsError: employer balance cannot cover the impression
        """
        now = now or datetime.utcnow()

        try:
            job = self._lock_job(job_id)
            if not job or not job.is_approved:
                db.session.rollback()
                return None

            # Free listing: plain view counter
            if not job.is_sponsored:
                job.views_count = Job.views_count + 1
                db.session.commit()
                return {'success': True, 'sponsored': False}

            # Quota used up (or end date passed): back to a free listing
            if not is_sponsorship_active(job, now):
                quota_used_up = job.impressions_remaining == 0
                job.is_sponsored = False
                job.sponsored_until = None
                notification_service.notify_sponsorship_expired(job, quota_used_up=quota_used_up)
                db.session.commit()
                current_app.logger.info(f"Sponsorship for job {job_id} expired after {job.impressions_used} impressions")
                return {'success': True, 'sponsored': False}

            duplicate = JobImpression.find_recent(
                job.id,
                user_id=user_id,
                ip_address=ip_address,
                user_agent=user_agent,
                window=self.dedup_window,
                now=now
            )
            if duplicate:
                db.session.rollback()
                return {'success': True, 'sponsored': True, 'duplicate': True}

            viewer = db.session.get(User, user_id) if user_id is not None else None
            if not self.is_targeted(job, viewer):
                # Off-target views are free to the employer
                db.session.rollback()
                return {'success': True, 'sponsored': True, 'isTargeted': False}

            employer = self._lock_user(job.employer_id)
            if employer is None:
                raise NotFoundError("Employer not found")

            cost = Decimal(job.cost_per_impression)
            if employer.balance < cost:
                raise InsufficientFundsError(required=cost, current=employer.balance)

            impression = JobImpression(
                job_id=job.id,
                user_id=viewer.id if viewer else None,
                ip_address=ip_address,
                user_agent=user_agent,
                is_targeted=True,
                created_at=now
            )
            db.session.add(impression)

            job.impressions_used = Job.impressions_used + 1
            BalanceTransaction.record(
                employer,
                -cost,
                TYPE_DEDUCTION,
                description=f'Sponsored impression: job {job.id}',
                related_job_id=job.id
            )
            db.session.flush()

            remaining = job.impressions_remaining
            if remaining is not None and 0 < remaining <= self.low_impressions_threshold:
                notification_service.notify_low_impressions(job, remaining)

            db.session.commit()

        except Exception:
            db.session.rollback()
            raise

        result = {'success': True, 'sponsored': True, 'isTargeted': True}
        if remaining is not None:
            result['impressionsRemaining'] = remaining
        return result

    # ===== SPONSOR / STOP =====

    def sponsor_job(
        self,
        employer_id: int,
        job_id: int,
        impression_limit,
        target_location: Optional[str] = None,
        target_experience: Optional[str] = None,
        target_education: Optional[str] = None
    ) -> Dict:
        """
        Buy a block of impressions for an approved job, paid up front

        Args:
            employer_id: Requesting employer (must own the job)
            job_id: Job to sponsor
            impression_limit: Impressions to buy (at least SPONSOR_MIN_IMPRESSIONS)
            target_location: Optional audience filter
            target_experience: Optional audience filter
            target_education: Optional audience filter

        Returns:
            dict with 'job', 'cost' and 'remainingBalance'
        """
        is_valid, limit = validate_impression_limit(impression_limit, self.min_impressions)
        if not is_valid:
            raise InvalidStateError(limit)

        targets = {}
        for field, value in (('target_location', target_location),
                             ('target_experience', target_experience),
                             ('target_education', target_education)):
            is_valid, cleaned = clean_target(value, field)
            if not is_valid:
                raise ValidationError(cleaned)
            targets[field] = cleaned

        cost_per_impression = self.cost_per_impression
        total_cost = cost_per_impression * limit

        try:
            job = self._lock_job(job_id)
            if not job:
                raise NotFoundError("Job not found")
            if job.employer_id != employer_id:
                raise ForbiddenError("Not your job")
            if not job.is_approved:
                raise InvalidStateError("Job must be approved before sponsoring")
            if is_sponsorship_active(job):
                raise InvalidStateError("Job is already sponsored")

            # Re-checked under the lock so concurrent purchases cannot overdraw
            employer = self._lock_user(employer_id)
            if employer is None:
                raise NotFoundError("Employer not found")
            if employer.balance < total_cost:
                raise InsufficientFundsError(required=total_cost, current=employer.balance)

            job.is_sponsored = True
            job.sponsored_until = None  # No time limit, only impression limit
            job.impression_limit = limit
            job.impressions_used = 0
            job.cost_per_impression = cost_per_impression
            for field, value in targets.items():
                setattr(job, field, value)

            BalanceTransaction.record(
                employer,
                -total_cost,
                TYPE_DEDUCTION,
                description=f'Sponsored job post: {limit} impressions',
                related_job_id=job.id
            )
            notification_service.notify_job_sponsored(job, limit)
            remaining_balance = employer.balance
            db.session.commit()

        except InsufficientFundsError as e:
            db.session.rollback()
            current_app.logger.warning(
                f"Employer {employer_id} cannot sponsor job {job_id}: needs {e.required}, has {e.current}")
            raise
        except Exception:
            db.session.rollback()
            raise

        current_app.logger.info(f"Job {job_id} sponsored by employer {employer_id}: {limit} impressions for ${total_cost}")
        return {
            'job': job,
            'cost': total_cost,
            'remainingBalance': remaining_balance
        }

    def stop_sponsorship(self, employer_id: int, job_id: int) -> Dict:
        """
        Stop a sponsorship and refund the unused impressions

        Returns:
            dict with 'job' and 'refundAmount'
        """
        try:
            job = self._lock_job(job_id)
            if not job:
                raise NotFoundError("Job not found")
            if job.employer_id != employer_id:
                raise ForbiddenError("Not your job")
            if not job.is_sponsored:
                raise InvalidStateError("Job is not sponsored")

            unused_impressions = job.impressions_remaining or 0
            refund_amount = Decimal(unused_impressions) * Decimal(job.cost_per_impression)

            if refund_amount > 0:
                employer = self._lock_user(employer_id)
                if employer is None:
                    raise NotFoundError("Employer not found")
                BalanceTransaction.record(
                    employer,
                    refund_amount,
                    TYPE_REFUND,
                    description=f'Refund for {unused_impressions} unused impressions',
                    related_job_id=job.id
                )

            job.clear_sponsorship()
            notification_service.notify_sponsorship_stopped(job, refund_amount)
            db.session.commit()

        except Exception:
            db.session.rollback()
            raise

        current_app.logger.info(f"Sponsorship for job {job_id} stopped, refunded ${refund_amount}")
        return {'job': job, 'refundAmount': refund_amount}

    # ===== BALANCE =====

    def top_up_balance(self, actor: User, amount, target_user_id: Optional[int] = None) -> Dict:
        """
        Add funds to an ad balance

        Employers top up their own balance; admins top up an employer by
        passing target_user_id. Only employer accounts hold an ad balance.

        Returns:
            dict with 'transaction' and 'newBalance'
        """
        if not (actor.is_employer or actor.is_admin):
            raise ForbiddenError("Forbidden")

        if actor.is_admin and not target_user_id:
            raise ValidationError("targetUserId required for admin top-ups")

        is_valid, value = validate_amount(amount)
        if not is_valid:
            raise ValidationError(value)

        target_id = target_user_id if actor.is_admin else actor.id
        description = f'Admin top-up by {actor.full_name}' if actor.is_admin else 'Balance top-up'

        try:
            user = self._lock_user(target_id)
            if user is None:
                raise NotFoundError("User not found")
            if not user.is_employer:
                raise InvalidStateError("Only employer accounts hold an ad balance")

            transaction = BalanceTransaction.record(user, value, TYPE_TOPUP, description=description)
            new_balance = user.balance
            notification_service.notify_balance_topup(user.id, value, new_balance)
            db.session.commit()

        except Exception:
            db.session.rollback()
            raise

        current_app.logger.info(f"Balance top-up of ${value} for user {target_id} by user {actor.id}")
        return {'transaction': transaction, 'newBalance': new_balance}

    def get_balance(self, user_id: int, limit: Optional[int] = None) -> Dict:
        """Current balance and most recent transactions, newest first"""
        user = db.session.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")

        if limit is None:
            limit = current_app.config.get('TRANSACTIONS_PER_PAGE', 50)

        transactions = BalanceTransaction.query.filter_by(user_id=user_id).order_by(
            BalanceTransaction.id.desc()
        ).limit(limit).all()

        return {'adBalance': user.balance, 'balanceTransactions': transactions}

    def verify_ledger(self, user_id: int) -> Dict:
        """
        Audit an employer's transaction history

        Every row must satisfy balance_after == balance_before + amount and
        chain onto the previous row; the last row must match the stored balance.
        """
        user = db.session.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")

        transactions = BalanceTransaction.query.filter_by(user_id=user_id).order_by(
            BalanceTransaction.id.asc()
        ).all()

        errors = []
        previous = None
        for transaction in transactions:
            before = Decimal(transaction.balance_before)
            after = Decimal(transaction.balance_after)
            if before + Decimal(transaction.amount) != after:
                errors.append({'transactionId': transaction.id, 'problem': 'amount_mismatch'})
            if previous is not None and Decimal(previous.balance_after) != before:
                errors.append({'transactionId': transaction.id, 'problem': 'broken_chain'})
            previous = transaction

        if previous is not None and Decimal(previous.balance_after) != user.balance:
            errors.append({'transactionId': previous.id, 'problem': 'balance_mismatch'})

        if errors:
            current_app.logger.error(f"Ledger for user {user_id} has {len(errors)} inconsistencies")

        return {
            'valid': not errors,
            'errors': errors,
            'transactionCount': len(transactions),
            'adBalance': user.balance
        }


# Singleton instance
sponsorship_service = SponsorshipService()
