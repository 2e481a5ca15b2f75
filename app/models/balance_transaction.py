"""
Balance Transaction Model
Append-only ledger of employer ad balance mutations
"""
from datetime import datetime
from decimal import Decimal
from sqlalchemy import event
from app import db


TYPE_TOPUP = 'topup'
TYPE_DEDUCTION = 'deduction'
TYPE_REFUND = 'refund'
TRANSACTION_TYPES = (TYPE_TOPUP, TYPE_DEDUCTION, TYPE_REFUND)


class ImmutableTransactionError(Exception):
    """Raised when code tries to modify or delete a ledger row"""


class BalanceTransaction(db.Model):
    """One balance mutation. balance_after == balance_before + amount."""
    __tablename__ = 'balance_transactions'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)

    amount = db.Column(db.Numeric(12, 4), nullable=False)  # signed
    type = db.Column(db.String(20), nullable=False, index=True)  # topup, deduction, refund
    description = db.Column(db.String(500))
    balance_before = db.Column(db.Numeric(12, 4), nullable=False)
    balance_after = db.Column(db.Numeric(12, 4), nullable=False)
    related_job_id = db.Column(db.Integer, db.ForeignKey('jobs.id', ondelete='SET NULL'), nullable=True, index=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)

    # Relationships
    user = db.relationship('User', back_populates='balance_transactions')
    related_job = db.relationship('Job')

    def __repr__(self):
        return f'<BalanceTransaction {self.type} {self.amount}>'

    @classmethod
    def record(cls, user, amount, type, description=None, related_job_id=None):
        """
        Apply a signed amount to the user's balance and append the ledger row

        Both changes are added to the current session; the caller owns the commit.

        Args:
            user: User whose ad_balance changes (should be row-locked by the caller)
            amount: Signed Decimal amount
            type: One of TRANSACTION_TYPES
            description: Human readable description
            related_job_id: Optional job the mutation belongs to

        Returns:
            BalanceTransaction: The pending ledger row
        """
        if type not in TRANSACTION_TYPES:
            raise ValueError(f"Unknown transaction type: {type}")

        amount = Decimal(amount)
        balance_before = user.balance
        balance_after = balance_before + amount
        if balance_after < 0:
            raise ValueError("Balance cannot go negative")

        user.ad_balance = balance_after
        transaction = cls(
            user_id=user.id,
            amount=amount,
            type=type,
            description=description,
            balance_before=balance_before,
            balance_after=balance_after,
            related_job_id=related_job_id
        )
        db.session.add(transaction)
        return transaction

    def to_dict(self):
        return {
            'id': self.id,
            'userId': self.user_id,
            'amount': float(self.amount),
            'type': self.type,
            'description': self.description,
            'balanceBefore': float(self.balance_before),
            'balanceAfter': float(self.balance_after),
            'relatedJobId': self.related_job_id,
            'createdAt': self.created_at.isoformat() if self.created_at else None
        }


@event.listens_for(BalanceTransaction, 'before_update')
def _block_update(mapper, connection, target):
    raise ImmutableTransactionError(f"Balance transaction {target.id} is immutable")


@event.listens_for(BalanceTransaction, 'before_delete')
def _block_delete(mapper, connection, target):
    raise ImmutableTransactionError(f"Balance transaction {target.id} cannot be deleted")
