#!/usr/bin/env python
"""
Balance Top-Up Script

Adds funds to an employer's ad balance through the ledger, or audits it.

Usage:
    python top_up_balance.py <email> <amount>
    python top_up_balance.py --audit <email>

Example:
    python top_up_balance.py hiring@acme.com 25.00

Or via Heroku:
    heroku run python top_up_balance.py hiring@acme.com 25.00
"""

import sys
import os

# Add the app directory to the path
sys.path.insert(0, os.path.dirname(__file__))

from app import create_app
from app.models.user import User
from app.services.errors import LedgerError
from app.services.sponsorship_service import sponsorship_service


def top_up(email, amount):
    """Credit an employer's balance as the first admin account"""
    app = create_app(os.getenv('FLASK_ENV', 'production'))

    with app.app_context():
        user = User.query.filter_by(email=email).first()

        if not user:
            print(f"❌ Error: No user found with email: {email}")
            return False

        if not user.is_employer:
            print(f"❌ Error: {email} is not an employer account")
            return False

        admin = User.query.filter_by(role='admin').order_by(User.id).first()
        if not admin:
            print("❌ Error: Create an admin account first")
            return False

        try:
            result = sponsorship_service.top_up_balance(admin, amount, target_user_id=user.id)
        except LedgerError as e:
            print(f"❌ Error: {e.message}")
            return False

        print(f"✅ Added ${result['transaction'].amount:.2f} to {email}")
        print(f"  New balance: ${result['newBalance']:.4f}")
        return True


def audit(email):
    """Print the ledger consistency report for an account"""
    app = create_app(os.getenv('FLASK_ENV', 'production'))

    with app.app_context():
        user = User.query.filter_by(email=email).first()

        if not user:
            print(f"❌ Error: No user found with email: {email}")
            return False

        report = sponsorship_service.verify_ledger(user.id)

        print(f"Ledger for {email} ({report['transactionCount']} transactions)")
        print("-" * 60)
        print(f"  Balance: ${report['adBalance']:.4f}")
        if report['valid']:
            print("✅ History is consistent")
        else:
            for error in report['errors']:
                print(f"  ❌ Transaction {error['transactionId']}: {error['problem']}")
        return report['valid']


if __name__ == '__main__':
    if len(sys.argv) < 3:
        print("Balance Management Script")
        print("=" * 60)
        print("\nUsage:")
        print("  Top up:  python top_up_balance.py <email> <amount>")
        print("  Audit:   python top_up_balance.py --audit <email>")
        sys.exit(1)

    if sys.argv[1] == '--audit':
        ok = audit(sys.argv[2])
    else:
        ok = top_up(sys.argv[1], sys.argv[2])

    sys.exit(0 if ok else 1)
