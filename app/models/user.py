from datetime import datetime
from decimal import Decimal
from flask_login import UserMixin
from app import db, bcrypt, login_manager


ROLE_APPLICANT = 'applicant'
ROLE_EMPLOYER = 'employer'
ROLE_ADMIN = 'admin'


@login_manager.user_loader
def load_user(user_id):
    """Load user by ID for Flask-Login"""
    return db.session.get(User, int(user_id))


class User(UserMixin, db.Model):
    """User model for applicants, employers and admins"""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)

    # Profile information
    first_name = db.Column(db.String(80))
    last_name = db.Column(db.String(80))
    role = db.Column(db.String(20), nullable=False, default=ROLE_APPLICANT, index=True)  # applicant, employer, admin
    company_name = db.Column(db.String(200))

    # Viewer profile (matched against sponsored job targeting)
    location = db.Column(db.String(200))
    experience_level = db.Column(db.String(50))  # ENTRY_LEVEL, MID_LEVEL, SENIOR, MANAGER
    education = db.Column(db.String(50))  # high_school, associate, bachelor, master, phd

    # Employer reputation
    average_rating = db.Column(db.Float)  # 0-5
    response_rate = db.Column(db.Float)  # 0-100
    completed_hires = db.Column(db.Integer, default=0)
    is_verified = db.Column(db.Boolean, default=False, nullable=False)

    # Prepaid advertising balance
    ad_balance = db.Column(db.Numeric(12, 4), default=Decimal('0'), nullable=False)

    # Status
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    # Timestamps
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    jobs = db.relationship('Job', back_populates='employer', lazy='dynamic')
    balance_transactions = db.relationship('BalanceTransaction', back_populates='user', lazy='dynamic',
                                           order_by='BalanceTransaction.id')
    notifications = db.relationship('Notification', back_populates='user', lazy='dynamic')

    def __repr__(self):
        return f'<User {self.email}>'

    def set_password(self, password):
        """Hash and set the user's password"""
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    @property
    def full_name(self):
        """Get user's full name"""
        if self.first_name and self.last_name:
            return f'{self.first_name} {self.last_name}'
        if self.first_name:
            return self.first_name
        return self.email.split('@')[0]  # Use email prefix as display name

    @property
    def is_employer(self):
        return self.role == ROLE_EMPLOYER

    @property
    def is_admin(self):
        return self.role == ROLE_ADMIN

    @property
    def is_applicant(self):
        return self.role == ROLE_APPLICANT

    @property
    def balance(self):
        """Current ad balance as a Decimal (never None)"""
        return Decimal(self.ad_balance) if self.ad_balance is not None else Decimal('0')

    def reputation(self):
        """Snapshot of the employer reputation fields used for ranking"""
        from app.services.ranking_service import EmployerReputation
        return EmployerReputation(
            average_rating=self.average_rating,
            response_rate=self.response_rate,
            completed_hires=self.completed_hires,
            is_verified=self.is_verified
        )

    def targeting_profile(self):
        """Viewer fields compared against a sponsored job's audience filters"""
        return {
            'location': self.location,
            'experience': self.experience_level,
            'education': self.education
        }
