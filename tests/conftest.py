"""
Pytest configuration and fixtures for JobBoard tests
"""
import pytest
from datetime import datetime
from decimal import Decimal
from flask import g
from sqlalchemy import text
from app import create_app, db
from app.models.user import User
from app.models.job import Job


@pytest.fixture(scope='session')
def app():
    """Create and configure a test application instance"""
    app = create_app('testing')

    # Establish an application context
    ctx = app.app_context()
    ctx.push()

    yield app

    ctx.pop()


@pytest.fixture(scope='session')
def _db(app):
    """Create test database"""
    db.create_all()
    yield db
    db.session.remove()
    db.drop_all()


@pytest.fixture(scope='function', autouse=True)
def cleanup_db(_db):
    """Clean up database after each test"""
    yield

    # Rollback any open transactions
    _db.session.remove()

    tables = list(reversed(_db.metadata.sorted_tables))
    if _db.engine.dialect.name == 'postgresql':
        # Use TRUNCATE with CASCADE for proper cleanup
        table_names = ', '.join(table.name for table in tables)
        _db.session.execute(text(f"TRUNCATE TABLE {table_names} RESTART IDENTITY CASCADE"))
    else:
        for table in tables:
            _db.session.execute(table.delete())
    _db.session.commit()


@pytest.fixture(scope='function')
def db_session(_db):
    """Provide the database session for tests"""
    return _db.session


@pytest.fixture
def client(app):
    """Create a test client with login helper"""
    client = app.test_client()

    # Requests reuse the session-wide app context, so drop any user Flask-Login cached on g
    g.pop('_login_user', None)

    def login(user):
        """Log in a user for testing"""
        with client.session_transaction() as sess:
            sess['_user_id'] = str(user.id)  # Flask-Login uses _user_id
            sess['_fresh'] = True
        g.pop('_login_user', None)

    client.login = login
    return client


def make_user(db_session, email, role, **fields):
    user = User(email=email, role=role, first_name='Test', last_name=role.title(), **fields)
    user.set_password('Test123!@#')
    db_session.add(user)
    db_session.commit()
    return user


def make_job(db_session, employer, title='Backend Engineer', status='approved', **fields):
    job = Job(
        employer_id=employer.id,
        title=title,
        company=employer.company_name or 'Acme',
        location=fields.pop('location', 'Berlin'),
        job_type=fields.pop('job_type', 'full_time'),
        description=fields.pop('description', 'Build and run the API that powers our job board.'),
        status=status,
        **fields
    )
    db_session.add(job)
    db_session.commit()
    return job


@pytest.fixture
def employer(db_session):
    """Employer with a $10.00 ad balance"""
    return make_user(db_session, 'employer@example.com', 'employer',
                     company_name='Acme', ad_balance=Decimal('10.00'))


@pytest.fixture
def employer_2(db_session):
    """A second employer with no balance"""
    return make_user(db_session, 'employer2@example.com', 'employer', company_name='Globex')


@pytest.fixture
def applicant(db_session):
    """Applicant with a full targeting profile"""
    return make_user(db_session, 'applicant@example.com', 'applicant',
                     location='Berlin', experience_level='SENIOR', education='bachelor')


@pytest.fixture
def admin(db_session):
    return make_user(db_session, 'admin@example.com', 'admin')


@pytest.fixture
def approved_job(db_session, employer):
    return make_job(db_session, employer)


@pytest.fixture
def pending_job(db_session, employer):
    return make_job(db_session, employer, title='Data Analyst', status='pending')


@pytest.fixture
def now():
    return datetime(2025, 6, 1, 12, 0, 0)


@pytest.fixture
def job_factory(db_session, employer):
    """Create jobs; defaults to an approved job owned by `employer`"""
    def factory(owner=None, **fields):
        return make_job(db_session, owner or employer, **fields)
    return factory


@pytest.fixture
def user_factory(db_session):
    def factory(email, role='applicant', **fields):
        return make_user(db_session, email, role, **fields)
    return factory
