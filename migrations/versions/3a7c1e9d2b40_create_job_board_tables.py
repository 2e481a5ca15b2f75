"""create_job_board_tables

Revision ID: 3a7c1e9d2b40
Revises:
Create Date: 2025-05-12 09:14:22.418305

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3a7c1e9d2b40'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table('users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('first_name', sa.String(length=80), nullable=True),
        sa.Column('last_name', sa.String(length=80), nullable=True),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('company_name', sa.String(length=200), nullable=True),
        sa.Column('location', sa.String(length=200), nullable=True),
        sa.Column('experience_level', sa.String(length=50), nullable=True),
        sa.Column('education', sa.String(length=50), nullable=True),
        sa.Column('average_rating', sa.Float(), nullable=True),
        sa.Column('response_rate', sa.Float(), nullable=True),
        sa.Column('completed_hires', sa.Integer(), nullable=True),
        sa.Column('is_verified', sa.Boolean(), nullable=False),
        sa.Column('ad_balance', sa.Numeric(precision=12, scale=4), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_role'), 'users', ['role'], unique=False)

    op.create_table('jobs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('employer_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('company', sa.String(length=200), nullable=False),
        sa.Column('location', sa.String(length=200), nullable=True),
        sa.Column('job_type', sa.String(length=50), nullable=True),
        sa.Column('category', sa.String(length=100), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('apply_url', sa.String(length=500), nullable=True),
        sa.Column('salary_min', sa.Integer(), nullable=True),
        sa.Column('salary_max', sa.Integer(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('rejection_reason', sa.Text(), nullable=True),
        sa.Column('likes_count', sa.Integer(), nullable=False),
        sa.Column('comments_count', sa.Integer(), nullable=False),
        sa.Column('views_count', sa.Integer(), nullable=False),
        sa.Column('engagement_score', sa.Integer(), nullable=False),
        sa.Column('is_sponsored', sa.Boolean(), nullable=False),
        sa.Column('sponsored_until', sa.DateTime(), nullable=True),
        sa.Column('impression_limit', sa.Integer(), nullable=True),
        sa.Column('impressions_used', sa.Integer(), nullable=False),
        sa.Column('cost_per_impression', sa.Numeric(precision=10, scale=4), nullable=False),
        sa.Column('target_location', sa.String(length=200), nullable=True),
        sa.Column('target_experience', sa.String(length=50), nullable=True),
        sa.Column('target_education', sa.String(length=50), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['employer_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_jobs_employer_id'), 'jobs', ['employer_id'], unique=False)
    op.create_index(op.f('ix_jobs_status'), 'jobs', ['status'], unique=False)
    op.create_index(op.f('ix_jobs_is_sponsored'), 'jobs', ['is_sponsored'], unique=False)
    op.create_index(op.f('ix_jobs_created_at'), 'jobs', ['created_at'], unique=False)

    op.create_table('balance_transactions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=12, scale=4), nullable=False),
        sa.Column('type', sa.String(length=20), nullable=False),
        sa.Column('description', sa.String(length=500), nullable=True),
        sa.Column('balance_before', sa.Numeric(precision=12, scale=4), nullable=False),
        sa.Column('balance_after', sa.Numeric(precision=12, scale=4), nullable=False),
        sa.Column('related_job_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['related_job_id'], ['jobs.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_balance_transactions_user_id'), 'balance_transactions', ['user_id'], unique=False)
    op.create_index(op.f('ix_balance_transactions_type'), 'balance_transactions', ['type'], unique=False)
    op.create_index(op.f('ix_balance_transactions_related_job_id'), 'balance_transactions', ['related_job_id'], unique=False)
    op.create_index(op.f('ix_balance_transactions_created_at'), 'balance_transactions', ['created_at'], unique=False)

    op.create_table('job_impressions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('job_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=True),
        sa.Column('ip_address', sa.String(length=45), nullable=True),
        sa.Column('user_agent', sa.String(length=500), nullable=True),
        sa.Column('is_targeted', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['job_id'], ['jobs.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_job_impressions_job_created', 'job_impressions', ['job_id', 'created_at'], unique=False)
    op.create_index(op.f('ix_job_impressions_user_id'), 'job_impressions', ['user_id'], unique=False)

    op.create_table('notifications',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('type', sa.String(length=50), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('link', sa.String(length=500), nullable=True),
        sa.Column('is_read', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_notifications_user_id'), 'notifications', ['user_id'], unique=False)
    op.create_index(op.f('ix_notifications_created_at'), 'notifications', ['created_at'], unique=False)

    op.create_table('job_likes',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('job_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['job_id'], ['jobs.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('job_id', 'user_id', name='uq_job_likes_job_user')
    )
    op.create_index(op.f('ix_job_likes_job_id'), 'job_likes', ['job_id'], unique=False)
    op.create_index(op.f('ix_job_likes_user_id'), 'job_likes', ['user_id'], unique=False)

    op.create_table('job_comments',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('job_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=True),
        sa.Column('body', sa.Text(), nullable=False),
        sa.Column('is_anonymous', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['job_id'], ['jobs.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_job_comments_job_id'), 'job_comments', ['job_id'], unique=False)

    op.create_table('job_fit_criteria',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('job_id', sa.Integer(), nullable=False),
        sa.Column('required_education', sa.String(length=50), nullable=True),
        sa.Column('preferred_education', sa.String(length=50), nullable=True),
        sa.Column('min_years_experience', sa.Integer(), nullable=True),
        sa.Column('preferred_years_experience', sa.Integer(), nullable=True),
        sa.Column('essential_skills', sa.Text(), nullable=True),
        sa.Column('technical_skills', sa.Text(), nullable=True),
        sa.Column('personal_attributes', sa.Text(), nullable=True),
        sa.Column('cultural_values', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['job_id'], ['jobs.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('job_id')
    )

    op.create_table('applicant_profiles',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('education', sa.String(length=50), nullable=True),
        sa.Column('years_experience', sa.Integer(), nullable=True),
        sa.Column('essential_skills', sa.Text(), nullable=True),
        sa.Column('technical_skills', sa.Text(), nullable=True),
        sa.Column('personal_attributes', sa.Text(), nullable=True),
        sa.Column('cultural_values', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id')
    )

    op.create_table('job_fit_scores',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('job_id', sa.Integer(), nullable=False),
        sa.Column('applicant_id', sa.Integer(), nullable=False),
        sa.Column('education_score', sa.Integer(), nullable=False),
        sa.Column('experience_score', sa.Integer(), nullable=False),
        sa.Column('essential_skills_score', sa.Integer(), nullable=False),
        sa.Column('technical_skills_score', sa.Integer(), nullable=False),
        sa.Column('attributes_score', sa.Integer(), nullable=False),
        sa.Column('cultural_fit_score', sa.Integer(), nullable=False),
        sa.Column('overall_score', sa.Integer(), nullable=False),
        sa.Column('education_status', sa.String(length=20), nullable=True),
        sa.Column('experience_status', sa.String(length=20), nullable=True),
        sa.Column('essential_skills_status', sa.String(length=20), nullable=True),
        sa.Column('technical_skills_status', sa.String(length=20), nullable=True),
        sa.Column('attributes_status', sa.String(length=20), nullable=True),
        sa.Column('cultural_fit_status', sa.String(length=20), nullable=True),
        sa.Column('calculated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['applicant_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['job_id'], ['jobs.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('job_id', 'applicant_id', name='uq_job_fit_scores_job_applicant')
    )
    op.create_index(op.f('ix_job_fit_scores_job_id'), 'job_fit_scores', ['job_id'], unique=False)
    op.create_index(op.f('ix_job_fit_scores_applicant_id'), 'job_fit_scores', ['applicant_id'], unique=False)


def downgrade():
    op.drop_index(op.f('ix_job_fit_scores_applicant_id'), table_name='job_fit_scores')
    op.drop_index(op.f('ix_job_fit_scores_job_id'), table_name='job_fit_scores')
    op.drop_table('job_fit_scores')
    op.drop_table('applicant_profiles')
    op.drop_table('job_fit_criteria')
    op.drop_index(op.f('ix_job_comments_job_id'), table_name='job_comments')
    op.drop_table('job_comments')
    op.drop_index(op.f('ix_job_likes_user_id'), table_name='job_likes')
    op.drop_index(op.f('ix_job_likes_job_id'), table_name='job_likes')
    op.drop_table('job_likes')
    op.drop_index(op.f('ix_notifications_created_at'), table_name='notifications')
    op.drop_index(op.f('ix_notifications_user_id'), table_name='notifications')
    op.drop_table('notifications')
    op.drop_index(op.f('ix_job_impressions_user_id'), table_name='job_impressions')
    op.drop_index('ix_job_impressions_job_created', table_name='job_impressions')
    op.drop_table('job_impressions')
    op.drop_index(op.f('ix_balance_transactions_created_at'), table_name='balance_transactions')
    op.drop_index(op.f('ix_balance_transactions_related_job_id'), table_name='balance_transactions')
    op.drop_index(op.f('ix_balance_transactions_type'), table_name='balance_transactions')
    op.drop_index(op.f('ix_balance_transactions_user_id'), table_name='balance_transactions')
    op.drop_table('balance_transactions')
    op.drop_index(op.f('ix_jobs_created_at'), table_name='jobs')
    op.drop_index(op.f('ix_jobs_is_sponsored'), table_name='jobs')
    op.drop_index(op.f('ix_jobs_status'), table_name='jobs')
    op.drop_index(op.f('ix_jobs_employer_id'), table_name='jobs')
    op.drop_table('jobs')
    op.drop_index(op.f('ix_users_role'), table_name='users')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_table('users')
