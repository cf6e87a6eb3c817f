"""
Revision ID: 20261019_initial_schema
Revises:
Create Date: 2026-10-19
"""
revision = '20261019_initial_schema'
down_revision = None
branch_labels = None
depends_on = None
from alembic import op
import sqlalchemy as sa

USER_ROLE = sa.Enum('student', 'alumni', 'admin', name='userrole')
USER_STATUS = sa.Enum('pending', 'approved', 'rejected', 'inactive', 'active', name='userstatus')
COMPANY_STATUS = sa.Enum('pending', 'approved', 'rejected', name='companystatus')
CONNECTION_STATUS = sa.Enum('pending', 'accepted', 'rejected', name='connectionstatus')


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    ]


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String, nullable=False),
        sa.Column('role', USER_ROLE, nullable=False),
        sa.Column('status', USER_STATUS, nullable=False, server_default='pending'),
        sa.Column('is_verified', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('last_login_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'student_profiles',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('student_id', sa.String(50), nullable=False),
        sa.Column('branch', sa.String(100), nullable=False),
        sa.Column('grad_year', sa.Integer, nullable=False),
        sa.Column('skills', sa.JSON, nullable=True),
        sa.Column('resume_url', sa.Text, nullable=True),
        sa.Column('phone', sa.String(20), nullable=True),
        sa.Column('cgpa', sa.Float, nullable=True),
        sa.Column('preferences', sa.JSON, nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_student_profiles_user_id', 'student_profiles', ['user_id'], unique=True)

    op.create_table(
        'alumni_profiles',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('grad_year', sa.Integer, nullable=True),
        sa.Column('current_title', sa.String(255), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_alumni_profiles_user_id', 'alumni_profiles', ['user_id'], unique=True)

    op.create_table(
        'companies',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('alumni_id', sa.String(36), sa.ForeignKey('alumni_profiles.id', ondelete='CASCADE'),
                  nullable=False),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(140), nullable=True),
        sa.Column('website', sa.Text, nullable=True),
        sa.Column('industry', sa.String(100), nullable=True),
        sa.Column('company_size', sa.String(50), nullable=True),
        sa.Column('about', sa.Text, nullable=True),
        sa.Column('document_url', sa.Text, nullable=True),
        sa.Column('status', COMPANY_STATUS, nullable=False, server_default='pending'),
        *_timestamps(),
    )
    op.create_index('ix_companies_alumni_id', 'companies', ['alumni_id'], unique=True)

    op.create_table(
        'jobs',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('company_id', sa.String(36), sa.ForeignKey('companies.id', ondelete='CASCADE'), nullable=False),
        sa.Column('posted_by_alumni_id', sa.String(36),
                  sa.ForeignKey('alumni_profiles.id', ondelete='SET NULL'), nullable=True),
        sa.Column('job_title', sa.String(255), nullable=False),
        sa.Column('job_description', sa.Text, nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_jobs_company_id', 'jobs', ['company_id'])
    op.create_index('ix_jobs_posted_by_alumni_id', 'jobs', ['posted_by_alumni_id'])
    op.create_index('ix_jobs_created_at', 'jobs', ['created_at'])

    op.create_table(
        'job_applications',
        sa.Column('job_id', sa.String(36), sa.ForeignKey('jobs.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('resume_url', sa.Text, nullable=True),
        sa.Column('applicant_count', sa.Integer, nullable=False, server_default='0'),
        sa.Column('applied_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_job_applications_applied_at', 'job_applications', ['applied_at'])

    op.create_table(
        'password_reset_tokens',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('token_hash', sa.String(255), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('used', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_password_reset_tokens_user_id', 'password_reset_tokens', ['user_id'])
    op.create_index('ix_password_reset_tokens_token_hash', 'password_reset_tokens', ['token_hash'])

    op.create_table(
        'notifications',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(120), nullable=False),
        sa.Column('message', sa.Text, nullable=False),
        sa.Column('is_read', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_notifications_user_id', 'notifications', ['user_id'])

    op.create_table(
        'connections',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('sender_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('receiver_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('status', CONNECTION_STATUS, nullable=False, server_default='pending'),
        *_timestamps(),
    )
    op.create_index('ix_connections_sender_id', 'connections', ['sender_id'])
    op.create_index('ix_connections_receiver_id', 'connections', ['receiver_id'])

    op.create_table(
        'messages',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('sender_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('receiver_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('content', sa.Text, nullable=False),
        sa.Column('is_read', sa.Boolean, nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index('ix_messages_sender_id', 'messages', ['sender_id'])
    op.create_index('ix_messages_receiver_id', 'messages', ['receiver_id'])
    op.create_index('ix_messages_created_at', 'messages', ['created_at'])

    op.create_table(
        'revoked_tokens',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('jti', sa.String, nullable=False),
        sa.Column('revoked_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_revoked_tokens_jti', 'revoked_tokens', ['jti'], unique=True)

    op.create_table(
        'activity_logs',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('timestamp', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('action', sa.String(255), nullable=False),
        sa.Column('status', sa.String(50), nullable=False),
        sa.Column('details', sa.Text, nullable=True),
        sa.Column('user', sa.String(255), nullable=True),
        sa.Column('entity', sa.String(255), nullable=True),
        sa.Column('source', sa.String(255), nullable=True)
    )
    op.create_index('ix_activity_logs_timestamp', 'activity_logs', ['timestamp'])


def downgrade():
    for table in ('activity_logs', 'revoked_tokens', 'messages', 'connections', 'notifications',
                  'password_reset_tokens', 'job_applications', 'jobs', 'companies',
                  'alumni_profiles', 'student_profiles', 'users'):
        op.drop_table(table)
    bind = op.get_bind()
    for enum_type in (CONNECTION_STATUS, COMPANY_STATUS, USER_STATUS, USER_ROLE):
        enum_type.drop(bind, checkfirst=True)
