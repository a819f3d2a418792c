"""Initial schema

Revision ID: 001
Revises:
Create Date: 2024-01-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

DEFAULT_PICTURE_URL = 'https://cdn.wallpapersafari.com/92/63/wUq2AY.jpg'


def upgrade() -> None:
    # Create users table
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(50), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('profile_picture', sa.String(1000), nullable=False, server_default=DEFAULT_PICTURE_URL),
        sa.Column('role', sa.String(20), nullable=False, server_default='USER'),
        sa.Column('phone', sa.String(50), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('reset_password_token', sa.String(512), nullable=False, server_default=''),
        sa.Column('active', sa.Boolean(), nullable=False, server_default='1'),
        sa.Column('resume', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), onupdate=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_reset_password_token', 'users', ['reset_password_token'])

    # Create businesses table
    op.create_table(
        'businesses',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('cnpj', sa.String(18), nullable=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('logo', sa.String(1000), nullable=False, server_default=DEFAULT_PICTURE_URL),
        sa.Column('role', sa.String(20), nullable=False, server_default='BUSINESS'),
        sa.Column('phone', sa.String(50), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('reset_password_token', sa.String(512), nullable=False, server_default=''),
        sa.Column('active', sa.Boolean(), nullable=False, server_default='1'),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('street', sa.String(255), nullable=True),
        sa.Column('number', sa.String(20), nullable=True),
        sa.Column('neighborhood', sa.String(255), nullable=True),
        sa.Column('zip_code', sa.String(20), nullable=True),
        sa.Column('complement', sa.String(255), nullable=True),
        sa.Column('city', sa.String(255), nullable=True),
        sa.Column('state', sa.String(50), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), onupdate=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('cnpj', name='uq_businesses_cnpj')
    )
    op.create_index('ix_businesses_email', 'businesses', ['email'], unique=True)
    op.create_index('ix_businesses_id', 'businesses', ['id'])
    op.create_index('ix_businesses_reset_password_token', 'businesses', ['reset_password_token'])

    # Create jobs table
    op.create_table(
        'jobs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(500), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('salary', sa.String(255), nullable=False, server_default='negotiable'),
        sa.Column('business_id', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='OPEN'),
        sa.Column('city', sa.String(255), nullable=False),
        sa.Column('state', sa.String(50), nullable=False),
        sa.Column('work_mode', sa.String(20), nullable=True),
        sa.Column('open_apply', sa.Boolean(), nullable=False, server_default='0'),
        sa.Column('validation', sa.Boolean(), nullable=False, server_default='1'),
        sa.Column('premium', sa.Boolean(), nullable=False, server_default='0'),
        sa.Column('selected_candidate_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), onupdate=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['business_id'], ['businesses.id']),
        sa.ForeignKeyConstraint(['selected_candidate_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_jobs_id', 'jobs', ['id'])
    op.create_index('ix_jobs_business_id', 'jobs', ['business_id'])
    op.create_index('ix_jobs_status', 'jobs', ['status'])

    # Create job_applications table
    op.create_table(
        'job_applications',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('job_id', sa.Integer(), nullable=False),
        sa.Column('applied_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['job_id'], ['jobs.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'job_id', name='uq_application_user_job')
    )
    op.create_index('ix_job_applications_id', 'job_applications', ['id'])


def downgrade() -> None:
    op.drop_table('job_applications')
    op.drop_table('jobs')
    op.drop_table('businesses')
    op.drop_table('users')
