"""Initial schema: donors, blood requests, donations, inventory, users

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision = '0001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None

BLOOD_GROUPS = ('A+', 'A-', 'B+', 'B-', 'O+', 'O-', 'AB+', 'AB-')

blood_group = sa.Enum(*BLOOD_GROUPS, name='blood_group')
approval_status = sa.Enum('pending', 'approved', 'rejected', name='approval_status')
urgency_level = sa.Enum('normal', 'urgent', 'emergency', name='urgency_level')
request_status = sa.Enum('pending', 'in_progress', 'completed', 'cancelled', name='request_status')
user_role = sa.Enum('admin', 'donor', 'hospital', name='user_role')

ALL_ENUMS = (blood_group, approval_status, urgency_level, request_status, user_role)


def _column_type(enum_type):
    """Shared Postgres enum types are created once up front, never per table."""
    if op.get_bind().dialect.name == "postgresql":
        return postgresql.ENUM(*enum_type.enums, name=enum_type.name, create_type=False)
    return enum_type


def upgrade() -> None:
    bind = op.get_bind()
    if bind.dialect.name == "postgresql":
        for enum_type in ALL_ENUMS:
            enum_type.create(bind, checkfirst=True)

    op.create_table(
        'donors',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('phone', sa.String(), nullable=False),
        sa.Column('blood_group', _column_type(blood_group), nullable=False),
        sa.Column('city', sa.String(), nullable=False),
        sa.Column('batch', sa.String(), nullable=True),
        sa.Column('whatsapp_number', sa.String(), nullable=True),
        sa.Column('last_donation_date', sa.DateTime(), nullable=True),
        sa.Column('approval_status', _column_type(approval_status), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_donors_id', 'donors', ['id'])
    op.create_index('ix_donors_email', 'donors', ['email'], unique=True)
    op.create_index('ix_donors_blood_group', 'donors', ['blood_group'])
    op.create_index('ix_donors_approval_status', 'donors', ['approval_status'])

    op.create_table(
        'blood_requests',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('patient_name', sa.String(), nullable=False),
        sa.Column('blood_group', _column_type(blood_group), nullable=False),
        sa.Column('units_needed', sa.Integer(), nullable=False),
        sa.Column('urgency_level', _column_type(urgency_level), nullable=False),
        sa.Column('location', sa.String(), nullable=False),
        sa.Column('hospital_name', sa.String(), nullable=False),
        sa.Column('contact_person', sa.String(), nullable=False),
        sa.Column('contact_phone', sa.String(), nullable=False),
        sa.Column('contact_whatsapp', sa.String(), nullable=True),
        sa.Column('status', _column_type(request_status), nullable=False),
        sa.Column('approval_status', _column_type(approval_status), nullable=False),
        sa.Column('remarks', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_blood_requests_id', 'blood_requests', ['id'])
    op.create_index('ix_blood_requests_blood_group', 'blood_requests', ['blood_group'])
    op.create_index('ix_blood_requests_status', 'blood_requests', ['status'])
    op.create_index('ix_blood_requests_approval_status', 'blood_requests', ['approval_status'])

    op.create_table(
        'donations',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('donor_id', sa.Integer(), sa.ForeignKey('donors.id'), nullable=False),
        sa.Column('request_id', sa.Integer(), sa.ForeignKey('blood_requests.id'), nullable=False),
        sa.Column('donation_date', sa.DateTime(), nullable=False),
        sa.Column('units_contributed', sa.Integer(), nullable=False),
        sa.Column('remarks', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_donations_id', 'donations', ['id'])
    op.create_index('ix_donations_donor_id', 'donations', ['donor_id'])
    op.create_index('ix_donations_request_id', 'donations', ['request_id'])
    op.create_index('ix_donations_donation_date', 'donations', ['donation_date'])

    op.create_table(
        'blood_inventory',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('blood_group', _column_type(blood_group), nullable=False),
        sa.Column('units_available', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('last_updated', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_blood_inventory_id', 'blood_inventory', ['id'])
    op.create_index('ix_blood_inventory_blood_group', 'blood_inventory', ['blood_group'], unique=True)

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('role', _column_type(user_role), nullable=False),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)


def downgrade() -> None:
    op.drop_table('users')
    op.drop_table('blood_inventory')
    op.drop_table('donations')
    op.drop_table('blood_requests')
    op.drop_table('donors')

    bind = op.get_bind()
    for enum_type in reversed(ALL_ENUMS):
        enum_type.drop(bind, checkfirst=True)
