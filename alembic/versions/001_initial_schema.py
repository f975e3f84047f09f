"""Initial schema: reference data, working hours, rosters, payroll, role permissions

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

WORKING_HOUR_STATUS = ('pending', 'approved', 'rejected', 'paid')
ROSTER_STATUS = ('pending', 'confirmed', 'cancelled')
PAYROLL_STATUS = ('pending', 'approved', 'paid')


def _timestamps(with_updated: bool = True):
    # SQL-standard CURRENT_TIMESTAMP works on SQLite and Postgres
    cols = [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    ]
    if with_updated:
        cols.append(
            sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False)
        )
    return cols


def upgrade() -> None:
    # Skip if tables already exist (e.g. DB created by app create_all())
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    if 'profiles' in inspector.get_table_names():
        return

    op.create_table(
        'profiles',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('full_name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('role', sa.String(), nullable=False, server_default='employee'),
        sa.Column('hourly_rate', sa.Numeric(10, 2), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_profiles_id'), 'profiles', ['id'], unique=False)
    op.create_index(op.f('ix_profiles_full_name'), 'profiles', ['full_name'], unique=False)
    op.create_index(op.f('ix_profiles_email'), 'profiles', ['email'], unique=True)

    op.create_table(
        'clients',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('company', sa.String(), nullable=True),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('status', sa.String(), nullable=False, server_default='active'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_clients_id'), 'clients', ['id'], unique=False)
    op.create_index(op.f('ix_clients_name'), 'clients', ['name'], unique=False)

    op.create_table(
        'projects',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('client_id', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(), nullable=False, server_default='active'),
        *_timestamps(),
        sa.ForeignKeyConstraint(['client_id'], ['clients.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_projects_id'), 'projects', ['id'], unique=False)
    op.create_index(op.f('ix_projects_name'), 'projects', ['name'], unique=False)
    op.create_index(op.f('ix_projects_client_id'), 'projects', ['client_id'], unique=False)

    op.create_table(
        'bank_accounts',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('profile_id', sa.Integer(), nullable=True),
        sa.Column('bank_name', sa.String(), nullable=False),
        sa.Column('account_number', sa.String(), nullable=False),
        sa.Column('is_primary', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(with_updated=False),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_bank_accounts_id'), 'bank_accounts', ['id'], unique=False)
    op.create_index(op.f('ix_bank_accounts_profile_id'), 'bank_accounts', ['profile_id'], unique=False)

    op.create_table(
        'rosters',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('client_id', sa.Integer(), nullable=False),
        sa.Column('project_id', sa.Integer(), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('start_time', sa.Time(), nullable=False),
        sa.Column('end_time', sa.Time(), nullable=False),
        sa.Column('total_hours', sa.Numeric(6, 2), nullable=False),
        sa.Column('expected_profiles', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('per_hour_rate', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('status', sa.Enum(*ROSTER_STATUS, name='roster_status'), nullable=False, server_default='pending'),
        sa.Column('is_locked', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        *_timestamps(),
        sa.ForeignKeyConstraint(['client_id'], ['clients.id']),
        sa.ForeignKeyConstraint(['project_id'], ['projects.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_rosters_id'), 'rosters', ['id'], unique=False)
    op.create_index(op.f('ix_rosters_client_id'), 'rosters', ['client_id'], unique=False)
    op.create_index(op.f('ix_rosters_project_id'), 'rosters', ['project_id'], unique=False)
    op.create_index(op.f('ix_rosters_start_date'), 'rosters', ['start_date'], unique=False)

    op.create_table(
        'roster_profiles',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('roster_id', sa.Integer(), nullable=False),
        sa.Column('profile_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['roster_id'], ['rosters.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('roster_id', 'profile_id', name='uq_roster_profiles_roster_profile'),
    )
    op.create_index(op.f('ix_roster_profiles_id'), 'roster_profiles', ['id'], unique=False)
    op.create_index(op.f('ix_roster_profiles_roster_id'), 'roster_profiles', ['roster_id'], unique=False)
    op.create_index(op.f('ix_roster_profiles_profile_id'), 'roster_profiles', ['profile_id'], unique=False)

    op.create_table(
        'working_hours',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('profile_id', sa.Integer(), nullable=False),
        sa.Column('client_id', sa.Integer(), nullable=False),
        sa.Column('project_id', sa.Integer(), nullable=False),
        sa.Column('roster_id', sa.Integer(), nullable=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('start_time', sa.Time(), nullable=False),
        sa.Column('end_time', sa.Time(), nullable=False),
        sa.Column('sign_in_time', sa.Time(), nullable=True),
        sa.Column('sign_out_time', sa.Time(), nullable=True),
        sa.Column('total_hours', sa.Numeric(6, 2), nullable=False),
        sa.Column('actual_hours', sa.Numeric(6, 2), nullable=False),
        sa.Column('overtime_hours', sa.Numeric(6, 2), nullable=False, server_default='0'),
        sa.Column('hourly_rate', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('payable_amount', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('status', sa.Enum(*WORKING_HOUR_STATUS, name='working_hour_status'), nullable=False, server_default='pending'),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        *_timestamps(),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id']),
        sa.ForeignKeyConstraint(['client_id'], ['clients.id']),
        sa.ForeignKeyConstraint(['project_id'], ['projects.id']),
        sa.ForeignKeyConstraint(['roster_id'], ['rosters.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_working_hours_id'), 'working_hours', ['id'], unique=False)
    op.create_index(op.f('ix_working_hours_profile_id'), 'working_hours', ['profile_id'], unique=False)
    op.create_index(op.f('ix_working_hours_client_id'), 'working_hours', ['client_id'], unique=False)
    op.create_index(op.f('ix_working_hours_project_id'), 'working_hours', ['project_id'], unique=False)
    op.create_index(op.f('ix_working_hours_roster_id'), 'working_hours', ['roster_id'], unique=False)
    op.create_index(op.f('ix_working_hours_date'), 'working_hours', ['date'], unique=False)

    op.create_table(
        'payroll',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('profile_id', sa.Integer(), nullable=False),
        sa.Column('bank_account_id', sa.Integer(), nullable=True),
        sa.Column('pay_period_start', sa.Date(), nullable=False),
        sa.Column('pay_period_end', sa.Date(), nullable=False),
        sa.Column('total_hours', sa.Numeric(8, 2), nullable=False),
        sa.Column('hourly_rate', sa.Numeric(10, 2), nullable=False),
        sa.Column('gross_pay', sa.Numeric(12, 2), nullable=False),
        sa.Column('deductions', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('net_pay', sa.Numeric(12, 2), nullable=False),
        sa.Column('status', sa.Enum(*PAYROLL_STATUS, name='payroll_status'), nullable=False, server_default='pending'),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        *_timestamps(),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id']),
        sa.ForeignKeyConstraint(['bank_account_id'], ['bank_accounts.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('pay_period_start <= pay_period_end', name='ck_payroll_period_order'),
    )
    op.create_index(op.f('ix_payroll_id'), 'payroll', ['id'], unique=False)
    op.create_index(op.f('ix_payroll_profile_id'), 'payroll', ['profile_id'], unique=False)
    op.create_index(op.f('ix_payroll_pay_period_end'), 'payroll', ['pay_period_end'], unique=False)

    op.create_table(
        'payroll_working_hours',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('payroll_id', sa.Integer(), nullable=False),
        sa.Column('working_hour_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['payroll_id'], ['payroll.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['working_hour_id'], ['working_hours.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('payroll_id', 'working_hour_id', name='uq_payroll_working_hours_pair'),
    )
    op.create_index(op.f('ix_payroll_working_hours_id'), 'payroll_working_hours', ['id'], unique=False)
    op.create_index(op.f('ix_payroll_working_hours_payroll_id'), 'payroll_working_hours', ['payroll_id'], unique=False)
    op.create_index(
        op.f('ix_payroll_working_hours_working_hour_id'), 'payroll_working_hours', ['working_hour_id'], unique=False
    )

    op.create_table(
        'role_permissions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('role', sa.String(), nullable=False),
        sa.Column('permission', sa.String(), nullable=False),
        *_timestamps(with_updated=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('role', 'permission', name='uq_role_permissions_role_permission'),
    )
    op.create_index(op.f('ix_role_permissions_id'), 'role_permissions', ['id'], unique=False)
    op.create_index(op.f('ix_role_permissions_role'), 'role_permissions', ['role'], unique=False)


def downgrade() -> None:
    op.drop_table('role_permissions')
    op.drop_table('payroll_working_hours')
    op.drop_table('payroll')
    op.drop_table('working_hours')
    op.drop_table('roster_profiles')
    op.drop_table('rosters')
    op.drop_table('bank_accounts')
    op.drop_table('projects')
    op.drop_table('clients')
    op.drop_table('profiles')

    bind = op.get_bind()
    if bind.dialect.name == 'postgresql':
        for enum_name in ('payroll_status', 'working_hour_status', 'roster_status'):
            sa.Enum(name=enum_name).drop(bind, checkfirst=True)
