"""Create HR portal tables

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=True),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=True),
    ]


def _owner():
    return sa.Column('user_id', sa.String(length=36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False)


def _employee():
    return sa.Column('employee_id', sa.String(length=36), sa.ForeignKey('employees.id', ondelete='CASCADE'), nullable=False)


def upgrade() -> None:
    op.create_table('users',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('full_name', sa.String(length=200), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table('employees',
        sa.Column('id', sa.String(length=36), nullable=False),
        _owner(),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=False),
        sa.Column('position', sa.String(length=100), nullable=False),
        sa.Column('department', sa.String(length=100), nullable=False),
        sa.Column('hire_date', sa.Date(), nullable=False),
        sa.Column('salary', sa.Integer(), nullable=False),
        sa.Column('address', sa.String(length=255), nullable=False),
        sa.Column('education_degree', sa.String(length=100), nullable=True),
        sa.Column('branch', sa.String(length=100), nullable=True),
        sa.Column('skills', sa.Text(), nullable=True),
        sa.Column('emergency_contact_name', sa.String(length=100), nullable=False),
        sa.Column('emergency_contact_phone', sa.String(length=50), nullable=False),
        sa.Column('emergency_contact_relationship', sa.String(length=50), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'email', name='uq_employees_user_email'),
    )
    op.create_index('ix_employees_user_id', 'employees', ['user_id'])
    op.create_index('ix_employees_department', 'employees', ['department'])
    op.create_index('ix_employees_status', 'employees', ['status'])

    op.create_table('attendance_records',
        sa.Column('id', sa.String(length=36), nullable=False),
        _owner(),
        _employee(),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('check_in', sa.String(length=5), nullable=True),
        sa.Column('check_out', sa.String(length=5), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('work_location', sa.String(length=3), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'employee_id', 'date', name='uq_attendance_employee_date'),
    )
    op.create_index('ix_attendance_records_user_id', 'attendance_records', ['user_id'])
    op.create_index('ix_attendance_records_employee_id', 'attendance_records', ['employee_id'])
    op.create_index('ix_attendance_records_date', 'attendance_records', ['date'])

    op.create_table('leaves',
        sa.Column('id', sa.String(length=36), nullable=False),
        _owner(),
        _employee(),
        sa.Column('leave_type', sa.String(length=20), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('reason', sa.Text(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('approved_by', sa.String(length=255), nullable=True),
        sa.Column('approved_at', sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_leaves_user_id', 'leaves', ['user_id'])
    op.create_index('ix_leaves_employee_id', 'leaves', ['employee_id'])
    op.create_index('ix_leaves_status', 'leaves', ['status'])

    op.create_table('holidays',
        sa.Column('id', sa.String(length=36), nullable=False),
        _owner(),
        sa.Column('name', sa.String(length=150), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_recurring', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_holidays_user_id', 'holidays', ['user_id'])
    op.create_index('ix_holidays_date', 'holidays', ['date'])

    op.create_table('work_logs',
        sa.Column('id', sa.String(length=36), nullable=False),
        _owner(),
        _employee(),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('task', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('hours_spent', sa.Float(), nullable=False),
        sa.Column('priority', sa.String(length=10), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_work_logs_user_id', 'work_logs', ['user_id'])
    op.create_index('ix_work_logs_employee_id', 'work_logs', ['employee_id'])
    op.create_index('ix_work_logs_date', 'work_logs', ['date'])

    op.create_table('notifications',
        sa.Column('id', sa.String(length=36), nullable=False),
        _owner(),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('notification_date', sa.Date(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_notifications_user_id', 'notifications', ['user_id'])

    op.create_table('projects',
        sa.Column('id', sa.String(length=36), nullable=False),
        _owner(),
        _employee(),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('category', sa.String(length=100), nullable=False),
        sa.Column('tag', sa.String(length=50), nullable=False),
        sa.Column('file_paths', sa.JSON(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_projects_user_id', 'projects', ['user_id'])
    op.create_index('ix_projects_employee_id', 'projects', ['employee_id'])

    op.create_table('user_settings',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(length=36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('company_name', sa.String(length=200), nullable=True),
        sa.Column('company_email', sa.String(length=255), nullable=True),
        sa.Column('company_address', sa.String(length=255), nullable=True),
        sa.Column('first_name', sa.String(length=100), nullable=True),
        sa.Column('last_name', sa.String(length=100), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('role', sa.String(length=100), nullable=True),
        sa.Column('email_notifications', sa.Boolean(), nullable=True),
        sa.Column('attendance_alerts', sa.Boolean(), nullable=True),
        sa.Column('task_reminders', sa.Boolean(), nullable=True),
        sa.Column('weekly_reports', sa.Boolean(), nullable=True),
        sa.Column('dark_mode', sa.Boolean(), nullable=True),
        sa.Column('theme_color', sa.String(length=20), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id'),
    )


def downgrade() -> None:
    # Drop tables in reverse order
    op.drop_table('user_settings')
    op.drop_table('projects')
    op.drop_table('notifications')
    op.drop_table('work_logs')
    op.drop_table('holidays')
    op.drop_table('leaves')
    op.drop_table('attendance_records')
    op.drop_table('employees')
    op.drop_table('users')
