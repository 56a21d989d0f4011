"""Initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-16 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Create users table
    op.create_table('users',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('role', sa.String(length=50), nullable=True),
        sa.Column('gender', sa.String(length=20), nullable=True),
        sa.Column('first_name', sa.String(length=100), nullable=True),
        sa.Column('middle_name', sa.String(length=100), nullable=True),
        sa.Column('last_name', sa.String(length=100), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_users_role'), 'users', ['role'], unique=False)

    # Create assignment_submissions table
    op.create_table('assignment_submissions',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('student_id', sa.String(length=36), nullable=True),
        sa.Column('teacher_id', sa.String(length=36), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=True),
        sa.Column('attachments', sa.JSON(), nullable=True),
        sa.Column('feedback_files', sa.JSON(), nullable=True),
        sa.Column('feedback', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.ForeignKeyConstraint(['student_id'], ['users.id'], ),
        sa.ForeignKeyConstraint(['teacher_id'], ['users.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_assignment_submissions_student_id'), 'assignment_submissions', ['student_id'], unique=False)
    op.create_index(op.f('ix_assignment_submissions_teacher_id'), 'assignment_submissions', ['teacher_id'], unique=False)
    op.create_index(op.f('ix_assignment_submissions_status'), 'assignment_submissions', ['status'], unique=False)
    op.create_index(op.f('ix_assignment_submissions_created_at'), 'assignment_submissions', ['created_at'], unique=False)
    op.create_index(op.f('ix_assignment_submissions_updated_at'), 'assignment_submissions', ['updated_at'], unique=False)

    # Create install_surveys table
    op.create_table('install_surveys',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('type', sa.String(length=50), nullable=False),
        sa.Column('agent_id', sa.Integer(), nullable=True),
        sa.Column('device_id', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_install_surveys_created_at'), 'install_surveys', ['created_at'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_install_surveys_created_at'), table_name='install_surveys')
    op.drop_table('install_surveys')

    op.drop_index(op.f('ix_assignment_submissions_updated_at'), table_name='assignment_submissions')
    op.drop_index(op.f('ix_assignment_submissions_created_at'), table_name='assignment_submissions')
    op.drop_index(op.f('ix_assignment_submissions_status'), table_name='assignment_submissions')
    op.drop_index(op.f('ix_assignment_submissions_teacher_id'), table_name='assignment_submissions')
    op.drop_index(op.f('ix_assignment_submissions_student_id'), table_name='assignment_submissions')
    op.drop_table('assignment_submissions')

    op.drop_index(op.f('ix_users_role'), table_name='users')
    op.drop_table('users')
