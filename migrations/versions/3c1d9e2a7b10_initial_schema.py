"""Initial schema: users, profiles, appointments, therapy sessions, feedback, audit log

Revision ID: 3c1d9e2a7b10
Revises:
Create Date: 2026-10-18 09:00:00

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3c1d9e2a7b10'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    ]


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(length=120), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('last_login', sa.DateTime(), nullable=True),
        sa.Column('login_count', sa.Integer(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_role', 'users', ['role'], unique=False)

    op.create_table(
        'doctors',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('specialization', sa.String(length=200), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_doctors_user_id', 'doctors', ['user_id'], unique=True)

    op.create_table(
        'therapists',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('skills_json', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_therapists_user_id', 'therapists', ['user_id'], unique=True)

    op.create_table(
        'patients',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('email', sa.String(length=120), nullable=False),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('medical_history_json', sa.Text(), nullable=True),
        sa.Column('reports_json', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_patients_user_id', 'patients', ['user_id'], unique=True)

    op.create_table(
        'appointments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('patient_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('patient_name', sa.String(length=200), nullable=False),
        sa.Column('doctor_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('doctor_name', sa.String(length=200), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('time', sa.String(length=5), nullable=False),
        sa.Column('reason', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='confirmed'),
        sa.Column('prescription', sa.Text(), nullable=True),
        sa.Column('therapies_json', sa.Text(), nullable=True),
        sa.Column('prescribed_at', sa.DateTime(), nullable=True),
        *_timestamps(),
    )
    with op.batch_alter_table('appointments', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_appointments_patient_id'), ['patient_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_appointments_doctor_id'), ['doctor_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_appointments_date'), ['date'], unique=False)
        batch_op.create_index(batch_op.f('ix_appointments_status'), ['status'], unique=False)

    op.create_table(
        'therapy_sessions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('patient_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('patient_name', sa.String(length=200), nullable=False),
        sa.Column('therapy_type', sa.String(length=120), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('therapist_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('therapist_name', sa.String(length=200), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='scheduled'),
        sa.Column('session_number', sa.Integer(), nullable=False),
        sa.Column('total_sessions', sa.Integer(), nullable=False),
        sa.Column('doctor_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('appointment_id', sa.Integer(), sa.ForeignKey('appointments.id'), nullable=False),
        sa.Column('scheduled_at', sa.DateTime(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('reminder_sent_at', sa.DateTime(), nullable=True),
        *_timestamps(),
    )
    with op.batch_alter_table('therapy_sessions', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_therapy_sessions_patient_id'), ['patient_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_therapy_sessions_therapist_id'), ['therapist_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_therapy_sessions_doctor_id'), ['doctor_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_therapy_sessions_appointment_id'), ['appointment_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_therapy_sessions_status'), ['status'], unique=False)
        batch_op.create_index(batch_op.f('ix_therapy_sessions_scheduled_at'), ['scheduled_at'], unique=False)

    op.create_table(
        'feedback',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('patient_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('doctor_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('appointment_id', sa.Integer(), sa.ForeignKey('appointments.id'), nullable=True),
        sa.Column('text', sa.Text(), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=True),
        sa.Column('sentiment', sa.String(length=20), nullable=False, server_default='neutral'),
        *_timestamps(),
    )
    with op.batch_alter_table('feedback', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_feedback_patient_id'), ['patient_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_feedback_doctor_id'), ['doctor_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_feedback_appointment_id'), ['appointment_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_feedback_sentiment'), ['sentiment'], unique=False)

    op.create_table(
        'audit_logs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('entity_type', sa.String(length=64), nullable=False),
        sa.Column('entity_id', sa.String(length=64), nullable=True),
        sa.Column('action', sa.String(length=32), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('details', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    with op.batch_alter_table('audit_logs', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_audit_logs_entity_type'), ['entity_type'], unique=False)
        batch_op.create_index(batch_op.f('ix_audit_logs_entity_id'), ['entity_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_audit_logs_action'), ['action'], unique=False)
        batch_op.create_index(batch_op.f('ix_audit_logs_user_id'), ['user_id'], unique=False)


def downgrade():
    op.drop_table('audit_logs')
    op.drop_table('feedback')
    op.drop_table('therapy_sessions')
    op.drop_table('appointments')
    op.drop_table('patients')
    op.drop_table('therapists')
    op.drop_table('doctors')
    op.drop_table('users')
