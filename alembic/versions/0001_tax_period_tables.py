"""Add ledger, submission record and deadline notification tables

Revision ID: 0001_tax_period_tables
Revises:
Create Date: 2026-10-18

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_tax_period_tables'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table('ledger_entries',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('business_id', sa.String(length=64), nullable=False),
        sa.Column('entry_date', sa.Date(), nullable=False),
        sa.Column('kind', sa.String(length=10), nullable=False),
        sa.Column('amount', sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column('allowable', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('description', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_ledger_entries_id'), 'ledger_entries', ['id'], unique=False)
    op.create_index(op.f('ix_ledger_entries_business_id'), 'ledger_entries', ['business_id'], unique=False)
    op.create_index(op.f('ix_ledger_entries_entry_date'), 'ledger_entries', ['entry_date'], unique=False)

    op.create_table('submission_records',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('business_id', sa.String(length=64), nullable=False),
        sa.Column('tax_year_start', sa.Integer(), nullable=False),
        sa.Column('period_key', sa.String(length=10), nullable=False),
        sa.Column('hmrc_reference', sa.String(length=100), nullable=True),
        sa.Column('submitted_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('business_id', 'tax_year_start', 'period_key', name='uq_submission_period')
    )
    op.create_index(op.f('ix_submission_records_id'), 'submission_records', ['id'], unique=False)
    op.create_index(op.f('ix_submission_records_business_id'), 'submission_records', ['business_id'], unique=False)

    op.create_table('deadline_notifications',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('dedup_key', sa.String(length=200), nullable=False),
        sa.Column('deadline_label', sa.String(length=100), nullable=False),
        sa.Column('deadline_date', sa.Date(), nullable=False),
        sa.Column('trigger_days', sa.Integer(), nullable=False),
        sa.Column('priority', sa.String(length=10), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('message', sa.String(length=500), nullable=False),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('snoozed_until', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('dedup_key')
    )
    op.create_index(op.f('ix_deadline_notifications_id'), 'deadline_notifications', ['id'], unique=False)
    op.create_index(op.f('ix_deadline_notifications_created_at'), 'deadline_notifications', ['created_at'], unique=False)


def downgrade():
    op.drop_index(op.f('ix_deadline_notifications_created_at'), table_name='deadline_notifications')
    op.drop_index(op.f('ix_deadline_notifications_id'), table_name='deadline_notifications')
    op.drop_table('deadline_notifications')
    op.drop_index(op.f('ix_submission_records_business_id'), table_name='submission_records')
    op.drop_index(op.f('ix_submission_records_id'), table_name='submission_records')
    op.drop_table('submission_records')
    op.drop_index(op.f('ix_ledger_entries_entry_date'), table_name='ledger_entries')
    op.drop_index(op.f('ix_ledger_entries_business_id'), table_name='ledger_entries')
    op.drop_index(op.f('ix_ledger_entries_id'), table_name='ledger_entries')
    op.drop_table('ledger_entries')
