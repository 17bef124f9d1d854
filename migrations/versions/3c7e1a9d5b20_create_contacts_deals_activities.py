"""create_contacts_deals_activities

Revision ID: 3c7e1a9d5b20
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c7e1a9d5b20'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'contacts',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('name', sa.Text, nullable=False),
        sa.Column('email', sa.Text, nullable=True),
        sa.Column('phone', sa.Text, nullable=True),
        sa.Column('company', sa.Text, nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        'deals',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('name', sa.Text, nullable=False),
        sa.Column('value', sa.Numeric, nullable=True),
        sa.Column('stage', sa.Text, nullable=False, server_default='lead'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        'activities',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('type', sa.Text, nullable=False),  # call, email, meeting, note, task
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('description', sa.Text, nullable=False),
        sa.Column('contact_id', sa.Integer, sa.ForeignKey('contacts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('deal_id', sa.Integer, sa.ForeignKey('deals.id', ondelete='SET NULL'), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_index('ix_activities_contact_id', 'activities', ['contact_id'])
    op.create_index('ix_activities_deal_id', 'activities', ['deal_id'])
    op.create_index('ix_activities_date', 'activities', ['date'])


def downgrade() -> None:
    op.drop_index('ix_activities_date', 'activities')
    op.drop_index('ix_activities_deal_id', 'activities')
    op.drop_index('ix_activities_contact_id', 'activities')
    op.drop_table('activities')
    op.drop_table('deals')
    op.drop_table('contacts')
