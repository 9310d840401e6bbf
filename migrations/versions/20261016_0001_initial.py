"""initial schema: events, partners, entries, promoters, staff, refresh tokens

Revision ID: 20261016_0001_initial
Revises:
Create Date: 2026-10-16 12:00:00
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "20261016_0001_initial"
down_revision: Union[str, Sequence[str], None] = None
branch_labels = None
depends_on = None

Money = sa.Numeric(12, 2, asdecimal=False)


def upgrade() -> None:
    op.create_table(
        "events",
        sa.Column("id", sa.String(40), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("day_of_week", sa.String(10), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("time", sa.String(5), nullable=False),
        sa.Column("venue_name", sa.String(160), nullable=False),
        sa.Column("location", sa.String(160), nullable=False),
        sa.Column("deal_type", sa.String(20), nullable=False),
        sa.Column("rumba_percentage", sa.Integer(), nullable=False),
        sa.Column("payment_terms", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_events"),
    )
    op.create_index("ix_events_date", "events", ["date"])

    op.create_table(
        "event_partners",
        sa.Column("event_id", sa.String(40), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("percentage", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["event_id"], ["events.id"], name="fk_event_partners_event_id_events", ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("event_id", "position", name="pk_event_partners"),
    )

    op.create_table(
        "event_entries",
        sa.Column("id", sa.String(40), nullable=False),
        sa.Column("event_id", sa.String(40), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("table_commissions", Money, nullable=False),
        sa.Column("vip_girls_commissions", Money, nullable=False),
        sa.Column("ad_spend", Money, nullable=False),
        sa.Column("ad_reach", sa.Integer(), nullable=False),
        sa.Column("ad_clicks", sa.Integer(), nullable=False),
        sa.Column("ad_leads", sa.Integer(), nullable=False),
        sa.Column("leads_collected", sa.Integer(), nullable=False),
        sa.Column("door_revenue", Money, nullable=True),
        sa.Column("total_night_revenue", Money, nullable=True),
        sa.Column("attendance", sa.Integer(), nullable=False),
        sa.Column("tables_from_rumba", sa.Integer(), nullable=False),
        sa.Column("days_until_paid", sa.Integer(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["event_id"], ["events.id"], name="fk_event_entries_event_id_events", ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id", name="pk_event_entries"),
    )
    op.create_index("ix_event_entries_event_id", "event_entries", ["event_id"])
    op.create_index("ix_event_entries_date", "event_entries", ["date"])

    op.create_table(
        "entry_promoters",
        sa.Column("entry_id", sa.String(40), nullable=False),
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("commission", Money, nullable=False),
        sa.ForeignKeyConstraint(
            ["entry_id"], ["event_entries.id"], name="fk_entry_promoters_entry_id_event_entries", ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("entry_id", "id", name="pk_entry_promoters"),
    )

    op.create_table(
        "entry_staff",
        sa.Column("entry_id", sa.String(40), nullable=False),
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("role", sa.String(80), nullable=False),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("payment", Money, nullable=False),
        sa.ForeignKeyConstraint(
            ["entry_id"], ["event_entries.id"], name="fk_entry_staff_entry_id_event_entries", ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("entry_id", "id", name="pk_entry_staff"),
    )

    op.create_table(
        "refresh_tokens",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("jti", sa.String(64), nullable=False),
        sa.Column("username", sa.String(160), nullable=False),
        sa.Column("issued_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("revoked_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_refresh_tokens"),
    )
    op.create_index("ix_refresh_tokens_jti", "refresh_tokens", ["jti"], unique=True)
    op.create_index("ix_refresh_tokens_username", "refresh_tokens", ["username"])


def downgrade() -> None:
    op.drop_index("ix_refresh_tokens_username", table_name="refresh_tokens")
    op.drop_index("ix_refresh_tokens_jti", table_name="refresh_tokens")
    op.drop_table("refresh_tokens")
    op.drop_table("entry_staff")
    op.drop_table("entry_promoters")
    op.drop_index("ix_event_entries_date", table_name="event_entries")
    op.drop_index("ix_event_entries_event_id", table_name="event_entries")
    op.drop_table("event_entries")
    op.drop_table("event_partners")
    op.drop_index("ix_events_date", table_name="events")
    op.drop_table("events")
