"""Create events, event_history and event_subdomains tables

Revision ID: 3c1f0a7d52e9
Revises:
Create Date: 2026-10-18

"""

# pylint: disable=invalid-name

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

from eventsite.adapters.db.dialects import DialectName
from eventsite.adapters.db.sa_types import BIGINT_ID, PORTABLE_JSON, UTCDateTime

# pylint: disable=no-member

# revision identifiers, used by Alembic.
revision: str = "3c1f0a7d52e9"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""
    dialect = DialectName.from_sqlalchemy(op.get_bind())

    op.create_table(
        "events",
        sa.Column("id", BIGINT_ID, sa.Identity(always=False, start=1), nullable=False),
        sa.Column(
            "user_id",
            sa.String(length=64),
            nullable=False,
            comment="Opaque id of the owner, issued by the auth provider.",
        ),
        sa.Column("state", sa.SmallInteger(), nullable=False, comment="EventState value."),
        sa.Column("title", sa.Text(), nullable=False, server_default=""),
        sa.Column("picture_set", PORTABLE_JSON, nullable=False),
        sa.Column("sub_event_details", PORTABLE_JSON, nullable=False),
        sa.Column("ui_state", PORTABLE_JSON, nullable=False),
        sa.Column("current_active_subdomain", sa.String(length=64), nullable=False),
        sa.Column("subscription_customer_id", sa.String(length=128), nullable=True),
        sa.Column("subscription_id", sa.String(length=128), nullable=True),
        sa.Column(
            "subscription_active", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        sa.Column("time_created", UTCDateTime(), nullable=False),
        sa.Column("time_last_updated", UTCDateTime(), nullable=False),
        sa.Column("time_removed", UTCDateTime(), nullable=True),
        sa.CheckConstraint("state IN (1, 2, 3)", name=op.f("ck_events_known_state")),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_events")),
        sa.UniqueConstraint("user_id", name=op.f("uq_events_user_id")),
        comment="One event per user. Rows are soft-deleted through state, never removed.",
    )

    op.create_table(
        "event_history",
        sa.Column("id", BIGINT_ID, sa.Identity(always=False, start=1), nullable=False),
        sa.Column("event_id", BIGINT_ID, nullable=False),
        sa.Column(
            "type", sa.SmallInteger(), nullable=False, comment="EventHistoryType value."
        ),
        sa.Column("timestamp", UTCDateTime(), nullable=False),
        sa.Column(
            "data",
            PORTABLE_JSON,
            nullable=True,
            comment="Snapshot of the request that caused the mutation.",
        ),
        sa.ForeignKeyConstraint(
            ["event_id"],
            ["events.id"],
            name=op.f("fk_event_history_event_id_events"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_event_history")),
        comment="Append-only audit log of event mutations.",
    )
    op.create_index(
        op.f("ix_event_history_event_history_event_id_event_history_timestamp"),
        "event_history",
        ["event_id", "timestamp"],
        unique=False,
    )

    op.create_table(
        "event_subdomains",
        sa.Column("id", BIGINT_ID, sa.Identity(always=False, start=1), nullable=False),
        sa.Column("subdomain", sa.String(length=64), nullable=False),
        sa.Column("state", sa.String(length=16), nullable=False),
        sa.Column("event_id", BIGINT_ID, nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.CheckConstraint(
            "state IN ('active', 'inactive')",
            name=op.f("ck_event_subdomains_known_state"),
        ),
        sa.ForeignKeyConstraint(
            ["event_id"],
            ["events.id"],
            name=op.f("fk_event_subdomains_event_id_events"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_event_subdomains")),
        comment="Subdomains claimed by events. At most one active claim per subdomain.",
    )
    op.create_index(
        op.f("ix_event_subdomains_event_subdomains_subdomain"),
        "event_subdomains",
        ["subdomain"],
        unique=False,
    )
    op.create_index(
        op.f("ix_event_subdomains_event_subdomains_event_id"),
        "event_subdomains",
        ["event_id"],
        unique=False,
    )
    op.create_index(
        "ix_event_subdomains_active_subdomain",
        "event_subdomains",
        ["subdomain"],
        unique=True,
        postgresql_where=sa.text("state = 'active'"),
        sqlite_where=sa.text("state = 'active'"),
    )

    # ---- APPEND-ONLY ENFORCEMENT ----
    if dialect is DialectName.POSTGRES:
        op.execute(
            """
            CREATE OR REPLACE FUNCTION event_history_forbid_mod() RETURNS trigger
            LANGUAGE plpgsql AS $$
            BEGIN
              RAISE EXCEPTION 'event_history is append-only; % not allowed', TG_OP
              USING ERRCODE = '0A000'; -- feature_not_supported
            END;
            $$;
            """
        )
        op.execute(
            """
            CREATE TRIGGER tr_event_history_append_only
            BEFORE UPDATE OR DELETE ON event_history
            FOR EACH ROW
            EXECUTE FUNCTION event_history_forbid_mod();
            """
        )
    else:
        op.execute(
            """
            CREATE TRIGGER tr_event_history_no_update
            BEFORE UPDATE ON event_history
            BEGIN
              SELECT RAISE(ABORT, 'event_history is append-only; UPDATE not allowed');
            END;
            """
        )
        op.execute(
            """
            CREATE TRIGGER tr_event_history_no_delete
            BEFORE DELETE ON event_history
            BEGIN
              SELECT RAISE(ABORT, 'event_history is append-only; DELETE not allowed');
            END;
            """
        )


def downgrade() -> None:
    """Downgrade schema."""
    dialect = DialectName.from_sqlalchemy(op.get_bind())

    if dialect is DialectName.POSTGRES:
        op.execute(
            "DROP TRIGGER IF EXISTS tr_event_history_append_only ON event_history;"
        )
        op.execute("DROP FUNCTION IF EXISTS event_history_forbid_mod();")
    else:
        op.execute("DROP TRIGGER IF EXISTS tr_event_history_no_delete;")
        op.execute("DROP TRIGGER IF EXISTS tr_event_history_no_update;")

    op.drop_index("ix_event_subdomains_active_subdomain", table_name="event_subdomains")
    op.drop_index(
        op.f("ix_event_subdomains_event_subdomains_event_id"),
        table_name="event_subdomains",
    )
    op.drop_index(
        op.f("ix_event_subdomains_event_subdomains_subdomain"),
        table_name="event_subdomains",
    )
    op.drop_table("event_subdomains")

    op.drop_index(
        op.f("ix_event_history_event_history_event_id_event_history_timestamp"),
        table_name="event_history",
    )
    op.drop_table("event_history")
    op.drop_table("events")
