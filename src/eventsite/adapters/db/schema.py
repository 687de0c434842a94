"""Relational schema of EVENTSITE.

Three tables hold everything the service knows:

| Table              | Role                                          |
|--------------------|-----------------------------------------------|
| `events`           | one row per user; the source of truth         |
| `event_history`    | append-only audit log of mutations            |
| `event_subdomains` | subdomains claimed by events, never deleted   |

Constraints (enforced here):

| Constraint                                   | Purpose                       |
|----------------------------------------------|-------------------------------|
| UNIQUE(events.user_id)                       | one event per user            |
| UNIQUE(event_subdomains.subdomain) WHERE state = 'active' | one owner per subdomain |
| CHECK(events.state IN (1, 2, 3))             | known lifecycle states        |

The adapters recognize unique violations by the column names that appear in
the database error, so column names here are part of their contract.

Append-only enforcement on `event_history` is applied in migrations.
"""

from __future__ import annotations

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Identity,
    Index,
    SmallInteger,
    String,
    Table,
    Text,
    false,
    text,
)

from eventsite.adapters.db.metadata import metadata
from eventsite.adapters.db.sa_types import BIGINT_ID, PORTABLE_JSON, UTCDateTime

__all__ = ["events", "event_history", "event_subdomains", "ACTIVE_SUBDOMAIN_INDEX"]

ACTIVE_SUBDOMAIN_INDEX = "ix_event_subdomains_active_subdomain"

events = Table(
    "events",
    metadata,
    Column("id", BIGINT_ID, Identity(start=1), primary_key=True, nullable=False),
    Column(
        "user_id",
        String(64),
        nullable=False,
        unique=True,
        comment="Opaque id of the owner, issued by the auth provider.",
    ),
    Column("state", SmallInteger, nullable=False, comment="EventState value."),
    Column("title", Text, nullable=False, server_default=""),
    Column("picture_set", PORTABLE_JSON, nullable=False),
    Column("sub_event_details", PORTABLE_JSON, nullable=False),
    Column("ui_state", PORTABLE_JSON, nullable=False),
    Column("current_active_subdomain", String(64), nullable=False),
    Column("subscription_customer_id", String(128), nullable=True),
    Column("subscription_id", String(128), nullable=True),
    Column("subscription_active", Boolean, nullable=False, server_default=false()),
    Column("time_created", UTCDateTime(), nullable=False),
    Column("time_last_updated", UTCDateTime(), nullable=False),
    Column("time_removed", UTCDateTime(), nullable=True),
    CheckConstraint("state IN (1, 2, 3)", name="known_state"),
    comment="One event per user. Rows are soft-deleted through state, never removed.",
)

event_history = Table(
    "event_history",
    metadata,
    Column("id", BIGINT_ID, Identity(start=1), primary_key=True, nullable=False),
    Column("event_id", BIGINT_ID, ForeignKey("events.id"), nullable=False),
    Column("type", SmallInteger, nullable=False, comment="EventHistoryType value."),
    Column("timestamp", UTCDateTime(), nullable=False),
    Column(
        "data",
        PORTABLE_JSON,
        nullable=True,
        comment="Snapshot of the request that caused the mutation.",
    ),
    Index(None, "event_id", "timestamp"),
    comment="Append-only audit log of event mutations.",
)

event_subdomains = Table(
    "event_subdomains",
    metadata,
    Column("id", BIGINT_ID, Identity(start=1), primary_key=True, nullable=False),
    Column("subdomain", String(64), nullable=False),
    Column("state", String(16), nullable=False),
    Column("event_id", BIGINT_ID, ForeignKey("events.id"), nullable=False),
    Column("user_id", String(64), nullable=False),
    CheckConstraint("state IN ('active', 'inactive')", name="known_state"),
    Index(None, "subdomain"),
    Index(None, "event_id"),
    Index(
        ACTIVE_SUBDOMAIN_INDEX,
        "subdomain",
        unique=True,
        postgresql_where=text("state = 'active'"),
        sqlite_where=text("state = 'active'"),
    ),
    comment="Subdomains claimed by events. At most one active claim per subdomain.",
)
