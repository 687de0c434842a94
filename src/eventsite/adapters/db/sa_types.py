"""Column types shared by the EVENTSITE tables.

PostgreSQL and SQLite must hand back the same Python values: integer ids,
JSON documents and aware UTC timestamps.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, BigInteger, Integer
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.types import DateTime, TypeDecorator

from eventsite.adapters.db.dialects import DialectName

if TYPE_CHECKING:
    from sqlalchemy.engine.interfaces import Dialect

__all__ = ["BIGINT_ID", "PORTABLE_JSON", "UTCDateTime", "as_utc"]

# INTEGER on SQLite so that primary keys alias the rowid
BIGINT_ID = BigInteger().with_variant(Integer(), "sqlite")

PORTABLE_JSON = JSON(none_as_null=True).with_variant(
    JSONB(none_as_null=True), "postgresql"
)


def as_utc(value: datetime) -> datetime:
    """Return `value` as an aware UTC datetime, reading naive values as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class UTCDateTime(TypeDecorator[datetime]):
    """A zone-aware timestamp column that only ever holds UTC.

    SQLite has no zone-aware storage, so the value is written there as naive
    UTC wall time and re-labelled as UTC on the way out.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> Any:
        if value is None:
            return None
        stamp = as_utc(value)
        if dialect.name == DialectName.SQLITE.value:
            return stamp.replace(tzinfo=None)
        return stamp

    def process_result_value(self, value: Any, dialect: Dialect) -> datetime | None:
        if isinstance(value, datetime):
            return as_utc(value)
        return value

    def process_literal_param(self, value: datetime | None, dialect: Dialect) -> Any:
        return self.process_bind_param(value, dialect)

    @property
    def python_type(self) -> type[datetime]:
        return datetime
