"""The `MetaData` every EVENTSITE table is declared on.

Constraints and indexes are named from `NAMING_CONVENTION`, so the names in
the migration and in the live schema are the same strings. Unnamed indexes
are labelled from their columns, e.g.
``ix_event_subdomains_event_subdomains_subdomain``.
"""

from sqlalchemy import MetaData

NAMING_CONVENTION = {
    "pk": "pk_%(table_name)s",
    "fk": "fk_%(table_name)s_%(column_0_N_name)s_%(referred_table_name)s",
    "uq": "uq_%(table_name)s_%(column_0_N_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "ix": "ix_%(table_name)s_%(column_0_N_label)s",
}

metadata = MetaData(naming_convention=NAMING_CONVENTION)
