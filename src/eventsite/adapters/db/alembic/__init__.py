"""Alembic migration scripts, packaged so `build_alembic_config` can find them."""
