"""Integration tests.

Real SQLite files and PostgreSQL test containers: migrations, append-only
triggers, transaction isolation, retries and concurrent subdomain claims.
"""
