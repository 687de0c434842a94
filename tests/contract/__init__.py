"""Contract tests.

Each storage port (event table, history log, subdomain claims) is checked
once, through the `ports` fixture, against the in-memory, SQLite and
PostgreSQL implementations so they stay interchangeable.
"""
