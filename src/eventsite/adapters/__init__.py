"""Adapters: concrete implementations of the `eventsite.interfaces` ports.

SQLAlchemy-backed tables for production and tests, in-memory tables for fast
service-layer tests, ID generators and the local payments gateway.
"""
