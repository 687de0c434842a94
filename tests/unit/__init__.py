"""Unit tests.

Domain rules, the claim manager, the lifecycle engine and the repository
facade are exercised here against the in-memory tables in
`eventsite.adapters.in_memory_adapters`; nothing touches a database file.
"""
