"""
Per-resource repository modules for database access.

Each module owns the queries for one resource and always scopes reads and
writes to the owning user.
"""
