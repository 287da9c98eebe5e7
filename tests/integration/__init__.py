"""Integration tests.

Whole chains built the way embedding code builds them, run against both the
in-memory and the SQLite unit of work: the token factory scenarios,
cross-application routing, bootstrap and the SQLAlchemy unit of work.
"""
