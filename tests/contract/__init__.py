"""Contract tests.

The `Storage` port is specified here once and checked against every backend
(in-memory, transaction overlay, SQLAlchemy). A backend that passes can be
swapped under a chain without changing any behaviour.

Only the port's public surface is asserted: ordering of `items`, prefix
filtering, overwrite and removal semantics.
"""
