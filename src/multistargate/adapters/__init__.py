"""Adapters (infrastructure) for MULTISTARGATE.

Provide concrete implementations of the storage and unit-of-work ports
(in-memory and SQLAlchemy-backed), plus persistence mapping and related wiring
(engines, metadata).

Dependency rule: may import `multistargate.interfaces` and
`multistargate.domain`; inner layers must not import this package.
"""
