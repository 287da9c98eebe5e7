"""Database wiring: engine factory, shared metadata and table schemas."""
