"""Service layer: application contract, state persistence, registry and dispatcher.

The dispatcher is the entrypoint of the service layer. It performs no business
logic of its own; it resolves the owning application, loads its state, calls
it and persists the result.
"""
