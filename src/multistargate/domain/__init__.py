"""Domain layer: the token-factory ledger, its value objects and errors.

Nothing in here knows about storage, routing or the simulated chain.
"""
