"""Interfaces (application boundary) for MULTISTARGATE.

Defines framework-free contracts: ABCs and small DTOs shared by the service
layer, the applications, the adapters and the simulated chain (storage,
router handle, address API, unit of work, wire envelopes). Business rules stay
out of this package.

Dependency rule: this package only imports from `multistargate.interfaces`
and the value objects of `multistargate.domain`. It may be imported by every
other layer.
"""
