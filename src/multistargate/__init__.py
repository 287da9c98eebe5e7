"""MULTISTARGATE

A pluggable protocol-extension dispatcher for simulated blockchain test
environments. Independent applications claim the message and query type URLs
they own, keep their own namespaced state, and are routed to by a dispatcher
that loads and saves that state transactionally around every call.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
