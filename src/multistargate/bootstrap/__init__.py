"""Bootstrap (composition root) for MULTISTARGATE.

Assembles a simulated chain at runtime: wires the storage unit of work, the
application registry, the dispatcher, the address API and the bank keeper
into a `Chain`, reading configuration where asked to.

Import rules:
- Tests and embedding code import *this* package to get a ready chain.
- This package may import every other `multistargate` package.
- Inner layers must not import `multistargate.bootstrap`.
"""

from .bootstrap import bootstrap_from_env, build_chain, build_dispatcher, build_uow

__all__ = ["bootstrap_from_env", "build_chain", "build_dispatcher", "build_uow"]
