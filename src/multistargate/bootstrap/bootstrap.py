"""Build a chain with its applications, dispatcher and unit of work."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from multistargate import config
from multistargate.adapters.db.engine import create_schema, make_engine
from multistargate.adapters.unit_of_work import InMemoryUnitOfWork, SqlAlchemyUnitOfWork
from multistargate.environment import BankKeeper, Chain, MockAddressApi
from multistargate.service_layer.dispatcher import Dispatcher
from multistargate.service_layer.registry import ApplicationRegistry

if TYPE_CHECKING:
    from multistargate.interfaces.environment import BlockInfo
    from multistargate.interfaces.unit_of_work import AbstractUnitOfWork
    from multistargate.service_layer.application import Application

logger = logging.getLogger(__name__)


def build_uow(db_url: str | None = None) -> AbstractUnitOfWork:
    """Build the unit of work backing a chain.

    Args:
        db_url: SQLAlchemy URL of a durable store. When None, the chain lives
            in memory and is lost with the process.

    Returns:
        An in-memory unit of work, or a SQLAlchemy one over a database whose
        schema has been created.
    """
    if db_url is None:
        logger.debug("Using in-memory chain storage")
        return InMemoryUnitOfWork()

    engine = make_engine(db_url)
    create_schema(engine)
    logger.debug("Using SQLAlchemy chain storage at %s", engine.url)
    return SqlAlchemyUnitOfWork(engine)


def build_dispatcher(applications: Iterable[Application]) -> Dispatcher:
    """Register `applications` and build the dispatcher routing to them.

    Raises:
        RegistrationError: If two applications share a name or a type URL.
    """
    return Dispatcher(ApplicationRegistry.register(applications))


def build_chain(
    applications: Iterable[Application],
    *,
    prefix: str = config.DEFAULT_CHAIN_PREFIX,
    db_url: str | None = None,
    block: BlockInfo | None = None,
) -> Chain:
    """Build a chain hosting `applications`.

    Args:
        applications: The stargate applications to register.
        prefix: Human-readable part of every address on the chain.
        db_url: Optional SQLAlchemy URL; in-memory storage when None.
        block: Initial block; the default test block when None.

    Returns:
        A ready-to-use `Chain`.
    """
    dispatcher = build_dispatcher(applications)
    chain = Chain(
        uow=build_uow(db_url),
        dispatcher=dispatcher,
        api=MockAddressApi(prefix),
        bank=BankKeeper(),
        block=block,
    )
    logger.debug(
        "Built chain %s with applications %s",
        chain.block.chain_id,
        dispatcher.registry.names(),
    )
    return chain


def bootstrap_from_env(
    applications: Iterable[Application],
    *,
    prefix: str = config.DEFAULT_CHAIN_PREFIX,
) -> Chain:
    """Build a chain stored in the database named by `MULTISTARGATE_DB_URL`.

    Raises:
        DatabaseUrlNotSetError: If the environment variable is not set.
    """
    return build_chain(applications, prefix=prefix, db_url=config.get_db_url())
