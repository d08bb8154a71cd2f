"""Engine lifecycle and the SQLAlchemy unit of work for catalog operations.

``startup()`` binds one process-wide engine and creates the schema; every
``SqlAlchemyCatalogUnitOfWork`` then opens its own session from that engine.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from stockroom.adapters.sqlalchemy.mappings import create_all_tables
from stockroom.adapters.sqlalchemy.repositories import (
    SqlAlchemyChangeLogRepository,
    SqlAlchemyProductRepository,
)
from stockroom.config.storage import get_database_config
from stockroom.domain.ports.unit_of_work import CatalogRepositories

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when the adapter is used before ``startup()`` or started twice."""


@dataclass(slots=True)
class _EngineBinding:
    engine: Engine
    sessions: sessionmaker[Session]


_binding: _EngineBinding | None = None


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Bind the catalog engine and make sure its tables exist."""

    global _binding  # noqa: PLW0603
    if _binding is not None and not force:
        raise StartupError("Catalog database already started. Pass force=True to rebind.")

    bound = engine or create_engine(database_uri or get_database_config().uri, future=True)
    create_all_tables(bound)
    _binding = _EngineBinding(
        engine=bound,
        sessions=sessionmaker(bind=bound, expire_on_commit=False),
    )
    log.debug("Catalog database bound to %s", bound.url.render_as_string(hide_password=True))


def configured_engine() -> Engine | None:
    return _binding.engine if _binding is not None else None


def is_started() -> bool:
    return _binding is not None


def shutdown() -> None:
    """Dispose the bound engine; mostly useful between tests."""

    global _binding  # noqa: PLW0603
    if _binding is not None:
        _binding.engine.dispose()
    _binding = None


def _session_factory() -> sessionmaker[Session]:
    if _binding is None:
        raise StartupError(
            "Catalog database not started. Call "
            "stockroom.adapters.sqlalchemy.unit_of_work.startup() first."
        )
    return _binding.sessions


class SqlAlchemyCatalogUnitOfWork:
    """One session, one transaction: the product and change-log repositories share it."""

    def __init__(self) -> None:
        self._sessions = _session_factory()
        self._session: Session | None = None
        self._repositories: CatalogRepositories | None = None

    def __enter__(self) -> SqlAlchemyCatalogUnitOfWork:
        if self._session is not None:
            raise StartupError("Unit of work already entered")
        self._session = self._sessions()
        self._repositories = CatalogRepositories(
            products=SqlAlchemyProductRepository(self._session),
            changes=SqlAlchemyChangeLogRepository(self._session),
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        session = self.session
        if exc_type is not None:
            session.rollback()
        session.close()
        self._session = None
        self._repositories = None
        return False

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work session not open")
        return self._session

    @property
    def repositories(self) -> CatalogRepositories:
        if self._repositories is None:
            raise StartupError("Unit of work session not open")
        return self._repositories

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


if TYPE_CHECKING:
    from stockroom.domain.ports.unit_of_work import CatalogUnitOfWork

    _uow_check: CatalogUnitOfWork = SqlAlchemyCatalogUnitOfWork()
