"""SQLAlchemy catalog database and the unit of work opened per scraped product.

The process holds at most one :class:`CatalogDatabase`, installed by
:func:`startup`. Units of work created without an explicit database bind to it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from catalogsync.adapters.sqlalchemy.mappings import create_all_tables, start_mappers
from catalogsync.adapters.sqlalchemy.repositories import SqlAlchemyCatalogRepository
from catalogsync.config import DatabaseConfig

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine


class StartupError(RuntimeError):
    """Raised when the catalog database is used before :func:`startup` or twice started."""


class CatalogDatabase:
    """An engine with the catalog schema in place and a session factory bound to it."""

    def __init__(self, engine: Engine) -> None:
        start_mappers()
        create_all_tables(engine)
        self.engine = engine
        self.sessions: sessionmaker[Session] = sessionmaker(bind=engine, expire_on_commit=False)

    @classmethod
    def connect(cls, database_uri: str | None = None) -> CatalogDatabase:
        uri = database_uri or DatabaseConfig.from_env().uri
        return cls(create_engine(uri, future=True))

    def unit_of_work(self) -> SqlAlchemyCatalogUnitOfWork:
        return SqlAlchemyCatalogUnitOfWork(self)

    def close(self) -> None:
        self.engine.dispose()


_current: CatalogDatabase | None = None


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> CatalogDatabase:
    """Open the process-wide catalog database; ``force`` replaces an open one."""

    global _current  # noqa: PLW0603
    if _current is not None and not force:
        raise StartupError("Catalog database already open. Pass force=True to replace it.")
    if engine is not None:
        database = CatalogDatabase(engine)
    else:
        database = CatalogDatabase.connect(database_uri)
    _current = database
    return database


def current_database() -> CatalogDatabase:
    if _current is None:
        raise StartupError(
            "Catalog database not open. Call catalogsync.adapters.sqlalchemy.startup() first."
        )
    return _current


def is_started() -> bool:
    return _current is not None


def shutdown() -> None:
    """Dispose the process-wide catalog database, if any."""

    global _current  # noqa: PLW0603
    if _current is not None:
        _current.close()
    _current = None


class SqlAlchemyCatalogUnitOfWork:
    """One session against the catalog; rolled back when the block raises."""

    def __init__(self, database: CatalogDatabase | None = None) -> None:
        self._sessions = (database or current_database()).sessions
        self._session: Session | None = None
        self._catalog: SqlAlchemyCatalogRepository | None = None

    def __enter__(self) -> SqlAlchemyCatalogUnitOfWork:
        if self._session is not None:
            raise StartupError("Unit of work is already open")
        self._session = self._sessions()
        self._catalog = SqlAlchemyCatalogRepository(self._session)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        session = self.session
        try:
            if exc_type is not None:
                session.rollback()
        finally:
            session.close()
            self._session = None
            self._catalog = None
        return False

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work used outside its with block")
        return self._session

    @property
    def catalog(self) -> SqlAlchemyCatalogRepository:
        if self._catalog is None:
            raise StartupError("Unit of work used outside its with block")
        return self._catalog

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


if TYPE_CHECKING:
    from catalogsync.domain.ports.unit_of_work import CatalogUnitOfWork

    _uow_check: CatalogUnitOfWork = SqlAlchemyCatalogUnitOfWork()
