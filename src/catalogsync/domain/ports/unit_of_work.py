"""Transaction boundary the reconciler opens once per scraped product."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Self, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from catalogsync.domain.ports.persistence import CatalogRepository


@runtime_checkable
class CatalogUnitOfWork(Protocol):
    """Scope in which catalog reads and writes commit or roll back together.

    Leaving the ``with`` block because of an exception rolls back; the exception
    is never swallowed. Nothing is committed unless :meth:`commit` is called.
    """

    @property
    def catalog(self) -> CatalogRepository: ...

    def __enter__(self) -> Self: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool | None: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...
