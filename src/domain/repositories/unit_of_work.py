"""Unit of Work protocol."""

from types import TracebackType
from typing import Optional, Protocol

from domain.repositories.profile_repository import IProfileRepository


class IUnitOfWork(Protocol):
    """One backend transaction over the profiles table.

    Nothing is written unless ``commit`` is called before the block exits.
    Leaving the block on an error rolls back, and transport or constraint
    failures come out as ``BackendError``.
    """

    profiles: IProfileRepository

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...

    async def __aenter__(self) -> "IUnitOfWork": ...

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None: ...
