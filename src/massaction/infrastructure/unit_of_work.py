"""Transactional boundary shared by repositories and services."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from sqlalchemy.orm import Session


class UnitOfWork(Protocol):
    """Represents an atomic transactional boundary."""

    @property
    def session(self) -> Session:
        """Session bound to the active transaction."""

        raise NotImplementedError

    def __enter__(self) -> UnitOfWork:
        """Enter the transactional context."""

        raise NotImplementedError

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: object,
    ) -> None:
        """Exit the transactional context, rolling back if needed."""

        raise NotImplementedError

    def commit(self) -> None:
        """Commit the current transaction."""

        raise NotImplementedError

    def rollback(self) -> None:
        """Rollback the current transaction."""

        raise NotImplementedError


class SqlAlchemyUnitOfWork(UnitOfWork):
    """One session and one transaction per ``with`` block.

    Leaving the block commits unless an exception escaped; any failure rolls
    back everything flushed inside it.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory
        self._session: Session | None = None

    @property
    def session(self) -> Session:
        if self._session is None:
            raise RuntimeError("unit of work is not active")
        return self._session

    def __enter__(self) -> "SqlAlchemyUnitOfWork":
        self._session = self._session_factory()
        self._session.begin()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: object,
    ) -> None:
        if self._session is None:
            return
        try:
            if exc_type is not None:
                self.rollback()
            else:
                self.commit()
        finally:
            self._session.close()
            self._session = None

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        if self._session is None:
            return
        self._session.rollback()
