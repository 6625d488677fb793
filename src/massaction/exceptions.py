"""Application errors and the SQLAlchemy translation used by repositories."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, TypeVar

from sqlalchemy import exc as sa_exc

__all__ = [
    "AppError",
    "RepositoryError",
    "NotFoundError",
    "IntegrityConstraintViolation",
    "DatabaseOperationError",
    "ensure_found",
    "handle_sqlalchemy_errors",
]

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AppError(Exception):
    """Base class for application specific errors."""


class RepositoryError(AppError):
    """Base class for persistence layer failures."""


class NotFoundError(RepositoryError):
    """Raised when a record could not be located."""


class IntegrityConstraintViolation(RepositoryError):
    """Raised when a database constraint is violated."""


class DatabaseOperationError(RepositoryError):
    """Raised for unexpected database errors."""


def ensure_found(record: T | None, *, entity: str, identifier: str) -> T:
    """Return ``record`` or raise :class:`NotFoundError`."""

    if record is None:
        raise NotFoundError(f"{entity} '{identifier}' not found")
    return record


def _prefixed(entity: str | None, message: str) -> str:
    return f"{entity}: {message}" if entity else message


@contextmanager
def handle_sqlalchemy_errors(*, entity: str | None = None) -> Iterator[None]:
    """Translate SQLAlchemy errors raised inside the block into repository errors.

    Integrity errors keep the driver message so callers can report which
    constraint failed.
    """

    try:
        yield
    except sa_exc.IntegrityError as exc:
        detail = exc.orig if exc.orig is not None else exc
        logger.warning(
            "repository.integrity_violation", extra={"entity": entity, "detail": str(detail)}
        )
        raise IntegrityConstraintViolation(
            _prefixed(entity, f"integrity constraint violated ({detail})")
        ) from exc
    except sa_exc.DBAPIError as exc:
        logger.error("repository.database_error", extra={"entity": entity}, exc_info=True)
        raise DatabaseOperationError(_prefixed(entity, "database operation failed")) from exc
