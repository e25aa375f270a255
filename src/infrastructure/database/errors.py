"""Translation of SQLAlchemy failures into StoreError."""

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import DBAPIError, SQLAlchemyError

from core.exceptions import StoreError


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """Re-raise any SQLAlchemy error inside the block as a StoreError."""
    try:
        yield
    except SQLAlchemyError as exc:
        # Prefer the driver's own message over SQLAlchemy's wrapper text.
        orig = exc.orig if isinstance(exc, DBAPIError) else None
        raise StoreError(str(orig or exc), operation=operation) from exc
