"""Translation of PostgREST/HTTP failures into StoreError."""

from collections.abc import Iterator
from contextlib import contextmanager

import httpx
from postgrest.exceptions import APIError

from core.exceptions import StoreError


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """Re-raise PostgREST and transport errors inside the block as StoreError."""
    try:
        yield
    except APIError as exc:
        raise StoreError(exc.message or str(exc), operation=operation) from exc
    except httpx.HTTPError as exc:
        raise StoreError(str(exc) or type(exc).__name__, operation=operation) from exc
