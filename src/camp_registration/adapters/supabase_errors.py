"""Translation of Supabase client failures into service errors."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

import httpx
from postgrest.exceptions import APIError
from storage3.utils import StorageException

from camp_registration.errors import CampRegistrationError, StoreUnavailable

UNIQUE_VIOLATION = "23505"

logger = logging.getLogger(__name__)


@contextmanager
def store_errors(
    operation: str, conflict: type[CampRegistrationError] | None = None
) -> Iterator[None]:
    """Raise StoreUnavailable for backend failures inside the block.

    When ``conflict`` is given, a unique constraint violation raises it instead.
    """
    try:
        yield
    except APIError as exc:
        if conflict is not None and exc.code == UNIQUE_VIOLATION:
            raise conflict from exc
        logger.error("Supabase %s failed: %s %s", operation, exc.code, exc.message)
        raise StoreUnavailable from exc
    except (StorageException, httpx.HTTPError) as exc:
        logger.error("Supabase %s failed: %s", operation, exc)
        raise StoreUnavailable from exc
