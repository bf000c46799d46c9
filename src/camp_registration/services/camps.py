"""Camp catalog browsing."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Protocol

from camp_registration.domain.camps import Camp, CampStatus, Countdown
from camp_registration.errors import CampNotFound, RegistrationClosed, ValidationError
from camp_registration.services.cache import Cache

CATALOG_CACHE_KEY = "camps:catalog"
STATUS_FILTERS = {"all", *CampStatus}
SORT_KEYS = {"date", "title"}


class CampRepository(Protocol):
    """Persistence interface for the camp catalog."""

    def list_camps(self) -> list[Camp]:
        """Return every camp."""

    def get_camp(self, slug: str) -> Camp | None:
        """Return a camp by slug, if present."""


@dataclass
class CampService:
    """Service for listing camps and checking registration windows."""

    repository: CampRepository
    cache: Cache
    ttl_seconds: int = 60

    def list_camps(
        self, status: str = "all", search: str = "", sort_by: str = "date"
    ) -> list[Camp]:
        """Return camps filtered by status and search text, sorted."""
        invalid = []
        if status not in STATUS_FILTERS:
            invalid.append("status")
        if sort_by not in SORT_KEYS:
            invalid.append("sort_by")
        if invalid:
            raise ValidationError(invalid)

        needle = search.strip().lower()
        camps = [
            camp
            for camp in self._catalog()
            if (status == "all" or camp.status == status)
            and (
                not needle
                or needle in camp.title.lower()
                or needle in camp.description.lower()
            )
        ]
        if sort_by == "title":
            return sorted(camps, key=lambda camp: camp.title.casefold())
        # Undated camps sort last.
        return sorted(
            camps,
            key=lambda camp: (camp.start_date is None, camp.start_date or date.min),
        )

    def get_camp(self, slug: str) -> Camp | None:
        """Return a camp by slug, if present."""
        return self.repository.get_camp(slug)

    def require_open_camp(self, slug: str, now: datetime | None = None) -> Camp:
        """Return the camp when it accepts registrations."""
        camp = self.repository.get_camp(slug)
        if camp is None:
            raise CampNotFound
        if not is_open(camp, now or datetime.now(tz=UTC)):
            raise RegistrationClosed
        return camp

    def refresh(self) -> None:
        """Drop the cached catalog."""
        self.cache.delete(CATALOG_CACHE_KEY)

    def _catalog(self) -> list[Camp]:
        cached = self.cache.get(CATALOG_CACHE_KEY)
        if isinstance(cached, list):
            return cached
        camps = self.repository.list_camps()
        self.cache.set(CATALOG_CACHE_KEY, camps, self.ttl_seconds)
        return camps


def is_open(camp: Camp, now: datetime) -> bool:
    """Return True while the camp is active and its deadline has not passed."""
    if camp.status != CampStatus.ACTIVE:
        return False
    return camp.registration_closes_at is None or now < camp.registration_closes_at


def time_remaining(camp: Camp, now: datetime) -> Countdown:
    """Return the time left until registration closes, floored at zero."""
    if camp.registration_closes_at is None:
        return Countdown(days=0, hours=0, minutes=0, seconds=0)
    remaining = int((camp.registration_closes_at - now).total_seconds())
    if remaining <= 0:
        return Countdown(days=0, hours=0, minutes=0, seconds=0)
    days, remaining = divmod(remaining, 86400)
    hours, remaining = divmod(remaining, 3600)
    minutes, seconds = divmod(remaining, 60)
    return Countdown(days=days, hours=hours, minutes=minutes, seconds=seconds)
