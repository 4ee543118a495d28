"""Static park and activity lookups."""

from dataclasses import dataclass
from typing import Protocol

from nps_proxy.domain.catalog import Activity, Park
from nps_proxy.domain.errors import NotFoundError


class CatalogRepository(Protocol):
    """Read-only source of park and activity records."""

    def list_parks(self) -> list[Park]:
        """Return all parks."""

    def list_activities(self) -> list[Activity]:
        """Return all activities."""


@dataclass
class CatalogService:
    """Service for local catalog lookups."""

    repository: CatalogRepository

    def list_parks(self) -> list[Park]:
        return self.repository.list_parks()

    def list_activities(self) -> list[Activity]:
        return self.repository.list_activities()

    def get_park(self, park_id: str) -> Park:
        """Return the park with a matching id or raise NotFoundError."""
        for park in self.repository.list_parks():
            if park.get("id") == park_id:
                return park
        raise NotFoundError(park_id)
