"""Catalog repository backed by JSON files on disk."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from nps_proxy.domain.catalog import Activity, Park
from nps_proxy.services.catalog import CatalogRepository

_logger = logging.getLogger(__name__)


@dataclass
class JsonFileCatalogRepository(CatalogRepository):
    """Catalog data loaded once from parks.json and activities.json."""

    parks: list[Park]
    activities: list[Activity]

    @classmethod
    def load(cls, data_dir: str | Path) -> "JsonFileCatalogRepository":
        """Read both catalog files from data_dir."""
        directory = Path(data_dir)
        return cls(
            parks=_read_records(directory / "parks.json"),
            activities=_read_records(directory / "activities.json"),
        )

    def list_parks(self) -> list[Park]:
        return self.parks

    def list_activities(self) -> list[Activity]:
        return self.activities


def _read_records(path: Path) -> list[dict]:
    if not path.exists():
        _logger.warning("Catalog file %s not found; serving an empty list", path)
        return []
    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, list):
        raise ValueError(f"Catalog file {path} must contain a JSON array")
    return payload
