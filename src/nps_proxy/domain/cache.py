"""Cache domain models."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class CacheEntry:
    """A cached upstream response, immutable once stored."""

    expires_at: datetime
    status_code: int
    body: bytes
    headers: dict[str, str] = field(default_factory=dict)

    def is_fresh(self, now: datetime) -> bool:
        """Return true while the entry has not reached its expiry."""
        return self.expires_at > now
