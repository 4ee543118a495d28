"""Static lookup records."""

from typing import Any

Park = dict[str, Any]
Activity = dict[str, Any]
