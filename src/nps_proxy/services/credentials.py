"""Upstream credential discovery."""

import logging
from collections.abc import Iterable, Mapping

from nps_proxy.domain.proxy import Credential

_logger = logging.getLogger(__name__)


def resolve_credential(
    candidate_names: Iterable[str], lookup: Mapping[str, str | None]
) -> Credential:
    """Return the first non-empty value among candidate names, in order."""
    for name in candidate_names:
        value = lookup.get(name)
        if value:
            _logger.info("Using upstream API key from %s", name)
            return Credential(value=value, source=name)
    _logger.info(
        "Upstream API key not found in environment. "
        "Proxy will return errors until set."
    )
    return Credential(value=None, source=None)
