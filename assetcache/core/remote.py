"""Last-Modified lookup for remote sources.

Redirects are followed by hand so every hop's headers are inspected, with an
explicit hop limit.  ``None`` means the timestamp is unknown and the caller
must treat the source as changed.
"""

from __future__ import annotations

import logging
from datetime import timezone
from email.utils import parsedate_to_datetime
from typing import Any
from urllib.parse import urljoin

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_MAX_REDIRECTS = 5


def parse_http_date(value: str) -> float | None:
    """Parse an HTTP date header into Unix seconds, or ``None`` if invalid."""
    try:
        parsed = parsedate_to_datetime(value.strip())
    except (TypeError, ValueError, IndexError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp()


class RemoteMetadataResolver:
    """Fetches the last-modified time of a URL.

    Parameters
    ----------
    session:
        HTTP session to issue requests with.  A new ``requests.Session`` is
        created when omitted.
    timeout:
        Seconds to wait for connect and read before giving up.
    max_redirects:
        Number of ``Location`` hops followed before the URL is declared
        unresolvable.
    """

    def __init__(
        self,
        session: Any | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        max_redirects: int = DEFAULT_MAX_REDIRECTS,
    ) -> None:
        self._session = session if session is not None else requests.Session()
        self._timeout = timeout
        self._max_redirects = max_redirects

    def last_modified(self, url: str) -> float | None:
        """Return the Unix last-modified time of *url*.

        ``0.0`` when the server sends no ``Last-Modified`` header, ``None``
        when the time cannot be determined (including 4xx/5xx responses).
        """
        current = url
        for _ in range(self._max_redirects + 1):
            try:
                with self._session.get(
                    current,
                    allow_redirects=False,
                    stream=True,
                    timeout=self._timeout,
                ) as response:
                    headers = response.headers
                    status_code = response.status_code
            except requests.RequestException as exc:
                logger.warning("Cannot fetch headers for %s: %s", current, exc)
                return None

            location = headers.get("Location")
            if location:
                current = urljoin(current, location.strip())
                logger.debug("Following redirect from %s to %s.", url, current)
                continue

            if status_code >= 400:
                logger.warning("HTTP %d for %s; treating it as unknown.", status_code, current)
                return None

            modified = headers.get("Last-Modified")
            if modified is None:
                return 0.0
            timestamp = parse_http_date(modified)
            if timestamp is None:
                logger.warning("Unparsable Last-Modified %r from %s.", modified, current)
            return timestamp

        logger.warning(
            "Gave up on %s after %d redirects.", url, self._max_redirects
        )
        return None
