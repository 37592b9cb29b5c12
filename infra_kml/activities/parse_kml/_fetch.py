"""Remote KML document retrieval.

The parser itself never performs I/O; this helper is the collaborator
side of that boundary, used by ``parse_kml_url``.
"""

from __future__ import annotations

import logging

import httpx

from infra_kml.core.exceptions import TransientError

logger = logging.getLogger("infra_kml.activities.parse_kml")

DEFAULT_FETCH_TIMEOUT_S = 30.0


class KmlFetchError(TransientError):
    """Raised when a KML document cannot be retrieved.

    Attributes:
        url: The requested URL.
        status_code: HTTP status, or ``None`` for transport failures.
    """

    default_stage = "parse_kml"
    default_code = "KML_FETCH_FAILED"

    def __init__(self, url: str, message: str, *, status_code: int | None = None) -> None:
        self.url = url
        self.status_code = status_code
        super().__init__(f"Failed to fetch KML file {url}: {message}")


def fetch_kml_document(url: str, *, timeout_s: float = DEFAULT_FETCH_TIMEOUT_S) -> bytes:
    """Download a KML document.

    Raises:
        KmlFetchError: On a non-2xx response or a transport failure.
    """
    try:
        with httpx.Client(timeout=timeout_s, follow_redirects=True) as client:
            response = client.get(url)
            response.raise_for_status()
            content = response.content
    except httpx.HTTPStatusError as exc:
        status = exc.response.status_code
        raise KmlFetchError(
            url, f"HTTP {status} {exc.response.reason_phrase}", status_code=status
        ) from exc
    except httpx.HTTPError as exc:
        raise KmlFetchError(url, str(exc) or type(exc).__name__) from exc

    logger.debug("Fetched %d bytes of KML from %s", len(content), url)
    return content
