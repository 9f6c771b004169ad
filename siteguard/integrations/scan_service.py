"""Client for the remote scanning service.

POST ``{url}`` to ``/scan``; the service answers with the raw scan payload or
``{"error": "..."}``.  No retries: every failure is terminal for the request.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from ..config import get_settings
from ..errors import ServiceUnreachableError, UpstreamError

logger = logging.getLogger(__name__)

SCAN_PATH = "/scan"
FETCH_ERROR = "Error fetching scan results."


class ScanServiceClient:
    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        settings = get_settings()
        self.base_url = (base_url or settings.SCAN_SERVICE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT

    async def fetch_scan(self, url: str) -> Dict[str, Any]:
        endpoint = self.base_url + SCAN_PATH
        logger.info("Requesting scan for %s", url)
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                r = await client.post(endpoint, json={"url": url})
        except httpx.HTTPError as e:
            logger.warning("Scan service unreachable at %s: %s", endpoint, e)
            raise ServiceUnreachableError(FETCH_ERROR) from e

        try:
            data = r.json()
        except ValueError:
            data = None

        if isinstance(data, dict) and data.get("error"):
            logger.warning("Scan service reported an error for %s: %s", url, data["error"])
            raise UpstreamError(str(data["error"]), status_code=r.status_code)
        if r.is_error:
            logger.warning("Scan service returned HTTP %s for %s", r.status_code, url)
            raise UpstreamError(f"Scan service returned HTTP {r.status_code}", status_code=r.status_code)
        if not isinstance(data, dict):
            logger.warning("Scan service returned a non-object body for %s", url)
            raise UpstreamError("Scan service returned an unreadable response", status_code=r.status_code)
        return data
