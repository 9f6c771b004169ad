from __future__ import annotations

import logging
from typing import Optional

import httpx

from ..config import get_settings
from ..errors import ServiceUnreachableError, UpstreamError

logger = logging.getLogger(__name__)

PDF_PATH = "/generate-pdf"
PDF_FAILED = "PDF generation failed"
PDF_ERROR = "Error generating PDF."


class PdfServiceClient:
    """Hands report HTML to the remote renderer and returns the document bytes."""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        settings = get_settings()
        base_url = base_url or settings.PDF_SERVICE_URL
        if not base_url:
            raise ValueError("PDF_SERVICE_URL is not configured")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT

    async def render(self, html: str) -> bytes:
        endpoint = self.base_url + PDF_PATH
        logger.info("Requesting PDF render (%d bytes of HTML)", len(html))
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                r = await client.post(endpoint, json={"html": html})
        except httpx.HTTPError as e:
            logger.warning("PDF service unreachable at %s: %s", endpoint, e)
            raise ServiceUnreachableError(PDF_ERROR) from e
        if r.is_error:
            logger.error("PDF service returned HTTP %s", r.status_code)
            raise UpstreamError(PDF_FAILED, status_code=r.status_code)
        return r.content
