from __future__ import annotations

import logging

from .audit.normalizer import normalize
from .config import get_settings
from .integrations.pdf_service import PdfServiceClient
from .integrations.scan_service import ScanServiceClient
from .report.html import to_report_html
from .report.pdf import build_pdf
from .schemas import NormalizedReport

logger = logging.getLogger(__name__)


async def scan_url(url: str) -> NormalizedReport:
    """Fetch the raw scan for ``url`` and normalize it."""
    url = url.strip()
    raw = await ScanServiceClient().fetch_scan(url)
    report = normalize(raw, url)
    logger.info("Scan for %s normalized: overall %.3f, %d issue(s), %d pass(es)",
                url, report.overall_score, len(report.issues), len(report.passes))
    return report


async def render_pdf(report: NormalizedReport) -> bytes:
    """Remote renderer when one is configured, local reportlab otherwise."""
    if get_settings().PDF_SERVICE_URL:
        return await PdfServiceClient().render(to_report_html(report))
    logger.info("PDF_SERVICE_URL not set; rendering %s locally", report.url)
    return build_pdf(report)
