import time

from fastapi import APIRouter, HTTPException, Response

from .. import services
from ..errors import MalformedScanError, ServiceUnreachableError, SiteGuardError, UpstreamError
from ..report.html import to_report_html
from ..schemas import NormalizedReport, ScanRequest

router = APIRouter(prefix='/api', tags=['scans'])


def error_status(exc: SiteGuardError) -> int:
    if isinstance(exc, MalformedScanError):
        return 422
    if isinstance(exc, ServiceUnreachableError):
        return 503
    return 502


@router.post('/scan', response_model=NormalizedReport)
async def scan(payload: ScanRequest):
    try:
        return await services.scan_url(payload.url)
    except SiteGuardError as e:
        raise HTTPException(error_status(e), detail=str(e))


@router.post('/report/html')
async def report_html(report: NormalizedReport):
    return {'html': to_report_html(report)}


@router.post('/report/pdf')
async def report_pdf(report: NormalizedReport):
    try:
        pdf = await services.render_pdf(report)
    except (UpstreamError, ServiceUnreachableError) as e:
        raise HTTPException(error_status(e), detail=str(e))
    filename = f"siteguard-scan-{int(time.time() * 1000)}.pdf"
    return Response(
        content=pdf,
        media_type='application/pdf',
        headers={'Content-Disposition': f'attachment; filename={filename}'},
    )
