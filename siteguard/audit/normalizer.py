"""Turn a raw scanner payload into the fixed report shape.

The scanner result is untrusted JSON: summary scores, a ``security`` block
whose sub-objects may each be missing, and optionally the full Lighthouse
report under ``fullReport``.  Everything here is a pure mapping; fetching the
payload and exporting the result live in :mod:`siteguard.integrations`.
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import ValidationError

from ..errors import MalformedScanError
from ..schemas import (
    FailedAudit,
    FullReport,
    Issue,
    NormalizedReport,
    Pass,
    RawScanResult,
    RawSecurity,
    SUMMARY_KEYS,
)

# (category id, display name) in report order
CATEGORIES = [
    ('performance', 'Performance'),
    ('accessibility', 'Accessibility'),
    ('seo', 'SEO'),
    ('best-practices', 'Best Practices'),
]
CATEGORY_IDS = [cid for cid, _ in CATEGORIES]

HSTS_HEADER = 'strict-transport-security'

ISSUE_LABELS = {
    'hsts-missing': 'HSTS header missing',
    'cookie-banner-missing': 'No cookie consent banner detected',
    'blacklist-listed': 'Site is blacklisted for malware or phishing',
}
ISSUE_CRITICALITY = {
    'hsts-missing': 'high',
    'cookie-banner-missing': 'medium',
    'blacklist-listed': 'high',
}
PASS_LABELS = {
    'ssl-valid': 'SSL certificate is valid',
    'blacklist-clear': 'Site is not blacklisted',
}


def _issue(issue_id: str) -> Issue:
    return Issue(id=issue_id, label=ISSUE_LABELS[issue_id], criticality=ISSUE_CRITICALITY[issue_id])


def _pass(pass_id: str) -> Pass:
    return Pass(id=pass_id, label=PASS_LABELS[pass_id])


def parse_scan(raw: Union[Mapping[str, Any], RawScanResult]) -> RawScanResult:
    if isinstance(raw, RawScanResult):
        return raw
    if not isinstance(raw, Mapping):
        raise MalformedScanError(f"scan result must be an object, got {type(raw).__name__}")
    try:
        return RawScanResult.model_validate(raw)
    except ValidationError as exc:
        fields = sorted({'.'.join(str(p) for p in err['loc']) for err in exc.errors()})
        raise MalformedScanError(f"invalid scan result: {', '.join(fields)}") from exc


def security_issues(security: Optional[RawSecurity]) -> List[Issue]:
    if security is None:
        return []
    issues = []
    # no header map at all means nothing was served, so HSTS is still missing
    if not security.header(HSTS_HEADER):
        issues.append(_issue('hsts-missing'))
    cookies = security.trackers_and_cookies
    if cookies is not None and not cookies.cookie_banner:
        issues.append(_issue('cookie-banner-missing'))
    sb = security.safe_browsing
    if sb is not None and sb.safe is False:
        issues.append(_issue('blacklist-listed'))
    return issues


def security_passes(security: Optional[RawSecurity]) -> List[Pass]:
    if security is None:
        return []
    passes = []
    https = security.https
    if https is not None and https.ssl is not None and https.ssl.valid is True:
        passes.append(_pass('ssl-valid'))
    sb = security.safe_browsing
    if sb is not None and sb.safe is True:
        passes.append(_pass('blacklist-clear'))
    return passes


def _number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def _text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def failed_audits(full_report: Optional[FullReport], category_id: str) -> List[FailedAudit]:
    """Weighted audits in ``category_id`` that did not fully pass, in reference order."""
    if full_report is None:
        return []
    category = full_report.categories.get(category_id)
    if category is None:
        return []
    out = []
    for ref in category.audit_refs:
        weight = _number(ref.weight)
        if not isinstance(ref.id, str) or weight is None or not weight > 0:
            continue
        audit = full_report.audits.get(ref.id)
        # a null or non-numeric score (manual / not applicable) counts as not passing
        score = _number(audit.score) if audit is not None else None
        if audit is None or score == 1:
            continue
        out.append(FailedAudit(
            id=ref.id,
            title=_text(audit.title) or "",
            description=_text(audit.description),
            score=score,
            display_value=_text(audit.display_value),
        ))
    return out


def normalize(raw: Union[Mapping[str, Any], RawScanResult], url: str) -> NormalizedReport:
    scan = parse_scan(raw)
    s = scan.summary
    summary: Dict[str, float] = {
        'performance': s.performance,
        'accessibility': s.accessibility,
        'seo': s.seo,
        'bestPractices': s.best_practices,
    }
    overall = sum(summary[k] for k in SUMMARY_KEYS) / len(SUMMARY_KEYS)
    return NormalizedReport(
        url=url,
        overall_score=overall,
        summary=summary,
        issues=security_issues(scan.security),
        passes=security_passes(scan.security),
        failed_audits={cid: failed_audits(scan.full_report, cid) for cid in CATEGORY_IDS},
    )
