import re

from siteguard.audit.normalizer import normalize
from siteguard.report.pdf import build_pdf


def test_build_pdf_returns_pdf_document(raw_scan):
    pdf = build_pdf(normalize(raw_scan, "https://example.com"))
    assert pdf.startswith(b"%PDF")
    assert pdf.rstrip().endswith(b"%%EOF")


def test_long_reports_span_pages():
    audits = {
        f"a{i}": {"score": 0, "title": f"Audit {i}", "description": "word " * 80, "displayValue": "1 s"}
        for i in range(8)
    }
    refs = [{"id": k, "weight": 1} for k in audits]
    raw = {
        "summary": {"performance": 0.2, "accessibility": 0.3, "seo": 0.4, "bestPractices": 0.1},
        "security": {"safeBrowsing": {"safe": False}, "trackersAndCookies": {}},
        "fullReport": {
            "categories": {cid: {"auditRefs": refs} for cid in ("performance", "accessibility", "seo", "best-practices")},
            "audits": audits,
        },
    }
    pdf = build_pdf(normalize(raw, "https://example.com"))
    assert pdf.startswith(b"%PDF")
    counts = [int(n) for n in re.findall(rb"/Count (\d+)", pdf)]
    assert max(counts) > 1


def test_markup_in_audit_text_does_not_break_rendering():
    raw = {
        "summary": {"performance": 0.5, "accessibility": 0.5, "seo": 0.5, "bestPractices": 0.5},
        "fullReport": {
            "categories": {"seo": {"auditRefs": [{"id": "x", "weight": 1}]}},
            "audits": {"x": {"score": 0, "title": "Use <meta> & <title> tags", "description": "<b>unclosed"}},
        },
    }
    pdf = build_pdf(normalize(raw, "https://example.com/?a=1&b=<2>"))
    assert pdf.startswith(b"%PDF")
