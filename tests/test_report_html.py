from siteguard.audit.explanations import SECURITY_EXPLANATIONS, explain
from siteguard.audit.normalizer import normalize
from siteguard.report.html import to_report_html
from siteguard.schemas import Issue, NormalizedReport

URL = "https://example.com/shop"
HEADINGS = ["Performance Issues", "Accessibility Issues", "SEO Issues", "Best Practices Issues"]


def _bare_report(**overrides):
    fields = dict(
        url=URL,
        overall_score=0.5,
        summary={"performance": 0.5, "accessibility": 0.5, "seo": 0.5, "bestPractices": 0.5},
    )
    fields.update(overrides)
    return NormalizedReport(**fields)


def test_contains_url_and_every_category_heading(raw_scan):
    html = to_report_html(normalize(raw_scan, URL))
    assert URL in html
    for heading in HEADINGS:
        assert heading in html


def test_headings_present_without_any_findings():
    html = to_report_html(_bare_report())
    assert URL in html
    for heading in HEADINGS:
        assert heading in html
    assert "No major issues detected in Best Practices." in html
    assert "<li>None</li>" in html


def test_sections_appear_in_fixed_order(raw_scan):
    html = to_report_html(normalize(raw_scan, URL))
    markers = [
        "<b>URL:</b>",
        "Overall Grade:",
        "Category Scores",
        *HEADINGS,
        "Critical Security/Compliance Issues",
        "Passed / Good",
        "Scan performed by SiteGuard.io",
        "References: NIST 800-53, CISA, OWASP Top 10",
    ]
    positions = [html.index(m) for m in markers]
    assert positions == sorted(positions)


def test_grades_and_scores(raw_scan):
    html = to_report_html(normalize(raw_scan, URL))
    assert "<b>Overall Grade:</b> C (74/100)" in html
    assert "<b>Performance:</b> A (95/100)" in html
    assert "<b>BestPractices:</b> D (50/100)" in html


def test_failed_audit_details(raw_scan):
    html = to_report_html(normalize(raw_scan, URL))
    assert "Largest Contentful Paint" in html
    assert "4.1 s" in html
    assert "Speed Index" not in html
    assert "No major issues detected in SEO." in html


def test_at_most_eight_audits_per_category():
    audits = {f"a{i}": {"score": 0, "title": f"Audit number {i:02d}"} for i in range(11)}
    raw = {
        "summary": {"performance": 0.4, "accessibility": 0.4, "seo": 0.4, "bestPractices": 0.4},
        "fullReport": {
            "categories": {"performance": {"auditRefs": [{"id": k, "weight": 1} for k in audits]}},
            "audits": audits,
        },
    }
    html = to_report_html(normalize(raw, URL))
    assert "Audit number 07" in html
    assert "Audit number 08" not in html


def test_issue_and_pass_explanations(raw_scan):
    html = to_report_html(normalize(raw_scan, URL))
    assert "HSTS header missing" in html
    assert "<b>Why this matters:</b> " + SECURITY_EXPLANATIONS["cookie-banner-missing"].why in html
    assert "SSL certificate is valid</b><br/>" + SECURITY_EXPLANATIONS["ssl-valid"].why in html


def test_unknown_issue_id_renders_empty_explanation():
    report = _bare_report(issues=[Issue(id="open-ports", label="Open ports exposed", criticality="high")])
    html = to_report_html(report)
    assert "Open ports exposed" in html
    assert explain("open-ports").why == ""


def test_untrusted_text_is_escaped():
    raw = {
        "summary": {"performance": 0.4, "accessibility": 0.4, "seo": 0.4, "bestPractices": 0.4},
        "fullReport": {
            "categories": {"seo": {"auditRefs": [{"id": "x", "weight": 1}]}},
            "audits": {"x": {"score": 0, "title": "<script>alert(1)</script>"}},
        },
    }
    html = to_report_html(normalize(raw, URL))
    assert "<script>" not in html
    assert "&lt;script&gt;" in html


def test_page_and_export_share_one_environment():
    from siteguard.report import html
    from siteguard.routers import pages

    assert html.env is pages.env
    assert html.env.autoescape("report.html")
