from typing import Optional

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from .. import services
from ..audit.normalizer import CATEGORIES
from ..config import get_settings
from ..errors import SiteGuardError
from ..schemas import FailedAudit, Issue, NormalizedReport, Pass
from ..templating import env
from .scans import error_status

router = APIRouter(tags=['pages'])

# report page shows fewer audits per category than the exported document
PAGE_AUDITS_PER_CATEGORY = 5

LAYOUT_BASE = r"""<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>{{ title }}</title>
</head>
<body>
<header><a href="/">SiteGuard</a></header>
<main>
{{ body|safe }}
</main>
<footer>SiteGuard scans reference best practices from NIST 800-53, CISA, and OWASP Top 10.</footer>
</body>
</html>
"""

HOME_TEMPLATE = r"""
{% if canceled %}<p class="notice">Checkout canceled. Your card was not charged.</p>{% endif %}
<p>Every scan delivers a full-spectrum PDF report you can share with clients or forward to developers.</p>
<form id="scan-form">
  <input type="text" name="url" placeholder="Enter your website URL" required>
  <button type="submit">Run Audit</button>
</form>
<p id="scan-error" role="alert"></p>
<p><a href="/sample-report">See a sample report</a></p>
<script>
document.getElementById('scan-form').addEventListener('submit', async (ev) => {
  ev.preventDefault();
  const url = ev.target.url.value;
  const err = document.getElementById('scan-error');
  err.textContent = '';
  const res = await fetch('/api/create-checkout-session', {
    method: 'POST', headers: {'Content-Type': 'application/json'}, body: JSON.stringify({url})
  });
  const data = await res.json();
  if (!res.ok) { err.textContent = data.error || data.detail || 'Checkout failed.'; return; }
  window.location = data.url;
});
</script>
"""

REPORT_TEMPLATE = r"""
{% set overall = grade(report.overall_score) %}
<h2>{{ heading }}</h2>
<h1>{{ report.url }}</h1>
<div class="grade {{ overall.color_class }}">{{ overall.letter }}</div>
<p>Overall Risk: {{ overall.letter }} (Score: {{ format_score(report.overall_score) }})</p>
<div class="scores">
{% for name, score in report.summary.items() %}
  {% set g = grade(score) %}
  <div class="score {{ g.color_class }}"><span>{{ name }}</span> <b>{{ g.letter }}</b> {{ format_score(score) }}</div>
{% endfor %}
</div>
{% for cid, cname in categories %}
{% set failed = report.failed_audits.get(cid, []) %}
<section>
  <h3>{{ cname }} Issues</h3>
  {% if not failed %}
  <p>No major issues detected in {{ cname }}.</p>
  {% else %}
  <ul>
  {% for audit in failed[:max_audits] %}
    <li><strong>{{ audit.title }}</strong>
      <div>{{ audit.description or '' }}</div>
      {% if audit.display_value %}<div>{{ audit.display_value }}</div>{% endif %}
    </li>
  {% endfor %}
  </ul>
  {% endif %}
</section>
{% endfor %}
<section>
  <h3>Critical Security/Compliance Issues</h3>
  {% for issue in report.issues %}
  <div class="issue {{ issue.criticality }}">
    <strong>{{ issue.label }}</strong>
    <div><b>Why this matters: </b>{{ explain(issue.id).why }}</div>
    <div><b>How to fix: </b>{{ explain(issue.id).fix }}</div>
  </div>
  {% else %}
  <p>No critical issues detected.</p>
  {% endfor %}
</section>
<section>
  <h3>Passed / Good</h3>
  {% for p in report.passes %}
  <div class="pass"><strong>{{ p.label }}</strong><div>{{ explain(p.id).why }}</div></div>
  {% endfor %}
</section>
{% if report_json is none %}
<p><a href="/">Back to Home</a></p>
{% else %}
<button id="download">Download PDF Report</button>
<script id="report-data" type="application/json">{{ report_json|safe }}</script>
<script>
document.getElementById('download').addEventListener('click', async (ev) => {
  const btn = ev.target;
  btn.disabled = true; btn.textContent = 'Generating PDF...';
  try {
    const res = await fetch('/api/report/pdf', {
      method: 'POST', headers: {'Content-Type': 'application/json'},
      body: document.getElementById('report-data').textContent
    });
    if (!res.ok) throw new Error('PDF generation failed');
    const blob = await res.blob();
    const link = document.createElement('a');
    link.href = URL.createObjectURL(blob);
    link.download = `siteguard-scan-${Date.now()}.pdf`;
    document.body.appendChild(link); link.click(); link.remove();
  } catch (e) {
    alert('PDF generation failed: ' + e.message);
  }
  btn.disabled = false; btn.textContent = 'Download PDF Report';
});
</script>
{% endif %}
"""

ERROR_TEMPLATE = r"""<p class="error" role="alert">{{ message }}</p><p><a href="/">Back</a></p>"""


def render_page(body: str, title: Optional[str] = None, status_code: int = 200) -> HTMLResponse:
    html = env.from_string(LAYOUT_BASE).render(title=title or get_settings().APP_NAME, body=body)
    return HTMLResponse(html, status_code=status_code)


SAMPLE_REPORT = NormalizedReport(
    url='https://www.big-enterprise-demo.com',
    overall_score=0.82,
    summary={'performance': 0.65, 'accessibility': 0.85, 'seo': 0.92, 'bestPractices': 0.86},
    issues=[
        Issue(id='hsts-missing', label='HSTS header missing', criticality='high'),
        Issue(id='cookie-banner-missing', label='No cookie consent banner detected', criticality='medium'),
    ],
    passes=[
        Pass(id='ssl-valid', label='SSL certificate is valid'),
        Pass(id='blacklist-clear', label='Site is not blacklisted'),
    ],
    failed_audits={
        'performance': [
            FailedAudit(id='uses-long-cache-ttl',
                        title='Serve static assets with an efficient cache policy',
                        description='A long cache lifetime can speed up repeat visits to your page.',
                        display_value='1 resource found'),
            FailedAudit(id='unused-javascript',
                        title='Remove unused JavaScript',
                        description='Reduce unused JavaScript and defer loading scripts until they are required '
                                    'to decrease bytes consumed by network activity.',
                        display_value='Potential savings of 60 KB'),
        ],
        'accessibility': [
            FailedAudit(id='color-contrast',
                        title='Background and foreground colors do not have a sufficient contrast ratio.',
                        description='Low-contrast text is difficult or impossible for many users to read.',
                        display_value='4 elements found'),
        ],
        'seo': [],
        'best-practices': [
            FailedAudit(id='image-aspect-ratio',
                        title='Displays images with incorrect aspect ratio',
                        description='Image display is distorted if the aspect ratio in the page does not match '
                                    'the source.',
                        display_value='1 image found'),
        ],
    },
)


def render_report(report: NormalizedReport, heading: str, report_json: Optional[str] = None) -> str:
    return env.from_string(REPORT_TEMPLATE).render(
        report=report,
        heading=heading,
        categories=CATEGORIES,
        max_audits=PAGE_AUDITS_PER_CATEGORY,
        report_json=report_json,
    )


@router.get('/', response_class=HTMLResponse)
async def home(canceled: bool = False):
    return render_page(env.from_string(HOME_TEMPLATE).render(canceled=canceled))


@router.get('/sample-report', response_class=HTMLResponse)
async def sample_report():
    return render_page(render_report(SAMPLE_REPORT, 'Sample Scan Report'), 'Sample Scan Report')


@router.get('/scan-success', response_class=HTMLResponse)
async def scan_success(url: Optional[str] = None):
    if not url:
        return render_page(env.from_string(ERROR_TEMPLATE).render(message='No URL found for scan.'),
                           'Scan Results', 400)
    try:
        report = await services.scan_url(url)
    except SiteGuardError as e:
        return render_page(env.from_string(ERROR_TEMPLATE).render(message=str(e)), 'Scan Results',
                           error_status(e))
    # "</" would end the inline <script> block early
    report_json = report.model_dump_json(by_alias=True).replace('</', '<\\/')
    return render_page(render_report(report, 'Scan Results', report_json), f"Scan Results • {report.url}")
