from ..audit.normalizer import CATEGORIES
from ..schemas import NormalizedReport
from ..templating import env

MAX_AUDITS_PER_CATEGORY = 8
FOOTER_SERVICE = "Scan performed by SiteGuard.io"
FOOTER_REFERENCES = "References: NIST 800-53, CISA, OWASP Top 10"

REPORT_TEMPLATE = r"""
<div><b>URL:</b> {{ report.url }}</div>
<div style="font-size:1.5rem;"><b>Overall Grade:</b> {{ grade(report.overall_score).letter }} ({{ format_score(report.overall_score) }})</div>
<h2>Category Scores</h2>
<ul>
{% for name, score in report.summary.items() %}
  <li><b>{{ name[:1]|upper }}{{ name[1:] }}:</b> {{ grade(score).letter }} ({{ format_score(score) }})</li>
{% endfor %}
</ul>
{% for cid, cname in categories %}
{% set failed = report.failed_audits.get(cid, []) %}
<h3 style="color:#0369a1">{{ cname }} Issues</h3>
{% if not failed %}
<div style="color:green;">No major issues detected in {{ cname }}.</div>
{% else %}
<ul>
{% for audit in failed[:max_audits] %}
  <li>
    <b>{{ audit.title }}</b><br/>
    <span>{{ audit.description or '' }}</span><br/>
    {% if audit.display_value %}<span style="color:#d97706">{{ audit.display_value }}</span><br/>{% endif %}
  </li>
{% endfor %}
</ul>
{% endif %}
{% endfor %}
<h2 style="color:#b91c1c">Critical Security/Compliance Issues</h2>
<ul>
{% for issue in report.issues %}
  <li>
    <b>{{ issue.label }}</b><br/>
    <b>Why this matters:</b> {{ explain(issue.id).why }}
    <br/><b>How to fix:</b> {{ explain(issue.id).fix }}
  </li>
{% else %}
  <li>None</li>
{% endfor %}
</ul>
<h2 style="color:#15803d">Passed / Good</h2>
<ul>
{% for p in report.passes %}
  <li><b>{{ p.label }}</b>{% if explain(p.id).why %}<br/>{{ explain(p.id).why }}{% endif %}</li>
{% endfor %}
</ul>
<hr/>
<div><b>{{ footer_service }}</b></div>
<div>{{ footer_references }}</div>
"""

_template = env.from_string(REPORT_TEMPLATE)


def to_report_html(report: NormalizedReport) -> str:
    """Flat HTML fragment handed to the PDF renderer."""
    return _template.render(
        report=report,
        categories=CATEGORIES,
        max_audits=MAX_AUDITS_PER_CATEGORY,
        footer_service=FOOTER_SERVICE,
        footer_references=FOOTER_REFERENCES,
    )
