import io
from typing import List
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ..audit.explanations import explain
from ..audit.grader import format_score, grade
from ..audit.normalizer import CATEGORIES
from ..schemas import NormalizedReport
from .html import FOOTER_REFERENCES, FOOTER_SERVICE, MAX_AUDITS_PER_CATEGORY

PAGE_MARGIN = 2*cm
BAND_HEIGHT = 40
BRAND = colors.HexColor('#0369a1')
DANGER = colors.HexColor('#b91c1c')
GOOD = colors.HexColor('#15803d')
MUTED = colors.HexColor('#495057')
WARN = colors.HexColor('#d97706')
GRADE_COLORS = {
    'A': colors.HexColor('#15803d'),
    'B': colors.HexColor('#eab308'),
    'C': colors.HexColor('#f97316'),
    'D': colors.HexColor('#dc2626'),
}


def _styles():
    base = getSampleStyleSheet()
    return {
        'url': ParagraphStyle('url', parent=base['Normal'], fontName='Helvetica-Bold', fontSize=11),
        'overall': ParagraphStyle('overall', parent=base['Title'], alignment=0, fontSize=18, leading=22),
        'h2': ParagraphStyle('h2', parent=base['Heading2'], spaceBefore=10),
        'h3': ParagraphStyle('h3', parent=base['Heading3'], textColor=BRAND, spaceBefore=8),
        'item': ParagraphStyle('item', parent=base['BodyText'], fontName='Helvetica-Bold', leftIndent=8),
        'detail': ParagraphStyle('detail', parent=base['BodyText'], fontSize=9, leading=11, leftIndent=18,
                                 textColor=MUTED),
        'body': base['BodyText'],
    }


def _p(text: str, style, color=None) -> Paragraph:
    # audit text is untrusted; Paragraph parses its input as markup
    body = escape(text)
    if color is not None:
        body = f'<font color="#{color.hexval()[2:]}">{body}</font>'
    return Paragraph(body, style)


def _header_band(title: str):
    def draw(c, doc):
        c.saveState()
        c.setFillColor(BRAND)
        c.rect(0, A4[1]-BAND_HEIGHT, A4[0], BAND_HEIGHT, fill=1, stroke=0)
        c.setFillColor(colors.white)
        c.setFont('Helvetica-Bold', 14)
        c.drawString(PAGE_MARGIN, A4[1]-28, f"SiteGuard Scan Report • {title}"[:90])
        c.setFillColor(MUTED)
        c.setFont('Helvetica', 9)
        c.drawRightString(A4[0]-PAGE_MARGIN, 20, f"Page {doc.page}")
        c.restoreState()
    return draw


def _score_table(report: NormalizedReport) -> Table:
    rows, style = [], [
        ('FONTNAME', (0, 0), (-1, -1), 'Helvetica'),
        ('FONTNAME', (1, 0), (1, -1), 'Helvetica-Bold'),
        ('TEXTCOLOR', (1, 0), (1, -1), colors.white),
        ('ALIGN', (1, 0), (1, -1), 'CENTER'),
        ('GRID', (0, 0), (-1, -1), 0.25, colors.grey),
    ]
    for i, (name, score) in enumerate(report.summary.items()):
        g = grade(score)
        rows.append([name[:1].upper() + name[1:], g.letter, format_score(score)])
        style.append(('BACKGROUND', (1, i), (1, i), GRADE_COLORS[g.letter]))
    return Table(rows, colWidths=[7*cm, 2*cm, 3*cm], hAlign='LEFT', style=TableStyle(style))


def _story(report: NormalizedReport) -> List:
    st = _styles()
    overall = grade(report.overall_score)
    flow = [
        _p(f"URL: {report.url}", st['url']),
        _p(f"Overall Grade: {overall.letter} ({format_score(report.overall_score)})", st['overall'],
           GRADE_COLORS[overall.letter]),
        Spacer(1, 6),
        _p('Category Scores', st['h2']),
        _score_table(report),
        Spacer(1, 8),
    ]

    for cid, cname in CATEGORIES:
        failed = report.failed_audits.get(cid, [])
        flow.append(_p(f"{cname} Issues", st['h3']))
        if not failed:
            flow.append(_p(f"No major issues detected in {cname}.", st['body'], GOOD))
        for audit in failed[:MAX_AUDITS_PER_CATEGORY]:
            flow.append(_p(f"• {audit.title}", st['item']))
            if audit.description:
                flow.append(_p(audit.description, st['detail']))
            if audit.display_value:
                flow.append(_p(audit.display_value, st['detail'], WARN))

    flow.append(_p('Critical Security/Compliance Issues', st['h2'], DANGER))
    if not report.issues:
        flow.append(_p('None', st['body']))
    for issue in report.issues:
        exp = explain(issue.id)
        flow.append(_p(f"• {issue.label} ({issue.criticality})", st['item']))
        flow.append(_p(f"Why this matters: {exp.why}", st['detail']))
        flow.append(_p(f"How to fix: {exp.fix}", st['detail']))

    flow.append(_p('Passed / Good', st['h2'], GOOD))
    for p in report.passes:
        flow.append(_p(f"• {p.label}", st['item']))
        why = explain(p.id).why
        if why:
            flow.append(_p(why, st['detail']))

    flow += [
        Spacer(1, 12),
        _p(FOOTER_SERVICE, st['url']),
        _p(FOOTER_REFERENCES, st['body'], MUTED),
    ]
    return flow


def build_pdf(report: NormalizedReport) -> bytes:
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=A4, title=f"SiteGuard scan: {report.url}",
        leftMargin=PAGE_MARGIN, rightMargin=PAGE_MARGIN,
        topMargin=BAND_HEIGHT + 1*cm, bottomMargin=PAGE_MARGIN,
    )
    band = _header_band(report.url)
    doc.build(_story(report), onFirstPage=band, onLaterPages=band)
    pdf = buf.getvalue()
    buf.close()
    return pdf
