from jinja2 import BaseLoader, Environment, select_autoescape

from .audit.explanations import explain
from .audit.grader import format_score, grade

# every template is an embedded string, autoescaped as HTML
env = Environment(
    loader=BaseLoader(),
    autoescape=select_autoescape(["html", "xml"]),
    trim_blocks=True,
    lstrip_blocks=True,
)
env.globals.update(grade=grade, format_score=format_score, explain=explain)
