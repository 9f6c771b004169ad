from .audit.grader import Grade, grade
from .audit.normalizer import normalize
from .report.html import to_report_html

__version__ = "1.0.0"

__all__ = ["Grade", "grade", "normalize", "to_report_html", "__version__"]
