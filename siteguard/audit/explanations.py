from types import MappingProxyType
from typing import Mapping, NamedTuple


class Explanation(NamedTuple):
    why: str
    fix: str


EMPTY_EXPLANATION = Explanation('', '')

SECURITY_EXPLANATIONS: Mapping[str, Explanation] = MappingProxyType({
    'hsts-missing': Explanation(
        why='Without HTTP Strict Transport Security (HSTS), browsers may allow users to access your site over insecure HTTP.',
        fix='Add a Strict-Transport-Security header to your server response '
            '(e.g., `Strict-Transport-Security: max-age=31536000; includeSubDomains`).',
    ),
    'cookie-banner-missing': Explanation(
        why='Sites handling personal data in the EU (and other regions) must inform users about cookies for privacy compliance.',
        fix='Add a cookie consent banner using a trusted library or service (e.g., Cookiebot, CookieYes).',
    ),
    'blacklist-listed': Explanation(
        why='Your site is flagged by Google Safe Browsing as potentially malicious or infected with malware/phishing.',
        fix='Check your site with the Google Safe Browsing Transparency Report and clean any infections before requesting removal.',
    ),
    'ssl-valid': Explanation(
        why='A valid SSL/TLS certificate ensures all traffic to your site is securely encrypted.',
        fix='No action needed.',
    ),
    'blacklist-clear': Explanation(
        why='Your site is not flagged as dangerous or infected by Google Safe Browsing.',
        fix='No action needed.',
    ),
})


def explain(finding_id: str) -> Explanation:
    """Unknown ids get an empty explanation so new scanner checks still render."""
    return SECURITY_EXPLANATIONS.get(finding_id, EMPTY_EXPLANATION)
