"""Pytest fixtures for SiteGuard tests."""

import copy

import pytest

from siteguard.config import get_settings

SCAN_SERVICE = "http://scanner.test"
PDF_SERVICE = "http://pdf.test"

SAMPLE_SCAN = {
    "summary": {
        "performance": 0.95,
        "accessibility": 0.80,
        "seo": 0.70,
        "bestPractices": 0.50,
    },
    "security": {
        "headers": {"content-type": "text/html", "x-frame-options": "DENY"},
        "https": {"ssl": {"valid": True, "issuer": "R3"}},
        "safeBrowsing": {"safe": True},
        "trackersAndCookies": {"cookieBanner": False, "trackers": ["ga"]},
    },
    "fullReport": {
        "categories": {
            "performance": {
                "auditRefs": [
                    {"id": "largest-contentful-paint", "weight": 25},
                    {"id": "render-blocking-resources", "weight": 0},
                    {"id": "speed-index", "weight": 10},
                    {"id": "total-blocking-time", "weight": 30},
                ],
            },
            "accessibility": {
                "auditRefs": [
                    {"id": "color-contrast", "weight": 7},
                    {"id": "image-alt", "weight": 10},
                ],
            },
            "seo": {"auditRefs": [{"id": "meta-description", "weight": 1}]},
        },
        "audits": {
            "largest-contentful-paint": {
                "score": 0.42,
                "title": "Largest Contentful Paint",
                "description": "LCP marks the time at which the largest text or image is painted.",
                "displayValue": "4.1 s",
            },
            "render-blocking-resources": {"score": 0, "title": "Eliminate render-blocking resources"},
            "speed-index": {"score": 1, "title": "Speed Index", "displayValue": "0.9 s"},
            "total-blocking-time": {"score": 0.7, "title": "Total Blocking Time", "displayValue": "320 ms"},
            "color-contrast": {
                "score": 0,
                "title": "Background and foreground colors do not have a sufficient contrast ratio.",
                "description": "Low-contrast text is difficult or impossible for many users to read.",
            },
            "image-alt": {"score": 1, "title": "Image elements have [alt] attributes"},
            "meta-description": {"score": 1, "title": "Document has a meta description"},
        },
    },
}


@pytest.fixture(autouse=True)
def setup_env(monkeypatch):
    """Point the clients at fake services and drop any cached settings."""
    monkeypatch.setenv("SCAN_SERVICE_URL", SCAN_SERVICE)
    monkeypatch.delenv("PDF_SERVICE_URL", raising=False)
    monkeypatch.delenv("STRIPE_SECRET_KEY", raising=False)
    monkeypatch.delenv("STRIPE_PRICE_ID", raising=False)
    monkeypatch.setenv("REQUEST_TIMEOUT", "5")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def raw_scan():
    return copy.deepcopy(SAMPLE_SCAN)
