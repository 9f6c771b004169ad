from types import SimpleNamespace

import pytest
import stripe
from fastapi.testclient import TestClient

from siteguard.config import get_settings
from siteguard.main import app
from siteguard.routers.billing import success_url


@pytest.fixture()
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture()
def stripe_configured(monkeypatch):
    monkeypatch.setenv("STRIPE_SECRET_KEY", "sk_test_123")
    get_settings.cache_clear()


@pytest.fixture()
def fake_session(monkeypatch):
    calls = []

    def create(**kwargs):
        calls.append(kwargs)
        return SimpleNamespace(id="cs_test_1", url="https://checkout.stripe.com/c/pay/cs_test_1")

    monkeypatch.setattr(stripe.checkout.Session, "create", create)
    return calls


def test_success_url_carries_scanned_url():
    assert success_url("https://siteguard.io", "https://example.com/a?b=1") == (
        "https://siteguard.io/scan-success?unlocked=true&url=https%3A%2F%2Fexample.com%2Fa%3Fb%3D1"
    )


def test_creates_one_off_payment_session(client, stripe_configured, fake_session):
    r = client.post(
        "/api/create-checkout-session",
        json={"priceId": "price_basic", "url": "https://example.com"},
        headers={"origin": "https://siteguard.io"},
    )
    assert r.status_code == 200
    assert r.json() == {"sessionId": "cs_test_1", "url": "https://checkout.stripe.com/c/pay/cs_test_1"}

    (kwargs,) = fake_session
    assert kwargs["mode"] == "payment"
    assert kwargs["line_items"] == [{"price": "price_basic", "quantity": 1}]
    assert kwargs["payment_method_types"] == ["card"]
    assert kwargs["metadata"] == {"url": "https://example.com"}
    assert kwargs["success_url"].startswith("https://siteguard.io/scan-success?unlocked=true&url=")
    assert kwargs["cancel_url"] == "https://siteguard.io/?canceled=true"


def test_price_falls_back_to_configured_default(client, monkeypatch, fake_session):
    monkeypatch.setenv("STRIPE_SECRET_KEY", "sk_test_123")
    monkeypatch.setenv("STRIPE_PRICE_ID", "price_default")
    get_settings.cache_clear()
    r = client.post("/api/create-checkout-session", json={"url": "https://example.com"})
    assert r.status_code == 200
    assert fake_session[0]["line_items"][0]["price"] == "price_default"
    # no Origin header: BASE_URL is used
    assert fake_session[0]["cancel_url"] == "http://127.0.0.1:8000/?canceled=true"


@pytest.mark.parametrize("body", [{"url": "https://example.com"}, {"priceId": "price_basic"}, {}])
def test_missing_price_or_url(client, stripe_configured, body):
    r = client.post("/api/create-checkout-session", json=body)
    assert r.status_code == 400
    assert r.json() == {"error": "Missing priceId or url"}


def test_stripe_not_configured(client):
    r = client.post("/api/create-checkout-session", json={"priceId": "p", "url": "https://example.com"})
    assert r.status_code == 500


def test_stripe_error(client, stripe_configured, monkeypatch):
    def boom(**kwargs):
        raise stripe.InvalidRequestError("No such price: 'p'", param="price")

    monkeypatch.setattr(stripe.checkout.Session, "create", boom)
    r = client.post("/api/create-checkout-session", json={"priceId": "p", "url": "https://example.com"})
    assert r.status_code == 500
    assert r.json()["error"] == "Stripe Checkout error"
    assert "No such price" in r.json()["details"]


def test_get_not_allowed(client):
    assert client.get("/api/create-checkout-session").status_code == 405
