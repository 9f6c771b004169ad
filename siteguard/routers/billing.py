import logging
from urllib.parse import quote

import stripe
from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse

from ..config import get_settings
from ..schemas import CheckoutRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix='/api', tags=['billing'])


def success_url(origin: str, url: str) -> str:
    # the scanned URL rides along so the report page can recover it
    return f"{origin}/scan-success?unlocked=true&url={quote(url, safe='')}"


@router.post('/create-checkout-session')
def create_checkout_session(payload: CheckoutRequest, request: Request):
    settings = get_settings()
    price = payload.price_id or settings.STRIPE_PRICE_ID
    if not price or not payload.url:
        return JSONResponse(status_code=400, content={'error': 'Missing priceId or url'})
    if not settings.STRIPE_SECRET_KEY:
        raise HTTPException(status_code=500, detail='Stripe not configured')

    stripe.api_key = settings.STRIPE_SECRET_KEY
    origin = (request.headers.get('origin') or settings.BASE_URL).rstrip('/')
    try:
        session = stripe.checkout.Session.create(
            payment_method_types=['card'],
            line_items=[{'price': price, 'quantity': 1}],
            mode='payment',
            success_url=success_url(origin, payload.url),
            cancel_url=f"{origin}/?canceled=true",
            metadata={'url': payload.url},
        )
    except stripe.StripeError as e:
        logger.error('Stripe Checkout error: %s', e)
        return JSONResponse(
            status_code=500,
            content={'error': 'Stripe Checkout error', 'details': str(e)},
        )
    logger.info('Created checkout session %s for %s', session.id, payload.url)
    return {'sessionId': session.id, 'url': session.url}
