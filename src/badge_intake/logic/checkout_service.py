"""
Business logic for hosted checkout creation.

Turns a validated storefront order into a Square payment-link request:
resolves the merchant location, converts the price to cents and builds the
idempotency key and payment note.
"""

import time
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Optional

from badge_intake.dal import PaymentsGateway
from badge_intake.handlers.utils.errors import ProviderError
from badge_intake.handlers.utils.observability import count, logger, tracer
from badge_intake.models.input import OrderRequest
from badge_intake.models.output import PaymentLinkResult

CURRENCY = 'USD'


def compute_amount_cents(unit_price: float, quantity: int) -> int:
    """
    Total amount in cents.

    The unit price is rounded to whole cents (half away from zero) before it
    is multiplied by the quantity, so ``10.005 x 2`` is 2002 and not 2001.
    """
    unit_cents = (Decimal(str(unit_price)) * 100).quantize(Decimal('1'), rounding=ROUND_HALF_UP)
    return int(unit_cents) * quantity


def build_idempotency_key(reference_id: str, clock: Callable[[], float] = time.time) -> str:
    """
    Idempotency key for a payment-link request.

    The key embeds the current time in milliseconds, so resubmitting the same
    order creates a second payment link. Deduplication is left to the
    storefront.
    """
    return f"{reference_id}-{int(clock() * 1000)}"


def build_payment_note(reference_id: str, quantity: int, customer_name: Optional[str]) -> str:
    return f"MagicCardPrint Order | Ref: {reference_id} | Qty: {quantity} | Customer: {customer_name or 'N/A'}"


class CheckoutService:
    """Creates hosted checkout links for storefront orders."""

    def __init__(
        self,
        payments_gateway: PaymentsGateway,
        location_id: Optional[str] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize checkout service.

        Args:
            payments_gateway: client for the payments provider
            location_id: configured Square location; looked up when empty
            clock: time source for idempotency keys
        """
        self.payments_gateway = payments_gateway
        self.location_id = location_id
        self.clock = clock

    @tracer.capture_method
    def resolve_location_id(self) -> str:
        """
        Return the configured location or the merchant's first one.

        Raises:
            ProviderError: If the merchant has no location
        """
        if self.location_id:
            return self.location_id

        location_id = self.payments_gateway.first_location_id()
        if not location_id:
            raise ProviderError(message='No Square location found', provider='square')

        logger.info("Using first Square location", extra={"location_id": location_id})
        return location_id

    @tracer.capture_method
    def create_checkout(self, request: OrderRequest) -> PaymentLinkResult:
        """
        Create a payment link for an order.

        Args:
            request: validated order

        Returns:
            Checkout URL and provider order id

        Raises:
            ProviderError: If the location lookup or the link creation fails
        """
        location_id = self.resolve_location_id()
        amount_cents = compute_amount_cents(request.unit_price, request.quantity)
        idempotency_key = build_idempotency_key(request.reference_id, self.clock)

        tracer.put_annotation("reference_id", request.reference_id)
        logger.info("Creating payment link", extra={
            "reference_id": request.reference_id,
            "quantity": request.quantity,
            "amount_cents": amount_cents,
            "idempotency_key": idempotency_key,
        })

        payment_link = self.payments_gateway.create_payment_link(
            idempotency_key=idempotency_key,
            item_name=request.item_name,
            amount_cents=amount_cents,
            currency=CURRENCY,
            location_id=location_id,
            redirect_url=request.redirect_url,
            payment_note=build_payment_note(request.reference_id, request.quantity, request.customer_name),
            buyer_email=request.customer_email or None,
        )

        if not payment_link or not payment_link.get('url'):
            raise ProviderError(message='Failed to create payment link', provider='square')

        count("CheckoutCreated")

        return PaymentLinkResult(
            checkout_url=payment_link['url'],
            order_id=payment_link.get('order_id'),
            reference_id=request.reference_id,
        )
