"""
Square implementation of the payments gateway.

Wraps the Square Python SDK calls used by the checkout function: listing the
merchant's locations and creating a quick-pay payment link.
"""

from typing import Dict, Optional

from square import Square
from square.core.api_error import ApiError
from square.environment import SquareEnvironment

from badge_intake.handlers.utils.errors import ProviderError
from badge_intake.handlers.utils.observability import logger, tracer

PROVIDER = 'square'


class SquarePaymentsGateway:
    """Square Checkout API client."""

    def __init__(self, access_token: str, production: bool = False, client: Optional[Square] = None) -> None:
        """
        Initialize the gateway.

        Args:
            access_token: Square access token
            production: use the production environment instead of the sandbox
            client: pre-built SDK client, mainly for tests
        """
        environment = SquareEnvironment.PRODUCTION if production else SquareEnvironment.SANDBOX
        self.client = client or Square(token=access_token, environment=environment)
        logger.debug('Square gateway initialized', extra={'production': production})

    @tracer.capture_method
    def first_location_id(self) -> Optional[str]:
        try:
            response = self.client.locations.list()
        except ApiError as e:
            raise ProviderError(message=f"Failed to list Square locations: {e.body}", provider=PROVIDER) from e

        locations = response.locations or []
        if not locations:
            return None
        return locations[0].id

    @tracer.capture_method
    def create_payment_link(
        self,
        idempotency_key: str,
        item_name: str,
        amount_cents: int,
        currency: str,
        location_id: str,
        redirect_url: str,
        payment_note: str,
        buyer_email: Optional[str] = None,
    ) -> Dict[str, Optional[str]]:
        """
        Create a quick-pay payment link.

        Returns:
            ``{"url": ..., "order_id": ...}`` of the created link

        Raises:
            ProviderError: If Square rejects the request or returns no link
        """
        pre_populated_data = {'buyer_email': buyer_email} if buyer_email else None

        try:
            response = self.client.checkout.payment_links.create(
                idempotency_key=idempotency_key,
                quick_pay={
                    'name': item_name,
                    'price_money': {'amount': amount_cents, 'currency': currency},
                    'location_id': location_id,
                },
                checkout_options={
                    'redirect_url': redirect_url,
                    'ask_for_shipping_address': True,
                },
                pre_populated_data=pre_populated_data,
                payment_note=payment_note,
            )
        except ApiError as e:
            logger.error('Square rejected payment link', extra={
                'status_code': e.status_code,
                'body': e.body,
            })
            raise ProviderError(message=f"Square API error: {e.body}", provider=PROVIDER) from e

        payment_link = response.payment_link
        if payment_link is None or not payment_link.url:
            raise ProviderError(message='Failed to create payment link', provider=PROVIDER)

        return {'url': payment_link.url, 'order_id': payment_link.order_id}
