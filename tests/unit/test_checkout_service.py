"""
Unit tests for the checkout service.
"""

import pytest

from badge_intake.handlers.utils.errors import ProviderError
from badge_intake.logic.checkout_service import (
    CURRENCY,
    CheckoutService,
    build_idempotency_key,
    build_payment_note,
    compute_amount_cents,
)
from badge_intake.models.input import OrderRequest
from fakes import FakePaymentsGateway


class TestComputeAmountCents:
    """Test cases for price conversion."""

    @pytest.mark.parametrize("unit_price,quantity,expected", [
        (12.5, 3, 3750),
        (10.005, 2, 2002),
        (19.995, 3, 6000),
        (0.1, 3, 30),
        (9.99, 1, 999),
    ])
    def test_unit_price_rounded_before_multiplying(self, unit_price, quantity, expected):
        assert compute_amount_cents(unit_price, quantity) == expected


class TestHelpers:

    def test_idempotency_key_embeds_milliseconds(self):
        assert build_idempotency_key("MCP-1", clock=lambda: 1700000000.1234) == "MCP-1-1700000000123"

    def test_idempotency_key_differs_between_attempts(self):
        ticks = iter([1.0, 1.002])

        first = build_idempotency_key("MCP-1", clock=lambda: next(ticks))
        second = build_idempotency_key("MCP-1", clock=lambda: next(ticks))

        assert first != second

    def test_payment_note(self):
        assert build_payment_note("R1", 4, "Jane") == "MagicCardPrint Order | Ref: R1 | Qty: 4 | Customer: Jane"
        assert build_payment_note("R1", 1, None) == "MagicCardPrint Order | Ref: R1 | Qty: 1 | Customer: N/A"


class TestCheckoutService:
    """Test cases for CheckoutService."""

    @pytest.fixture
    def order(self, sample_order_data):
        return OrderRequest.model_validate(sample_order_data)

    def test_create_checkout(self, order):
        gateway = FakePaymentsGateway()
        service = CheckoutService(payments_gateway=gateway, clock=lambda: 1704110400.0)

        result = service.create_checkout(order)

        assert result.checkout_url == "https://square.link/u/test123"
        assert result.order_id == "sq-order-1"
        assert result.reference_id == "MCP-1001"

        request = gateway.created[0]
        assert request["amount_cents"] == 3750
        assert request["currency"] == CURRENCY
        assert request["location_id"] == "L-FIRST"
        assert request["idempotency_key"] == "MCP-1001-1704110400000"
        assert request["buyer_email"] == "jane.smith@example.com"
        assert request["item_name"] == "Custom ID Badge"
        assert "Customer: Jane Smith" in request["payment_note"]

    def test_configured_location_skips_lookup(self, order):
        gateway = FakePaymentsGateway()
        service = CheckoutService(payments_gateway=gateway, location_id="L-CONFIGURED")

        service.create_checkout(order)

        assert gateway.location_calls == 0
        assert gateway.created[0]["location_id"] == "L-CONFIGURED"

    def test_no_location_found(self, order):
        gateway = FakePaymentsGateway(location_id=None)
        service = CheckoutService(payments_gateway=gateway)

        with pytest.raises(ProviderError) as exc_info:
            service.create_checkout(order)

        assert exc_info.value.message == "No Square location found"
        assert gateway.created == []

    def test_missing_link_url(self, order):
        gateway = FakePaymentsGateway(link={"url": None, "order_id": None})
        service = CheckoutService(payments_gateway=gateway)

        with pytest.raises(ProviderError) as exc_info:
            service.create_checkout(order)

        assert exc_info.value.message == "Failed to create payment link"

    def test_blank_email_not_prepopulated(self, sample_order_data):
        sample_order_data["customerEmail"] = ""
        gateway = FakePaymentsGateway()

        CheckoutService(payments_gateway=gateway).create_checkout(OrderRequest.model_validate(sample_order_data))

        assert gateway.created[0]["buyer_email"] is None
