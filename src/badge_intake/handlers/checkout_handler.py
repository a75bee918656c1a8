"""
Checkout Handler - Lambda function creating Square hosted checkouts.

Receives the order summary from the badge designer, creates a quick-pay
payment link and returns the URL the buyer is redirected to.
"""

from typing import Any, Dict

from aws_lambda_powertools.event_handler import Response
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.utilities.typing import LambdaContext

from badge_intake.dal import get_payments_gateway
from badge_intake.handlers.models.env_vars import get_checkout_env_vars
from badge_intake.handlers.utils.errors import ConfigurationError, handle_service_errors
from badge_intake.handlers.utils.observability import count, logger, metrics, tracer
from badge_intake.handlers.utils.responses import api_gateway_response, json_response
from badge_intake.handlers.utils.rest_api_resolver import CHECKOUT_PATH, create_resolver, read_json_body
from badge_intake.logic.checkout_service import CheckoutService
from badge_intake.models.input import OrderRequest
from badge_intake.models.output import CheckoutOutput

ALLOW_METHODS = 'POST, OPTIONS'
FAILURE_SUMMARY = 'Failed to create checkout'

app = create_resolver(CHECKOUT_PATH, ALLOW_METHODS)


def build_checkout_service() -> CheckoutService:
    """
    Build the checkout service from the function's environment.

    Raises:
        ConfigurationError: If no Square access token is configured
    """
    env_vars = get_checkout_env_vars()
    if not env_vars.SQUARE_ACCESS_TOKEN:
        raise ConfigurationError(
            message='Square credentials not configured',
            details='Please add SQUARE_ACCESS_TOKEN to the function environment variables',
        )

    return CheckoutService(
        payments_gateway=get_payments_gateway(
            access_token=env_vars.SQUARE_ACCESS_TOKEN,
            production=env_vars.is_production,
        ),
        location_id=env_vars.SQUARE_LOCATION_ID,
    )


@app.post(CHECKOUT_PATH)
@tracer.capture_method
@handle_service_errors(FAILURE_SUMMARY, ALLOW_METHODS)
def create_checkout() -> Response:
    """
    Create a hosted checkout for an order.

    Returns:
        Checkout URL, Square order id and the echoed reference id
    """
    request_body = read_json_body(app, invalid_message='Missing required fields')

    # Missing or falsy fields are rejected before any outbound call
    order = OrderRequest.model_validate(request_body)

    tracer.put_annotation("reference_id", order.reference_id)
    logger.info("Create checkout request received", extra={
        "reference_id": order.reference_id,
        "quantity": order.quantity,
    })

    result = build_checkout_service().create_checkout(order)

    logger.info("Checkout created", extra={
        "reference_id": result.reference_id,
        "order_id": result.order_id,
    })

    output = CheckoutOutput(**result.model_dump())
    return json_response(
        status_code=200,
        body=output.model_dump(mode='json', by_alias=True),
        allow_methods=ALLOW_METHODS,
    )


@tracer.capture_lambda_handler
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@metrics.log_metrics(capture_cold_start_metric=True)
def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """
    Main Lambda handler function.

    Args:
        event: API Gateway REST proxy event
        context: Lambda context object

    Returns:
        API Gateway response
    """
    try:
        count("RequestCount")
        tracer.put_annotation("service", "checkout")
        return app.resolve(event, context)
    except Exception as e:
        count("RequestError")
        logger.exception("Unhandled error in lambda handler", extra={"error": str(e)})

        return api_gateway_response(
            status_code=500,
            body={"error": FAILURE_SUMMARY, "details": str(e)},
            allow_methods=ALLOW_METHODS,
        )
