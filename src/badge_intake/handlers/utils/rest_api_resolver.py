"""
REST API resolver factory for the order-intake Lambda handlers.

Each Lambda function serves a single path. The resolver built here answers
CORS preflight requests on that path and turns every unmatched request into a
405 so the storefront sees the same contract for all three functions.
"""

import json
from typing import Any

from aws_lambda_powertools.event_handler import APIGatewayRestResolver, Response
from aws_lambda_powertools.event_handler.exceptions import NotFoundError

from badge_intake.handlers.utils.errors import ValidationError
from badge_intake.handlers.utils.observability import logger
from badge_intake.handlers.utils.responses import method_not_allowed, preflight_response

# API path constants
CHECKOUT_PATH = '/api/create-checkout'
TEMPLATES_PATH = '/api/get-templates'
UPLOAD_DESIGN_PATH = '/api/upload-design'


def create_resolver(path: str, allow_methods: str) -> APIGatewayRestResolver:
    """
    Build a resolver for a single-path function.

    Args:
        path: the only path served by the function
        allow_methods: comma separated verbs advertised in CORS headers

    Returns:
        Resolver with the preflight route and the 405 fallback registered
    """
    app = APIGatewayRestResolver()

    @app.route(path, method="OPTIONS")
    def preflight() -> Response:
        return preflight_response(allow_methods)

    @app.not_found
    def reject_method(exc: NotFoundError) -> Response:
        logger.info("Rejected request", extra={
            "http_method": app.current_event.http_method,
            "path": app.current_event.path,
        })
        return method_not_allowed(allow_methods)

    return app


def read_json_body(app: APIGatewayRestResolver, invalid_message: str) -> Any:
    """
    Decode the JSON request body of the current event.

    Raises:
        ValidationError: If the body is not valid JSON
    """
    try:
        return json.loads(app.current_event.decoded_body or '{}')
    except json.JSONDecodeError as e:
        raise ValidationError(message=invalid_message, details=f"Request body is not valid JSON: {e.msg}") from e
