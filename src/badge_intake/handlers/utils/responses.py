"""
Response helpers producing API Gateway responses with permissive CORS headers.

The storefront is a static site hosted on another origin, so every response,
including errors and preflight replies, advertises ``Access-Control-Allow-Origin: *``.
"""

import json
from typing import Any, Dict, Optional

from aws_lambda_powertools.event_handler import Response, content_types


def cors_headers(allow_methods: str) -> Dict[str, str]:
    """CORS headers sent on every response of a handler."""
    return {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": allow_methods,
        "Access-Control-Allow-Headers": "Content-Type",
    }


def json_response(
    status_code: int,
    body: Any,
    allow_methods: str,
    headers: Optional[Dict[str, str]] = None,
) -> Response:
    """Create a JSON response carrying the handler's CORS headers."""
    response_headers = cors_headers(allow_methods)
    if headers:
        response_headers.update(headers)

    return Response(
        status_code=status_code,
        content_type=content_types.APPLICATION_JSON,
        body=body if isinstance(body, str) else json.dumps(body),
        headers=response_headers,
    )


def preflight_response(allow_methods: str) -> Response:
    """Empty 200 reply to a CORS preflight request."""
    return Response(
        status_code=200,
        content_type=content_types.TEXT_PLAIN,
        body="",
        headers=cors_headers(allow_methods),
    )


def method_not_allowed(allow_methods: str) -> Response:
    return json_response(
        status_code=405,
        body={"error": "Method not allowed"},
        allow_methods=allow_methods,
        headers={"Allow": allow_methods},
    )


def api_gateway_response(status_code: int, body: Any, allow_methods: str) -> Dict[str, Any]:
    """Raw API Gateway proxy response, for failures outside the resolver."""
    headers = {"Content-Type": content_types.APPLICATION_JSON}
    headers.update(cors_headers(allow_methods))

    return {
        "statusCode": status_code,
        "headers": headers,
        "body": body if isinstance(body, str) else json.dumps(body),
        "isBase64Encoded": False,
    }
