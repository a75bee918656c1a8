"""
Templates Handler - Lambda function serving the badge template catalog.

Lists the template folders stored in Cloudinary on every request and returns
the designs the badge designer can start from.
"""

from typing import Any, Dict

from aws_lambda_powertools.event_handler import Response
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.utilities.typing import LambdaContext

from badge_intake.handlers.models.env_vars import get_asset_host_env_vars
from badge_intake.handlers.utils.errors import handle_service_errors
from badge_intake.handlers.utils.observability import count, logger, metrics, tracer
from badge_intake.handlers.utils.providers import require_asset_host
from badge_intake.handlers.utils.responses import api_gateway_response, json_response
from badge_intake.handlers.utils.rest_api_resolver import TEMPLATES_PATH, create_resolver
from badge_intake.logic.template_catalog import TemplateCatalogService

ALLOW_METHODS = 'GET, OPTIONS'
FAILURE_SUMMARY = 'Failed to fetch templates'

app = create_resolver(TEMPLATES_PATH, ALLOW_METHODS)


@app.get(TEMPLATES_PATH)
@tracer.capture_method
@handle_service_errors(FAILURE_SUMMARY, ALLOW_METHODS)
def get_templates() -> Response:
    """
    Return the template catalog.

    An empty catalog is a successful response.

    Returns:
        Templates grouped from the Cloudinary template folders and their categories
    """
    asset_host = require_asset_host(get_asset_host_env_vars())

    logger.info("Fetching templates from Cloudinary")
    catalog = TemplateCatalogService(asset_host=asset_host).build_catalog()

    return json_response(
        status_code=200,
        body=catalog.model_dump(mode='json', by_alias=True),
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
        tracer.put_annotation("service", "templates")
        return app.resolve(event, context)
    except Exception as e:
        count("RequestError")
        logger.exception("Unhandled error in lambda handler", extra={"error": str(e)})

        return api_gateway_response(
            status_code=500,
            body={"error": FAILURE_SUMMARY, "details": str(e)},
            allow_methods=ALLOW_METHODS,
        )
