"""
Upload Design Handler - Lambda function storing customer badge designs.

Uploads the rendered badge faces and any bulk-order or artwork attachments to
Cloudinary, stores a specifications snapshot next to them and emails the
print shop.
"""

from typing import Any, Dict

from aws_lambda_powertools.event_handler import Response
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.utilities.typing import LambdaContext

from badge_intake.dal import get_mail_sender
from badge_intake.handlers.models.env_vars import get_design_upload_env_vars
from badge_intake.handlers.utils.errors import ValidationError, handle_service_errors
from badge_intake.handlers.utils.observability import count, logger, metrics, tracer
from badge_intake.handlers.utils.providers import require_asset_host
from badge_intake.handlers.utils.responses import api_gateway_response, json_response
from badge_intake.handlers.utils.rest_api_resolver import UPLOAD_DESIGN_PATH, create_resolver, read_json_body
from badge_intake.logic.design_upload import DesignUploadService
from badge_intake.logic.email_notifier import EmailNotifier
from badge_intake.models.input import DesignUploadRequest
from badge_intake.models.output import UploadDesignOutput

ALLOW_METHODS = 'POST, OPTIONS'
FAILURE_SUMMARY = 'Failed to upload design'
MISSING_FIELDS = 'Missing required fields: frontImage and referenceId'

app = create_resolver(UPLOAD_DESIGN_PATH, ALLOW_METHODS)


def build_design_upload_service() -> DesignUploadService:
    """Build the upload service; the mail sender is omitted when Resend is not configured."""
    env_vars = get_design_upload_env_vars()

    mail_sender = get_mail_sender(api_key=env_vars.RESEND_API_KEY) if env_vars.RESEND_API_KEY else None
    notifier = EmailNotifier(
        mail_sender=mail_sender,
        sender=env_vars.NOTIFICATION_FROM_ADDRESS,
        recipient=env_vars.NOTIFICATION_TO_ADDRESS,
    )

    return DesignUploadService(asset_host=require_asset_host(env_vars), notifier=notifier)


@app.post(UPLOAD_DESIGN_PATH)
@tracer.capture_method
@handle_service_errors(FAILURE_SUMMARY, ALLOW_METHODS)
def upload_design() -> Response:
    """
    Upload a finished design.

    Returns:
        Reference id and the list of stored assets
    """
    request_body = read_json_body(app, invalid_message=MISSING_FIELDS)
    design = DesignUploadRequest.model_validate(request_body)

    if not design.front_image or not design.reference_id:
        raise ValidationError(message=MISSING_FIELDS)

    logger.info("Upload design request received", extra={
        "reference_id": design.reference_id,
        "is_bulk_order": design.is_bulk_order,
        "bulk_photos_count": design.bulk_photos_count,
        "artwork_files_count": design.artwork_files_count,
    })

    images = build_design_upload_service().upload_design(design)

    output = UploadDesignOutput(reference_id=design.reference_id, images=images)
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
        tracer.put_annotation("service", "upload-design")
        return app.resolve(event, context)
    except Exception as e:
        count("RequestError")
        logger.exception("Unhandled error in lambda handler", extra={"error": str(e)})

        return api_gateway_response(
            status_code=500,
            body={"error": FAILURE_SUMMARY, "details": str(e)},
            allow_methods=ALLOW_METHODS,
        )
