"""
AWS Lambda Handlers Module.

Entry points of the three storefront functions. Each handler module owns a
single-path ``APIGatewayRestResolver`` and a ``lambda_handler`` decorated with
the Powertools logger, tracer and metrics:

- checkout_handler: POST /api/create-checkout
- templates_handler: GET /api/get-templates
- upload_design_handler: POST /api/upload-design

Handler modules are imported by their Lambda entry points only, so one
function never loads another function's dependencies.
"""

__version__ = "1.0.0"

from badge_intake.handlers.utils.observability import logger, metrics, tracer
from badge_intake.handlers.utils.rest_api_resolver import CHECKOUT_PATH, TEMPLATES_PATH, UPLOAD_DESIGN_PATH

__all__ = [
    "logger",
    "tracer",
    "metrics",
    "CHECKOUT_PATH",
    "TEMPLATES_PATH",
    "UPLOAD_DESIGN_PATH",
]
