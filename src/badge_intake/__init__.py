"""
MagicCardPrint order-intake service.

Serverless handlers behind the badge designer storefront, laid out in the
three-layer pattern of the aws-lambda-handler-cookbook:

- handlers: API Gateway entry points, CORS and error mapping
- logic: checkout, template catalog, design upload and notification workflows
- dal: Square, Cloudinary and Resend clients
- models: pydantic request, response and domain models
"""

__version__ = "1.0.0"
__description__ = "Order intake for the MagicCardPrint badge designer"

from badge_intake.handlers.utils.observability import logger, metrics, tracer
from badge_intake.models.input import DesignUploadRequest, OrderRequest
from badge_intake.models.output import CheckoutOutput, TemplateCatalogOutput, UploadDesignOutput

__all__ = [
    "OrderRequest",
    "DesignUploadRequest",
    "CheckoutOutput",
    "TemplateCatalogOutput",
    "UploadDesignOutput",
    "logger",
    "tracer",
    "metrics",
]
