"""
Business Logic Layer Module.

This module contains the order-intake workflows. It sits between the
handlers, which parse API Gateway events, and the integration layer, which
talks to Square, Cloudinary and Resend.

- checkout_service: amount conversion and payment-link creation
- template_catalog: folder discovery and the filename grouping fold
- design_upload: sequential asset uploads with per-asset fault isolation
- email_notifier: plain-text order report delivery
"""

from badge_intake.logic.checkout_service import CheckoutService, compute_amount_cents
from badge_intake.logic.design_upload import DesignUploadService
from badge_intake.logic.email_notifier import EmailNotifier
from badge_intake.logic.template_catalog import TemplateCatalogService, group_designs

__all__ = [
    "CheckoutService",
    "compute_amount_cents",
    "DesignUploadService",
    "EmailNotifier",
    "TemplateCatalogService",
    "group_designs",
]
