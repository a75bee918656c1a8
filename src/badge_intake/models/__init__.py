"""
Service Models Package

Pydantic models used throughout the service: request models, response
models and the catalog/asset domain models.
"""

from .assets import SpecificationsSnapshot, StepResult, UploadAsset
from .catalog import CategoryFolder, CategorySummary, DesignRecord
from .input import DesignUploadRequest, OrderRequest, UploadedFile
from .output import CheckoutOutput, PaymentLinkResult, TemplateCatalogOutput, UploadDesignOutput

__all__ = [
    # Input models
    "OrderRequest",
    "DesignUploadRequest",
    "UploadedFile",

    # Output models
    "CheckoutOutput",
    "PaymentLinkResult",
    "TemplateCatalogOutput",
    "UploadDesignOutput",

    # Domain models
    "CategoryFolder",
    "CategorySummary",
    "DesignRecord",
    "UploadAsset",
    "SpecificationsSnapshot",
    "StepResult",
]
