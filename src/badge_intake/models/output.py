"""
Output models for API responses using Pydantic.

Responses are serialized with camelCase keys to match what the storefront
JavaScript reads.
"""

from typing import Annotated, List, Optional

from pydantic import Field, field_serializer, model_serializer

from badge_intake.models.assets import UploadAsset
from badge_intake.models.catalog import CategorySummary, DesignRecord
from badge_intake.models.input import CamelModel


class PaymentLinkResult(CamelModel):
    """A payment link created for one storefront order."""

    checkout_url: Annotated[str, Field(
        description='Hosted checkout page the buyer is redirected to',
        examples=['https://square.link/u/AbCdEf']
    )]

    order_id: Annotated[Optional[str], Field(
        default=None,
        description='Order id assigned by Square to the payment link'
    )] = None

    reference_id: Annotated[str, Field(
        description='Storefront order reference echoed back'
    )]


class CheckoutOutput(PaymentLinkResult):
    """Response model for a created payment link."""

    success: bool = True


class TemplateCatalogOutput(CamelModel):
    """Response model for the template catalog."""

    success: bool = True
    templates: List[DesignRecord] = Field(default_factory=list)
    categories: List[CategorySummary] = Field(default_factory=list)

    # Only set when the catalog is empty
    message: Optional[str] = None

    @model_serializer(mode='wrap')
    def drop_empty_message(self, handler):
        data = handler(self)
        if data.get('message') is None:
            data.pop('message', None)
        return data


class UploadDesignOutput(CamelModel):
    """Response model for an uploaded design."""

    success: bool = True
    reference_id: str
    images: List[UploadAsset] = Field(default_factory=list)
    message: str = 'Design uploaded successfully'

    @field_serializer('images')
    def serialize_images(self, images: List[UploadAsset]) -> list:
        return [asset.model_dump(exclude_none=True) for asset in images]
