"""
Input models for request validation using Pydantic.

The storefront posts camelCase JSON; models accept either the camelCase alias
or the snake_case field name.
"""

from typing import Annotated, Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DEFAULT_ITEM_NAME = 'Custom ID Badge'
DEFAULT_REDIRECT_URL = 'https://magiccardprint-designer.vercel.app/thank-you.html'


class CamelModel(BaseModel):
    """Base model mapping snake_case fields to camelCase JSON keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OrderRequest(CamelModel):
    """Request model for creating a hosted checkout."""

    reference_id: Annotated[str, Field(
        min_length=1,
        description='Order reference, also the asset folder key',
        examples=['MCP-20240101-0001']
    )]

    quantity: Annotated[int, Field(
        gt=0,
        description='Number of badges ordered',
        examples=[1, 25]
    )]

    unit_price: Annotated[float, Field(
        gt=0,
        description='Price of a single badge in major currency units',
        examples=[12.5]
    )]

    customer_name: Optional[str] = None
    customer_email: Optional[str] = None

    item_name: Annotated[str, Field(
        default=DEFAULT_ITEM_NAME,
        description='Line item label shown on the hosted checkout page'
    )] = DEFAULT_ITEM_NAME

    # Forwarded verbatim, never inspected
    specifications: Optional[Any] = None

    redirect_url: Annotated[str, Field(
        default=DEFAULT_REDIRECT_URL,
        description='Where the buyer lands after paying'
    )] = DEFAULT_REDIRECT_URL


class UploadedFile(CamelModel):
    """A named file sent inline as a data URI."""

    # Incomplete entries are skipped at upload time, not rejected here
    name: Annotated[Optional[str], Field(
        default=None,
        description='Original file name including extension',
        examples=['jane-doe.jpg']
    )] = None

    data: Annotated[Optional[str], Field(
        default=None,
        description='File content as a data URI or remote URL'
    )] = None


class DesignUploadRequest(CamelModel):
    """Request model for uploading a finished badge design."""

    # Presence of front_image and reference_id is checked by the handler
    front_image: Optional[str] = None
    back_image: Optional[str] = None
    reference_id: Optional[str] = None
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    specifications: Optional[Dict[str, Any]] = None

    is_bulk_order: Optional[bool] = False
    excel_data: Optional[List[Any]] = None
    excel_file: Optional[str] = None
    excel_file_name: Optional[str] = None
    bulk_photos: Optional[List[UploadedFile]] = None

    has_artwork: Optional[bool] = False
    artwork_files: Optional[List[UploadedFile]] = None

    @property
    def bulk_photos_count(self) -> int:
        return len(self.bulk_photos) if self.bulk_photos else 0

    @property
    def artwork_files_count(self) -> int:
        return len(self.artwork_files) if self.artwork_files else 0

    @property
    def bulk_record_count(self) -> int:
        return len(self.excel_data) if self.excel_data else 0
