"""
Models describing assets uploaded for one order.
"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_serializer

from badge_intake.models.input import CamelModel

# Root folder of all per-order asset folders
ASSET_NAMESPACE = 'magiccardprint'


class UploadAsset(BaseModel):
    """A successfully uploaded asset; front/back carry ``side``, the rest ``type``."""

    side: Optional[Literal['front', 'back']] = None
    type: Optional[Literal['excel', 'photo', 'artwork']] = None
    name: Optional[str] = None
    url: str

    @property
    def manifest_label(self) -> str:
        """Label used for this asset in the notification file manifest."""
        if self.side:
            return f"{self.side.upper()} Design"
        if self.type == 'excel':
            return "Excel Data"
        if self.type == 'photo':
            return f"Photo ({self.name})"
        return f"Artwork ({self.name})"


class SpecificationsSnapshot(CamelModel):
    """Audit document stored next to the order's assets."""

    reference_id: str
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    specifications: Optional[Dict[str, Any]] = None
    is_bulk_order: bool = False
    bulk_record_count: int = 0
    excel_file_name: Optional[str] = None
    bulk_photos_count: int = 0
    has_artwork: bool = False
    artwork_files_count: int = 0
    uploaded_at: datetime
    uploaded_files: List[UploadAsset] = Field(default_factory=list)

    @field_serializer('uploaded_files')
    def serialize_uploaded_files(self, files: List[UploadAsset]) -> List[Dict[str, Any]]:
        return [asset.model_dump(exclude_none=True) for asset in files]


class StepResult(BaseModel):
    """Outcome of a best-effort step; callers decide what a failure means."""

    ok: bool
    value: Optional[Any] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, value: Any = None) -> 'StepResult':
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: str) -> 'StepResult':
        return cls(ok=False, error=error)
