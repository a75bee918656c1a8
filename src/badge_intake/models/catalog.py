"""
Template catalog domain models.

Templates are stored at the asset host as
``templates/{category}/{designN}-{front|back|preview}``; the models below
describe the folders and the design records regrouped from their files.
"""

from typing import Optional

from pydantic import BaseModel, Field

from badge_intake.models.input import CamelModel


class CategoryFolder(BaseModel):
    """A sub-folder of ``templates`` holding one category of designs."""

    name: str = Field(description='Folder slug, e.g. conference-badge')
    path: str = Field(description='Full folder path, e.g. templates/conference-badge')


class CategorySummary(BaseModel):
    name: str
    display: str


class DesignRecord(CamelModel):
    """One selectable badge template made of up to three images."""

    id: str = Field(description='"{category}-{designId}"', examples=['conference-badge-design1'])
    category: str
    category_display: str
    name: str = Field(examples=['Conference Badge Design 1'])
    front: Optional[str] = None
    back: Optional[str] = None
    preview: Optional[str] = None

    @property
    def has_primary_face(self) -> bool:
        """A template needs a front or a preview to be selectable."""
        return bool(self.front or self.preview)
