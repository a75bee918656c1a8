"""
Template catalog discovery.

Badge templates are uploaded to the asset host as
``templates/{category}/{designN}-{face}``. This module lists the category
folders, folds each folder's files into design records and assembles the
catalog served to the designer page.
"""

import re
from typing import Any, Dict, Iterable, List

from badge_intake.dal import AssetHost
from badge_intake.handlers.utils.errors import ProviderError
from badge_intake.handlers.utils.observability import count, logger, tracer
from badge_intake.models.catalog import CategoryFolder, CategorySummary, DesignRecord
from badge_intake.models.output import TemplateCatalogOutput

TEMPLATES_ROOT = 'templates'
MAX_RESOURCES_PER_CATEGORY = 100

DESIGN_FILENAME = re.compile(r'^(design\d+)-(.+)$')
DESIGN_FACES = ('front', 'back', 'preview')


def humanize_slug(slug: str) -> str:
    """``conference-badge`` -> ``Conference Badge``."""
    return ' '.join(word[:1].upper() + word[1:] for word in slug.split('-'))


def humanize_design_id(design_id: str) -> str:
    """``design1`` -> ``Design 1``."""
    return design_id.replace('design', 'Design ', 1)


def group_designs(category: str, resources: Iterable[Dict[str, Any]]) -> List[DesignRecord]:
    """
    Fold a category folder's resources into design records.

    Filenames not matching ``designN-<face>`` are ignored, as are faces other
    than front/back/preview. A later file for the same face replaces an
    earlier one. Records without a front or a preview are dropped.

    Args:
        category: category folder name
        resources: resource descriptors with ``public_id`` and ``secure_url``

    Returns:
        Design records in order of first appearance
    """
    category_display = humanize_slug(category)
    designs: Dict[str, DesignRecord] = {}

    for resource in resources:
        filename = resource['public_id'].split('/')[-1]
        match = DESIGN_FILENAME.match(filename)
        if not match:
            logger.debug("Skipping non-template file", extra={"filename": filename})
            continue

        design_id, face = match.groups()
        record = designs.get(design_id)
        if record is None:
            record = DesignRecord(
                id=f"{category}-{design_id}",
                category=category,
                category_display=category_display,
                name=f"{category_display} {humanize_design_id(design_id)}",
            )
            designs[design_id] = record

        if face in DESIGN_FACES:
            setattr(record, face, resource.get('secure_url'))

    return [record for record in designs.values() if record.has_primary_face]


class TemplateCatalogService:
    """Builds the template catalog from the asset host."""

    def __init__(self, asset_host: AssetHost):
        self.asset_host = asset_host

    @tracer.capture_method
    def list_categories(self) -> List[CategoryFolder]:
        return self.asset_host.list_subfolders(TEMPLATES_ROOT)

    @tracer.capture_method
    def list_category_designs(self, category: CategoryFolder) -> List[DesignRecord]:
        resources = self.asset_host.list_resources(
            prefix=f"{category.path}/",
            max_results=MAX_RESOURCES_PER_CATEGORY,
        )
        logger.info("Listed category resources", extra={
            "category": category.name,
            "resource_count": len(resources),
        })
        return group_designs(category.name, resources)

    @tracer.capture_method
    def build_catalog(self) -> TemplateCatalogOutput:
        """
        Build the catalog of selectable templates.

        A category whose listing fails is skipped; the rest of the catalog is
        still returned.

        Returns:
            Templates and categories, with an explanatory message when empty
        """
        try:
            categories = self.list_categories()
        except ProviderError as e:
            # The asset host reports a missing root folder as an API error
            logger.warning("Could not list template folders", extra={"error": e.message})
            return TemplateCatalogOutput(message='No templates folder found in Cloudinary')

        if not categories:
            return TemplateCatalogOutput(message='No category folders found under templates/')

        templates: List[DesignRecord] = []
        for category in categories:
            try:
                templates.extend(self.list_category_designs(category))
            except ProviderError as e:
                logger.warning("Skipping template category", extra={
                    "category": category.path,
                    "error": e.message,
                })
                count("TemplateCategorySkipped")

        logger.info("Template catalog built", extra={
            "category_count": len(categories),
            "template_count": len(templates),
        })
        count("TemplatesListed", len(templates))

        return TemplateCatalogOutput(
            templates=templates,
            categories=[
                CategorySummary(name=category.name, display=humanize_slug(category.name))
                for category in categories
            ],
        )
